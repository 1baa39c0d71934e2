import math

from qlab.complex_number import Complex


def test_arithmetic():
    a = Complex(1, 2)
    b = Complex(3, 4)
    assert a.add(b) == Complex(4, 6)
    assert b.subtract(a) == Complex(2, 2)
    assert a.multiply(b) == Complex(-5, 10)
    assert a.scale(2) == Complex(2, 4)
    assert a.conjugate() == Complex(1, -2)


def test_operations_return_new_values():
    a = Complex(1, 2)
    a.add(Complex(1, 1))
    a.scale(3)
    assert a.real == 1 and a.imag == 2


def test_operators_mix_with_reals():
    a = Complex(1, 1)
    assert a + 1 == Complex(2, 1)
    assert 2 * a == Complex(2, 2)
    assert 1 - a == Complex(0, -1)
    assert -a == Complex(-1, -1)
    assert complex(a) == 1 + 1j


def test_magnitude_phase_probability():
    z = Complex(3, 4)
    assert z.magnitude() == 5
    assert abs(z) == 5
    assert z.probability() == 25
    assert abs(Complex(0, 1).phase() - math.pi / 2) < 1e-12
    assert abs(Complex(-1, 0).phase() - math.pi) < 1e-12


def test_from_polar():
    z = Complex.from_polar(2, math.pi / 2)
    assert z.is_close(Complex(0, 2))
    assert Complex.from_polar(1, math.pi).is_close(-1)


def test_to_string():
    assert Complex(0.5).to_string() == "0.500"
    assert Complex(0, 1).to_string() == "1.000i"
    assert Complex(0, -1 / math.sqrt(2)).to_string() == "-0.707i"
    assert Complex(0.5, -0.5).to_string() == "0.500 - 0.500i"
    assert Complex(0.25, 0.75).to_string(2) == "0.25 + 0.75i"
    assert Complex(0.00001, 0.00001).to_string() == "0.000"
    assert str(Complex(1)) == "1.000"
