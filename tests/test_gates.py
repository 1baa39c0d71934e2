import math

import pytest

from qlab import gates
from qlab.gates import FIXED_GATES, H, I, P, Rx, Ry, Rz, S, SX, T, X, Z, is_unitary, matmul


def _close(a, b, tol=1e-12):
    return all(a[r][c].is_close(b[r][c], tol) for r in range(2) for c in range(2))


@pytest.mark.parametrize("name", sorted(FIXED_GATES))
def test_fixed_gates_unitary(name):
    assert is_unitary(FIXED_GATES[name])


@pytest.mark.parametrize("theta", [0.0, 0.3, math.pi / 4, 1.7, math.pi, -2.2])
def test_rotation_gates_unitary(theta):
    for family in (Rx, Ry, Rz, P):
        assert is_unitary(family(theta))


def test_default_angle_is_quarter_pi():
    assert _close(Rx(), Rx(math.pi / 4))
    assert gates.resolve_angle(None) == math.pi / 4
    assert gates.resolve_angle({}) == math.pi / 4
    assert gates.resolve_angle({"theta": 0}) == 0.0


def test_known_identities():
    assert _close(matmul(H, H), I)
    assert _close(matmul(S, S), Z)
    assert _close(matmul(T, T), S)
    assert _close(matmul(SX, SX), X)
    assert _close(T, P(math.pi / 4))


def test_rotation_matrix_entries():
    theta = 0.8
    rx = Rx(theta)
    assert rx[0][1].is_close(complex(0, -math.sin(theta / 2)))
    ry = Ry(theta)
    assert ry[1][0].is_close(math.sin(theta / 2))
    rz = Rz(theta)
    assert abs(rz[0][0].phase() + theta / 2) < 1e-12
    assert abs(rz[1][1].phase() - theta / 2) < 1e-12


def test_parametrised_gates_are_fresh():
    assert Rx(0.5) is not Rx(0.5)


def test_single_qubit_matrix_lookup():
    assert gates.single_qubit_matrix("H") is H
    assert _close(gates.single_qubit_matrix("Ry", {"theta": 0.2}), Ry(0.2))
    assert gates.single_qubit_matrix("nope") is None


def test_dagger_inverts():
    for name, matrix in FIXED_GATES.items():
        assert _close(matmul(matrix, gates.dagger(matrix)), I), name
