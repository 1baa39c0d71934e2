"""Immutable complex numbers.

The simulator keeps its own small complex type instead of the builtin
``complex`` so that every amplitude exposes the quantities the rest of the
package talks about directly: magnitude, phase and Born-rule probability.
Values never change after construction; every operation returns a new
:class:`Complex`.

    >>> from qlab.complex_number import Complex
    >>> a = Complex(1, 1).scale(0.5)
    >>> a.probability()
    0.5
    >>> a.to_string()
    '0.500 + 0.500i'
"""

import math
from typing import Union

Number = Union["Complex", int, float]

# Parts smaller than this are dropped from the textual rendering
DISPLAY_EPSILON = 1e-4


class Complex:
    """A complex value ``real + imag*i``."""

    __slots__ = ("_real", "_imag")

    def __init__(self, real: float = 0.0, imag: float = 0.0):
        self._real = float(real)
        self._imag = float(imag)

    @property
    def real(self) -> float:
        return self._real

    @property
    def imag(self) -> float:
        return self._imag

    @classmethod
    def from_polar(cls, magnitude: float, phase: float) -> "Complex":
        """Return ``magnitude * (cos(phase) + i sin(phase))``."""
        return cls(magnitude * math.cos(phase), magnitude * math.sin(phase))

    @classmethod
    def from_builtin(cls, value: complex | float | int) -> "Complex":
        value = complex(value)
        return cls(value.real, value.imag)

    # Arithmetic

    def add(self, other: "Complex") -> "Complex":
        return Complex(self._real + other.real, self._imag + other.imag)

    def subtract(self, other: "Complex") -> "Complex":
        return Complex(self._real - other.real, self._imag - other.imag)

    def multiply(self, other: "Complex") -> "Complex":
        return Complex(
            self._real * other.real - self._imag * other.imag,
            self._real * other.imag + self._imag * other.real,
        )

    def scale(self, scalar: float) -> "Complex":
        """Multiply by a real ``scalar``."""
        return Complex(self._real * scalar, self._imag * scalar)

    def conjugate(self) -> "Complex":
        return Complex(self._real, -self._imag)

    def magnitude(self) -> float:
        return math.sqrt(self._real * self._real + self._imag * self._imag)

    def phase(self) -> float:
        """Argument in radians, ``atan2(imag, real)``."""
        return math.atan2(self._imag, self._real)

    def probability(self) -> float:
        """Squared magnitude; the Born-rule weight of an amplitude."""
        return self._real * self._real + self._imag * self._imag

    def is_close(self, other: Number, tol: float = 1e-9) -> bool:
        other = _coerce(other)
        return abs(self._real - other.real) <= tol and abs(self._imag - other.imag) <= tol

    def to_string(self, precision: int = 3) -> str:
        """Render for display.

        A vanishing imaginary part renders only the real part, a vanishing
        real part renders only ``±imag i``; otherwise ``real ± imag i``.
        """
        r = f"{self._real:.{precision}f}"
        i = f"{abs(self._imag):.{precision}f}"
        if abs(self._imag) < DISPLAY_EPSILON:
            return r
        sign = "" if self._imag >= 0 else "-"
        if abs(self._real) < DISPLAY_EPSILON:
            return f"{sign}{i}i"
        return f"{r} {'+' if self._imag >= 0 else '-'} {i}i"

    # Python protocol

    def __add__(self, other: Number) -> "Complex":
        return self.add(_coerce(other))

    __radd__ = __add__

    def __sub__(self, other: Number) -> "Complex":
        return self.subtract(_coerce(other))

    def __rsub__(self, other: Number) -> "Complex":
        return _coerce(other).subtract(self)

    def __mul__(self, other: Number) -> "Complex":
        if isinstance(other, (int, float)):
            return self.scale(other)
        return self.multiply(_coerce(other))

    __rmul__ = __mul__

    def __neg__(self) -> "Complex":
        return Complex(-self._real, -self._imag)

    def __abs__(self) -> float:
        return self.magnitude()

    def __complex__(self) -> complex:
        return complex(self._real, self._imag)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Complex, int, float, complex)):
            other = _coerce(other)
            return self._real == other.real and self._imag == other.imag
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._real, self._imag))

    def __repr__(self) -> str:
        return f"Complex({self._real!r}, {self._imag!r})"

    def __str__(self) -> str:
        return self.to_string()


def _coerce(value: Number | complex) -> Complex:
    if isinstance(value, Complex):
        return value
    return Complex.from_builtin(value)


ZERO = Complex(0.0, 0.0)
ONE = Complex(1.0, 0.0)
