"""Gate library.

Single-qubit gates are ``2x2`` matrices of :class:`~qlab.complex_number.Complex`
stored as nested tuples so the shared constants cannot be mutated.  Rotation
families are functions of one angle and build a fresh matrix on every call.

Multi-qubit gates are *not* matrices here.  They are recognised by name and
applied by dedicated bit-permutation routines in :mod:`qlab.circuit`, which
only touch the two or four amplitudes each elementary operation changes.
"""

import math
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

from .complex_number import Complex
from .config import DEFAULT_ANGLE

Matrix = Tuple[Tuple[Complex, Complex], Tuple[Complex, Complex]]

_SQRT1_2 = 1 / math.sqrt(2)


def _matrix(a: Complex, b: Complex, c: Complex, d: Complex) -> Matrix:
    return ((a, b), (c, d))


# Fixed gates
I = _matrix(Complex(1), Complex(0), Complex(0), Complex(1))
X = _matrix(Complex(0), Complex(1), Complex(1), Complex(0))
Y = _matrix(Complex(0), Complex(0, -1), Complex(0, 1), Complex(0))
Z = _matrix(Complex(1), Complex(0), Complex(0), Complex(-1))
H = _matrix(Complex(_SQRT1_2), Complex(_SQRT1_2), Complex(_SQRT1_2), Complex(-_SQRT1_2))
S = _matrix(Complex(1), Complex(0), Complex(0), Complex(0, 1))
Sdg = _matrix(Complex(1), Complex(0), Complex(0), Complex(0, -1))
T = _matrix(Complex(1), Complex(0), Complex(0), Complex.from_polar(1, math.pi / 4))
Tdg = _matrix(Complex(1), Complex(0), Complex(0), Complex.from_polar(1, -math.pi / 4))
SX = _matrix(Complex(0.5, 0.5), Complex(0.5, -0.5), Complex(0.5, -0.5), Complex(0.5, 0.5))


# Parametrised families

def Rx(theta: float = DEFAULT_ANGLE) -> Matrix:
    """Rotation about the X axis by ``theta``."""
    c = math.cos(theta / 2)
    s = math.sin(theta / 2)
    return _matrix(Complex(c), Complex(0, -s), Complex(0, -s), Complex(c))


def Ry(theta: float = DEFAULT_ANGLE) -> Matrix:
    """Rotation about the Y axis by ``theta``."""
    c = math.cos(theta / 2)
    s = math.sin(theta / 2)
    return _matrix(Complex(c), Complex(-s), Complex(s), Complex(c))


def Rz(theta: float = DEFAULT_ANGLE) -> Matrix:
    """Rotation about the Z axis by ``theta``."""
    return _matrix(
        Complex.from_polar(1, -theta / 2),
        Complex(0),
        Complex(0),
        Complex.from_polar(1, theta / 2),
    )


def P(phi: float = DEFAULT_ANGLE) -> Matrix:
    """Phase gate ``diag(1, e^{i phi})``."""
    return _matrix(Complex(1), Complex(0), Complex(0), Complex.from_polar(1, phi))


FIXED_GATES: Dict[str, Matrix] = {
    "I": I,
    "X": X,
    "Y": Y,
    "Z": Z,
    "H": H,
    "S": S,
    "Sdg": Sdg,
    "T": T,
    "Tdg": Tdg,
    "SX": SX,
}

PARAMETRIC_GATES: Dict[str, Callable[[float], Matrix]] = {
    "Rx": Rx,
    "Ry": Ry,
    "Rz": Rz,
    "P": P,
}

# Controlled gates that reuse a single-qubit matrix on the target
CONTROLLED_GATES: Dict[str, str] = {
    "CH": "H",
    "CS": "S",
    "CT": "T",
    "CRx": "Rx",
    "CRy": "Ry",
    "CRz": "Rz",
    "CP": "P",
}

# Two-qubit gates with a dedicated permutation or phase routine
PERMUTATION_GATES = ("CNOT", "CX", "CZ", "CY", "SWAP")

THREE_QUBIT_GATES = ("Toffoli", "CCX")

MEASURE = "M"

SINGLE_QUBIT_GATES = tuple(FIXED_GATES) + tuple(PARAMETRIC_GATES) + (MEASURE,)
TWO_QUBIT_GATES = PERMUTATION_GATES + tuple(CONTROLLED_GATES)
GATE_NAMES = SINGLE_QUBIT_GATES + TWO_QUBIT_GATES + THREE_QUBIT_GATES


def resolve_angle(params: Optional[Mapping[str, float]]) -> float:
    """Return ``params["theta"]`` or the default angle when it is omitted."""
    if not params or params.get("theta") is None:
        return DEFAULT_ANGLE
    return float(params["theta"])


def single_qubit_matrix(name: str, params: Optional[Mapping[str, float]] = None) -> Optional[Matrix]:
    """Return the ``2x2`` matrix for ``name`` or ``None`` if it is not a known gate."""
    if name in FIXED_GATES:
        return FIXED_GATES[name]
    if name in PARAMETRIC_GATES:
        return PARAMETRIC_GATES[name](resolve_angle(params))
    return None


def dagger(matrix: Matrix) -> Matrix:
    """Return the conjugate transpose of ``matrix``."""
    return _matrix(
        matrix[0][0].conjugate(),
        matrix[1][0].conjugate(),
        matrix[0][1].conjugate(),
        matrix[1][1].conjugate(),
    )


def matmul(a: Matrix, b: Matrix) -> Matrix:
    """Return the product ``a b`` of two ``2x2`` matrices."""
    return _matrix(
        a[0][0] * b[0][0] + a[0][1] * b[1][0],
        a[0][0] * b[0][1] + a[0][1] * b[1][1],
        a[1][0] * b[0][0] + a[1][1] * b[1][0],
        a[1][0] * b[0][1] + a[1][1] * b[1][1],
    )


def is_unitary(matrix: Sequence[Sequence[Complex]], tol: float = 1e-10) -> bool:
    """Return ``True`` if ``U U† = I`` within ``tol``.

    Accepts square matrices of any size so tests can check composed
    operators as well as the ``2x2`` library gates.
    """
    size = len(matrix)
    for i in range(size):
        for j in range(size):
            val = Complex(0)
            for k in range(size):
                val = val + matrix[i][k] * matrix[j][k].conjugate()
            expected = 1.0 if i == j else 0.0
            if not val.is_close(expected, tol):
                return False
    return True
