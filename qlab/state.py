"""Quantum state vectors.

A :class:`QuantumState` owns ``2**n`` complex amplitudes.  Basis index ``i``
encodes the value of qubit ``k`` in bit ``k`` of ``i``, so qubit ``0`` is the
least significant bit and the binary rendering of an index reads the highest
qubit first::

    >>> state = QuantumState(3)
    >>> state.to_ket_notation(4)
    '|100⟩'

Measurement draws from an injectable random source.  Anything with a
``random()`` method returning a float in ``[0, 1)`` works; passing a seeded
``random.Random`` makes sampling reproducible.
"""

import math
import random
from typing import List, Optional, Protocol, Sequence, Tuple

from .complex_number import ONE, ZERO, Complex
from .errors import InvalidQubitIndex
from .log import get_logger

logger = get_logger(__name__)

# Amplitudes below this probability are left out of the ket rendering
_DISPLAY_THRESHOLD = 1e-4


class RandomSource(Protocol):
    def random(self) -> float: ...


class QuantumState:
    """State vector of ``num_qubits`` qubits, initialised to ``|0...0⟩``."""

    def __init__(self, num_qubits: int, rng: Optional[RandomSource] = None):
        self.num_qubits = num_qubits
        self.num_states = 1 << num_qubits
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.amplitudes: List[Complex] = []
        self.reset()

    def reset(self) -> None:
        """Return to the all-zero computational basis state."""
        self.amplitudes = [ZERO] * self.num_states
        self.amplitudes[0] = ONE

    def clone(self) -> "QuantumState":
        """Return an independent copy sharing only the random source."""
        copy = QuantumState(self.num_qubits, self.rng)
        copy.amplitudes = list(self.amplitudes)
        return copy

    def set_amplitudes(self, amplitudes: Sequence[Complex | complex | float]) -> None:
        """Load ``amplitudes`` and normalise them.

        Raises ``ValueError`` if the length is not ``2**num_qubits``.
        """
        if len(amplitudes) != self.num_states:
            raise ValueError(
                f"Expected {self.num_states} amplitudes, got {len(amplitudes)}"
            )
        self.amplitudes = [
            a if isinstance(a, Complex) else Complex.from_builtin(a) for a in amplitudes
        ]
        self.normalize()

    def check_qubit(self, qubit: int) -> None:
        if not isinstance(qubit, int) or qubit < 0 or qubit >= self.num_qubits:
            raise InvalidQubitIndex(qubit, self.num_qubits)

    # Queries

    def get_amplitude(self, index: int) -> Complex:
        return self.amplitudes[index]

    def get_probability(self, index: int) -> float:
        return self.amplitudes[index].probability()

    def get_probabilities(self) -> List[float]:
        return [a.probability() for a in self.amplitudes]

    def total_probability(self) -> float:
        return sum(a.probability() for a in self.amplitudes)

    def qubit_probability(self, qubit: int) -> float:
        """Probability of reading ``1`` on ``qubit``."""
        self.check_qubit(qubit)
        return sum(
            a.probability() for i, a in enumerate(self.amplitudes) if (i >> qubit) & 1
        )

    def bloch_vector(self, qubit: int) -> Tuple[float, float, float]:
        """Return ``(x, y, z)`` of the reduced state of ``qubit``.

        The vector has unit length for a qubit that is not entangled with the
        rest of the register and shrinks towards the origin as entanglement
        grows.
        """
        self.check_qubit(qubit)
        step = 1 << qubit
        rho00 = 0.0
        rho11 = 0.0
        rho01 = Complex(0)
        for i in range(self.num_states):
            if i & step:
                continue
            a0 = self.amplitudes[i]
            a1 = self.amplitudes[i | step]
            rho00 += a0.probability()
            rho11 += a1.probability()
            rho01 = rho01 + a0 * a1.conjugate()
        return (2 * rho01.real, -2 * rho01.imag, rho00 - rho11)

    # Mutation

    def normalize(self) -> None:
        """Rescale to unit norm; a zero vector is left untouched."""
        norm = math.sqrt(self.total_probability())
        if norm > 0:
            factor = 1 / norm
            self.amplitudes = [a.scale(factor) for a in self.amplitudes]

    def measure(self, qubit: int) -> int:
        """Measure ``qubit`` in the computational basis and collapse it.

        Only the measured qubit is projected: amplitudes inconsistent with the
        outcome are zeroed and the survivors rescaled, so any qubits entangled
        with ``qubit`` keep their correlated amplitudes.

        Returns
        -------
        int
            The observed bit, ``0`` or ``1``.  A zero vector has nothing to
            collapse: it is left unchanged and ``0`` is returned.
        """
        self.check_qubit(qubit)
        prob0 = 0.0
        prob1 = 0.0
        for i, amp in enumerate(self.amplitudes):
            if (i >> qubit) & 1:
                prob1 += amp.probability()
            else:
                prob0 += amp.probability()

        if prob0 + prob1 <= 0:
            logger.warning("measure qubit %d on a zero vector, state left unchanged", qubit)
            return 0

        outcome = 0 if self.rng.random() * (prob0 + prob1) < prob0 else 1
        kept = prob0 if outcome == 0 else prob1
        factor = 1 / math.sqrt(kept)
        for i in range(self.num_states):
            if ((i >> qubit) & 1) != outcome:
                self.amplitudes[i] = ZERO
            else:
                self.amplitudes[i] = self.amplitudes[i].scale(factor)

        logger.debug("measure qubit %d -> %d (p0=%.6f)", qubit, outcome, prob0)
        return outcome

    def measure_all(self) -> int:
        """Collapse the whole register onto one basis state and return its index."""
        r = self.rng.random()
        cumulative = 0.0
        result = self.num_states - 1
        for i, amp in enumerate(self.amplitudes):
            cumulative += amp.probability()
            if r < cumulative:
                result = i
                break

        self.amplitudes = [ZERO] * self.num_states
        self.amplitudes[result] = ONE
        return result

    # Rendering

    def to_binary_string(self, index: int) -> str:
        return format(index, f"0{self.num_qubits}b")

    def to_ket_notation(self, index: int) -> str:
        return f"|{self.to_binary_string(index)}⟩"

    def __len__(self) -> int:
        return self.num_states

    def __str__(self) -> str:
        terms = [
            f"{amp.to_string()} {self.to_ket_notation(i)}"
            for i, amp in enumerate(self.amplitudes)
            if amp.probability() > _DISPLAY_THRESHOLD
        ]
        return " + ".join(terms) or "0"

    def __repr__(self) -> str:
        return f"QuantumState(num_qubits={self.num_qubits})"
