"""Quantum circuits and gate application.

A :class:`QuantumCircuit` owns one :class:`~qlab.state.QuantumState` and an
ordered list of :class:`GateOperation` records.  Running the circuit resets the
state and replays every operation in order.

Gates are applied directly to the amplitude list by pairing basis indices that
differ in the target bit.  Only two (or, for swaps across two qubits, four)
amplitudes change per elementary update regardless of register size, which is
what keeps pure-Python simulation of ten qubits practical.

Two update disciplines are used:

* single-qubit and controlled single-qubit gates read both amplitudes of a pair
  from the pre-update list and write into a fresh buffer which then replaces
  the state's list;
* permutation gates (CNOT, SWAP, Toffoli) and the CZ phase flip work on a copy
  of the list in place, visiting each pair once by only acting when the lower
  index of the pair is reached.

Example::

    >>> qc = QuantumCircuit(2)
    >>> _ = qc.add_gate("H", 0)
    >>> _ = qc.add_gate("CNOT", 1, 0)
    >>> str(qc.run())
    '0.707 |00⟩ + 0.707 |11⟩'
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from . import config
from .complex_number import Complex
from .errors import InvalidQubitCount, InvalidQubitIndex, UnknownGateError
from .gates import (
    CONTROLLED_GATES,
    GATE_NAMES,
    MEASURE,
    Matrix,
    single_qubit_matrix,
    I,
)
from .log import get_logger
from .state import QuantumState, RandomSource

logger = get_logger(__name__)

_I = Complex(0, 1)
_MINUS_I = Complex(0, -1)


@dataclass
class GateOperation:
    """One entry of a circuit's gate list.

    ``control`` and ``control2`` are ``None`` for gates without controls.  For
    ``SWAP`` the ``control`` field holds the second swapped qubit.  ``time``
    is the position the operation was appended at.
    """

    name: str
    target: int
    control: Optional[int] = None
    control2: Optional[int] = None
    params: Optional[Dict[str, float]] = None
    time: int = 0

    @property
    def qubits(self) -> List[int]:
        return [q for q in (self.target, self.control, self.control2) if q is not None]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GateOperation":
        return cls(
            name=data["name"],
            target=data["target"],
            control=data.get("control"),
            control2=data.get("control2"),
            params=dict(data["params"]) if data.get("params") else None,
            time=data.get("time", 0),
        )


def check_qubit_count(num_qubits: int) -> None:
    if num_qubits < config.MIN_QUBITS or num_qubits > config.MAX_QUBITS:
        raise InvalidQubitCount(num_qubits, config.MIN_QUBITS, config.MAX_QUBITS)


class QuantumCircuit:
    """Gate list plus the state it acts on.

    Parameters
    ----------
    num_qubits:
        Register size, within ``[config.MIN_QUBITS, config.MAX_QUBITS]``.
    rng:
        Random source used for every measurement performed by this circuit.
    strict:
        When ``True`` unknown gate names raise :class:`UnknownGateError`
        instead of falling back to the identity (single-qubit) or a no-op
        (multi-qubit).  Defaults to ``config.STRICT_GATES``.
    """

    def __init__(
        self,
        num_qubits: int = config.DEFAULT_QUBITS,
        rng: Optional[RandomSource] = None,
        strict: Optional[bool] = None,
    ):
        check_qubit_count(num_qubits)
        self.num_qubits = num_qubits
        self.strict = config.STRICT_GATES if strict is None else strict
        self._gates: List[GateOperation] = []
        self.state = QuantumState(num_qubits, rng)

    @property
    def rng(self) -> RandomSource:
        return self.state.rng

    @property
    def gates(self) -> Sequence[GateOperation]:
        """Read-only view of the gate list in execution order."""
        return tuple(self._gates)

    def __len__(self) -> int:
        return len(self._gates)

    def reset(self) -> None:
        """Drop every gate and return the state to ``|0...0⟩``."""
        self._gates = []
        self.state.reset()

    # Register size

    def add_qubit(self) -> None:
        """Grow the register by one qubit; the state is rebuilt from scratch."""
        check_qubit_count(self.num_qubits + 1)
        self.num_qubits += 1
        self.state = QuantumState(self.num_qubits, self.state.rng)

    def remove_qubit(self) -> None:
        """Shrink the register by one qubit.

        The state is rebuilt and every gate touching the removed qubit is
        dropped from the gate list.
        """
        check_qubit_count(self.num_qubits - 1)
        self.num_qubits -= 1
        self.state = QuantumState(self.num_qubits, self.state.rng)
        before = len(self._gates)
        self._gates = [
            g for g in self._gates if all(q < self.num_qubits for q in g.qubits)
        ]
        dropped = before - len(self._gates)
        if dropped:
            logger.debug("remove_qubit dropped %d gate(s)", dropped)

    # Gate list

    def add_gate(
        self,
        name: str,
        target: int,
        control: Optional[int] = None,
        control2: Optional[int] = None,
        params: Optional[Mapping[str, float]] = None,
    ) -> GateOperation:
        """Append a gate and return its record.

        Example
        -------
        >>> qc = QuantumCircuit(2)
        >>> qc.add_gate("Rx", 0, params={"theta": 0.5}).time
        0
        """
        op = GateOperation(
            name=name,
            target=target,
            control=control,
            control2=control2,
            params=dict(params) if params else None,
            time=len(self._gates),
        )
        self._check_operation(op)
        if self.strict and name not in GATE_NAMES:
            raise UnknownGateError(f"Unknown gate {name}")
        self._gates.append(op)
        return op

    def remove_gate(self, index: int) -> None:
        """Delete the gate at ``index``; out-of-range indices are ignored."""
        if 0 <= index < len(self._gates):
            del self._gates[index]

    def _check_operation(self, op: GateOperation) -> None:
        qubits = op.qubits
        for q in qubits:
            if not isinstance(q, int) or q < 0 or q >= self.num_qubits:
                raise InvalidQubitIndex(q, self.num_qubits)
        if len(set(qubits)) != len(qubits):
            raise InvalidQubitIndex(op.target, self.num_qubits, "qubits of one gate must differ")

    # Execution

    def run(self) -> QuantumState:
        """Reset the state and apply every gate in order."""
        self.state.reset()
        for op in self._gates:
            self.apply_gate(op)
        logger.debug("ran %d gate(s) on %d qubit(s)", len(self._gates), self.num_qubits)
        return self.state

    def run_shots(self, shots: int = config.DEFAULT_SHOTS) -> Dict[str, int]:
        """Sample ``shots`` full-register measurements.

        Each shot runs the circuit and collapses the whole register.  The
        state present before the call is restored afterwards, so sampling a
        histogram never disturbs the working state.  A circuit without
        inline measurements always reaches the same pre-measurement state,
        so it is simulated once and every shot samples a clone of it.
        """
        if shots < 0:
            raise ValueError("shots must be non-negative")
        saved = self.state.clone()
        counts: Dict[str, int] = {}
        has_measurement = any(g.name == MEASURE for g in self._gates)

        try:
            prepared = None
            if not has_measurement:
                prepared = self.run().clone()

            for _ in range(shots):
                if prepared is not None:
                    self.state = prepared.clone()
                else:
                    self.run()
                bits = self.state.to_binary_string(self.state.measure_all())
                counts[bits] = counts.get(bits, 0) + 1
        finally:
            self.state = saved
        logger.info("sampled %d shot(s), %d distinct outcome(s)", shots, len(counts))
        return counts

    def measure(self, qubit: int) -> int:
        """Measure ``qubit`` of the current state directly."""
        return self.state.measure(qubit)

    def measure_all(self) -> int:
        """Collapse the current state onto one basis index."""
        return self.state.measure_all()

    def get_state_vector(self) -> List[Dict[str, Any]]:
        """Return one record per basis index, ordered by index."""
        result = []
        for i, amp in enumerate(self.state.amplitudes):
            result.append(
                {
                    "index": i,
                    "binary": self.state.to_binary_string(i),
                    "ket": self.state.to_ket_notation(i),
                    "amplitude": amp,
                    "probability": amp.probability(),
                }
            )
        return result

    def apply_gate(self, op: GateOperation) -> Optional[int]:
        """Apply one operation to the current state.

        Returns the measured bit for ``M`` and ``None`` otherwise.
        """
        self._check_operation(op)
        name = op.name

        if op.control is None:
            if name == MEASURE:
                return self.state.measure(op.target)
            matrix = single_qubit_matrix(name, op.params)
            if matrix is None:
                self._unknown(op)
                matrix = I
            self.apply_single_qubit_gate(matrix, op.target)
        elif op.control2 is None:
            if name in ("CNOT", "CX"):
                self.apply_cnot(op.control, op.target)
            elif name == "CZ":
                self.apply_cz(op.control, op.target)
            elif name == "CY":
                self.apply_cy(op.control, op.target)
            elif name == "SWAP":
                self.apply_swap(op.control, op.target)
            elif name in CONTROLLED_GATES:
                matrix = single_qubit_matrix(CONTROLLED_GATES[name], op.params)
                self.apply_controlled_gate(matrix, op.control, op.target)
            else:
                self._unknown(op)
        else:
            if name in ("Toffoli", "CCX"):
                self.apply_toffoli(op.control, op.control2, op.target)
            else:
                self._unknown(op)
        return None

    def _unknown(self, op: GateOperation) -> None:
        if self.strict:
            raise UnknownGateError(f"Unknown gate {op.name} on qubits {op.qubits}")
        logger.warning("unknown gate %s on qubits %s ignored", op.name, op.qubits)

    # Elementary updates

    def apply_single_qubit_gate(self, gate: Matrix, qubit: int) -> None:
        """Apply the ``2x2`` ``gate`` to ``qubit``."""
        amps = self.state.amplitudes
        step = 1 << qubit
        new_amps = [Complex(0)] * len(amps)
        for i0 in range(len(amps)):
            if i0 & step:
                continue
            i1 = i0 | step
            a0 = amps[i0]
            a1 = amps[i1]
            new_amps[i0] = gate[0][0] * a0 + gate[0][1] * a1
            new_amps[i1] = gate[1][0] * a0 + gate[1][1] * a1
        self.state.amplitudes = new_amps

    def apply_controlled_gate(self, gate: Matrix, control: int, target: int) -> None:
        """Apply ``gate`` to ``target`` on the subspace where ``control`` is 1."""
        amps = self.state.amplitudes
        cbit = 1 << control
        tbit = 1 << target
        new_amps = list(amps)
        for i0 in range(len(amps)):
            if not i0 & cbit or i0 & tbit:
                continue
            i1 = i0 | tbit
            a0 = amps[i0]
            a1 = amps[i1]
            new_amps[i0] = gate[0][0] * a0 + gate[0][1] * a1
            new_amps[i1] = gate[1][0] * a0 + gate[1][1] * a1
        self.state.amplitudes = new_amps

    def apply_cnot(self, control: int, target: int) -> None:
        amps = list(self.state.amplitudes)
        cbit = 1 << control
        for i in range(len(amps)):
            if i & cbit:
                j = i ^ (1 << target)
                if i < j:
                    amps[i], amps[j] = amps[j], amps[i]
        self.state.amplitudes = amps

    def apply_cz(self, control: int, target: int) -> None:
        amps = list(self.state.amplitudes)
        mask = (1 << control) | (1 << target)
        for i in range(len(amps)):
            if i & mask == mask:
                amps[i] = -amps[i]
        self.state.amplitudes = amps

    def apply_cy(self, control: int, target: int) -> None:
        """Controlled-Y: ``|c=1,t=0⟩ -> i|c=1,t=1⟩`` and ``|c=1,t=1⟩ -> -i|c=1,t=0⟩``."""
        amps = self.state.amplitudes
        cbit = 1 << control
        tbit = 1 << target
        new_amps = list(amps)
        for i0 in range(len(amps)):
            if not i0 & cbit or i0 & tbit:
                continue
            i1 = i0 | tbit
            new_amps[i1] = _I * amps[i0]
            new_amps[i0] = _MINUS_I * amps[i1]
        self.state.amplitudes = new_amps

    def apply_swap(self, qubit1: int, qubit2: int) -> None:
        amps = list(self.state.amplitudes)
        flip = (1 << qubit1) | (1 << qubit2)
        for i in range(len(amps)):
            if ((i >> qubit1) & 1) != ((i >> qubit2) & 1):
                j = i ^ flip
                if i < j:
                    amps[i], amps[j] = amps[j], amps[i]
        self.state.amplitudes = amps

    def apply_toffoli(self, control1: int, control2: int, target: int) -> None:
        amps = list(self.state.amplitudes)
        mask = (1 << control1) | (1 << control2)
        for i in range(len(amps)):
            if i & mask == mask:
                j = i ^ (1 << target)
                if i < j:
                    amps[i], amps[j] = amps[j], amps[i]
        self.state.amplitudes = amps

    # Serialisation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_qubits": self.num_qubits,
            "gates": [g.to_dict() for g in self._gates],
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        rng: Optional[RandomSource] = None,
        strict: Optional[bool] = None,
    ) -> "QuantumCircuit":
        """Rebuild a circuit from :meth:`to_dict` output."""
        circuit = cls(data["num_qubits"], rng=rng, strict=strict)
        for entry in data.get("gates", []):
            op = GateOperation.from_dict(entry)
            circuit.add_gate(op.name, op.target, op.control, op.control2, op.params)
        return circuit

    def __repr__(self) -> str:
        return f"QuantumCircuit(num_qubits={self.num_qubits}, gates={len(self._gates)})"
