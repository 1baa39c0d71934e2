"""Quantum algorithm construction helpers.

Each helper appends a canonical gate sequence to the circuit it is given and
returns that same circuit so calls can be chained.  None of them touch the
state; run the circuit afterwards to see the result::

    >>> from qlab.circuit import QuantumCircuit
    >>> qc = ghz_state(QuantumCircuit(3))
    >>> [g.name for g in qc.gates]
    ['H', 'CNOT', 'CNOT']

Gate records follow the ``add_gate(name, target, control, control2, params)``
argument order, so ``add_gate("CNOT", 1, 0)`` flips qubit 1 controlled by
qubit 0.

The module ends with a small registry of named presets used by the command
line interface and the HTTP API.
"""

import math
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .circuit import QuantumCircuit
from .errors import UnknownAlgorithmError
from .log import get_logger
from .state import RandomSource

logger = get_logger(__name__)


def bell_state(circuit: QuantumCircuit, qubit1: int = 0, qubit2: int = 1) -> QuantumCircuit:
    """Entangle ``qubit1`` and ``qubit2`` into ``(|00⟩ + |11⟩)/√2``."""
    circuit.add_gate("H", qubit1)
    circuit.add_gate("CNOT", qubit2, qubit1)
    return circuit


def ghz_state(circuit: QuantumCircuit) -> QuantumCircuit:
    """Fan a Hadamard on qubit 0 out to every other qubit with CNOTs."""
    circuit.add_gate("H", 0)
    for i in range(1, circuit.num_qubits):
        circuit.add_gate("CNOT", i, 0)
    return circuit


def qft(circuit: QuantumCircuit) -> QuantumCircuit:
    """Append the quantum Fourier transform over the whole register.

    Qubits are processed from the highest index down.  Each receives a
    Hadamard followed by controlled rotations ``CRz(π / 2**(i - j))`` from
    every lower qubit ``j``.  A final layer of SWAPs reverses the qubit order.

    Applied to ``|0...0⟩`` the transform yields the uniform superposition.
    """
    n = circuit.num_qubits
    for i in range(n - 1, -1, -1):
        circuit.add_gate("H", i)
        for j in range(i - 1, -1, -1):
            angle = math.pi / (1 << (i - j))
            circuit.add_gate("CRz", i, j, params={"theta": angle})
    for i in range(n // 2):
        circuit.add_gate("SWAP", i, n - 1 - i)
    return circuit


def grover_iterations(num_qubits: int) -> int:
    """``floor(π/4 · sqrt(2**n))`` with a minimum of one."""
    return max(1, int(math.floor(math.pi / 4 * math.sqrt(1 << num_qubits))))


def _phase_flip_all_ones(circuit: QuantumCircuit) -> None:
    # CZ on two qubits, H-Toffoli-H on qubit n-1 controlled by 0 and 1 otherwise
    n = circuit.num_qubits
    if n == 2:
        circuit.add_gate("CZ", 0, 1)
    elif n >= 3:
        circuit.add_gate("H", n - 1)
        circuit.add_gate("Toffoli", n - 1, 0, 1)
        circuit.add_gate("H", n - 1)


def grover(circuit: QuantumCircuit, marked_state: int = 0) -> QuantumCircuit:
    """Append Grover search for the basis state ``marked_state``.

    The oracle surrounds an all-ones phase flip with X gates on every qubit
    whose bit in ``marked_state`` is 0.  The diffusion operator is the same
    phase flip wrapped in Hadamard and X layers.  The multi-controlled flip is
    built from a CZ (two qubits) or an H-Toffoli-H sandwich on the top qubit
    controlled by qubits 0 and 1 (three or more qubits).  With four or more
    qubits that flip ignores the middle qubits, so every basis state with
    qubits 0, 1 and n-1 set is marked too and amplification is only exact
    for up to three qubits.

    Parameters
    ----------
    circuit:
        Circuit to extend.
    marked_state:
        Basis index to amplify, ``0 <= marked_state < 2**num_qubits``.
    """
    n = circuit.num_qubits
    if not 0 <= marked_state < (1 << n):
        raise ValueError(f"marked state {marked_state} outside 0..{(1 << n) - 1}")

    for i in range(n):
        circuit.add_gate("H", i)

    zero_bits = [i for i in range(n) if not (marked_state >> i) & 1]
    for _ in range(grover_iterations(n)):
        if n >= 2:
            for i in zero_bits:
                circuit.add_gate("X", i)
            _phase_flip_all_ones(circuit)
            for i in zero_bits:
                circuit.add_gate("X", i)

        for i in range(n):
            circuit.add_gate("H", i)
        for i in range(n):
            circuit.add_gate("X", i)
        _phase_flip_all_ones(circuit)
        for i in range(n):
            circuit.add_gate("X", i)
        for i in range(n):
            circuit.add_gate("H", i)
    return circuit


def vqe_ansatz(
    circuit: QuantumCircuit,
    params: Sequence[float] = (),
    depth: int = 2,
    rng: Optional[RandomSource] = None,
) -> QuantumCircuit:
    """Append a hardware-efficient variational ansatz.

    Every layer applies ``Ry(θ)`` then ``Rz(φ)`` to each qubit and then a
    ladder of CNOTs coupling neighbouring qubits.  Angles are consumed from
    ``params`` in order (θ, φ per qubit per layer); once ``params`` runs out
    the remaining angles are drawn uniformly from ``[0, 2π)`` using ``rng``,
    falling back to the circuit's own random source.
    """
    rng = rng if rng is not None else circuit.rng
    n = circuit.num_qubits
    index = 0

    def next_angle() -> float:
        nonlocal index
        if index < len(params):
            value = float(params[index])
        else:
            value = rng.random() * 2 * math.pi
        index += 1
        return value

    for _ in range(depth):
        for i in range(n):
            theta = next_angle()
            phi = next_angle()
            circuit.add_gate("Ry", i, params={"theta": theta})
            circuit.add_gate("Rz", i, params={"theta": phi})
        for i in range(n - 1):
            circuit.add_gate("CNOT", i + 1, i)
    return circuit


def qaoa(circuit: QuantumCircuit, gamma: float = 0.5, beta: float = 0.5) -> QuantumCircuit:
    """Append one QAOA layer for a nearest-neighbour cost on a line.

    Hadamards prepare ``|+...+⟩``, each neighbouring pair gets a
    ``CNOT · Rz(2γ) · CNOT`` ZZ-coupling, and ``Rx(2β)`` mixes every qubit.
    """
    n = circuit.num_qubits
    for i in range(n):
        circuit.add_gate("H", i)
    for i in range(n - 1):
        circuit.add_gate("CNOT", i + 1, i)
        circuit.add_gate("Rz", i + 1, params={"theta": 2 * gamma})
        circuit.add_gate("CNOT", i + 1, i)
    for i in range(n):
        circuit.add_gate("Rx", i, params={"theta": 2 * beta})
    return circuit


def teleportation(circuit: QuantumCircuit) -> QuantumCircuit:
    """Append the three-qubit teleportation circuit.

    Qubit 0 carries the payload.  Qubits 1 and 2 are entangled into a Bell
    pair, qubits 0 and 1 are rotated into the Bell basis, and the classical
    corrections are applied coherently: CNOT from qubit 1 and CZ from qubit 0
    onto qubit 2.
    """
    circuit.add_gate("H", 1)
    circuit.add_gate("CNOT", 2, 1)

    circuit.add_gate("CNOT", 1, 0)
    circuit.add_gate("H", 0)

    circuit.add_gate("CNOT", 2, 1)
    circuit.add_gate("CZ", 2, 0)
    return circuit


def deutsch_jozsa(circuit: QuantumCircuit, oracle: str = "balanced") -> QuantumCircuit:
    """Append Deutsch–Jozsa with the highest qubit as the ancilla.

    ``oracle`` is ``"balanced"`` (CNOT from every input qubit onto the
    ancilla, i.e. parity) or ``"constant"`` (no gates).  Every input qubit is
    measured at the end: all zeros means the oracle was constant.
    """
    if oracle not in ("balanced", "constant"):
        raise ValueError(f"oracle must be 'balanced' or 'constant', got {oracle!r}")
    n = circuit.num_qubits - 1

    circuit.add_gate("X", n)
    for i in range(n + 1):
        circuit.add_gate("H", i)

    if oracle == "balanced":
        for i in range(n):
            circuit.add_gate("CNOT", n, i)

    for i in range(n):
        circuit.add_gate("H", i)
    for i in range(n):
        circuit.add_gate("M", i)
    return circuit


def bb84(circuit: QuantumCircuit) -> QuantumCircuit:
    """Append the two-qubit BB84 demonstration: a Bell pair read in the X basis."""
    circuit.add_gate("H", 0)
    circuit.add_gate("CNOT", 1, 0)
    circuit.add_gate("H", 0)
    circuit.add_gate("H", 1)
    return circuit


# Named presets: default register size, builder and builder keyword arguments
ALGORITHMS: Dict[str, Tuple[int, Callable[..., QuantumCircuit], Dict[str, Any]]] = {
    "bell": (2, bell_state, {}),
    "ghz": (3, ghz_state, {}),
    "grover": (3, grover, {"marked_state": 7}),
    "shor": (4, qft, {}),
    "qft": (4, qft, {}),
    "vqe": (4, vqe_ansatz, {}),
    "qaoa": (4, qaoa, {"gamma": 0.5, "beta": 0.5}),
    "bb84": (2, bb84, {}),
    "teleportation": (3, teleportation, {}),
    "deutsch_jozsa": (3, deutsch_jozsa, {"oracle": "balanced"}),
}


def build_algorithm(
    name: str,
    num_qubits: Optional[int] = None,
    rng: Optional[RandomSource] = None,
    strict: Optional[bool] = None,
    **options: Any,
) -> QuantumCircuit:
    """Return a new circuit holding the algorithm registered as ``name``.

    ``num_qubits`` defaults to the preset's register size and ``options``
    override the preset's keyword arguments, e.g.
    ``build_algorithm("grover", 2, marked_state=1)``.
    """
    if name not in ALGORITHMS:
        raise UnknownAlgorithmError(f"Unknown algorithm {name}")
    size, build, defaults = ALGORITHMS[name]
    circuit = QuantumCircuit(size if num_qubits is None else num_qubits, rng=rng, strict=strict)
    build(circuit, **{**defaults, **options})
    logger.debug("built %s on %d qubit(s) with %d gate(s)", name, circuit.num_qubits, len(circuit))
    return circuit


def load_algorithm(
    name: str,
    rng: Optional[RandomSource] = None,
    strict: Optional[bool] = None,
) -> QuantumCircuit:
    """Return the preset ``name`` with its default size and arguments."""
    return build_algorithm(name, rng=rng, strict=strict)
