"""qlab - a pure-Python state-vector simulator for small quantum circuits."""

__version__ = "0.1.0"

from .algorithms import (
    ALGORITHMS,
    bb84,
    bell_state,
    build_algorithm,
    deutsch_jozsa,
    ghz_state,
    grover,
    load_algorithm,
    qaoa,
    qft,
    teleportation,
    vqe_ansatz,
)
from .circuit import GateOperation, QuantumCircuit
from .complex_number import Complex
from .errors import (
    InvalidQubitCount,
    InvalidQubitIndex,
    QuantumError,
    UnknownAlgorithmError,
    UnknownDialectError,
    UnknownGateError,
)
from .export import export_circuit, to_cirq, to_qiskit, to_qsharp
from .state import QuantumState

__all__ = [
    "ALGORITHMS",
    "Complex",
    "GateOperation",
    "InvalidQubitCount",
    "InvalidQubitIndex",
    "QuantumCircuit",
    "QuantumError",
    "QuantumState",
    "UnknownAlgorithmError",
    "UnknownDialectError",
    "UnknownGateError",
    "bb84",
    "bell_state",
    "build_algorithm",
    "deutsch_jozsa",
    "export_circuit",
    "ghz_state",
    "grover",
    "load_algorithm",
    "qaoa",
    "qft",
    "teleportation",
    "to_cirq",
    "to_qiskit",
    "to_qsharp",
    "vqe_ansatz",
]
