"""Exceptions raised by the simulator.

All errors derive from :class:`QuantumError`, itself a ``ValueError`` so that
callers which only guard against bad input values keep working.
"""


class QuantumError(ValueError):
    """Base class for every simulator error."""


class InvalidQubitIndex(QuantumError):
    """A qubit index is negative, too large, or repeated within one gate."""

    def __init__(self, qubit: int, num_qubits: int, reason: str = "out of range"):
        self.qubit = qubit
        self.num_qubits = num_qubits
        super().__init__(f"Invalid qubit index {qubit} for {num_qubits} qubit(s): {reason}")


class InvalidQubitCount(QuantumError):
    """A register size falls outside the supported bounds."""

    def __init__(self, count: int, minimum: int, maximum: int):
        self.count = count
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Qubit count {count} outside supported range [{minimum}, {maximum}]")


class UnknownGateError(QuantumError):
    """Raised in strict mode when a gate name is not part of the vocabulary."""


class UnknownAlgorithmError(QuantumError):
    """No algorithm preset is registered under the requested name."""


class UnknownDialectError(QuantumError):
    """No exporter is registered for the requested dialect."""
