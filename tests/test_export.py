import math

import pytest

from qlab.algorithms import bell_state, qft
from qlab.circuit import QuantumCircuit
from qlab.errors import UnknownDialectError
from qlab.export import EXPORTERS, export_circuit, to_cirq, to_qiskit, to_qsharp


@pytest.fixture
def bell():
    return bell_state(QuantumCircuit(2))


def test_qiskit_bell(bell):
    lines = to_qiskit(bell).splitlines()
    assert lines[0] == "from qiskit import QuantumCircuit"
    assert "qc = QuantumCircuit(2, 2)" in lines
    assert lines.index("qc.h(0)") < lines.index("qc.cx(0, 1)")
    assert "print(statevector)" in lines


def test_qiskit_parametric_gates_use_default_angle():
    qc = QuantumCircuit(2)
    qc.add_gate("Rx", 0)
    qc.add_gate("CRz", 1, 0, params={"theta": 0.5})
    code = to_qiskit(qc)
    assert f"qc.rx({math.pi / 4!r}, 0)" in code
    assert "qc.crz(0.5, 0, 1)" in code


def test_qiskit_three_qubit_and_measure():
    qc = QuantumCircuit(3)
    qc.add_gate("Toffoli", 2, 0, 1)
    qc.add_gate("M", 2)
    code = to_qiskit(qc)
    assert "qc.ccx(0, 1, 2)" in code
    assert "qc.measure(2, 2)" in code


def test_cirq_bell(bell):
    code = to_cirq(bell)
    assert "import cirq" in code
    assert "qubits = [cirq.LineQubit(i) for i in range(2)]" in code
    assert "circuit.append(cirq.H(qubits[0]))" in code
    assert "circuit.append(cirq.CNOT(qubits[0], qubits[1]))" in code


def test_qsharp_bell_skips_measurement(bell):
    bell.add_gate("M", 0)
    code = to_qsharp(bell)
    lines = code.splitlines()
    assert lines[0] == "namespace QuantumLab {"
    assert "        use qubits = Qubit[2];" in lines
    assert "        H(qubits[0]);" in lines
    assert "        CNOT(qubits[0], qubits[1]);" in lines
    assert "        let results = MultiM(qubits);" in lines
    assert "M(qubits[0])" not in code
    assert lines[-1] == "}"


def test_qsharp_namespace():
    assert to_qsharp(QuantumCircuit(1), namespace="Demo").startswith("namespace Demo {")


def test_unsupported_gates_are_skipped():
    qc = QuantumCircuit(2)
    qc.add_gate("SX", 0)
    qc.add_gate("X", 1)
    qsharp_code = to_qsharp(qc)
    assert "SX" not in qsharp_code
    assert "        X(qubits[1]);" in qsharp_code
    assert "qc.sx(0)" in to_qiskit(qc)
    assert "circuit.append((cirq.X**0.5)(qubits[0]))" in to_cirq(qc)


def test_controlled_rotations_are_exported():
    qc = qft(QuantumCircuit(3))
    crz = [g for g in qc.gates if g.name == "CRz"]
    half = repr(math.pi / 2)

    cirq_code = to_cirq(qc)
    assert cirq_code.count(".controlled_by(") == len(crz) == 3
    assert f"circuit.append(cirq.rz({half})(qubits[2]).controlled_by(qubits[1]))" in cirq_code

    qsharp_code = to_qsharp(qc)
    assert qsharp_code.count("Controlled Rz(") == 3
    assert f"        Controlled Rz([qubits[1]], ({half}, qubits[2]));" in qsharp_code

    assert to_qiskit(qc).count("qc.crz(") == 3


def test_controlled_fixed_gates_in_every_dialect():
    qc = QuantumCircuit(2)
    for name in ("CH", "CS", "CT", "CY"):
        qc.add_gate(name, 1, 0)
    qc.add_gate("CP", 1, 0, params={"theta": 0.5})
    cirq_code = to_cirq(qc)
    assert "circuit.append(cirq.H(qubits[1]).controlled_by(qubits[0]))" in cirq_code
    assert "circuit.append((cirq.Z**(0.5 / np.pi))(qubits[1]).controlled_by(qubits[0]))" in cirq_code
    assert cirq_code.count(".controlled_by(") == 5
    qsharp_code = to_qsharp(qc)
    assert "Controlled T([qubits[0]], qubits[1]);" in qsharp_code
    assert "Controlled R1([qubits[0]], (0.5, qubits[1]));" in qsharp_code
    qiskit_code = to_qiskit(qc)
    assert "qc.cs(0, 1)" in qiskit_code
    assert f"qc.cp({math.pi / 4!r}, 0, 1)" in qiskit_code


def test_unknown_gates_are_skipped():
    qc = QuantumCircuit(1)
    qc.add_gate("Foo", 0)
    qc.add_gate("H", 0)
    code = to_qiskit(qc)
    assert "Foo" not in code and "foo" not in code
    assert "qc.h(0)" in code


def test_export_circuit_dispatch(bell):
    assert set(EXPORTERS) == {"qiskit", "cirq", "qsharp"}
    assert export_circuit(bell) == to_qiskit(bell)
    assert export_circuit(bell, "Cirq") == to_cirq(bell)
    assert export_circuit(bell, "QSHARP") == to_qsharp(bell)


def test_export_circuit_unknown_dialect(bell):
    with pytest.raises(UnknownDialectError):
        export_circuit(bell, "quil")
