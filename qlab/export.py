"""Render a circuit's gate list as source code for other quantum toolkits.

Supported dialects:
    - ``qiskit``: a Qiskit ``QuantumCircuit`` script
    - ``cirq``: a Cirq ``Circuit`` on ``LineQubit``s
    - ``qsharp``: a Q# operation returning ``MultiM`` results

Exporters only read ``circuit.gates`` and ``circuit.num_qubits``.  Gates a
dialect has no template for are left out of its output.
"""

import math
from typing import Callable, Dict, List, Optional

from .circuit import GateOperation, QuantumCircuit
from .errors import UnknownDialectError
from .gates import resolve_angle
from .log import get_logger

logger = get_logger(__name__)

Template = Callable[[GateOperation, float], str]


def _fmt(value: float) -> str:
    return repr(float(value))


def _cirq_controlled(gate: str, g: GateOperation) -> str:
    return f"circuit.append({gate}(qubits[{g.target}]).controlled_by(qubits[{g.control}]))"


QISKIT_TEMPLATES: Dict[str, Template] = {
    "H": lambda g, a: f"qc.h({g.target})",
    "X": lambda g, a: f"qc.x({g.target})",
    "Y": lambda g, a: f"qc.y({g.target})",
    "Z": lambda g, a: f"qc.z({g.target})",
    "S": lambda g, a: f"qc.s({g.target})",
    "Sdg": lambda g, a: f"qc.sdg({g.target})",
    "T": lambda g, a: f"qc.t({g.target})",
    "Tdg": lambda g, a: f"qc.tdg({g.target})",
    "SX": lambda g, a: f"qc.sx({g.target})",
    "Rx": lambda g, a: f"qc.rx({_fmt(a)}, {g.target})",
    "Ry": lambda g, a: f"qc.ry({_fmt(a)}, {g.target})",
    "Rz": lambda g, a: f"qc.rz({_fmt(a)}, {g.target})",
    "P": lambda g, a: f"qc.p({_fmt(a)}, {g.target})",
    "CNOT": lambda g, a: f"qc.cx({g.control}, {g.target})",
    "CX": lambda g, a: f"qc.cx({g.control}, {g.target})",
    "CY": lambda g, a: f"qc.cy({g.control}, {g.target})",
    "CZ": lambda g, a: f"qc.cz({g.control}, {g.target})",
    "CH": lambda g, a: f"qc.ch({g.control}, {g.target})",
    "CRx": lambda g, a: f"qc.crx({_fmt(a)}, {g.control}, {g.target})",
    "CRy": lambda g, a: f"qc.cry({_fmt(a)}, {g.control}, {g.target})",
    "CRz": lambda g, a: f"qc.crz({_fmt(a)}, {g.control}, {g.target})",
    "CS": lambda g, a: f"qc.cs({g.control}, {g.target})",
    "CT": lambda g, a: f"qc.cp({_fmt(math.pi / 4)}, {g.control}, {g.target})",
    "CP": lambda g, a: f"qc.cp({_fmt(a)}, {g.control}, {g.target})",
    "SWAP": lambda g, a: f"qc.swap({g.control}, {g.target})",
    "Toffoli": lambda g, a: f"qc.ccx({g.control}, {g.control2}, {g.target})",
    "CCX": lambda g, a: f"qc.ccx({g.control}, {g.control2}, {g.target})",
    "M": lambda g, a: f"qc.measure({g.target}, {g.target})",
}

CIRQ_TEMPLATES: Dict[str, Template] = {
    "H": lambda g, a: f"circuit.append(cirq.H(qubits[{g.target}]))",
    "X": lambda g, a: f"circuit.append(cirq.X(qubits[{g.target}]))",
    "Y": lambda g, a: f"circuit.append(cirq.Y(qubits[{g.target}]))",
    "Z": lambda g, a: f"circuit.append(cirq.Z(qubits[{g.target}]))",
    "S": lambda g, a: f"circuit.append(cirq.S(qubits[{g.target}]))",
    "Sdg": lambda g, a: f"circuit.append((cirq.S**-1)(qubits[{g.target}]))",
    "T": lambda g, a: f"circuit.append(cirq.T(qubits[{g.target}]))",
    "Tdg": lambda g, a: f"circuit.append((cirq.T**-1)(qubits[{g.target}]))",
    "SX": lambda g, a: f"circuit.append((cirq.X**0.5)(qubits[{g.target}]))",
    "Rx": lambda g, a: f"circuit.append(cirq.rx({_fmt(a)})(qubits[{g.target}]))",
    "Ry": lambda g, a: f"circuit.append(cirq.ry({_fmt(a)})(qubits[{g.target}]))",
    "Rz": lambda g, a: f"circuit.append(cirq.rz({_fmt(a)})(qubits[{g.target}]))",
    "P": lambda g, a: f"circuit.append((cirq.Z**({_fmt(a)} / np.pi))(qubits[{g.target}]))",
    "CNOT": lambda g, a: f"circuit.append(cirq.CNOT(qubits[{g.control}], qubits[{g.target}]))",
    "CX": lambda g, a: f"circuit.append(cirq.CNOT(qubits[{g.control}], qubits[{g.target}]))",
    "CZ": lambda g, a: f"circuit.append(cirq.CZ(qubits[{g.control}], qubits[{g.target}]))",
    "CY": lambda g, a: _cirq_controlled("cirq.Y", g),
    "CH": lambda g, a: _cirq_controlled("cirq.H", g),
    "CS": lambda g, a: _cirq_controlled("cirq.S", g),
    "CT": lambda g, a: _cirq_controlled("cirq.T", g),
    "CRx": lambda g, a: _cirq_controlled(f"cirq.rx({_fmt(a)})", g),
    "CRy": lambda g, a: _cirq_controlled(f"cirq.ry({_fmt(a)})", g),
    "CRz": lambda g, a: _cirq_controlled(f"cirq.rz({_fmt(a)})", g),
    "CP": lambda g, a: _cirq_controlled(f"(cirq.Z**({_fmt(a)} / np.pi))", g),
    "SWAP": lambda g, a: f"circuit.append(cirq.SWAP(qubits[{g.control}], qubits[{g.target}]))",
    "Toffoli": lambda g, a: (
        f"circuit.append(cirq.TOFFOLI(qubits[{g.control}], qubits[{g.control2}], qubits[{g.target}]))"
    ),
    "CCX": lambda g, a: (
        f"circuit.append(cirq.TOFFOLI(qubits[{g.control}], qubits[{g.control2}], qubits[{g.target}]))"
    ),
    "M": lambda g, a: f"circuit.append(cirq.measure(qubits[{g.target}], key='m{g.target}'))",
}

QSHARP_TEMPLATES: Dict[str, Template] = {
    "H": lambda g, a: f"H(qubits[{g.target}]);",
    "X": lambda g, a: f"X(qubits[{g.target}]);",
    "Y": lambda g, a: f"Y(qubits[{g.target}]);",
    "Z": lambda g, a: f"Z(qubits[{g.target}]);",
    "S": lambda g, a: f"S(qubits[{g.target}]);",
    "Sdg": lambda g, a: f"Adjoint S(qubits[{g.target}]);",
    "T": lambda g, a: f"T(qubits[{g.target}]);",
    "Tdg": lambda g, a: f"Adjoint T(qubits[{g.target}]);",
    "Rx": lambda g, a: f"Rx({_fmt(a)}, qubits[{g.target}]);",
    "Ry": lambda g, a: f"Ry({_fmt(a)}, qubits[{g.target}]);",
    "Rz": lambda g, a: f"Rz({_fmt(a)}, qubits[{g.target}]);",
    "P": lambda g, a: f"R1({_fmt(a)}, qubits[{g.target}]);",
    "CNOT": lambda g, a: f"CNOT(qubits[{g.control}], qubits[{g.target}]);",
    "CX": lambda g, a: f"CNOT(qubits[{g.control}], qubits[{g.target}]);",
    "CY": lambda g, a: f"CY(qubits[{g.control}], qubits[{g.target}]);",
    "CZ": lambda g, a: f"CZ(qubits[{g.control}], qubits[{g.target}]);",
    "CH": lambda g, a: f"Controlled H([qubits[{g.control}]], qubits[{g.target}]);",
    "CS": lambda g, a: f"Controlled S([qubits[{g.control}]], qubits[{g.target}]);",
    "CT": lambda g, a: f"Controlled T([qubits[{g.control}]], qubits[{g.target}]);",
    "CRx": lambda g, a: f"Controlled Rx([qubits[{g.control}]], ({_fmt(a)}, qubits[{g.target}]));",
    "CRy": lambda g, a: f"Controlled Ry([qubits[{g.control}]], ({_fmt(a)}, qubits[{g.target}]));",
    "CRz": lambda g, a: f"Controlled Rz([qubits[{g.control}]], ({_fmt(a)}, qubits[{g.target}]));",
    "CP": lambda g, a: f"Controlled R1([qubits[{g.control}]], ({_fmt(a)}, qubits[{g.target}]));",
    "SWAP": lambda g, a: f"SWAP(qubits[{g.control}], qubits[{g.target}]);",
    "Toffoli": lambda g, a: f"CCNOT(qubits[{g.control}], qubits[{g.control2}], qubits[{g.target}]);",
    "CCX": lambda g, a: f"CCNOT(qubits[{g.control}], qubits[{g.control2}], qubits[{g.target}]);",
}


def _render_gates(circuit: QuantumCircuit, templates: Dict[str, Template], indent: str = "") -> List[str]:
    lines = []
    for gate in circuit.gates:
        template = templates.get(gate.name)
        if template is None:
            logger.debug("no template for %s, skipped", gate.name)
            continue
        lines.append(indent + template(gate, resolve_angle(gate.params)))
    return lines


def to_qiskit(circuit: QuantumCircuit) -> str:
    n = circuit.num_qubits
    lines = [
        "from qiskit import QuantumCircuit",
        "from qiskit.quantum_info import Statevector",
        "",
        f"qc = QuantumCircuit({n}, {n})",
    ]
    lines.extend(_render_gates(circuit, QISKIT_TEMPLATES))
    lines.extend(
        [
            "",
            "# Run simulation",
            "statevector = Statevector.from_instruction(qc.remove_final_measurements(inplace=False))",
            "print(statevector)",
        ]
    )
    return "\n".join(lines) + "\n"


def to_cirq(circuit: QuantumCircuit) -> str:
    lines = [
        "import cirq",
        "import numpy as np",
        "",
        "# Create qubits",
        f"qubits = [cirq.LineQubit(i) for i in range({circuit.num_qubits})]",
        "",
        "# Build circuit",
        "circuit = cirq.Circuit()",
    ]
    lines.extend(_render_gates(circuit, CIRQ_TEMPLATES))
    lines.extend(
        [
            "",
            "print(circuit)",
            "",
            "# Simulate",
            "simulator = cirq.Simulator()",
            "result = simulator.simulate(circuit)",
            "print(result.final_state_vector)",
        ]
    )
    return "\n".join(lines) + "\n"


def to_qsharp(circuit: QuantumCircuit, namespace: str = "QuantumLab") -> str:
    body = " " * 8
    lines = [
        f"namespace {namespace} {{",
        "    open Microsoft.Quantum.Canon;",
        "    open Microsoft.Quantum.Intrinsic;",
        "    open Microsoft.Quantum.Measurement;",
        "",
        "    operation RunCircuit() : Result[] {",
        f"{body}use qubits = Qubit[{circuit.num_qubits}];",
        "",
    ]
    lines.extend(_render_gates(circuit, QSHARP_TEMPLATES, indent=body))
    lines.extend(
        [
            "",
            f"{body}let results = MultiM(qubits);",
            f"{body}ResetAll(qubits);",
            f"{body}return results;",
            "    }",
            "}",
        ]
    )
    return "\n".join(lines) + "\n"


EXPORTERS: Dict[str, Callable[[QuantumCircuit], str]] = {
    "qiskit": to_qiskit,
    "cirq": to_cirq,
    "qsharp": to_qsharp,
}


def export_circuit(circuit: QuantumCircuit, dialect: Optional[str] = "qiskit") -> str:
    """Return ``circuit`` rendered in ``dialect``."""
    key = (dialect or "qiskit").lower()
    if key not in EXPORTERS:
        raise UnknownDialectError(f"Unknown export dialect {dialect}")
    return EXPORTERS[key](circuit)
