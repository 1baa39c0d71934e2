"""HTTP interface to the simulator.

Every request builds a fresh :class:`~qlab.circuit.QuantumCircuit`, so no
state is shared between requests.  Passing ``seed`` makes measurement and
shot sampling reproducible.

Run locally with ``qlab serve`` or ``uvicorn qlab.api:app``.
"""

import random
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from . import config
from .algorithms import ALGORITHMS, build_algorithm
from .circuit import QuantumCircuit
from .errors import QuantumError, UnknownAlgorithmError, UnknownDialectError
from .export import EXPORTERS, export_circuit
from .gates import SINGLE_QUBIT_GATES, THREE_QUBIT_GATES, TWO_QUBIT_GATES
from .log import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="qlab",
    version="0.1.0",
    description="State-vector simulation of small quantum circuits.",
)


class GateOp(BaseModel):
    name: str
    target: int
    control: Optional[int] = None
    control2: Optional[int] = None
    params: Optional[Dict[str, float]] = None


class CircuitRequest(BaseModel):
    num_qubits: int = config.DEFAULT_QUBITS
    gates: List[GateOp] = Field(default_factory=list)
    seed: Optional[int] = None
    strict: Optional[bool] = None


class ShotsRequest(CircuitRequest):
    shots: int = Field(default=config.DEFAULT_SHOTS, ge=0, le=config.MAX_SHOTS)


class MeasureRequest(CircuitRequest):
    qubit: Optional[int] = None


class AlgorithmRequest(BaseModel):
    num_qubits: Optional[int] = None
    seed: Optional[int] = None
    options: Dict[str, Any] = Field(default_factory=dict)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    status = 404 if isinstance(exc, (UnknownAlgorithmError, UnknownDialectError)) else 400
    kind = type(exc).__name__ if isinstance(exc, QuantumError) else "ValueError"
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": kind, "detail": str(exc)})


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed)


def build_circuit(req: CircuitRequest) -> QuantumCircuit:
    """Create the circuit described by ``req`` without running it."""
    qc = QuantumCircuit(req.num_qubits, rng=_rng(req.seed), strict=req.strict)
    for op in req.gates:
        qc.add_gate(op.name, op.target, op.control, op.control2, op.params)
    return qc


def state_payload(qc: QuantumCircuit) -> List[Dict[str, Any]]:
    """JSON-friendly version of :meth:`QuantumCircuit.get_state_vector`."""
    records = []
    for entry in qc.get_state_vector():
        amp = entry["amplitude"]
        records.append(
            {
                "index": entry["index"],
                "binary": entry["binary"],
                "ket": entry["ket"],
                "amplitude": {"real": amp.real, "imag": amp.imag, "text": amp.to_string()},
                "probability": entry["probability"],
            }
        )
    return records


@app.get("/", response_class=HTMLResponse)
def root():
    return """
    <html>
      <head><title>qlab</title></head>
      <body style="font-family: sans-serif;">
        <h1>qlab simulator is online</h1>
        <p>See <a href="/docs">/docs</a> or POST a circuit to <code>/simulate</code>.</p>
      </body>
    </html>
    """


@app.get("/health")
def health():
    return {"status": "ok", "max_qubits": config.MAX_QUBITS}


@app.get("/gates")
def gates():
    return {
        "single": list(SINGLE_QUBIT_GATES),
        "two": list(TWO_QUBIT_GATES),
        "three": list(THREE_QUBIT_GATES),
    }


@app.post("/simulate")
def simulate(req: CircuitRequest):
    qc = build_circuit(req)
    state = qc.run()
    logger.info("simulated %d gate(s) on %d qubit(s)", len(qc), qc.num_qubits)
    return {"num_qubits": qc.num_qubits, "state": state_payload(qc), "ket": str(state)}


@app.post("/shots")
def shots(req: ShotsRequest):
    qc = build_circuit(req)
    counts = qc.run_shots(req.shots)
    return {"shots": req.shots, "counts": dict(sorted(counts.items()))}


@app.post("/measure")
def measure(req: MeasureRequest):
    qc = build_circuit(req)
    qc.run()
    if req.qubit is None:
        index = qc.measure_all()
        outcome: Dict[str, Any] = {"index": index, "bits": qc.state.to_binary_string(index)}
    else:
        outcome = {"qubit": req.qubit, "bit": qc.measure(req.qubit)}
    return {"outcome": outcome, "state": state_payload(qc)}


@app.get("/algorithms")
def algorithms():
    return {name: size for name, (size, _, _) in ALGORITHMS.items()}


@app.post("/algorithms/{name}")
def algorithm(name: str, req: Optional[AlgorithmRequest] = None):
    req = req or AlgorithmRequest()
    try:
        qc = build_algorithm(name, req.num_qubits, rng=_rng(req.seed), **req.options)
    except TypeError as exc:
        raise ValueError(f"Bad options for {name}: {exc}") from exc
    qc.run()
    return {"name": name, "circuit": qc.to_dict(), "state": state_payload(qc)}


@app.post("/export/{dialect}")
def export(dialect: str, req: CircuitRequest):
    if dialect.lower() not in EXPORTERS:
        raise UnknownDialectError(f"Unknown export dialect {dialect}")
    qc = build_circuit(req)
    return {"dialect": dialect.lower(), "code": export_circuit(qc, dialect)}


def serve(host: str = config.HOST, port: int = config.PORT) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    serve()
