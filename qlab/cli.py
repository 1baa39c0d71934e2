import argparse
import random

from . import config
from .algorithms import ALGORITHMS, build_algorithm
from .export import EXPORTERS, export_circuit
from .log import set_log_level
from .state import QuantumState


def format_probabilities(state: QuantumState, width: int = 40):
    """Return one ``bits: ####`` bar per basis state."""
    lines = []
    for i, p in enumerate(state.get_probabilities()):
        bar = "#" * int(p * width)
        lines.append(f"{state.to_binary_string(i)}: {bar} {p:.3f}")
    return lines


def _show(state: QuantumState):
    print(state)
    for line in format_probabilities(state):
        print(line)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Command line utilities for the qlab state-vector simulator"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for measurement sampling")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("bell", help="Prepare a Bell pair")
    ghz = sub.add_parser("ghz", help="Prepare a GHZ state")
    ghz.add_argument("-n", "--qubits", type=int, default=3)
    qft = sub.add_parser("qft", help="Quantum Fourier transform of |0...0>")
    qft.add_argument("-n", "--qubits", type=int, default=4)
    grover = sub.add_parser("grover", help="Grover search demo")
    grover.add_argument("-n", "--qubits", type=int, default=3)
    grover.add_argument("--marked", type=int, default=7)
    sub.add_parser("teleport", help="Teleportation circuit")
    sub.add_parser("list", help="List algorithm presets")

    shots = sub.add_parser("shots", help="Sample a preset many times")
    shots.add_argument("algorithm", choices=sorted(ALGORITHMS))
    shots.add_argument("--shots", type=int, default=config.DEFAULT_SHOTS)

    export = sub.add_parser("export", help="Print a preset as Qiskit, Cirq or Q# code")
    export.add_argument("algorithm", choices=sorted(ALGORITHMS))
    export.add_argument("--dialect", choices=sorted(EXPORTERS), default="qiskit")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=config.HOST)
    serve.add_argument("--port", type=int, default=config.PORT)

    args = parser.parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)
    rng = random.Random(args.seed)

    if args.command == "bell":
        _show(build_algorithm("bell", rng=rng).run())
    elif args.command == "ghz":
        _show(build_algorithm("ghz", args.qubits, rng=rng).run())
    elif args.command == "qft":
        _show(build_algorithm("qft", args.qubits, rng=rng).run())
    elif args.command == "grover":
        circuit = build_algorithm("grover", args.qubits, rng=rng, marked_state=args.marked)
        _show(circuit.run())
    elif args.command == "teleport":
        _show(build_algorithm("teleportation", rng=rng).run())
    elif args.command == "list":
        for name, (size, _, _) in sorted(ALGORITHMS.items()):
            print(f"{name}: {size} qubits")
    elif args.command == "shots":
        counts = build_algorithm(args.algorithm, rng=rng).run_shots(args.shots)
        for bits, count in sorted(counts.items()):
            print(f"{bits}: {count}")
    elif args.command == "export":
        print(export_circuit(build_algorithm(args.algorithm, rng=rng), args.dialect), end="")
    elif args.command == "serve":
        from .api import serve as run_server

        run_server(args.host, args.port)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
