import pytest

from qlab.cli import format_probabilities, main
from qlab.state import QuantumState


def test_format_probabilities():
    state = QuantumState(1)
    assert format_probabilities(state, width=10) == ["0: ########## 1.000", "1:  0.000"]


def test_bell(capsys):
    main(["bell"])
    out = capsys.readouterr().out
    assert "|00⟩" in out and "|11⟩" in out
    assert "00: " in out and "0.500" in out


def test_grover(capsys):
    main(["grover", "-n", "2", "--marked", "1"])
    out = capsys.readouterr().out
    assert "01: ###" in out and "1.000" in out


def test_list(capsys):
    main(["list"])
    out = capsys.readouterr().out.splitlines()
    assert "bell: 2 qubits" in out
    assert "teleportation: 3 qubits" in out


def test_shots(capsys):
    main(["--seed", "3", "shots", "bell", "--shots", "50"])
    lines = capsys.readouterr().out.splitlines()
    counts = {bits: int(n) for bits, n in (line.split(": ") for line in lines)}
    assert set(counts) <= {"00", "11"}
    assert sum(counts.values()) == 50


def test_export(capsys):
    main(["export", "bell", "--dialect", "cirq"])
    out = capsys.readouterr().out
    assert "circuit.append(cirq.H(qubits[0]))" in out


def test_no_command_prints_help(capsys):
    main([])
    assert "usage" in capsys.readouterr().out


def test_bad_algorithm_exits():
    with pytest.raises(SystemExit):
        main(["shots", "nope"])
