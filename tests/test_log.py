import logging

from qlab import config
from qlab.circuit import QuantumCircuit
from qlab.log import HANDLER_NAME, get_logger, set_log_level


def test_loggers_share_prefix_and_are_cached():
    a = get_logger("circuit")
    assert a.name == "qlab.circuit"
    assert get_logger("qlab.circuit") is a
    assert get_logger().name == "qlab"
    own = [h for h in a.handlers if h.get_name() == HANDLER_NAME]
    assert len(own) == 1
    assert isinstance(own[0], logging.StreamHandler)
    assert a.propagate is False


def test_set_log_level():
    logger = get_logger("test_levels")
    set_log_level("DEBUG")
    try:
        assert logger.level == logging.DEBUG
        own = [h for h in logger.handlers if h.get_name() == HANDLER_NAME]
        assert [h.level for h in own] == [logging.DEBUG]
    finally:
        set_log_level(config.LOG_LEVEL)


def test_unknown_gate_is_logged(monkeypatch):
    messages = []
    logger = get_logger("qlab.circuit")
    monkeypatch.setattr(logger, "warning", lambda msg, *args: messages.append(msg % args))
    qc = QuantumCircuit(1, strict=False)
    qc.add_gate("Foo", 0)
    qc.run()
    assert messages == ["unknown gate Foo on qubits [0] ignored"]


def test_config_defaults():
    assert config.MIN_QUBITS == 1
    assert config.MAX_QUBITS == 10
    assert config.DEFAULT_SHOTS == 1024
