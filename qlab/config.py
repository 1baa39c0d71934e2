"""Runtime settings for qlab read from environment variables."""

import math
import os

# Register bounds
MIN_QUBITS = int(os.getenv("QLAB_MIN_QUBITS", "1"))
MAX_QUBITS = int(os.getenv("QLAB_MAX_QUBITS", "10"))
DEFAULT_QUBITS = int(os.getenv("QLAB_DEFAULT_QUBITS", "3"))

# Sampling
DEFAULT_SHOTS = int(os.getenv("QLAB_DEFAULT_SHOTS", "1024"))
MAX_SHOTS = int(os.getenv("QLAB_MAX_SHOTS", "100000"))

# Gate handling
DEFAULT_ANGLE = math.pi / 4
STRICT_GATES = os.getenv("QLAB_STRICT_GATES", "false").lower() == "true"

# Logging
LOG_LEVEL = os.getenv("QLAB_LOG_LEVEL", "WARNING")
LOG_FORMAT = os.getenv("QLAB_LOG_FORMAT", "[%(levelname)s] %(name)s: %(message)s")

# HTTP server
HOST = os.getenv("QLAB_HOST", "127.0.0.1")
PORT = int(os.getenv("QLAB_PORT", "8000"))

__all__ = [
    "MIN_QUBITS",
    "MAX_QUBITS",
    "DEFAULT_QUBITS",
    "DEFAULT_SHOTS",
    "MAX_SHOTS",
    "DEFAULT_ANGLE",
    "STRICT_GATES",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "HOST",
    "PORT",
]
