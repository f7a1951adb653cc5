"""Centralized logging configuration using Loguru with Pino-compatible output.

The generated file is consumed by a Vite/Node toolchain, so JSON mode emits
NDJSON lines that Pino tooling can read next to the dev server's own logs.

Usage:
    from convex_typegen.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if CONVEX_TYPEGEN_LOG_LEVEL=DEBUG

Environment Variables:
    CONVEX_TYPEGEN_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    CONVEX_TYPEGEN_LOG_JSON: 0|1 (default: 0, human-readable)
    CONVEX_TYPEGEN_LOG_FILE: path to log file (optional)
    CONVEX_TYPEGEN_REQUEST_ID: correlation ID for cross-tool tracing
"""

import json
import os
import sys
import uuid

from loguru import logger

# Remove default handler
logger.remove()

# Pino-compatible numeric levels
PINO_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("CONVEX_TYPEGEN_LOG_LEVEL", "INFO").upper()
_json_mode = os.environ.get("CONVEX_TYPEGEN_LOG_JSON", "0") == "1"
_log_file = os.environ.get("CONVEX_TYPEGEN_LOG_FILE")
_request_id = os.environ.get("CONVEX_TYPEGEN_REQUEST_ID") or str(uuid.uuid4())


def _to_pino(record) -> dict:
    """Map a loguru record onto Pino's field names."""
    pino_log = {
        "level": PINO_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
        "name": "convex-typegen",
        "request_id": record["extra"].get("request_id", _request_id),
    }

    for key, value in record["extra"].items():
        if key != "request_id":
            pino_log[key] = value

    if record["exception"]:
        pino_log["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }
    return pino_log


def pino_compatible_sink(message):
    """Write one NDJSON line per record to stdout.

    Never call logger.* inside a sink, it recurses.
    """
    sys.stdout.write(json.dumps(_to_pino(message.record), default=str) + "\n")
    sys.stdout.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

if _json_mode:
    logger.add(pino_compatible_sink, level=_log_level, colorize=False)
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:

    def _file_pino_sink(message):
        """Append Pino-format JSON to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(_to_pino(message.record), default=str) + "\n")

    logger.add(_file_pino_sink, level="DEBUG")


def get_request_id() -> str:
    """Get the current request ID for correlation."""
    return _request_id


__all__ = [
    "logger",
    "get_request_id",
]
