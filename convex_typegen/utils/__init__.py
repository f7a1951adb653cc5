"""convex-typegen utilities package."""

from .constants import (
    CONFIG_FILE_NAME,
    ERROR_LOG_FILE,
    MIGRATIONS_DIR,
    RESERVED_DIR_PREFIX,
    STATE_DIR,
    TIMESTAMP_PREFIX,
)
from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .helpers import normalize_relative_path, strip_extension
from .logging import logger

__all__ = [
    "CONFIG_FILE_NAME",
    "ERROR_LOG_FILE",
    "MIGRATIONS_DIR",
    "RESERVED_DIR_PREFIX",
    "STATE_DIR",
    "TIMESTAMP_PREFIX",
    "handle_exceptions",
    "ExitCodes",
    "normalize_relative_path",
    "strip_extension",
    "logger",
]
