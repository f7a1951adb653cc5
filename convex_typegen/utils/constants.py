"""Centralized constants for the convex-typegen utils package.

Single source of truth for the tool's own state directory and the
reserved names of a Convex source tree.
"""

from pathlib import Path

# ============================================================================
# OUTPUT DIRECTORIES
# ============================================================================

# State directory for the tool's own artifacts (logs only, never the output),
# resolved against --root
STATE_DIR = Path(".convex-typegen")

ERROR_LOG_FILE = STATE_DIR / "error.log"

# Project-level configuration file, resolved against --root
CONFIG_FILE_NAME = "convex-typegen.json"

# ============================================================================
# CONVEX SOURCE TREE
# ============================================================================

# Directories starting with this prefix belong to Convex (e.g. _generated)
RESERVED_DIR_PREFIX = "_"

MIGRATIONS_DIR = "migrations"

# Line that records generation time; ignored when comparing outputs
TIMESTAMP_PREFIX = "// Generated on "
