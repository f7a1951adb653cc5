"""Centralized exit codes for the convex-typegen CLI."""


class ExitCodes:
    """Standard exit codes for convex-typegen commands."""

    SUCCESS = 0

    # Generation marker or tables missing; previous output left untouched
    SKIPPED = 3

    WRITE_FAILED = 4
