"""Custom exceptions for the generation pipeline.

PreconditionError never crosses the pipeline boundary; the runner turns it
into a logged warning and a skipped outcome. OutputWriteError does, since
the caller has to know the output on disk is stale.
"""


class TypegenError(Exception):
    """Base class for convex-typegen failures."""


class PreconditionError(TypegenError):
    """Raised when generation cannot proceed (marker missing, no tables).

    Attributes:
        reason: Short machine-readable reason ("marker_missing", "no_tables")
    """

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class OutputWriteError(TypegenError):
    """Raised when the output directory or file cannot be written.

    Attributes:
        path: Output path that failed
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path
