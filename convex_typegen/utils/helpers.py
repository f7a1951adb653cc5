"""Helper utility functions for convex-typegen."""

from pathlib import Path


def normalize_relative_path(file_path: str | Path) -> str:
    """Normalize a relative path to forward slashes.

    Function names are derived from these paths, so Windows separators must
    never reach the generated file.

    Examples:
        >>> normalize_relative_path("users\\\\getCurrent.ts")
        'users/getCurrent.ts'
    """
    normalized = str(file_path).replace("\\", "/")
    return normalized.lstrip("/")


def strip_extension(relative_path: str) -> str:
    """Drop the final file extension, keeping any dots in directory names."""
    head, sep, tail = relative_path.rpartition("/")
    stem = tail.rsplit(".", 1)[0] if "." in tail else tail
    return f"{head}{sep}{stem}"
