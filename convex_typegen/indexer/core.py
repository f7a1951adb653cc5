"""Core functionality for walking a Convex source tree.

This module contains the FileWalker class, which enumerates candidate
function files under the Convex directory and reads their text.
"""

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from convex_typegen.utils.helpers import normalize_relative_path
from convex_typegen.utils.logging import logger

from .config import (
    DEFAULT_SCHEMA_FILE,
    DEFAULT_SOURCE_EXTENSIONS,
    RESERVED_DIR_PREFIXES,
    SKIP_DIRS,
    SKIP_FILE_SUFFIXES,
)


@dataclass(frozen=True)
class SourceFile:
    """A readable file below the source root."""

    relative_path: str
    content: str


def is_reserved_dir(name: str) -> bool:
    """True for directories the scanner never enters (``_generated``, ``migrations``)."""
    return name.startswith(RESERVED_DIR_PREFIXES) or name in SKIP_DIRS


def list_table_dirs(root_path: Path) -> list[str]:
    """Immediate, non-reserved subdirectories of ``root_path``, sorted by name.

    Raises:
        OSError: If the directory cannot be listed
    """
    with os.scandir(root_path) as entries:
        names = [entry.name for entry in entries if entry.is_dir() and not is_reserved_dir(entry.name)]
    return sorted(names)


class FileWalker:
    """Walks the Convex directory and yields function candidate files.

    Unreadable directories and files are skipped; each skip is logged and
    recorded in ``warnings`` so the caller can surface partial results.
    """

    def __init__(
        self,
        root_path: Path,
        schema_file: str = DEFAULT_SCHEMA_FILE,
        extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS,
    ):
        """Initialize the file walker.

        Args:
            root_path: Convex source root
            schema_file: Name of the schema descriptor file, excluded from walking
            extensions: File extensions considered function candidates
        """
        self.root_path = Path(root_path)
        self.schema_file = schema_file
        self.extensions = tuple(extensions)
        self.warnings: list[str] = []
        self.stats = {
            "total_files": 0,
            "candidate_files": 0,
            "skipped_dirs": 0,
            "unreadable": 0,
        }

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def _on_walk_error(self, error: OSError) -> None:
        self.stats["unreadable"] += 1
        self._warn(f"Could not scan directory {error.filename}: {error.strerror or error}")

    def is_candidate(self, relative_path: str) -> bool:
        """True if the file may declare functions (extension match, not the schema)."""
        name = relative_path.rsplit("/", 1)[-1]
        if name == self.schema_file or name.endswith(SKIP_FILE_SUFFIXES):
            return False
        return name.endswith(self.extensions)

    def walk(self) -> Iterator[SourceFile]:
        """Yield candidate files in a stable order.

        Directories are visited top-down; within one directory, files come
        first and both files and subdirectories are ordered by name.
        """
        for dirpath, dirnames, filenames in os.walk(self.root_path, onerror=self._on_walk_error):
            kept = sorted(d for d in dirnames if not is_reserved_dir(d))
            self.stats["skipped_dirs"] += len(dirnames) - len(kept)
            dirnames[:] = kept

            for filename in sorted(filenames):
                self.stats["total_files"] += 1
                file = Path(dirpath) / filename
                relative_path = normalize_relative_path(file.relative_to(self.root_path).as_posix())
                if not self.is_candidate(relative_path):
                    continue

                try:
                    content = file.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    self.stats["unreadable"] += 1
                    self._warn(f"Could not read function file {file}: {e}")
                    continue

                self.stats["candidate_files"] += 1
                yield SourceFile(relative_path, content)
