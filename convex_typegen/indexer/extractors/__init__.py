"""Extractor framework for the indexer.

Extractors read the text of one file and return descriptors. They do not
build a syntax tree: Convex declarations follow a handful of fixed shapes
(``export default query({...})``, ``defineSchema({...})``), and matching
those shapes textually is enough to name tables and functions.

- FunctionExtractor: queries, mutations and actions in function files
- TableExtractor: table names in the schema file (or its directory)
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class BaseExtractor(ABC):
    """Abstract base class for all extractors."""

    def __init__(self, root_path: Path):
        """Initialize the extractor.

        Args:
            root_path: Convex source root
        """
        self.root_path = Path(root_path)

    @abstractmethod
    def extract(self, relative_path: str, content: str) -> list[Any]:
        """Extract descriptors from one file.

        Args:
            relative_path: Slash-separated path below the source root
            content: File content

        Returns:
            Descriptors in order of appearance in the file
        """


from .functions import FunctionExtractor  # noqa: E402
from .tables import TableExtractor  # noqa: E402

__all__ = ["BaseExtractor", "FunctionExtractor", "TableExtractor"]
