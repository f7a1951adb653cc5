"""Indexer package: walks a Convex source tree and extracts descriptors."""

from .core import FileWalker, SourceFile
from .orchestrator import scan

__all__ = ["FileWalker", "SourceFile", "scan"]
