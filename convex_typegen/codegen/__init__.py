"""Rendering and writing of the generated TypeScript module."""

from .types_file import render_types_file
from .writer import strip_timestamp, write_output

__all__ = ["render_types_file", "strip_timestamp", "write_output"]
