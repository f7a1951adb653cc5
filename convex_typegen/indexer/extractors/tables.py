"""Table name extractor for the Convex schema file.

Table names are collected, in order of first appearance, from:
1. Imports that name a table through their module path
   (``import users from "@convex/users/users"``)
2. Keys of the ``defineSchema({ ... })`` object (``users: defineTable(...)``);
   without a ``defineSchema`` call, any ``key: value`` entry in the file.
   Comments and string literals never contribute keys

When neither source yields a name, the immediate subdirectories of the
Convex root are taken as table names.
"""

from pathlib import Path

from convex_typegen.models import TableDescriptor
from convex_typegen.utils.logging import logger
from convex_typegen.validators.tokenizer import CLOSERS, OPENERS, find_matching, tokenize

from ..config import (
    SCHEMA_DEFINITION_PATTERN,
    TABLE_KEY_TOKENS,
    TABLE_VALUE_TOKENS,
    table_import_patterns,
)
from ..core import list_table_dirs
from . import BaseExtractor


def schema_object_body(content: str) -> str | None:
    """Text inside the first object argument of ``defineSchema(...)``."""
    match = SCHEMA_DEFINITION_PATTERN.search(content)
    if not match:
        return None
    brace = content.find("{", match.end())
    if brace == -1:
        return None
    close = find_matching(content, brace)
    if close == -1:
        close = len(content)
    return content[brace + 1:close]


def object_keys(text: str, top_level_only: bool = True) -> list[str]:
    """Keys of ``key: value`` entries in ``text``, in order of appearance.

    Comments never yield keys and string literals stay whole, so a colon
    inside a string does not disturb the nesting depth. Quoted keys are
    returned without their quotes.

    Args:
        text: Source text, typically the body of ``defineSchema({...})``
        top_level_only: Only keep entries at nesting depth 0
    """
    tokens = tokenize(text)
    keys = []
    depth = 0
    for index, token in enumerate(tokens):
        if token.text in OPENERS:
            depth += 1
            continue
        if token.text in CLOSERS:
            depth = max(depth - 1, 0)
            continue
        if token.kind not in TABLE_KEY_TOKENS or (top_level_only and depth != 0):
            continue
        following = tokens[index + 1:index + 3]
        if (
            len(following) == 2
            and following[0].kind == "COLON"
            and following[1].kind in TABLE_VALUE_TOKENS
        ):
            keys.append(token.text[1:-1] if token.kind == "STRING" else token.text)
    return keys


class TableExtractor(BaseExtractor):
    """Finds table names in the schema descriptor file."""

    def __init__(self, root_path: Path, import_path: str = "convex"):
        """Initialize the extractor.

        Args:
            root_path: Convex source root, listed when the schema names no table
            import_path: Module alias the schema imports tables through
                (``convex`` matches ``@convex/...``)
        """
        super().__init__(root_path)
        self.import_path = import_path
        self.import_patterns = table_import_patterns(import_path)
        self.warnings: list[str] = []

    def extract(self, relative_path: str, content: str) -> list[TableDescriptor]:
        """Table names declared by the schema text, deduplicated, first-seen order."""
        found: list[tuple[int, str]] = []
        for pattern in self.import_patterns:
            for match in pattern.finditer(content):
                found.append((match.start(), match.group(2)))
        names = [name for _, name in sorted(found, key=lambda item: item[0])]

        body = schema_object_body(content)
        if body is not None:
            names.extend(object_keys(body))
        else:
            names.extend(object_keys(content, top_level_only=False))

        tables = []
        seen: set[str] = set()
        for name in names:
            if name and name not in seen:
                seen.add(name)
                tables.append(TableDescriptor(name))
        logger.debug(f"{relative_path}: tables {[t.name for t in tables]}")
        return tables

    def from_directories(self) -> list[TableDescriptor]:
        """Fallback: every non-reserved subdirectory of the root is a table."""
        try:
            return [TableDescriptor(name) for name in list_table_dirs(self.root_path)]
        except OSError as e:
            message = f"Could not scan convex directory {self.root_path}: {e}"
            logger.warning(message)
            self.warnings.append(message)
            return []

    def collect(self, schema_content: str | None, schema_name: str = "schema.ts") -> list[TableDescriptor]:
        """Tables from the schema text, falling back to the directory listing.

        Args:
            schema_content: Schema file text, or None when the file is absent
            schema_name: Name used in log messages

        Returns:
            Ordered, deduplicated table descriptors (possibly empty)
        """
        tables = self.extract(schema_name, schema_content) if schema_content else []
        if not tables:
            tables = self.from_directories()
            if tables:
                logger.info(f"No tables named in {schema_name}; using directories: {[t.name for t in tables]}")
        return tables
