"""Indexer configuration - constants, patterns and heuristic tables.

This module contains only data: reserved names of a Convex source tree,
the compiled text patterns the extractors match against, and the ordered
return-type rule table.
"""

import re
from dataclasses import dataclass

from convex_typegen.utils.constants import MIGRATIONS_DIR, RESERVED_DIR_PREFIX

# =============================================================================
# FILE SYSTEM CONFIGURATION
# =============================================================================

# Directory name prefixes never descended into (_generated, .git, ...)
RESERVED_DIR_PREFIXES: tuple[str, ...] = (RESERVED_DIR_PREFIX, ".")

# Directories skipped by exact name
SKIP_DIRS: set[str] = {
    MIGRATIONS_DIR,
    "node_modules",
}

DEFAULT_SCHEMA_FILE = "schema.ts"

DEFAULT_SOURCE_EXTENSIONS: tuple[str, ...] = (".ts",)

# Declaration files describe types only and never declare functions
SKIP_FILE_SUFFIXES: tuple[str, ...] = (".d.ts",)


# =============================================================================
# FUNCTION DECLARATION PATTERNS
# =============================================================================

FUNCTION_VERBS: tuple[str, ...] = ("query", "mutation", "action")

_VERB_GROUP = "|".join(FUNCTION_VERBS)

# export default query({ ... })
DEFAULT_EXPORT_PATTERN: re.Pattern = re.compile(
    rf"export\s+default\s+({_VERB_GROUP})\s*\("
)

# export const getById = query({ ... })
NAMED_EXPORT_PATTERN: re.Pattern = re.compile(
    rf"export\s+const\s+(\w+)\s*=\s*({_VERB_GROUP})\s*\("
)

TABLE_DEFINITION_PATTERN: re.Pattern = re.compile(r"\bdefineTable\s*\(")

SCHEMA_DEFINITION_PATTERN: re.Pattern = re.compile(r"\bdefineSchema\s*\(")

ARGS_KEY_PATTERN: re.Pattern = re.compile(r"\bargs\s*:\s*\{")

# Token kinds of a `key: value` entry, secondary source of table names
TABLE_KEY_TOKENS: tuple[str, ...] = ("IDENT", "STRING")
TABLE_VALUE_TOKENS: tuple[str, ...] = ("IDENT", "NUMBER")


def table_import_patterns(import_path: str) -> list[re.Pattern]:
    """Schema import shapes that name a table through their module path.

    - ``import users from "@convex/users/users"``  (table directory + module)
    - ``import { organizationsTable } from "@convex/organizations"``
    """
    prefix = re.escape(import_path)
    return [
        re.compile(rf"import\s+(\w+|\{{[^}}]*\}})\s+from\s+[\"']@{prefix}/(\w+)/\w+[\"']"),
        re.compile(rf"import\s+(\w+|\{{[^}}]*\}})\s+from\s+[\"']@{prefix}/(\w+)[\"']"),
    ]


# =============================================================================
# RETURN-TYPE HEURISTICS
# =============================================================================
# Best-effort and lossy: a substring match says nothing about what the
# handler really returns. First matching rule wins.
# =============================================================================

@dataclass(frozen=True)
class ReturnTypeRule:
    """Map a substring of a function's name or source to a return type.

    Attributes:
        kind: Function kind the rule applies to ("query", "mutation", "action")
        needle: Substring to look for
        return_type: TypeScript type emitted when the rule matches
        source: "name" matches the function name, "content" the source of its call
        export_form: "default", "named", or None for both
    """

    kind: str
    needle: str
    return_type: str
    source: str = "name"
    export_form: str | None = None


DEFAULT_RETURN_TYPE_RULES: tuple[ReturnTypeRule, ...] = (
    # Default exports, matched against the full function path
    ReturnTypeRule("query", "getAllArticles", "ArticleWithAuthor[]", export_form="default"),
    ReturnTypeRule("query", "getCurrent", "User | null", export_form="default"),
    ReturnTypeRule("query", "getAll", "User[]", export_form="default"),
    ReturnTypeRule("query", "get", "User | null", export_form="default"),
    ReturnTypeRule("mutation", "create", 'Id<"articles">', export_form="default"),
    ReturnTypeRule("mutation", "update", "void", export_form="default"),
    ReturnTypeRule("mutation", "delete", "void", export_form="default"),
    # Named exports, matched against the export identifier
    ReturnTypeRule("query", "getCurrent", "Organization | null", export_form="named"),
    ReturnTypeRule("query", "getUser", "Organization[]", export_form="named"),
    # Handler bodies
    ReturnTypeRule("query", "articlesWithAuthors", "ArticleWithAuthor[]", source="content"),
    ReturnTypeRule("query", "return user", "User | null", source="content"),
    ReturnTypeRule("query", "return articles", "Article[]", source="content"),
    ReturnTypeRule("query", "return users", "User[]", source="content"),
)
