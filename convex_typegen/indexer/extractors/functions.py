"""Function declaration extractor for Convex function files.

Recognised shapes:
- ``export default query({ ... })``: one function named after the file
- ``export const getById = mutation({ ... })``: one function per export

For each function the ``args: { ... }`` block that belongs to its options
object is captured verbatim, and a return type is guessed from the rule
table in ``indexer.config``.
"""

import re
from pathlib import Path

from convex_typegen.models import FunctionDescriptor, FunctionKind
from convex_typegen.utils.helpers import normalize_relative_path, strip_extension
from convex_typegen.utils.logging import logger
from convex_typegen.validators.tokenizer import CLOSERS, OPENERS, find_matching, tokenize

from ..config import (
    ARGS_KEY_PATTERN,
    DEFAULT_EXPORT_PATTERN,
    DEFAULT_RETURN_TYPE_RULES,
    NAMED_EXPORT_PATTERN,
    TABLE_DEFINITION_PATTERN,
    ReturnTypeRule,
)
from . import BaseExtractor

_EXPORT_DEFAULT = re.compile(r"export\s+default\b")
_EXPORT_CONST = re.compile(r"export\s+const\b")


def call_span(content: str, open_paren: int) -> tuple[int, int]:
    """Span ``(open, close)`` of the call whose ``(`` sits at ``open_paren``.

    An unbalanced call extends to the end of the text.
    """
    close = find_matching(content, open_paren)
    if close == -1:
        close = len(content)
    return open_paren, close


def table_definition_spans(content: str) -> list[tuple[int, int]]:
    """Spans of every ``defineTable(...)`` call in ``content``."""
    return [call_span(content, match.end() - 1) for match in TABLE_DEFINITION_PATTERN.finditer(content)]


def is_table_only(content: str) -> bool:
    """A default-exported table definition with no named exports."""
    return (
        _EXPORT_DEFAULT.search(content) is not None
        and TABLE_DEFINITION_PATTERN.search(content) is not None
        and _EXPORT_CONST.search(content) is None
    )


def find_args_block(
    content: str,
    span: tuple[int, int],
    excluded: list[tuple[int, int]] | None = None,
) -> str | None:
    """Body of the ``args: { ... }`` entry of the call spanning ``span``.

    Only an ``args`` key sitting directly in the call's options object
    counts; keys nested deeper (or inside a ``defineTable`` call) belong
    to something else.
    """
    start, end = span
    excluded = excluded or []
    for match in ARGS_KEY_PATTERN.finditer(content, start, end):
        if any(lo < match.start() < hi for lo, hi in excluded):
            continue

        depth = 0
        for token in tokenize(content[start + 1:match.start()]):
            if token.text in OPENERS:
                depth += 1
            elif token.text in CLOSERS:
                depth -= 1
        if depth != 1:
            continue

        brace = match.end() - 1
        close = find_matching(content, brace)
        if close == -1 or close > end:
            continue
        return content[brace + 1:close].strip()
    return None


class FunctionExtractor(BaseExtractor):
    """Classifies one file's text into zero or more FunctionDescriptor.

    Return types come from ``return_type_rules``, an ordered table passed
    as data; the first matching rule wins.
    """

    def __init__(self, root_path: Path, return_type_rules: tuple[ReturnTypeRule, ...] = DEFAULT_RETURN_TYPE_RULES):
        super().__init__(root_path)
        self.return_type_rules = tuple(return_type_rules)

    def extract(self, relative_path: str, content: str) -> list[FunctionDescriptor]:
        """Extract every query/mutation/action declared in ``content``.

        Args:
            relative_path: Path below the Convex root (any separator style)
            content: File content

        Returns:
            Function descriptors, default export first, then named exports
            in order of appearance
        """
        relative_path = normalize_relative_path(relative_path)

        if is_table_only(content):
            logger.debug(f"{relative_path}: table definition only, skipped")
            return []

        module_name = strip_extension(relative_path)
        excluded = table_definition_spans(content)
        functions: list[FunctionDescriptor] = []
        seen: set[tuple[str, str]] = set()

        default_match = DEFAULT_EXPORT_PATTERN.search(content)
        if default_match:
            functions.append(self._describe(
                content,
                relative_path,
                name=module_name,
                kind=FunctionKind(default_match.group(1)),
                open_paren=default_match.end() - 1,
                export_name=None,
                excluded=excluded,
            ))
            seen.add(functions[-1].identity)

        for match in NAMED_EXPORT_PATTERN.finditer(content):
            export_name, verb = match.group(1), match.group(2)
            # Guard against table aliases such as `export const usersTable = ...`
            if export_name == "default" or "Table" in export_name:
                continue
            descriptor = self._describe(
                content,
                relative_path,
                name=f"{module_name}/{export_name}",
                kind=FunctionKind(verb),
                open_paren=match.end() - 1,
                export_name=export_name,
                excluded=excluded,
            )
            if descriptor.identity in seen:
                continue
            seen.add(descriptor.identity)
            functions.append(descriptor)

        if functions:
            logger.debug(
                f"{relative_path}: "
                + ", ".join(f"{f.kind.value} {f.name}" for f in functions)
            )
        return functions

    def _describe(
        self,
        content: str,
        relative_path: str,
        name: str,
        kind: FunctionKind,
        open_paren: int,
        export_name: str | None,
        excluded: list[tuple[int, int]],
    ) -> FunctionDescriptor:
        span = call_span(content, open_paren)
        is_default = export_name is None
        return FunctionDescriptor(
            name=name,
            relative_path=relative_path,
            kind=kind,
            is_default_export=is_default,
            export_name=export_name,
            raw_args=find_args_block(content, span, excluded),
            return_type_hint=self.infer_return_type(
                kind,
                subject=name if is_default else export_name,
                body=content[span[0]:span[1] + 1],
                export_form="default" if is_default else "named",
            ),
        )

    def infer_return_type(self, kind: FunctionKind, subject: str, body: str, export_form: str) -> str | None:
        """First rule matching the function's name (or body) wins.

        Args:
            kind: Function kind
            subject: Full function name for default exports, export identifier otherwise
            body: Source text of the function's call
            export_form: "default" or "named"

        Returns:
            TypeScript return type, or None when no rule matches
        """
        for rule in self.return_type_rules:
            if rule.kind != kind.value:
                continue
            if rule.export_form is not None and rule.export_form != export_form:
                continue
            haystack = subject if rule.source == "name" else body
            if rule.needle in haystack:
                return rule.return_type
        return None
