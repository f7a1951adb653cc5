"""Argument-block type synthesis.

Turns the body of an ``args: { ... }`` declaration into an ordered list of
FieldDescriptor and renders it as a TypeScript object type:

    id: v.optional(v.id("users")),      ->   { id?: Id<"users">, tags: string[] }
    tags: v.array(v.string()),

Optionality is hoisted onto the field (``id?:``); it never shows up as
``| undefined`` inside the rendered type.
"""

import re

from convex_typegen.utils.logging import logger

from .nodes import (
    ArrayNode,
    FieldDescriptor,
    IdNode,
    LiteralNode,
    ObjectNode,
    OptionalNode,
    PrimitiveNode,
    UnionNode,
    ValidatorNode,
)
from .parser import parse_validator
from .tokenizer import CLOSERS, OPENERS, split_top_level, tokenize

EMPTY_OBJECT_TYPE = "{}"
UNSTRUCTURED_OBJECT_TYPE = "Record<string, unknown>"
UNKNOWN_TYPE = "unknown"

PRIMITIVE_TS_TYPES = {
    "string": "string",
    "number": "number",
    "boolean": "boolean",
    "bigint": "bigint",
    "any": "any",
    "null": "null",
    "bytes": "ArrayBuffer",
}

_KEY = r"[A-Za-z_$][\w$]*|\"[^\"]*\"|'[^']*'"
FIELD_START_PATTERN = re.compile(rf"^(?:{_KEY})\s*:")
FIELD_PATTERN = re.compile(rf"^(?P<name>{_KEY})\s*:\s*(?P<expr>.+)$", re.DOTALL)


def _nesting_depth(text: str) -> int:
    depth = 0
    for token in tokenize(text):
        if token.text in OPENERS:
            depth += 1
        elif token.text in CLOSERS:
            depth -= 1
    return depth


def split_field_lines(raw_args: str) -> list[str]:
    """Group the lines of an args block into one logical line per field.

    A line opens a new field when it looks like ``name:`` and every
    delimiter of the previous field is closed; other lines continue the
    previous field and are joined with a single space.
    """
    logical: list[str] = []
    current = ""
    for line in raw_args.splitlines():
        line = line.strip()
        if not line or line.startswith("//"):
            continue
        if current and FIELD_START_PATTERN.match(line) and _nesting_depth(current) <= 0:
            logical.append(current)
            current = line
        else:
            current = f"{current} {line}" if current else line
    if current:
        logical.append(current)
    return logical


def parse_args(raw_args: str | None) -> list[FieldDescriptor]:
    """Parse an args block body into fields, preserving declaration order."""
    if not raw_args or not raw_args.strip():
        return []

    fields = []
    for logical_line in split_field_lines(raw_args):
        # Several fields may share one line: { a: v.string(), b: v.number() }
        for entry in split_top_level(logical_line):
            match = FIELD_PATTERN.match(entry)
            if not match:
                logger.debug(f"Skipping non-field entry in args block: {entry!r}")
                continue
            node = parse_validator(match.group("expr"))
            optional = isinstance(node, OptionalNode)
            if optional:
                node = node.inner
            fields.append(FieldDescriptor(match.group("name"), node, optional))
    return fields


def render_type(node: ValidatorNode) -> str:
    """Render one validator node as a TypeScript type expression."""
    if isinstance(node, PrimitiveNode):
        return PRIMITIVE_TS_TYPES.get(node.kind, UNKNOWN_TYPE)
    if isinstance(node, OptionalNode):
        # Nested optional: presence is decided by the owning field
        return render_type(node.inner)
    if isinstance(node, ArrayNode):
        element = node.inner
        while isinstance(element, OptionalNode):
            element = element.inner
        rendered = render_type(element)
        if isinstance(element, UnionNode) and len(element.members) > 1:
            return f"({rendered})[]"
        return f"{rendered}[]"
    if isinstance(node, UnionNode):
        return " | ".join(render_type(member) for member in node.members)
    if isinstance(node, IdNode):
        return f'Id<"{node.table}">'
    if isinstance(node, LiteralNode):
        return node.value
    if isinstance(node, ObjectNode):
        return UNSTRUCTURED_OBJECT_TYPE
    # UnknownNode and anything unrecognised
    return UNKNOWN_TYPE


def render_args_type(fields: list[FieldDescriptor]) -> str:
    """Compose ``{ a: T, b?: U }`` from parsed fields."""
    if not fields:
        return EMPTY_OBJECT_TYPE
    members = [
        f"{field.name}{'?' if field.optional else ''}: {render_type(field.node)}"
        for field in fields
    ]
    return "{ " + ", ".join(members) + " }"


def synthesize_args_type(raw_args: str | None) -> str:
    """Parse and render in one step."""
    return render_args_type(parse_args(raw_args))
