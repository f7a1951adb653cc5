"""Validator-expression parsing and argument type synthesis."""

from .args import parse_args, render_args_type, render_type, synthesize_args_type
from .nodes import (
    ArrayNode,
    FieldDescriptor,
    IdNode,
    LiteralNode,
    ObjectNode,
    OptionalNode,
    PrimitiveNode,
    UnionNode,
    UnknownNode,
    ValidatorNode,
)
from .parser import parse_validator
from .tokenizer import split_top_level

__all__ = [
    "ArrayNode",
    "FieldDescriptor",
    "IdNode",
    "LiteralNode",
    "ObjectNode",
    "OptionalNode",
    "PrimitiveNode",
    "UnionNode",
    "UnknownNode",
    "ValidatorNode",
    "parse_args",
    "parse_validator",
    "render_args_type",
    "render_type",
    "split_top_level",
    "synthesize_args_type",
]
