"""Unit tests for the validator-expression parser.

Each test feeds a real validator expression, as written in Convex function
files, and checks the tagged tree that comes back.
"""

import pytest

from convex_typegen.validators import (
    ArrayNode,
    IdNode,
    LiteralNode,
    ObjectNode,
    OptionalNode,
    PrimitiveNode,
    UnionNode,
    UnknownNode,
    parse_validator,
    split_top_level,
)


class TestPrimitives:
    """Zero-argument validators."""

    @pytest.mark.parametrize("kind", ["string", "number", "boolean", "bigint", "any", "null", "bytes"])
    def test_bare_primitive(self, kind):
        assert parse_validator(f"{kind}()") == PrimitiveNode(kind)

    def test_namespaced_primitive(self):
        assert parse_validator("v.string()") == PrimitiveNode("string")

    def test_int64_is_bigint_and_float64_is_number(self):
        assert parse_validator("v.int64()") == PrimitiveNode("bigint")
        assert parse_validator("v.float64()") == PrimitiveNode("number")

    def test_surrounding_whitespace_ignored(self):
        assert parse_validator("  v.boolean( )  ") == PrimitiveNode("boolean")


class TestCombinators:
    """optional / array / union / id / literal / object / record."""

    def test_optional_array_of_ids(self):
        node = parse_validator('optional(array(id("users")))')
        assert node == OptionalNode(ArrayNode(IdNode("users")))

    def test_namespaced_nesting(self):
        node = parse_validator('v.optional(v.array(v.id("users")))')
        assert node == OptionalNode(ArrayNode(IdNode("users")))

    def test_union_keeps_member_order(self):
        node = parse_validator('v.union(v.literal("b"), v.literal("a"), v.literal("b"))')
        assert node == UnionNode((LiteralNode('"b"'), LiteralNode('"a"'), LiteralNode('"b"')))

    def test_union_splits_only_at_top_level(self):
        node = parse_validator('union(object(literal("a"), string()), literal("b"))')
        assert isinstance(node, UnionNode)
        assert len(node.members) == 2, f"Expected 2 members, got {node.members}"
        assert node.members == (ObjectNode("object"), LiteralNode('"b"'))

    def test_union_allows_trailing_comma(self):
        node = parse_validator('v.union(\n  v.string(),\n  v.null(),\n)')
        assert node == UnionNode((PrimitiveNode("string"), PrimitiveNode("null")))

    def test_literal_kept_verbatim(self):
        assert parse_validator("v.literal('draft')") == LiteralNode("'draft'")
        assert parse_validator("v.literal(42)") == LiteralNode("42")
        assert parse_validator("v.literal(-1)") == LiteralNode("-1")
        assert parse_validator("v.literal(true)") == LiteralNode("true")

    def test_object_and_record_are_opaque(self):
        node = parse_validator('v.object({ name: v.string(), tags: v.array(v.string()) })')
        assert node == ObjectNode("object")
        assert parse_validator("v.record(v.string(), v.number())") == ObjectNode("record")

    def test_comments_inside_expression_ignored(self):
        node = parse_validator('v.array( // one per line\n v.string() /* trailing */ )')
        assert node == ArrayNode(PrimitiveNode("string"))

    def test_delimiters_inside_strings_do_not_nest(self):
        assert parse_validator('v.literal("a,(b")') == LiteralNode('"a,(b"')


class TestUnparsable:
    """Anything outside the vocabulary degrades to UnknownNode instead of raising."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "v.customValidator()",
            "v.string(",
            "v.union(v.string(), ",
            "v.id(users)",
            "v.literal(someConstant)",
            "v.string() extra",
            "not a validator at all",
        ],
    )
    def test_returns_unknown(self, text):
        node = parse_validator(text)
        assert isinstance(node, UnknownNode)

    def test_unknown_keeps_source(self):
        assert parse_validator("v.custom()") == UnknownNode("v.custom()")


class TestSplitTopLevel:
    def test_splits_at_depth_zero_only(self):
        parts = split_top_level('object(literal("a"), string()), literal("b")')
        assert parts == ['object(literal("a"), string())', 'literal("b")']

    def test_drops_trailing_empty_piece(self):
        assert split_top_level("a: v.string(), b: v.number(),") == ["a: v.string()", "b: v.number()"]

    def test_commas_in_strings_are_not_separators(self):
        assert split_top_level('literal("a, b"), literal("c")') == ['literal("a, b")', 'literal("c")']
