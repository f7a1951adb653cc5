"""Recursive-descent parser for Convex validator expressions.

Grammar (whitespace and comments ignored, ``v.`` namespace optional):

    expression := [IDENT "."]* combinator
    combinator := "optional" "(" expression ")"
                | "array"    "(" expression ")"
                | "union"    "(" expression ("," expression)* [","] ")"
                | "object"   "(" <balanced> ")"
                | "record"   "(" <balanced> ")"
                | "literal"  "(" STRING | NUMBER | "true" | "false" ")"
                | "id"       "(" STRING ")"
                | PRIMITIVE  "(" ")"

``parse_validator`` never raises; anything outside the grammar becomes an
UnknownNode so one odd field cannot fail a whole generation run.
"""

from .nodes import (
    ArrayNode,
    IdNode,
    LiteralNode,
    ObjectNode,
    OptionalNode,
    PrimitiveNode,
    UnionNode,
    UnknownNode,
    ValidatorNode,
)
from .tokenizer import OPENERS, Token, tokenize

# Zero-argument validators and the primitive kind each one denotes
PRIMITIVE_VALIDATORS = {
    "string": "string",
    "number": "number",
    "float64": "number",
    "boolean": "boolean",
    "bigint": "bigint",
    "int64": "bigint",
    "any": "any",
    "null": "null",
    "bytes": "bytes",
}

OBJECT_VALIDATORS = frozenset({"object", "record"})


class ValidatorSyntaxError(ValueError):
    """Raised inside the parser when input leaves the grammar."""


class ValidatorParser:
    """Single-use parser over the tokens of one validator expression."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    def parse(self) -> ValidatorNode:
        node = self._expression()
        if self._peek_text() == ",":
            self.index += 1
        if self.index != len(self.tokens):
            raise ValidatorSyntaxError(f"unexpected trailing input at token {self.index}")
        return node

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _peek_text(self) -> str | None:
        token = self._peek()
        return token.text if token else None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise ValidatorSyntaxError("unexpected end of expression")
        self.index += 1
        return token

    def _expect(self, text: str) -> Token:
        token = self._advance()
        if token.text != text:
            raise ValidatorSyntaxError(f"expected {text!r}, got {token.text!r}")
        return token

    def _expect_kind(self, kind: str) -> Token:
        token = self._advance()
        if token.kind != kind:
            raise ValidatorSyntaxError(f"expected {kind}, got {token.text!r}")
        return token

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _expression(self) -> ValidatorNode:
        name = self._expect_kind("IDENT").text
        # Namespaced form: v.string(), validators.v.string()
        while self._peek_text() == ".":
            self.index += 1
            name = self._expect_kind("IDENT").text
        self._expect("(")

        if name == "optional":
            inner = self._expression()
            self._expect(")")
            return OptionalNode(inner)

        if name == "array":
            inner = self._expression()
            self._expect(")")
            return ArrayNode(inner)

        if name == "union":
            return UnionNode(tuple(self._union_members()))

        if name in OBJECT_VALIDATORS:
            self._skip_balanced()
            return ObjectNode(name)

        if name == "literal":
            return LiteralNode(self._literal_value())

        if name == "id":
            table = self._expect_kind("STRING").text[1:-1]
            self._expect(")")
            return IdNode(table)

        if name in PRIMITIVE_VALIDATORS:
            self._expect(")")
            return PrimitiveNode(PRIMITIVE_VALIDATORS[name])

        raise ValidatorSyntaxError(f"unknown validator {name!r}")

    def _union_members(self) -> list[ValidatorNode]:
        members = [self._expression()]
        while self._peek_text() == ",":
            self.index += 1
            if self._peek_text() == ")":
                break
            members.append(self._expression())
        self._expect(")")
        return members

    def _literal_value(self) -> str:
        token = self._advance()
        value = token.text
        if token.text == "-":
            value += self._expect_kind("NUMBER").text
        elif token.kind == "IDENT" and token.text not in ("true", "false"):
            raise ValidatorSyntaxError(f"unsupported literal {token.text!r}")
        elif token.kind not in ("STRING", "NUMBER", "IDENT"):
            raise ValidatorSyntaxError(f"unsupported literal {token.text!r}")
        self._expect(")")
        return value

    def _skip_balanced(self) -> None:
        """Consume tokens up to and including the ``)`` closing the call."""
        depth = 1
        while depth:
            token = self._advance()
            if token.text in OPENERS:
                depth += 1
            elif token.text in (")", "}", "]"):
                depth -= 1


def parse_validator(text: str) -> ValidatorNode:
    """Parse a validator expression such as ``optional(array(id("users")))``.

    Returns an UnknownNode instead of raising on anything unparsable.
    """
    text = text.strip()
    if not text:
        return UnknownNode(text)
    try:
        return ValidatorParser(text).parse()
    except ValidatorSyntaxError:
        return UnknownNode(text)
