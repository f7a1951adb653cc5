"""Tagged validator tree produced by the validator parser.

Each node mirrors one combinator of the Convex ``v`` vocabulary. Nodes are
frozen so a parsed tree can be shared freely between renderers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PrimitiveNode:
    kind: str


@dataclass(frozen=True)
class OptionalNode:
    inner: "ValidatorNode"


@dataclass(frozen=True)
class UnionNode:
    members: tuple["ValidatorNode", ...]


@dataclass(frozen=True)
class ArrayNode:
    inner: "ValidatorNode"


@dataclass(frozen=True)
class ObjectNode:
    """``object(...)`` or ``record(...)``; fields are not descended into."""

    kind: str = "object"


@dataclass(frozen=True)
class LiteralNode:
    """Literal value, kept exactly as written (quotes included)."""

    value: str


@dataclass(frozen=True)
class IdNode:
    table: str


@dataclass(frozen=True)
class UnknownNode:
    """Anything outside the supported vocabulary."""

    source: str = ""


ValidatorNode = (
    PrimitiveNode
    | OptionalNode
    | UnionNode
    | ArrayNode
    | ObjectNode
    | LiteralNode
    | IdNode
    | UnknownNode
)


@dataclass(frozen=True)
class FieldDescriptor:
    """One entry of an ``args: { ... }`` block.

    ``node`` never is an OptionalNode: a top-level ``optional(...)`` is
    unwrapped and recorded in ``optional`` instead.
    """

    name: str
    node: ValidatorNode
    optional: bool = False
