"""Tokenizer for validator expressions and argument blocks.

Comments and whitespace are dropped; string literals are kept as single
tokens so delimiters inside them never affect nesting depth.
"""

import re
from dataclasses import dataclass

OPENERS = {"(": ")", "{": "}", "[": "]"}
CLOSERS = {")", "}", "]"}

_TOKEN_SPEC = [
    ("COMMENT", r"//[^\n]*|/\*.*?\*/"),
    ("STRING", r'"(?:[^"\\\n]|\\.)*"|\'(?:[^\'\\\n]|\\.)*\'|`(?:[^`\\]|\\.)*`'),
    ("NUMBER", r"\d+(?:\.\d+)?(?:[eE][+-]?\d+)?n?"),
    ("IDENT", r"[A-Za-z_$][\w$]*"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("LBRACE", r"\{"),
    ("RBRACE", r"\}"),
    ("LBRACKET", r"\["),
    ("RBRACKET", r"\]"),
    ("COMMA", r","),
    ("DOT", r"\."),
    ("COLON", r":"),
    ("WS", r"\s+"),
    ("OTHER", r"."),
]

TOKEN_PATTERN = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC),
    re.DOTALL,
)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, skipping whitespace and comments."""
    tokens = []
    for match in TOKEN_PATTERN.finditer(text):
        kind = match.lastgroup
        if kind in ("WS", "COMMENT"):
            continue
        tokens.append(Token(kind, match.group(), match.start()))
    return tokens


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split ``text`` on ``separator`` occurring at nesting depth 0.

    Depth increases on ``(``/``{``/``[`` and decreases on the matching
    closer. Quoted strings are skipped. Empty trailing pieces are dropped.

    >>> split_top_level('object(literal("a"), string()), literal("b")')
    ['object(literal("a"), string())', 'literal("b")']
    """
    parts = []
    depth = 0
    start = 0
    for token in tokenize(text):
        if token.text in OPENERS:
            depth += 1
        elif token.text in CLOSERS:
            depth = max(depth - 1, 0)
        elif token.text == separator and depth == 0:
            parts.append(text[start:token.pos].strip())
            start = token.pos + len(token.text)
    tail = text[start:].strip()
    if tail:
        parts.append(tail)
    return parts


def find_matching(text: str, open_index: int) -> int:
    """Return the index of the delimiter closing ``text[open_index]``.

    Strings and comments are skipped. Returns -1 when unbalanced.
    """
    opener = text[open_index]
    closer = OPENERS[opener]
    depth = 0
    for match in TOKEN_PATTERN.finditer(text, open_index):
        value = match.group()
        if match.lastgroup in ("STRING", "COMMENT"):
            continue
        if value == opener:
            depth += 1
        elif value == closer:
            depth -= 1
            if depth == 0:
                return match.start()
    return -1
