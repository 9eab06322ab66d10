"""Reader: converts a generic parse tree into Lispy values."""

from __future__ import annotations

import re

from lispy.errors import invalid_number
from lispy.reader.grammar import ParseNode
from lispy.types.value import (
    NUMBER_MAX,
    NUMBER_MIN,
    Expr,
    Number,
    QExpr,
    SExpr,
    String,
    Symbol,
    Value,
)

ESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

# Punctuation kept in the tree by the grammar but carrying no value
_BRACKETS = frozenset("(){}")


def unescape(text: str) -> str:
    """Decode backslash escapes; unknown escapes are kept verbatim."""
    return _ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(0)), text)


def read_number(node: ParseNode) -> Value:
    n = int(node.contents)
    if not NUMBER_MIN <= n <= NUMBER_MAX:
        return invalid_number(node.contents)
    return Number(n)


def read_string(node: ParseNode) -> String:
    # Strip the surrounding quotes before decoding
    return String(unescape(node.contents[1:-1]))


def read(node: ParseNode) -> Value:
    """Build a Value tree from a parse node.

    Numbers, symbols and strings become atoms; the root (">") and sexpr nodes
    become SExpr, qexpr nodes become QExpr. Brackets, regex markers and
    comments are skipped.
    """
    if "number" in node.tag:
        return read_number(node)
    if "string" in node.tag:
        return read_string(node)
    if "symbol" in node.tag:
        return Symbol(node.contents)

    x: Expr
    if "qexpr" in node.tag:
        x = QExpr()
    else:
        # root (">") or sexpr
        x = SExpr()

    for child in node.children:
        if child.contents in _BRACKETS and child.tag == "char":
            continue
        if child.tag == "regex" or "comment" in child.tag:
            continue
        x.add(read(child))
    return x
