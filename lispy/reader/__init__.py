"""Source text to values: the grammar-driven parser and the Reader."""

from __future__ import annotations

from lispy.errors import LispySyntaxError, parse_error
from lispy.reader.grammar import parse
from lispy.reader.reader import read
from lispy.types.value import Value


def read_source(source: str, filename: str = "<stdin>") -> Value:
    """Parse and read `source` into one SExpr of its top-level forms.

    A parse failure is returned as a ParseError value rather than raised.
    """
    try:
        root = parse(source, filename)
    except LispySyntaxError as ex:
        return parse_error(str(ex))
    return read(root)
