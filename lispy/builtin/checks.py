"""Argument validation shared by the builtins.

Each check returns an Error value describing the first violation, or None.
Builtins chain them with ``or`` and return early on the first failure:

    if err := check_count("head", args, 1) or check_type("head", args, 0, QExpr):
        return err
"""

from __future__ import annotations

from typing import Optional

from lispy.errors import (
    arity_mismatch,
    empty_list_argument,
    non_symbol,
    type_mismatch,
)
from lispy.types.value import Error, Expr, SExpr, Symbol, Value


def check_count(fun: str, args: SExpr, count: int) -> Optional[Error]:
    if len(args) != count:
        return arity_mismatch(fun, len(args), count)
    return None


def check_min_count(fun: str, args: SExpr, minimum: int) -> Optional[Error]:
    if len(args) < minimum:
        return arity_mismatch(fun, len(args), f"at least {minimum}")
    return None


def check_type(fun: str, args: SExpr, index: int, expected: type[Value]) -> Optional[Error]:
    actual = args[index]
    if not isinstance(actual, expected):
        return type_mismatch(fun, index, actual.type_name, expected.TYPE_NAME)
    return None


def check_all_types(fun: str, args: SExpr, expected: type[Value]) -> Optional[Error]:
    for i in range(len(args)):
        if err := check_type(fun, args, i, expected):
            return err
    return None


def check_not_empty(fun: str, args: SExpr, index: int) -> Optional[Error]:
    arg = args[index]
    if isinstance(arg, Expr) and not arg.cells:
        return empty_list_argument(fun, index)
    return None


def check_symbols(fun: str, syms: Expr) -> Optional[Error]:
    for s in syms:
        if not isinstance(s, Symbol):
            return non_symbol(fun, s.type_name)
    return None
