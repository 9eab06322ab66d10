"""Arithmetic, ordering and equality builtins."""

from __future__ import annotations

import operator
from typing import Callable

from lispy.builtin.checks import check_all_types, check_count, check_min_count
from lispy.errors import division_by_zero
from lispy.types.environment import Environment
from lispy.types.value import Number, SExpr, Value, wrap_number


def _truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


_ARITH_OPS: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _truncating_div,
}

_ORD_OPS: dict[str, Callable[[int, int], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


def builtin_op(args: SExpr, op: str) -> Value:
    """Left-fold `op` over one or more numbers; a lone argument to '-' is negated."""
    if err := check_min_count(op, args, 1) or check_all_types(op, args, Number):
        return err

    fn = _ARITH_OPS[op]
    x = args.pop(0).value

    if op == "-" and not args.cells:
        return Number(wrap_number(-x))

    while args.cells:
        y = args.pop(0).value
        if op == "/" and y == 0:
            return division_by_zero()
        x = wrap_number(fn(x, y))

    return Number(x)


def builtin_add(env: Environment, args: SExpr) -> Value:
    return builtin_op(args, "+")


def builtin_sub(env: Environment, args: SExpr) -> Value:
    return builtin_op(args, "-")


def builtin_mul(env: Environment, args: SExpr) -> Value:
    return builtin_op(args, "*")


def builtin_div(env: Environment, args: SExpr) -> Value:
    return builtin_op(args, "/")


def builtin_ord(args: SExpr, op: str) -> Value:
    """Compare exactly two numbers; 1 when the relation holds, else 0."""
    if err := check_count(op, args, 2) or check_all_types(op, args, Number):
        return err
    return Number(int(_ORD_OPS[op](args[0].value, args[1].value)))


def builtin_lt(env: Environment, args: SExpr) -> Value:
    return builtin_ord(args, "<")


def builtin_gt(env: Environment, args: SExpr) -> Value:
    return builtin_ord(args, ">")


def builtin_le(env: Environment, args: SExpr) -> Value:
    return builtin_ord(args, "<=")


def builtin_ge(env: Environment, args: SExpr) -> Value:
    return builtin_ord(args, ">=")


def builtin_cmp(args: SExpr, op: str) -> Value:
    """Structural (in)equality of exactly two values of any type."""
    if err := check_count(op, args, 2):
        return err
    same = args[0] == args[1]
    return Number(int(same if op == "==" else not same))


def builtin_eq(env: Environment, args: SExpr) -> Value:
    return builtin_cmp(args, "==")


def builtin_ne(env: Environment, args: SExpr) -> Value:
    return builtin_cmp(args, "!=")
