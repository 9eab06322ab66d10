"""List builtins over Q-expressions."""

from __future__ import annotations

from lispy.builtin.checks import (
    check_all_types,
    check_count,
    check_min_count,
    check_not_empty,
    check_type,
)
from lispy.types.environment import Environment
from lispy.types.value import QExpr, SExpr, Value


def builtin_list(env: Environment, args: SExpr) -> Value:
    """Wrap every argument into a single Q-expression."""
    return args.as_qexpr()


def builtin_head(env: Environment, args: SExpr) -> Value:
    """Return a Q-expression holding only the first element of the list."""
    if (
        err := check_count("head", args, 1)
        or check_type("head", args, 0, QExpr)
        or check_not_empty("head", args, 0)
    ):
        return err
    v = args.take(0)
    del v.cells[1:]
    return v


def builtin_tail(env: Environment, args: SExpr) -> Value:
    """Return the list with its first element removed."""
    if (
        err := check_count("tail", args, 1)
        or check_type("tail", args, 0, QExpr)
        or check_not_empty("tail", args, 0)
    ):
        return err
    v = args.take(0)
    v.pop(0)
    return v


def builtin_join(env: Environment, args: SExpr) -> Value:
    """Concatenate one or more Q-expressions in order."""
    if err := check_min_count("join", args, 1) or check_all_types("join", args, QExpr):
        return err
    x = args.pop(0)
    while args.cells:
        x.join(args.pop(0))
    return x
