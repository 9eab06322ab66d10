"""Conditional, evaluation and definition builtins.

These are ordinary builtins (their arguments are evaluated before the call);
the unevaluated parts they work on arrive quoted as Q-expressions.
"""

from __future__ import annotations

from typing import Optional

from lispy.builtin.checks import (
    check_count,
    check_min_count,
    check_not_empty,
    check_symbols,
    check_type,
)
from lispy.errors import invalid_variadic, unmatched_definition
from lispy.types.environment import Environment
from lispy.types.lambda_fn import VARIADIC, Lambda
from lispy.types.value import Error, Expr, Number, QExpr, SExpr, Value


def builtin_if(env: Environment, args: SExpr) -> Value:
    """(if cond {then} {else}): evaluate only the selected branch."""
    if (
        err := check_count("if", args, 3)
        or check_type("if", args, 0, Number)
        or check_type("if", args, 1, QExpr)
        or check_type("if", args, 2, QExpr)
    ):
        return err

    # Lazy import to avoid circular imports
    from lispy.evaluation.evaluator import evaluate

    branch = args.pop(1) if args[0].value else args.pop(2)
    return evaluate(env, branch.as_sexpr())


def builtin_eval(env: Environment, args: SExpr) -> Value:
    """(eval {expr}): evaluate a Q-expression as if it were an S-expression."""
    if err := check_count("eval", args, 1) or check_type("eval", args, 0, QExpr):
        return err

    from lispy.evaluation.evaluator import evaluate

    return evaluate(env, args.take(0).as_sexpr())


def builtin_var(env: Environment, args: SExpr, fun: str) -> Value:
    """Shared body of `def` (global) and `=` (local)."""
    if err := check_min_count(fun, args, 1) or check_type(fun, args, 0, QExpr):
        return err

    syms = args[0]
    if err := check_symbols(fun, syms):
        return err
    if len(syms) != len(args) - 1:
        return unmatched_definition(fun, len(syms), len(args) - 1)

    bind = env.define if fun == "def" else env.put
    for sym, value in zip(syms, args.cells[1:]):
        bind(sym.name, value)

    return SExpr()


def builtin_def(env: Environment, args: SExpr) -> Value:
    return builtin_var(env, args, "def")


def builtin_put(env: Environment, args: SExpr) -> Value:
    return builtin_var(env, args, "=")


def check_formals(fun: str, formals: Expr) -> Optional[Error]:
    """Formals are symbols only, with '&' at most once and second-to-last."""
    if err := check_symbols(fun, formals):
        return err
    markers = [i for i, s in enumerate(formals) if s.name == VARIADIC]
    if markers and (len(markers) > 1 or markers[0] != len(formals) - 2):
        return invalid_variadic()
    return None


def builtin_lambda(env: Environment, args: SExpr) -> Value:
    """(\\ {formals} {body}): build a lambda closing over the calling env."""
    if (
        err := check_count("\\", args, 2)
        or check_type("\\", args, 0, QExpr)
        or check_type("\\", args, 1, QExpr)
        or check_formals("\\", args[0])
    ):
        return err

    formals = args.pop(0)
    body = args.pop(0)
    return Lambda(formals, body, Environment(parent=env))


def builtin_fun(env: Environment, args: SExpr) -> Value:
    """(fun {name formals...} {body}): define a named lambda globally."""
    if (
        err := check_count("fun", args, 2)
        or check_type("fun", args, 0, QExpr)
        or check_type("fun", args, 1, QExpr)
        or check_not_empty("fun", args, 0)
        or check_formals("fun", args[0])
    ):
        return err

    formals = args.pop(0)
    body = args.pop(0)
    name = formals.pop(0)
    if name.name == VARIADIC:
        return invalid_variadic()

    env.define(name.name, Lambda(formals, body, Environment(parent=env)))
    return SExpr()
