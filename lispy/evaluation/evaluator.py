"""Core evaluator for the Lispy interpreter.

Reduces a Value tree to normal form: symbols are resolved through the
environment, S-expressions have their children reduced left to right and are
then applied, everything else evaluates to itself.
"""

from __future__ import annotations

from lispy.errors import not_a_function
from lispy.evaluation.apply import call
from lispy.types.environment import Environment
from lispy.types.value import Error, Function, SExpr, Symbol, Value


def evaluate(env: Environment, v: Value) -> Value:
    """Evaluate `v` in `env`, consuming it."""
    match v:
        case Symbol():
            return env.get(v.name)
        case SExpr():
            return evaluate_sexpr(env, v)
    # --- Atoms, functions and Q-expressions return as-is ---
    return v


def evaluate_sexpr(env: Environment, v: SExpr) -> Value:
    """Evaluate the children of `v` in place, then apply the first to the rest.

    The first Error among the evaluated children (by position) is the result.
    """
    v.cells = [evaluate(env, cell) for cell in v.cells]

    for i, cell in enumerate(v.cells):
        if isinstance(cell, Error):
            return v.take(i)

    if not v.cells:
        return v

    # Singleton grouping: (x) => x
    if len(v.cells) == 1:
        return v.take(0)

    f = v.pop(0)
    if not isinstance(f, Function):
        return not_a_function(f.type_name)

    return call(env, f, v)
