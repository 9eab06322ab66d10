"""Application engine for Lispy.

This module centralizes function application semantics for the interpreter:
- Builtins are dispatched through the builtin registry with the caller's env.
- Lambdas bind arguments to formals one at a time in their own closure env.
- Fewer arguments than formals yields a partially applied copy of the lambda.
- A formal list of the shape {... & rest} collects trailing arguments into a
  Q-expression bound to `rest` (an empty one when none are supplied).
"""

from __future__ import annotations

from lispy.builtin.registry import BuiltinId, dispatch
from lispy.errors import invalid_variadic, too_many_arguments
from lispy.types.environment import Environment
from lispy.types.lambda_fn import VARIADIC, Lambda
from lispy.types.value import Builtin, Function, SExpr, Symbol, Value


def _is_variadic_marker(v: Value) -> bool:
    return isinstance(v, Symbol) and v.name == VARIADIC


def call_lambda(env: Environment, f: Lambda, args: SExpr) -> Value:
    """Apply a Lambda value, consuming both `f` and `args`.

    Parameters:
    - env: The environment the call is evaluated in.
    - f: The lambda being applied; its formals and env are mutated.
    - args: The already-evaluated argument values.

    Behavior:
    - Each argument is bound (locally, in f.env) to the next formal.
    - When every formal is bound the body runs in f.env, whose caller link is
      pointed at `env`.
    - Otherwise a copy of the partially bound lambda is returned.
    """
    given = len(args)
    total = len(f.formals)

    while args.cells:
        if not f.formals.cells:
            return too_many_arguments(given, total)

        sym = f.formals.pop(0)

        if _is_variadic_marker(sym):
            # '&' must be followed by exactly one symbol
            if len(f.formals) != 1:
                return invalid_variadic()
            rest = f.formals.pop(0)
            f.env.put(rest.name, dispatch(env, BuiltinId.LIST, args))
            break

        f.env.put(sym.name, args.pop(0))

    # '&' left over: no variadic arguments were supplied, bind to {}
    if f.formals.cells and _is_variadic_marker(f.formals[0]):
        if len(f.formals) != 2:
            return invalid_variadic()
        f.formals.pop(0)
        rest = f.formals.pop(0)
        f.env.put(rest.name, dispatch(env, BuiltinId.LIST, SExpr()))

    if not f.formals.cells:
        f.env.caller = env
        if f.env.parent is None:
            f.env.parent = env
        return dispatch(f.env, BuiltinId.EVAL, SExpr([f.body.copy()]))

    return f.copy()


def call(env: Environment, f: Function, args: SExpr) -> Value:
    """Apply either a Builtin or a Lambda to evaluated arguments."""
    if isinstance(f, Builtin):
        return dispatch(env, f.id, args)
    return call_lambda(env, f, args)
