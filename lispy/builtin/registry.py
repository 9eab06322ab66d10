"""Registry of builtin functions.

Builtins form a closed enumeration. A ``Builtin`` value carries only its
``BuiltinId``; ``dispatch`` maps the id to the implementation, and ``register``
binds every id under its name in an environment.
"""

from __future__ import annotations

from enum import Enum

from lispy import BuiltinFn
from lispy.builtin import arithmetic, control, io_builtin, lists
from lispy.types.environment import Environment
from lispy.types.value import Builtin, SExpr, Value


class BuiltinId(Enum):
    LAMBDA = "\\"
    DEF = "def"
    PUT = "="
    FUN = "fun"

    LIST = "list"
    HEAD = "head"
    TAIL = "tail"
    EVAL = "eval"
    JOIN = "join"

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="

    EQ = "=="
    NE = "!="

    IF = "if"

    LOAD = "load"
    PRINT = "print"
    ERROR = "error"


_IMPLEMENTATIONS: dict[BuiltinId, BuiltinFn] = {
    BuiltinId.LAMBDA: control.builtin_lambda,
    BuiltinId.DEF: control.builtin_def,
    BuiltinId.PUT: control.builtin_put,
    BuiltinId.FUN: control.builtin_fun,
    BuiltinId.LIST: lists.builtin_list,
    BuiltinId.HEAD: lists.builtin_head,
    BuiltinId.TAIL: lists.builtin_tail,
    BuiltinId.EVAL: control.builtin_eval,
    BuiltinId.JOIN: lists.builtin_join,
    BuiltinId.ADD: arithmetic.builtin_add,
    BuiltinId.SUB: arithmetic.builtin_sub,
    BuiltinId.MUL: arithmetic.builtin_mul,
    BuiltinId.DIV: arithmetic.builtin_div,
    BuiltinId.LT: arithmetic.builtin_lt,
    BuiltinId.GT: arithmetic.builtin_gt,
    BuiltinId.LE: arithmetic.builtin_le,
    BuiltinId.GE: arithmetic.builtin_ge,
    BuiltinId.EQ: arithmetic.builtin_eq,
    BuiltinId.NE: arithmetic.builtin_ne,
    BuiltinId.IF: control.builtin_if,
    BuiltinId.LOAD: io_builtin.builtin_load,
    BuiltinId.PRINT: io_builtin.builtin_print,
    BuiltinId.ERROR: io_builtin.builtin_error,
}


def dispatch(env: Environment, builtin_id: BuiltinId, args: SExpr) -> Value:
    """Invoke the primitive behind `builtin_id` with the caller's env."""
    return _IMPLEMENTATIONS[builtin_id](env, args)


def register(env: Environment) -> None:
    """Bind every builtin under its name in the given environment."""
    for builtin_id in BuiltinId:
        env.put(builtin_id.value, Builtin(builtin_id))
