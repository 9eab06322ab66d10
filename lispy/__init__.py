# Core type aliases for Lispy's data model.
#
# Every runtime datum is an instance of one of the Value variants defined in
# lispy.types.value (Number, Error, Symbol, String, Builtin, Lambda, SExpr, QExpr).
# Code and data share that representation: an S-expression read from source is
# the same SExpr that the evaluator reduces.

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from lispy.types.environment import Environment
    from lispy.types.value import SExpr, Value

__version__ = "0.7.0"

# Signature shared by every builtin: (calling env, argument list) -> result
BuiltinFn = Callable[["Environment", "SExpr"], "Value"]
