"""User-defined function representation for Lispy."""

from __future__ import annotations

from io import StringIO

from lispy.types.environment import Environment
from lispy.types.value import Function, QExpr

VARIADIC = "&"


class Lambda(Function):
    """A first-class lambda with formal parameters, body, and closure env.

    The closure environment is owned exclusively by this lambda: it is where
    arguments accumulate across partial applications, and it is the frame the
    body runs in once every formal is bound.
    """

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: QExpr, body: QExpr, env: Environment | None = None):
        self.formals: QExpr = formals
        self.body: QExpr = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def copy(self) -> Lambda:
        return Lambda(self.formals.copy(), self.body.copy(), self.env.copy())

    def __eq__(self, other: object) -> bool:
        # Closure environments are not compared.
        return (
            isinstance(other, Lambda)
            and self.formals == other.formals
            and self.body == other.body
        )

    def _write(self, buffer: StringIO) -> None:
        buffer.write("(\\ ")
        self.formals._write(buffer)
        buffer.write(" ")
        self.body._write(buffer)
        buffer.write(")")

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
