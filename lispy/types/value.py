"""Runtime values for Lispy.

Every datum the interpreter touches is one of the tagged variants below. A value
forms a tree: each child has exactly one owner (its container, or a local
variable while the evaluator works on it). Ownership moves with ``pop``/``take``
and values are duplicated with ``copy`` whenever they are stored into an
Environment, so no two containers ever share a node.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, ClassVar, Iterator

if TYPE_CHECKING:
    from lispy.builtin.registry import BuiltinId
    from lispy.errors import ErrorKind

NUMBER_BITS = 64
NUMBER_MIN = -(1 << (NUMBER_BITS - 1))
NUMBER_MAX = (1 << (NUMBER_BITS - 1)) - 1


def wrap_number(n: int) -> int:
    """Reduce an integer to the signed 64-bit range (two's complement wrap)."""
    return ((n - NUMBER_MIN) % (1 << NUMBER_BITS)) + NUMBER_MIN


class Value:
    """Base class of every runtime value."""

    __slots__ = ()

    TYPE_NAME: ClassVar[str] = "Unknown"

    @property
    def type_name(self) -> str:
        return self.TYPE_NAME

    def copy(self) -> Value:
        raise NotImplementedError

    def _write(self, buffer: StringIO) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write(buffer)
            return buffer.getvalue()

    # Values are mutable trees; structural equality only.
    __hash__ = None  # type: ignore[assignment]


class Number(Value):
    __slots__ = ("value",)

    TYPE_NAME = "Number"

    def __init__(self, value: int):
        self.value = value

    def copy(self) -> Number:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def _write(self, buffer: StringIO) -> None:
        buffer.write(str(self.value))

    def __repr__(self) -> str:
        return f"Number({self.value})"


class Error(Value):
    """A first-class error. Never raised; returned and propagated as data."""

    __slots__ = ("message", "kind")

    TYPE_NAME = "Error"

    def __init__(self, message: str, kind: ErrorKind | None = None):
        self.message = message
        self.kind = kind

    def copy(self) -> Error:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def _write(self, buffer: StringIO) -> None:
        buffer.write("Error: ")
        buffer.write(self.message)

    def __repr__(self) -> str:
        kind = self.kind.value if self.kind is not None else None
        return f"Error({self.message!r}, kind={kind})"


class Symbol(Value):
    __slots__ = ("name",)

    TYPE_NAME = "Symbol"

    def __init__(self, name: str):
        self.name = name

    def copy(self) -> Symbol:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def _write(self, buffer: StringIO) -> None:
        buffer.write(self.name)

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"


class String(Value):
    """A decoded string literal; printed as its raw text."""

    __slots__ = ("text",)

    TYPE_NAME = "String"

    def __init__(self, text: str):
        self.text = text

    def copy(self) -> String:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, String) and self.text == other.text

    def _write(self, buffer: StringIO) -> None:
        buffer.write(self.text)

    def __repr__(self) -> str:
        return f"String({self.text!r})"


class Function(Value):
    """Common base of builtin and user-defined functions."""

    __slots__ = ()

    TYPE_NAME = "Function"


class Builtin(Function):
    """Reference to a primitive operation; carries no state beyond its id."""

    __slots__ = ("id",)

    def __init__(self, builtin_id: BuiltinId):
        self.id = builtin_id

    def copy(self) -> Builtin:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Builtin) and self.id is other.id

    def _write(self, buffer: StringIO) -> None:
        buffer.write("<builtin>")

    def __repr__(self) -> str:
        return f"Builtin({self.id.value!r})"


class Expr(Value):
    """Ordered container shared by S-expressions and Q-expressions."""

    __slots__ = ("cells",)

    OPEN: ClassVar[str] = ""
    CLOSE: ClassVar[str] = ""

    def __init__(self, cells: list[Value] | None = None):
        self.cells: list[Value] = cells if cells is not None else []

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __getitem__(self, i: int) -> Value:
        return self.cells[i]

    def add(self, v: Value) -> Expr:
        """Append `v`, taking ownership of it; returns self for chaining."""
        self.cells.append(v)
        return self

    def pop(self, i: int = 0) -> Value:
        """Remove and return the i-th child; the remaining children shift down."""
        return self.cells.pop(i)

    def take(self, i: int = 0) -> Value:
        """Pop the i-th child and discard what is left of this container."""
        x = self.cells.pop(i)
        self.cells.clear()
        return x

    def join(self, other: Expr) -> Expr:
        """Move every child of `other` onto the end of self, emptying `other`."""
        while other.cells:
            self.cells.append(other.cells.pop(0))
        return self

    def copy(self) -> Expr:
        return type(self)([c.copy() for c in self.cells])

    def as_sexpr(self) -> SExpr:
        """Retype to an S-expression; the cell list is moved, not copied."""
        return SExpr(self.cells)

    def as_qexpr(self) -> QExpr:
        """Retype to a Q-expression; the cell list is moved, not copied."""
        return QExpr(self.cells)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return len(self.cells) == len(other.cells) and all(
            x == y for x, y in zip(self.cells, other.cells)
        )

    def _write(self, buffer: StringIO) -> None:
        buffer.write(self.OPEN)
        for i, cell in enumerate(self.cells):
            if i:
                buffer.write(" ")
            cell._write(buffer)
        buffer.write(self.CLOSE)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cells!r})"


class SExpr(Expr):
    __slots__ = ()

    TYPE_NAME = "S-Expression"
    OPEN = "("
    CLOSE = ")"


class QExpr(Expr):
    __slots__ = ()

    TYPE_NAME = "Q-Expression"
    OPEN = "{"
    CLOSE = "}"
