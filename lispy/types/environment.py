"""Runtime environment for Lispy.

An Environment owns its bindings (each stored value is a private copy) and
holds two non-owning links used only for lookup:

- ``parent``: the lexical scope, i.e. the environment a lambda was created in.
  Following ``parent`` links always ends at the global environment.
- ``caller``: the environment a lambda was last fully applied from. Consulted
  only after the whole lexical chain misses.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispy.errors import unbound_symbol
from lispy.types.value import Value


class Environment:
    """Scope of name -> Value bindings with lexical and caller links."""

    __slots__ = ("vars", "parent", "caller")

    def __init__(self, parent: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.parent: Environment | None = parent
        self.caller: Environment | None = None

    def get(self, name: str) -> Value:
        """Look up `name`, returning a copy of the bound value.

        Order of resolution:
        1) this frame, then each lexical parent short of the root
        2) the same walk from the caller, then the caller's caller, ...
        3) the root (global) environment
        Returns an UnboundSymbol error if nothing matches.
        """
        roots: list[Environment] = []
        env: Optional[Environment] = self
        while env is not None:
            frame = env
            while frame.parent is not None:
                if name in frame.vars:
                    return frame.vars[name].copy()
                frame = frame.parent
            if frame not in roots:
                roots.append(frame)
            env = env.caller
        for root in roots:
            if name in root.vars:
                return root.vars[name].copy()
        return unbound_symbol(name)

    def put(self, name: str, value: Value) -> None:
        """Bind a copy of `value` in this frame, replacing any previous binding."""
        self.vars[name] = value.copy()

    def define(self, name: str, value: Value) -> None:
        """Bind a copy of `value` in the root (global) environment."""
        self.root().put(name, value)

    def root(self) -> Environment:
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def copy(self) -> Environment:
        """Deep-copy the bindings; the lookup links are shared references."""
        env = Environment(self.parent)
        env.caller = self.caller
        env.vars = {k: v.copy() for k, v in self.vars.items()}
        return env

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Lexical chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.parent
        return f"<Environment chain: {' -> '.join(chain)}>"
