from __future__ import annotations

import logging
from typing import Literal

from lispy.builtin.io_builtin import load_path
from lispy.builtin.registry import register
from lispy.evaluation.evaluator import evaluate
from lispy.reader import read_source
from lispy.types.environment import Environment
from lispy.types.value import Error, Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Owns the global environment and feeds source text through the reader and
    the evaluator. Definitions persist across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                # Lazy import to avoid circular imports
                from lispy.modules.loader import load_prelude
                load_prelude(self)
            except FileNotFoundError as ex:
                # Be permissive: no prelude found -> proceed with builtins only
                logger.warning("%s; continuing without prelude", ex)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_forms(self, code: str, filename: str = "<stdin>") -> list[Value]:
        """Evaluate each top-level form of `code` in turn in the global env.

        A parse failure yields a single ParseError and nothing is evaluated.
        """
        forms = read_source(code, filename)
        if isinstance(forms, Error):
            return [forms]
        results: list[Value] = []
        while forms.cells:
            results.append(evaluate(self.env, forms.pop(0)))
        return results

    def eval_prelude(self, code: str, filename: str = "<prelude>") -> None:
        for result in self.eval_forms(code, filename):
            if isinstance(result, Error):
                logger.warning("prelude %s: %s", filename, result.message)

    def eval(self, code: str) -> Value:
        """Read a whole line as one S-expression and evaluate it.

        `+ 1 2` and `(+ 1 2)` therefore both give 3.
        """
        line = read_source(code)
        if isinstance(line, Error):
            return line
        return evaluate(self.env, line)

    def load_file(self, path: str) -> Value:
        """Load a source file with the semantics of the `load` builtin."""
        return load_path(self.env, path)
