"""I/O builtins: loading source files, printing, and constructing errors."""

from __future__ import annotations

import logging

from lispy.builtin.checks import check_count, check_type
from lispy.errors import parse_error, user_error
from lispy.types.environment import Environment
from lispy.types.value import Error, SExpr, String, Value

logger = logging.getLogger(__name__)


def load_path(env: Environment, path: str) -> Value:
    """Evaluate every top-level form of the file at `path` in the global env.

    Stops at, and returns, the first Error (a parse failure included);
    returns () when every form evaluated cleanly.
    """
    from lispy.evaluation.evaluator import evaluate
    from lispy.modules.loader import resolve_source
    from lispy.reader import read_source

    resolved = resolve_source(path)
    if resolved is None:
        return parse_error(f"Could not load library `{path}`: file not found")
    try:
        source = resolved.read_text(encoding="utf-8")
    except OSError as ex:
        return parse_error(f"Could not load library `{path}`: {ex}")

    forms = read_source(source, str(resolved))
    if isinstance(forms, Error):
        return forms

    logger.info("loading %s (%d forms)", resolved, len(forms))
    root = env.root()
    while forms.cells:
        result = evaluate(root, forms.pop(0))
        if isinstance(result, Error):
            logger.debug("load of %s stopped: %s", resolved, result.message)
            return result
    return SExpr()


def builtin_load(env: Environment, args: SExpr) -> Value:
    """(load "file"): evaluate a source file in the global environment."""
    if err := check_count("load", args, 1) or check_type("load", args, 0, String):
        return err
    return load_path(env, args[0].text)


def builtin_print(env: Environment, args: SExpr) -> Value:
    """Print space-separated representations of args followed by newline; returns ()."""
    print(" ".join(str(a) for a in args))
    return SExpr()


def builtin_error(env: Environment, args: SExpr) -> Value:
    """(error "message"): construct an Error value."""
    if err := check_count("error", args, 1) or check_type("error", args, 0, String):
        return err
    return user_error(args[0].text)
