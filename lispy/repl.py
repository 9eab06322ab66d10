"""Interactive prompt and command-line entry point for Lispy.

    lispy                     start the REPL (with the standard prelude)
    lispy a.lspy b.lspy       load each file in order, then exit
    lispy --no-prelude        builtins only
"""

from __future__ import annotations

import argparse
import atexit
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from lispy import __version__
from lispy.config import get_history_file, get_log_level, get_recursion_limit
from lispy.interpreter import Interpreter
from lispy.types.value import Error

logger = logging.getLogger(__name__)

PROMPT = "lispy> "
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _enable_history(history: Path) -> None:
    try:
        import readline
    except ImportError:
        # No line editing on this platform; input() still works
        return

    if history.exists():
        readline.read_history_file(str(history))

    def save() -> None:
        try:
            readline.write_history_file(str(history))
        except OSError as ex:
            logger.warning("could not save history to %s: %s", history, ex)

    atexit.register(save)


def repl(
    itp: Interpreter,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Read, evaluate and print lines until end of input or Ctrl+C."""
    write(f"Lispy Version {__version__}")
    write("Press Ctrl+C to exit\n")
    while True:
        try:
            line = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            write("")
            return
        if not line.strip():
            continue
        try:
            result = itp.eval(line)
        except RecursionError:
            logger.debug("recursion limit hit evaluating %r", line)
            write("Error: maximum recursion depth exceeded")
            continue
        write(str(result))


def run_files(itp: Interpreter, paths: Sequence[str]) -> int:
    """Load each file in order; returns 1 if any of them failed, else 0."""
    status = 0
    for path in paths:
        try:
            result = itp.load_file(path)
        except RecursionError:
            result = Error(f"maximum recursion depth exceeded loading `{path}`")
        if isinstance(result, Error):
            print(result)
            status = 1
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lispy", description="Lispy interpreter")
    parser.add_argument("files", nargs="*", help="source files to load, in order")
    parser.add_argument(
        "--no-prelude", action="store_true", help="do not load the standard prelude"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=get_log_level(),
        help="logging level (default: $LISPY_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(levelname)s %(name)s: %(message)s"
    )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    itp = Interpreter(prelude=None if args.no_prelude else 'auto')
    if args.files:
        return run_files(itp, args.files)

    _enable_history(get_history_file())
    repl(itp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
