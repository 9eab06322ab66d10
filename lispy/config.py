from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


# Resolve installation dir (lispy package directory)
_LISPY_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _LISPY_DIR / 'prelude'
_DEFAULT_HISTORY_FILE = Path('~/.lispy_history')
_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_LOG_LEVEL = 'WARNING'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()).expanduser() for p in raw.split(os.pathsep) if p.strip()]


def get_load_roots() -> List[Path]:
    """Directories searched by `load` after the working directory."""
    return paths_from_env('LISPY_LOAD_PATH', [])


def get_prelude_root() -> Path:
    roots = paths_from_env('LISPY_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; if a file path is set, return its parent
    p = roots[0]
    return p if p.is_dir() else p.parent


def get_history_file() -> Path:
    raw = os.environ.get('LISPY_HISTORY_FILE')
    return Path(raw).expanduser() if raw else _DEFAULT_HISTORY_FILE.expanduser()


def get_recursion_limit() -> int:
    raw = os.environ.get('LISPY_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return max(int(raw), 1000)
    except ValueError:
        return _DEFAULT_RECURSION_LIMIT


def get_log_level() -> str:
    return os.environ.get('LISPY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
