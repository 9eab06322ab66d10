from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Protocol

from lispy.config import get_load_roots, get_prelude_root

logger = logging.getLogger(__name__)

PRELUDE_FILE = 'std.lspy'


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str, filename: str = ...) -> None: ...


# Map a `load` argument to a file: as given (relative to the working
# directory), then underneath each LISPY_LOAD_PATH root

def resolve_source(path: str) -> Optional[Path]:
    candidate = Path(path).expanduser()
    if candidate.is_file():
        return candidate
    if candidate.is_absolute():
        return None
    for root in get_load_roots():
        candidate = root / path
        if candidate.is_file():
            logger.debug("resolved %s via load path %s", path, root)
            return candidate
    return None


def load_prelude(itp: _HasEvalPrelude) -> None:
    std = get_prelude_root() / PRELUDE_FILE
    if not std.exists():
        raise FileNotFoundError(f"Cannot find prelude '{std}'")
    logger.debug("loading prelude %s", std)
    itp.eval_prelude(std.read_text(encoding='utf-8'), str(std))
