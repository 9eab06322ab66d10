import sys

import pytest

from lispy.builtin.registry import register
from lispy.config import get_recursion_limit
from lispy.interpreter import Interpreter
from lispy.types.environment import Environment


# Evaluation is recursive in Python: give deep programs the same headroom the
# command-line entry point does.
@pytest.fixture(autouse=True, scope="session")
def _recursion_limit():
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(max(old, get_recursion_limit()))
    yield
    sys.setrecursionlimit(old)


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def bare():
    """Interpreter with builtins only."""
    return Interpreter(prelude=None)


@pytest.fixture
def std():
    """Interpreter with the standard prelude loaded."""
    return Interpreter()
