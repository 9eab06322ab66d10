import pytest
from hypothesis import given, strategies as st

from lispy.builtin.registry import BuiltinId, dispatch
from lispy.errors import ErrorKind
from lispy.interpreter import Interpreter
from lispy.types.value import NUMBER_MAX, NUMBER_MIN, Number, SExpr, wrap_number

# Module-level interpreter for property tests (no definitions are made)
ITP = Interpreter(prelude=None)

small = st.integers(min_value=-(2 ** 31), max_value=2 ** 31)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2 3)", 6),
        ("(- 10 3 2)", 5),
        ("(* 2 3 4)", 24),
        ("(/ 12 3)", 4),
        ("(- 5)", -5),
        ("(+ 7)", 7),
        ("(/ 7 2)", 3),
        ("(/ -7 2)", -3),
        ("(/ 7 -2)", -3),
        ("(/ -7 -2)", 3),
        ("(+ (* 2 3) (- 10 4))", 12),
        ("(/ (+ 20 10) (* 2 5))", 3),
        ("(+ -1 5 -3)", 1),
        ("(- -10 -5)", -5),
        ("(* 1 2 3 4 5 6)", 720),
    ]
)
def test_arithmetic(bare, source, expected):
    assert bare.eval(source) == Number(expected)


def test_overflow_wraps(bare):
    assert bare.eval(f"(+ {NUMBER_MAX} 1)") == Number(NUMBER_MIN)
    assert bare.eval(f"(- {NUMBER_MIN} 1)") == Number(NUMBER_MAX)
    assert bare.eval(f"(* {NUMBER_MAX} 2)") == Number(-2)
    assert bare.eval(f"(- {NUMBER_MIN})") == Number(NUMBER_MIN)
    assert bare.eval(f"(/ {NUMBER_MIN} -1)") == Number(NUMBER_MIN)


def test_division_by_zero(bare):
    result = bare.eval("(/ 10 0)")
    assert result.kind is ErrorKind.DIVISION_BY_ZERO
    assert bare.eval("(/ 10 2 0 5)").kind is ErrorKind.DIVISION_BY_ZERO


def test_type_mismatch(bare):
    result = bare.eval("(+ 1 {2})")
    assert result.kind is ErrorKind.TYPE_MISMATCH
    assert result.message == (
        "function '+' passed incorrect type for argument `1`. "
        "Got `Q-Expression`, expected `Number`."
    )


def test_zero_arguments(env):
    result = dispatch(env, BuiltinId.SUB, SExpr())
    assert result.kind is ErrorKind.ARITY_MISMATCH
    assert result.message == (
        "function '-' passed incorrect number of arguments. "
        "Got `0`, expected `at least 1`."
    )


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(< 1 2)", 1),
        ("(> 1 2)", 0),
        ("(<= 2 2)", 1),
        ("(>= 1 2)", 0),
        ("(== 1 1)", 1),
        ("(== {1 2} {1 2})", 1),
        ("(== {1} (list 1))", 1),
        ("(== {1 {2}} {1 {3}})", 0),
        ("(!= 1 {1})", 1),
        ("(== + +)", 1),
        ("(== + -)", 0),
        ('(== "a" "a")', 1),
        ('(!= "a" "b")', 1),
        ("(== {} {})", 1),
    ]
)
def test_comparison(bare, source, expected):
    assert bare.eval(source) == Number(expected)


def test_ordering_arity_and_types(bare):
    result = bare.eval("(< 1 2 3)")
    assert result.kind is ErrorKind.ARITY_MISMATCH
    assert result.message.endswith("Got `3`, expected `2`.")
    assert bare.eval("(< 1 {2})").kind is ErrorKind.TYPE_MISMATCH
    assert bare.eval("(== 1 2 3)").kind is ErrorKind.ARITY_MISMATCH


@given(small, small)
def test_addition_matches_python(a, b):
    assert ITP.eval(f"(+ {a} {b})") == Number(a + b)
    assert ITP.eval(f"(+ {b} {a})") == Number(a + b)


@given(small, small)
def test_subtraction_and_multiplication(a, b):
    assert ITP.eval(f"(- {a} {b})") == Number(a - b)
    assert ITP.eval(f"(* {a} {b})") == Number(a * b)


@given(small, small.filter(lambda n: n != 0))
def test_division_truncates_toward_zero(a, b):
    q = ITP.eval(f"(/ {a} {b})").value
    r = a - q * b
    assert abs(r) < abs(b)
    assert r == 0 or (r < 0) == (a < 0)


@given(st.integers(min_value=NUMBER_MIN, max_value=NUMBER_MAX),
       st.integers(min_value=NUMBER_MIN, max_value=NUMBER_MAX))
def test_results_stay_in_range(a, b):
    result = ITP.eval(f"(* {a} {b})")
    assert NUMBER_MIN <= result.value <= NUMBER_MAX
    assert result == Number(wrap_number(a * b))
