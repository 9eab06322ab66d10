import pytest

from lispy.builtin.registry import BuiltinId
from lispy.errors import ErrorKind
from lispy.evaluation.evaluator import evaluate
from lispy.types.value import Builtin, Error, Number, QExpr, SExpr, String, Symbol


@pytest.mark.parametrize(
    "source,expected",
    [
        ("5", Number(5)),
        ("(5)", Number(5)),
        ("((((5))))", Number(5)),
        ("()", SExpr()),
        ('"text"', String("text")),
        ("(+ 1 2)", Number(3)),
        ("+ 1 2", Number(3)),
        ("(+ 1 (* 2 (+ 3 4) (- 10 6)))", Number(57)),
        ("{1 2 (+ 1 2)}", QExpr([Number(1), Number(2), SExpr([Symbol("+"), Number(1), Number(2)])])),
        ("{x y}", QExpr([Symbol("x"), Symbol("y")])),
        ("(eval (head {(+ 1 2) (+ 10 20)}))", Number(3)),
        ("+", Builtin(BuiltinId.ADD)),
        ("(+)", Builtin(BuiltinId.ADD)),
        ("", SExpr()),
    ]
)
def test_eval_line(bare, source, expected):
    assert bare.eval(source) == expected


def test_unbound_symbol(bare):
    result = bare.eval("x")
    assert isinstance(result, Error)
    assert result.kind is ErrorKind.UNBOUND_SYMBOL
    assert str(result) == "Error: unbound symbol `x`"


def test_non_function_head(bare):
    result = bare.eval("(1 2)")
    assert result.kind is ErrorKind.NOT_A_FUNCTION
    assert result.message == "S-Expression starting with incorrect type. Got `Number`, expected `Function`."


def test_first_error_by_position_wins(bare):
    result = bare.eval("(+ 1 (/ 1 0) undefined_thing)")
    assert result.kind is ErrorKind.DIVISION_BY_ZERO
    assert result.message == "division by zero"


def test_errors_propagate_through_nesting(bare):
    result = bare.eval("(head (list (+ 1 nope) 2))")
    assert result == Error("unbound symbol `nope`")


def test_parse_error_is_a_value(bare):
    result = bare.eval("(+ 1")
    assert result.kind is ErrorKind.PARSE_ERROR
    assert result.message == "<stdin>:1:5: error: expected ')' at end of input"


def test_invalid_number_is_a_value(bare):
    result = bare.eval("(+ 1 99999999999999999999)")
    assert result.kind is ErrorKind.INVALID_NUMBER


def test_eval_forms_evaluates_each_form(bare):
    assert bare.eval_forms("(def {x} 2) (* x 21)") == [SExpr(), Number(42)]


def test_eval_forms_parse_error(bare):
    [result] = bare.eval_forms("(def {x} 2", "prog.lspy")
    assert result.kind is ErrorKind.PARSE_ERROR
    assert result.message.startswith("prog.lspy:1:")
    assert bare.eval("x").kind is ErrorKind.UNBOUND_SYMBOL


def test_evaluate_directly(env):
    expr = SExpr([Symbol("+"), Number(1), SExpr([Symbol("*"), Number(2), Number(3)])])
    assert evaluate(env, expr) == Number(7)
    assert evaluate(env, QExpr([Symbol("undefined")])) == QExpr([Symbol("undefined")])


def test_symbols_resolve_to_copies(bare):
    bare.eval("def {xs} {1 2}")
    bare.eval("join xs {3}")
    assert bare.eval("xs") == QExpr([Number(1), Number(2)])


def test_definitions_persist_between_lines(bare):
    assert bare.eval("def {a b} 1 2") == SExpr()
    assert bare.eval("+ a b") == Number(3)
    assert str(bare.eval("list a b {c}")) == "{1 2 {c}}"
