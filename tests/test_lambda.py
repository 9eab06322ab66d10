import pytest

from lispy.errors import ErrorKind
from lispy.types.lambda_fn import Lambda
from lispy.types.value import Number, QExpr, SExpr, Symbol


def last(itp, code):
    return itp.eval_forms(code)[-1]


def test_anonymous_application(bare):
    assert bare.eval("((\\ {x y} {+ x y}) 1 2)") == Number(3)


def test_lambda_value_prints(bare):
    assert str(bare.eval("\\ {x y} {+ x y}")) == "(\\ {x y} {+ x y})"


def test_partial_application(bare):
    code = """
    (def {add} (\\ {a b} {+ a b}))
    (def {add2} (add 2))
    (add2 3)
    """
    assert last(bare, code) == Number(5)
    assert str(bare.eval("add2")) == "(\\ {b} {+ a b})"
    # the original is untouched by the partial application
    assert bare.eval("add 10 20") == Number(30)


def test_partial_application_one_at_a_time(bare):
    code = """
    (def {add3} (\\ {a b c} {+ a b c}))
    (((add3 1) 2) 3)
    """
    assert last(bare, code) == Number(6)


def test_too_many_arguments(bare):
    result = bare.eval("((\\ {x} {x}) 1 2)")
    assert result.kind is ErrorKind.TOO_MANY_ARGUMENTS
    assert result.message == "function passed too many arguments. Got 2, expected 1."


def test_too_many_arguments_after_partial(bare):
    code = """
    (def {f} ((\\ {a b} {+ a b}) 1))
    (f 2 3)
    """
    result = last(bare, code)
    assert result.kind is ErrorKind.TOO_MANY_ARGUMENTS
    assert result.message == "function passed too many arguments. Got 2, expected 1."


@pytest.mark.parametrize(
    "source,expected",
    [
        ("((\\ {x & xs} {xs}) 1 2 3)", QExpr([Number(2), Number(3)])),
        ("((\\ {x & xs} {xs}) 1)", QExpr()),
        ("((\\ {x & xs} {x}) 1)", Number(1)),
        ("((\\ {& xs} {xs}) 1 2)", QExpr([Number(1), Number(2)])),
        ("(((\\ {a b & r} {list a b r}) 1) 2)", QExpr([Number(1), Number(2), QExpr()])),
    ]
)
def test_variadic(bare, source, expected):
    assert bare.eval(source) == expected


@pytest.mark.parametrize(
    "source",
    [
        "\\ {x &} {x}",
        "\\ {& a b} {a}",
        "\\ {& a & b} {a}",
    ]
)
def test_invalid_variadic_rejected_at_construction(bare, source):
    result = bare.eval(source)
    assert result.kind is ErrorKind.INVALID_VARIADIC_FORMAL
    assert result.message == "function format invalid. Symbol '&' not followed by single symbol."


def test_invalid_variadic_rejected_at_binding(env):
    from lispy.evaluation.apply import call

    f = Lambda(QExpr([Symbol("&")]), QExpr([Number(1)]))
    result = call(env, f, SExpr([Number(1)]))
    assert result.kind is ErrorKind.INVALID_VARIADIC_FORMAL


def test_lambda_formals_must_be_symbols(bare):
    result = bare.eval("\\ {1} {1}")
    assert result.kind is ErrorKind.TYPE_MISMATCH
    assert result.message == "function '\\' cannot define non-symbol. Got `Number`, expected `Symbol`."
    assert bare.eval("\\ {x} 1").kind is ErrorKind.TYPE_MISMATCH
    assert bare.eval("\\ {x}").kind is ErrorKind.ARITY_MISMATCH


def test_closure_keeps_its_defining_scope(bare):
    code = """
    (def {mk} (\\ {y} {\\ {x} {+ x y}}))
    (def {f} (mk 10))
    (def {y} 99)
    (f 1)
    """
    assert last(bare, code) == Number(11)


def test_closure_ignores_caller_bindings(bare):
    code = """
    (def {mk} (\\ {y} {\\ {x} {+ x y}}))
    (def {f} (mk 10))
    (def {g} (\\ {y} {f 1}))
    (g 500)
    """
    assert last(bare, code) == Number(11)


def test_caller_locals_are_visible(bare):
    code = """
    (def {z} 1)
    (def {show} (\\ {_} {z}))
    (def {outer} (\\ {z} {show 0}))
    (outer 7)
    """
    assert last(bare, code) == Number(7)
    assert bare.eval("show 0") == Number(1)


def test_local_assignment_stays_local(bare):
    code = """
    (def {setl} (\\ {v} {= {local} v}))
    (setl 5)
    """
    assert last(bare, code) == SExpr()
    assert bare.eval("local").kind is ErrorKind.UNBOUND_SYMBOL


def test_def_inside_lambda_is_global(bare):
    code = """
    (def {setg} (\\ {v} {def {glob} v}))
    (setg 5)
    glob
    """
    assert last(bare, code) == Number(5)


def test_recursion(bare):
    code = """
    (def {fact} (\\ {n} {if (== n 0) {1} {* n (fact (- n 1))}}))
    (fact 10)
    """
    assert last(bare, code) == Number(3628800)


def test_fun_defines_named_lambda(bare):
    code = """
    (fun {add3 a b c} {+ a b c})
    (add3 1 2 3)
    """
    assert last(bare, code) == Number(6)
    assert str(bare.eval("add3")) == "(\\ {a b c} {+ a b c})"


def test_fun_errors(bare):
    assert bare.eval("fun {} {1}").kind is ErrorKind.EMPTY_LIST_ARGUMENT
    assert bare.eval("fun {& x} {x}").kind is ErrorKind.INVALID_VARIADIC_FORMAL
    assert bare.eval("fun {f 1} {1}").kind is ErrorKind.TYPE_MISMATCH
    assert bare.eval("fun {f} 1").kind is ErrorKind.TYPE_MISMATCH


def test_lambdas_are_values(bare):
    code = """
    (def {twice} (\\ {f x} {f (f x)}))
    (twice (\\ {n} {* n 3}) 2)
    """
    assert last(bare, code) == Number(18)
    assert bare.eval("twice - 5") == Number(5)
