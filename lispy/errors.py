"""Errors for Lispy.

Language-level failures are values: every builtin and the evaluator report a
fault by returning an ``Error`` built by one of the constructors below, and the
error travels through ordinary data flow until it reaches the top level.

The exception classes are for the host side only (the grammar raises
``LispySyntaxError``); they are converted to ``ParseError`` values at the point
where source text enters the interpreter.
"""

from __future__ import annotations

from enum import Enum

from lispy.types.value import Error


class LispyError(Exception):
    """ Base class for all Lispy host-side errors"""
    pass


class LispySyntaxError(LispyError):
    """ Raised by the grammar when source text cannot be parsed"""

    def __init__(self, message: str, filename: str = "<stdin>", line: int = 1, col: int = 1):
        super().__init__(f"{filename}:{line}:{col}: error: {message}")
        self.filename = filename
        self.line = line
        self.col = col


class ErrorKind(Enum):
    UNBOUND_SYMBOL = "UnboundSymbol"
    DIVISION_BY_ZERO = "DivisionByZero"
    TYPE_MISMATCH = "TypeMismatch"
    ARITY_MISMATCH = "ArityMismatch"
    EMPTY_LIST_ARGUMENT = "EmptyListArgument"
    INVALID_VARIADIC_FORMAL = "InvalidVariadicFormal"
    TOO_MANY_ARGUMENTS = "TooManyArguments"
    NOT_A_FUNCTION = "NotAFunction"
    INVALID_NUMBER = "InvalidNumber"
    PARSE_ERROR = "ParseError"
    USER_ERROR = "UserError"


def unbound_symbol(name: str) -> Error:
    return Error(f"unbound symbol `{name}`", ErrorKind.UNBOUND_SYMBOL)


def division_by_zero() -> Error:
    return Error("division by zero", ErrorKind.DIVISION_BY_ZERO)


def type_mismatch(fun: str, index: int, actual: str, expected: str) -> Error:
    return Error(
        f"function '{fun}' passed incorrect type for argument `{index}`. "
        f"Got `{actual}`, expected `{expected}`.",
        ErrorKind.TYPE_MISMATCH,
    )


def arity_mismatch(fun: str, actual: int, expected: int | str) -> Error:
    return Error(
        f"function '{fun}' passed incorrect number of arguments. "
        f"Got `{actual}`, expected `{expected}`.",
        ErrorKind.ARITY_MISMATCH,
    )


def empty_list_argument(fun: str, index: int) -> Error:
    return Error(
        f"function '{fun}' passed `{{}}` for argument `{index}`.",
        ErrorKind.EMPTY_LIST_ARGUMENT,
    )


def non_symbol(fun: str, actual: str) -> Error:
    return Error(
        f"function '{fun}' cannot define non-symbol. Got `{actual}`, expected `Symbol`.",
        ErrorKind.TYPE_MISMATCH,
    )


def unmatched_definition(fun: str, symbols: int, values: int) -> Error:
    return Error(
        f"function '{fun}' cannot define an unmatched number of values to symbols. "
        f"Got {values}, expected {symbols}.",
        ErrorKind.ARITY_MISMATCH,
    )


def invalid_variadic() -> Error:
    return Error(
        "function format invalid. Symbol '&' not followed by single symbol.",
        ErrorKind.INVALID_VARIADIC_FORMAL,
    )


def too_many_arguments(given: int, total: int) -> Error:
    return Error(
        f"function passed too many arguments. Got {given}, expected {total}.",
        ErrorKind.TOO_MANY_ARGUMENTS,
    )


def not_a_function(actual: str) -> Error:
    return Error(
        f"S-Expression starting with incorrect type. Got `{actual}`, expected `Function`.",
        ErrorKind.NOT_A_FUNCTION,
    )


def invalid_number(text: str) -> Error:
    return Error(f"invalid number `{text}`", ErrorKind.INVALID_NUMBER)


def parse_error(message: str) -> Error:
    return Error(message, ErrorKind.PARSE_ERROR)


def user_error(message: str) -> Error:
    return Error(message, ErrorKind.USER_ERROR)
