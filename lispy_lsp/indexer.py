from __future__ import annotations

"""
Lightweight indexer for Lispy files without evaluating code.

We scan for top-level forms and build an index for:
- definitions: (def {a b} ...), (= {a} ...), (fun {name args...} ...)
- bracket balance for both () and {}, with the first mismatched bracket
- unterminated string literals
- the first syntax error reported by the real grammar, with its position

The scanner is tolerant: it never raises on partial/incomplete buffers. We only
extract enough structure to power LSP features (document symbols, completion,
hover, signature help and diagnostics).
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
import re

from lispy.errors import LispySyntaxError
from lispy.reader.grammar import parse

# Simple token patterns for scanning; an unterminated string runs to the end
TOKEN_REGEX = re.compile(
    r'\s+|;[^\r\n]*|[(){}]|"(?:\\.|[^"\\])*(?P<close>")?|[^\s(){}";]+',
    re.DOTALL,
)

DEFINING_FORMS = ("def", "=", "fun")
OPENERS = {"(": ")", "{": "}"}
CLOSERS = {")": "(", "}": "{"}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: List[str] = field(default_factory=list)


@dataclass
class BracketProblem:
    message: str
    line: int
    col: int


@dataclass
class SyntaxProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    brace_balance: int = 0
    bracket_problem: Optional[BracketProblem] = None
    has_unmatched_quote: bool = False
    syntax_error: Optional[SyntaxProblem] = None


Token = Tuple[str, int]  # (text, offset)


def _iter_tokens(text: str) -> Iterator[Tuple[str, int, bool]]:
    # Yields (token, offset, is_unterminated_string); whitespace and comments dropped
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if tok.isspace() or tok.startswith(';'):
            continue
        unterminated = tok.startswith('"') and m.group("close") is None
        yield tok, m.start(), unterminated


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _read_braced_symbols(tokens: List[Token], start: int) -> Tuple[List[Token], int]:
    """Collect the plain symbols of a `{...}` starting at tokens[start].

    Returns the symbols with their offsets and the index just past the `}`
    (or the end of the tokens when the list is not closed).
    """
    syms: List[Token] = []
    if start >= len(tokens) or tokens[start][0] != '{':
        return syms, start
    j = start + 1
    while j < len(tokens):
        t, s = tokens[j]
        if t == '}':
            return syms, j + 1
        if t in OPENERS or t in CLOSERS or t.startswith('"'):
            # not a formals list
            return [], j
        syms.append((t, s))
        j += 1
    return syms, j


def _index_definition(idx: DocumentIndex, text: str, tokens: List[Token], head_pos: int) -> None:
    head = tokens[head_pos][0]
    names, after = _read_braced_symbols(tokens, head_pos + 1)
    if not names:
        return

    if head == 'fun':
        (name, offset), params = names[0], [t for t, _ in names[1:]]
        line, col = _position_from_offset(text, offset)
        idx.symbols[name] = SymbolDef(name, 'function', line, col, params)
        return

    # (def {f} (\ {x y} {...})) is recorded as a function with its formals
    lambda_params: Optional[List[str]] = None
    if (
        len(names) == 1
        and after + 1 < len(tokens)
        and tokens[after][0] == '('
        and tokens[after + 1][0] == '\\'
    ):
        formals, _ = _read_braced_symbols(tokens, after + 2)
        lambda_params = [t for t, _ in formals]

    for name, offset in names:
        line, col = _position_from_offset(text, offset)
        if lambda_params is not None:
            idx.symbols[name] = SymbolDef(name, 'function', line, col, lambda_params)
        else:
            idx.symbols[name] = SymbolDef(name, 'var', line, col)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens: List[Token] = []
    for tok, offset, unterminated in _iter_tokens(text):
        if unterminated:
            idx.has_unmatched_quote = True
        tokens.append((tok, offset))

    stack: List[Token] = []
    for i, (tok, start) in enumerate(tokens):
        if tok in OPENERS:
            if tok == '(':
                idx.paren_balance += 1
                if i + 1 < len(tokens) and tokens[i + 1][0] in DEFINING_FORMS:
                    _index_definition(idx, text, tokens, i + 1)
            else:
                idx.brace_balance += 1
            stack.append((tok, start))
        elif tok in CLOSERS:
            if tok == ')':
                idx.paren_balance -= 1
            else:
                idx.brace_balance -= 1
            if idx.bracket_problem is None:
                if not stack:
                    line, col = _position_from_offset(text, start)
                    idx.bracket_problem = BracketProblem(f"Unmatched '{tok}'", line, col)
                elif stack[-1][0] != CLOSERS[tok]:
                    line, col = _position_from_offset(text, start)
                    opener = stack[-1][0]
                    idx.bracket_problem = BracketProblem(
                        f"Expected '{OPENERS[opener]}' but found '{tok}'", line, col
                    )
            if stack:
                stack.pop()

    if idx.bracket_problem is None and stack:
        opener, start = stack[-1]
        line, col = _position_from_offset(text, start)
        idx.bracket_problem = BracketProblem(f"Unclosed '{opener}'", line, col)

    try:
        parse(text, "<buffer>")
    except LispySyntaxError as ex:
        # grammar positions are 1-based
        message = str(ex).split(": error: ", 1)[-1]
        idx.syntax_error = SyntaxProblem(message, ex.line - 1, ex.col - 1)

    return idx


# Builtin and prelude signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    # builtins
    "+": "(+ n & ns)",
    "-": "(- n & ns)",
    "*": "(* n & ns)",
    "/": "(/ n & ns)",
    "<": "(< a b)",
    ">": "(> a b)",
    "<=": "(<= a b)",
    ">=": "(>= a b)",
    "==": "(== a b)",
    "!=": "(!= a b)",
    "if": "(if cond then else)",
    "list": "(list & xs)",
    "head": "(head l)",
    "tail": "(tail l)",
    "eval": "(eval q)",
    "join": "(join l & ls)",
    "def": "(def syms & values)",
    "=": "(= syms & values)",
    "\\": "(\\ formals body)",
    "fun": "(fun signature body)",
    "load": "(load path)",
    "print": "(print & xs)",
    "error": "(error message)",
    # prelude
    "unpack": "(unpack f l)",
    "pack": "(pack f & xs)",
    "curry": "(curry f l)",
    "uncurry": "(uncurry f & xs)",
    "do": "(do & l)",
    "let": "(let b)",
    "not": "(not x)",
    "or": "(or x y)",
    "and": "(and x y)",
    "flip": "(flip f a b)",
    "ghost": "(ghost & xs)",
    "comp": "(comp f g x)",
    "fst": "(fst l)",
    "snd": "(snd l)",
    "trd": "(trd l)",
    "len": "(len l)",
    "nth": "(nth n l)",
    "last": "(last l)",
    "take": "(take n l)",
    "drop": "(drop n l)",
    "split": "(split n l)",
    "elem": "(elem x l)",
    "map": "(map f l)",
    "filter": "(filter f l)",
    "foldl": "(foldl f z l)",
    "sum": "(sum l)",
    "product": "(product l)",
    "select": "(select & cs)",
    "case": "(case x & cs)",
    "fib": "(fib n)",
}
