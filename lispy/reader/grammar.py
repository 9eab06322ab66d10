"""
  Lispy grammar: lexer and parser producing a generic parse tree.

The grammar is fixed and compiled once at import:

    number  : /-?[0-9]+/ ;
    symbol  : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&]+/ ;
    string  : /"(\\\\.|[^"])*"/ ;
    comment : /;[^\\r\\n]*/ ;
    sexpr   : '(' <expr>* ')' ;
    qexpr   : '{' <expr>* '}' ;
    expr    : <number> | <symbol> | <string> | <comment> | <sexpr> | <qexpr> ;
    lispy   : /^/ <expr>* /$/ ;

Alternatives are tried in order, so "-5" is a number while "-" and "x-5" are
symbols. The output is a tree of ``ParseNode`` (tag, contents, children) in the
shape the Reader consumes: the root is tagged ">", leaves are tagged
"expr|<rule>|regex", lists "expr|sexpr|>" / "expr|qexpr|>" with their bracket
tokens kept as "char" children, and the root carries empty "regex" start/end
markers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from lispy.errors import LispySyntaxError


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\r\n]*)"  # single-line comment
    r"|(?P<number>-?[0-9]+)"
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&]+)"
    r'|(?P<string>"(?:\\.|[^"\\])*")'  # double-quoted, backslash escapes
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<lbrace>\{)"
    r"|(?P<rbrace>\})",
    re.DOTALL,
)

CLOSERS = {"lparen": "rparen", "lbrace": "rbrace"}
LIST_TAGS = {"lparen": "expr|sexpr|>", "lbrace": "expr|qexpr|>"}

Token = tuple[str, str, int]  # (token_type, token_value, offset)


@dataclass
class ParseNode:
    """One node of the generic parse tree."""

    tag: str
    contents: str = ""
    children: list[ParseNode] = field(default_factory=list)
    line: int = 1
    col: int = 1


def _position(source: str, offset: int) -> tuple[int, int]:
    # Return (line, col), 1-based
    line = source.count("\n", 0, offset) + 1
    last_nl = source.rfind("\n", 0, offset)
    col = offset + 1 if last_nl == -1 else offset - last_nl
    return line, col


def lex(source: str, filename: str = "<stdin>") -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, offset) tuples.

    Whitespace is skipped; comments are kept so the parse tree can carry them.
    """
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            line, col = _position(source, pos)
            if source[pos] == '"':
                raise LispySyntaxError("unterminated string literal", filename, line, col)
            raise LispySyntaxError(f"unexpected character {source[pos]!r}", filename, line, col)
        kind = m.lastgroup
        if kind != "whitespace":
            yield kind, m.group(kind), pos
        pos = m.end()


class TokenStream:
    def __init__(self, source: str, filename: str = "<stdin>"):
        self.source = source
        self.filename = filename
        self.tokens = lex(source, filename)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def _error(self, message: str, offset: int) -> LispySyntaxError:
        line, col = _position(self.source, offset)
        return LispySyntaxError(message, self.filename, line, col)

    def parse_expr(self) -> Optional[ParseNode]:
        tok = self.advance()
        if tok is None:
            return None
        tok_type, tok_val, offset = tok
        line, col = _position(self.source, offset)

        if tok_type in ("number", "symbol", "string", "comment"):
            return ParseNode(f"expr|{tok_type}|regex", tok_val, line=line, col=col)

        if tok_type in CLOSERS:
            closer = CLOSERS[tok_type]
            node = ParseNode(LIST_TAGS[tok_type], line=line, col=col)
            node.children.append(ParseNode("char", tok_val, line=line, col=col))
            while True:
                nxt = self.peek()
                if nxt is None:
                    expected = ")" if closer == "rparen" else "}"
                    raise self._error(
                        f"expected '{expected}' at end of input", len(self.source)
                    )
                if nxt[0] == closer:
                    _, close_val, close_off = self.advance()
                    c_line, c_col = _position(self.source, close_off)
                    node.children.append(ParseNode("char", close_val, line=c_line, col=c_col))
                    return node
                node.children.append(self.parse_expr())

        raise self._error(f"unexpected '{tok_val}'", offset)

    def parse_all(self) -> Iterator[ParseNode]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str, filename: str = "<stdin>") -> ParseNode:
    """Parse a whole program into a root node tagged ">".

    Raises LispySyntaxError on malformed input.
    """
    stream = TokenStream(source, filename)
    root = ParseNode(">")
    root.children.append(ParseNode("regex"))
    root.children.extend(stream.parse_all())
    end_line, end_col = _position(source, len(source))
    root.children.append(ParseNode("regex", line=end_line, col=end_col))
    return root
