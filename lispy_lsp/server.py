from __future__ import annotations

"""
A minimal pygls-based Language Server for Lispy.

Features:
- Text synchronization and document store
- Diagnostics: grammar errors, unbalanced () and {}, unterminated strings
- Hover: builtin/prelude signatures and locally defined symbols
- Completion: builtins, prelude functions and local definitions
- Signature Help: for builtins, prelude functions and local functions
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from lispy import __version__
from lispy.config import get_log_level
from lispy_lsp.indexer import BUILTIN_SIGNATURES, DocumentIndex, build_index

logger = logging.getLogger(__name__)

SOURCE = "lispy-ls"
WORD_BREAKS = " \t(){}\"\n\r"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class LispyLanguageServer(LanguageServer):
    CMD_NAME = "lispy-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}


ls = LispyLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LispyLanguageServer, params: DidOpenTextDocumentParams):
    _refresh(ls, params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LispyLanguageServer, params: DidChangeTextDocumentParams):
    # pygls has already applied the (possibly incremental) edits to its workspace
    uri = params.text_document.uri
    _refresh(ls, uri, ls.workspace.get_text_document(uri).source)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LispyLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _refresh(ls: LispyLanguageServer, uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, collect_diagnostics(idx))


# --- Diagnostics ---
def _mk_range(line: int, col: int) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + 1))


def collect_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.syntax_error is not None:
        err = idx.syntax_error
        diags.append(
            Diagnostic(
                range=_mk_range(err.line, err.col),
                message=err.message,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    if idx.bracket_problem is not None:
        problem = idx.bracket_problem
        diags.append(
            Diagnostic(
                range=_mk_range(problem.line, problem.col),
                message=problem.message,
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    if idx.has_unmatched_quote:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unterminated string literal",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    return diags


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: LispyLanguageServer, params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = None
    if word in BUILTIN_SIGNATURES:
        contents = BUILTIN_SIGNATURES[word]
    elif word in state.index.symbols:
        sdef = state.index.symbols[word]
        contents = f"{word}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"

    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(ls: LispyLanguageServer, params: CompletionParams) -> CompletionList:
    items: List[CompletionItem] = [
        CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig)
        for name, sig in BUILTIN_SIGNATURES.items()
    ]
    state = ls.documents.get(params.text_document.uri)
    if state:
        for name, sdef in state.index.symbols.items():
            if name in BUILTIN_SIGNATURES:
                continue
            kind = CompletionItemKind.Function if sdef.kind == 'function' else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind))
    return CompletionList(is_incomplete=False, items=items)


# --- Signature Help ---
def signature_for(name: str, idx: DocumentIndex) -> Optional[str]:
    if name in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[name]
    sdef = idx.symbols.get(name)
    if sdef is not None and sdef.kind == 'function':
        return f"({' '.join([name, *sdef.params])})"
    return None


@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(ls: LispyLanguageServer, params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    callee = extract_callee_name(get_line_prefix(state.text, params.position))
    if not callee:
        return None
    label = signature_for(callee, state.index)
    if not label:
        return None

    # Everything after the callee name is a parameter
    parameters = [ParameterInformation(label=p) for p in label.strip("()").split()[1:]]
    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(ls: LispyLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == 'function' else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---

def get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    # find last '(' and take following token
    lp = prefix.rfind('(')
    if lp == -1:
        return None
    parts = prefix[lp + 1:].split()
    if not parts:
        return None
    return parts[0].rstrip(')}')


def main() -> None:
    logging.basicConfig(level=get_log_level())
    logger.info("starting %s %s over stdio", SOURCE, __version__)
    ls.start_io()


if __name__ == "__main__":
    main()
