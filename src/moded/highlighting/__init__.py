"""Syntax highlighting for visible rows, backed by pygments.

``highlight`` lexes the whole document at once so multi-line constructs
(block comments, triple-quoted strings) colour correctly, then splits the
token stream back into one span list per row. Colours are plain names from
a small terminal palette so the host decides how to paint them.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.token import Token, _TokenType
from pygments.util import ClassNotFound

from moded.runtime import telemetry

PALETTE = ("blue", "darkblue", "red", "purple", "green", "yellow", "orange")

Span = Tuple[str, Optional[str], Optional[str]]
"""``(text, colour, style)``; colour and style are ``None`` for plain text."""

_TOKEN_COLOURS: Dict[_TokenType, Tuple[str, Optional[str]]] = {
    Token.Keyword.Constant: ("orange", "bold"),
    Token.Keyword.Type: ("yellow", None),
    Token.Keyword: ("purple", None),
    Token.Name.Builtin: ("red", None),
    Token.Name.Class: ("yellow", None),
    Token.Name.Decorator: ("blue", "italic"),
    Token.Name.Exception: ("red", "bold"),
    Token.Name.Function: ("blue", None),
    Token.Literal.String.Char: ("green", "bold"),
    Token.Literal.String.Doc: ("darkblue", "italic"),
    Token.Literal.String: ("green", None),
    Token.Literal.Number: ("orange", None),
    Token.Comment: ("darkblue", "italic"),
    Token.Error: ("red", "bold"),
}


def highlight(file_extension: str, rows: Sequence[str]) -> Optional[List[List[Span]]]:
    """Return one span list per row, or ``None`` when no lexer applies."""

    if not file_extension:
        return None
    lines = tuple(rows)
    result = _highlight_cached(file_extension.lower(), lines)
    if result is None:
        return None
    return [list(spans) for spans in result]


@lru_cache(maxsize=32)
def _lexer_for(extension: str) -> Optional[Lexer]:
    try:
        lexer = get_lexer_for_filename(f"buffer.{extension}", stripnl=False, ensurenl=False)
    except ClassNotFound:
        return None
    if isinstance(lexer, TextLexer):
        return None
    return lexer


@lru_cache(maxsize=8)
def _highlight_cached(
    extension: str, lines: Tuple[str, ...]
) -> Optional[Tuple[Tuple[Span, ...], ...]]:
    lexer = _lexer_for(extension)
    if lexer is None:
        return None

    with telemetry.span(
        "highlight::lex",
        logger_name="moded.highlighting",
        metadata={"extension": extension, "rows": len(lines)},
    ):
        rows: List[List[Span]] = [[]]
        for ttype, value in lex("\n".join(lines), lexer):
            colour, style = _style_for(ttype)
            pieces = value.split("\n")
            for index, piece in enumerate(pieces):
                if index:
                    rows.append([])
                if piece:
                    rows[-1].append((piece, colour, style))

    # A lexer may still append a final newline; never report more rows than given.
    del rows[len(lines):]
    while len(rows) < len(lines):
        rows.append([])
    return tuple(tuple(spans) for spans in rows)


def _style_for(ttype: _TokenType) -> Tuple[Optional[str], Optional[str]]:
    current: Optional[_TokenType] = ttype
    while current is not None:
        found = _TOKEN_COLOURS.get(current)
        if found is not None:
            return found
        current = current.parent
    return None, None


__all__ = ["PALETTE", "Span", "highlight"]
