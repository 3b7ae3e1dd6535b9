# ebnf/lex/__init__.py
"""Lexical recognizers for the EBNF dialect.

Every recognizer takes the source text and a cursor and returns
`(new_pos, value)`. A leading mismatch raises `RecognitionError` and consumes
nothing, so the caller can retry the next alternative from the same cursor.

- identifier     : (alpha|"_") (alnum|"_")*         (Unicode-aware)
- string literal : '...' | "..."                    (escapes \\t \\b \\n \\r \\f \\/ \\<quote>)
- regex literal  : #'...' | #"..."                  (same escapes)
- take_balanced  : text between a matching bracket pair, nesting-aware

Whitespace around tokens belongs to the callers (`skip_ws`).
"""

from __future__ import annotations
import regex as re
from typing import Tuple

from ..grammar.errors import RecognitionError, IncompleteDelimitedError

_WS_RE = re.compile(r"\s*")
_IDENT_RE = re.compile(r"[\p{Alphabetic}_][\p{Alphabetic}\p{N}_]*")

# payload is group(1), the raw slice between the quotes
_QUOTED_RE = {
    "'": re.compile(r"'((?:[^'\\]|\\[tbnrf/'])*)'"),
    '"': re.compile(r'"((?:[^"\\]|\\[tbnrf/"])*)"'),
}


def skip_ws(src: str, pos: int) -> int:
    return _WS_RE.match(src, pos).end()


def identifier(src: str, pos: int) -> Tuple[int, str]:
    m = _IDENT_RE.match(src, pos)
    if m is None:
        raise RecognitionError(pos, "expected identifier")
    return m.end(), m.group(0)


def _quoted(src: str, pos: int, what: str) -> Tuple[int, str]:
    pat = _QUOTED_RE.get(src[pos:pos + 1])
    if pat is None:
        raise RecognitionError(pos, f"expected {what}")
    m = pat.match(src, pos)
    if m is None:
        # unterminated, or a backslash outside the escape set
        raise RecognitionError(pos, f"malformed {what}")
    return m.end(), m.group(1)


def string_literal(src: str, pos: int) -> Tuple[int, str]:
    return _quoted(src, pos, "string literal")


def regex_literal(src: str, pos: int) -> Tuple[int, str]:
    if not src.startswith("#", pos):
        raise RecognitionError(pos, "expected regex literal")
    try:
        return _quoted(src, pos + 1, "regex literal")
    except RecognitionError as e:
        raise RecognitionError(pos, e.message) from None


def take_balanced(src: str, pos: int, opening: str, closing: str) -> Tuple[int, str]:
    """Scan from pos (just past `opening`) to the matching `closing`.

    Returns (position after the closing char, text in between). A backslash
    skips the next char; quoted literals are skipped whole so brackets inside
    them do not count.
    """
    depth = 1
    quote = None
    i = pos
    n = len(src)
    while i < n:
        ch = src[i]
        if ch == "\\":
            i += 2
            continue
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == opening:
            depth += 1
        elif ch == closing:
            depth -= 1
            if depth == 0:
                return i + 1, src[pos:i]
        i += 1
    raise IncompleteDelimitedError(pos - 1, f"missing {closing!r} for {opening!r}")
