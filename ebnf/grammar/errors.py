# ebnf/grammar/errors.py
"""Parse failures.

All failures are `SyntaxError` subclasses carrying an absolute offset into
the grammar source. While a failure unwinds through nested constructs each
level pushes a `Frame(pos, context)`, so the final message shows what was
being parsed at every nesting level.

- RecognitionError         : leading pattern did not match (retried by callers)
- IncompleteDelimitedError : bracket never closed (propagated)
- UnexpectedInputError     : bracket interior left unparsed text (propagated)
- MalformedRuleError       : no `name ::= ... ;` at the cursor (aborts parse)
- NestingTooDeepError      : brackets nested past the interpreter stack
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Frame:
    pos: int
    context: str


# ---------- position utils ----------
def line_col(src: str, pos: int) -> Tuple[int, int]:
    """1-based (line, col) of the absolute offset pos."""
    line = src.count("\n", 0, pos) + 1
    col = pos - (src.rfind("\n", 0, pos) + 1) + 1
    return line, col

def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """[start, end) of the line holding pos"""
    start = src.rfind("\n", 0, pos) + 1
    end = src.find("\n", pos)
    if end == -1:
        end = len(src)
    return start, end

def snippet_caret_at_pos(src: str, pos: int) -> str:
    start, end = _line_bounds(src, pos)
    caret = " " * (pos - start) + "^"
    return f"{src[start:end]}\n{caret}"


class ParseError(SyntaxError):
    label = "parse error"

    def __init__(self, pos: int, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.pos = pos
        self.message = message
        self.frames: List[Frame] = []
        self.source: Optional[str] = None
        if source is not None:
            self.attach(source)

    def __reduce__(self):
        # rebuild from the constructor arguments, not from args == (message,)
        return (type(self), (self.pos, self.message, self.source), {"frames": list(self.frames)})

    def push(self, pos: int, context: str) -> None:
        self.frames.append(Frame(pos, context))

    def attach(self, source: str) -> None:
        """Bind the full grammar source so positions render as line:col."""
        self.source = source
        self.lineno, self.offset = line_col(source, self.pos)
        start, end = _line_bounds(source, self.pos)
        self.text = source[start:end]

    def _where(self, pos: int) -> str:
        if self.source is None:
            return f"offset {pos}"
        line, col = line_col(self.source, pos)
        return f"{line}:{col}"

    def __str__(self) -> str:
        out = [f"{self.label}: {self.message} at {self._where(self.pos)}"]
        if self.source is not None:
            out.append(snippet_caret_at_pos(self.source, self.pos))
        for fr in self.frames:
            out.append(f"  in {fr.context} at {self._where(fr.pos)}")
        return "\n".join(out)


class RecognitionError(ParseError):
    label = "recognition failure"


class IncompleteDelimitedError(ParseError):
    label = "incomplete delimited node"


class UnexpectedInputError(ParseError):
    label = "unexpected input"


class MalformedRuleError(ParseError):
    label = "malformed rule"

    @classmethod
    def from_error(cls, err: ParseError, pos: int) -> "MalformedRuleError":
        out = cls(err.pos, err.message)
        out.frames = list(err.frames)
        out.push(pos, "rule")
        return out


class NestingTooDeepError(ParseError):
    label = "nesting too deep"

    @classmethod
    def at_rule(cls, pos: int) -> "NestingTooDeepError":
        out = cls(pos, "brackets nested too deeply to parse")
        out.push(pos, "rule")
        return out


@contextmanager
def context(pos: int, label: str) -> Iterator[None]:
    """Push a frame onto any ParseError escaping the block."""
    try:
        yield
    except ParseError as e:
        e.push(pos, label)
        raise
