# ebnf/grammar/parser.py
"""EBNF grammar parser.

Grammar we parse:
    grammar    := rule*
    rule       := IDENT ("::=" | "=") rhs ";"
    rhs        := node+                      (2+ nodes -> Multiple)
    node       := term (("," | "|") term)*   (right-assoc, equal precedence)
    term       := atom ("*" | "+" | "?")?
    atom       := "(" rhs ")" | "[" rhs "]" | "{" rhs "}"
                | STRING | "#" STRING | IDENT

Operators
---------
`,` and `|` share one precedence level and chain to the right, so

    a | b , c , d   ->  Symbol(a, |, Symbol(b, ,, Symbol(c, ,, d)))

This is not the usual EBNF reading (where `,` binds tighter than `|`); trees
of existing grammars depend on it. Postfix operators bind tighter than both,
and plain juxtaposition collects whole operator chains into a Multiple:

    a b | c         ->  Multiple([a, Symbol(b, |, c)])

Every method is a function of an absolute cursor into an immutable source
and returns `(new_pos, value)`; on failure it raises and the caller retries
from the cursor it still holds.
"""

from __future__ import annotations
from typing import List, Tuple

from .ast import (
    StringLiteral, RegexLiteral, Terminal, Group, Optional, Repeat,
    RegexExt, Multiple, Symbol, Expression, Grammar, Node,
    POSTFIX_OPS, BINARY_OPS,
)
from .errors import (
    ParseError, RecognitionError, UnexpectedInputError, MalformedRuleError,
    NestingTooDeepError, context,
)
from ..lex import (
    skip_ws, identifier, string_literal, regex_literal, take_balanced,
)

_BRACKETS = (
    ("(", ")", Group, "group"),
    ("[", "]", Optional, "optional"),
    ("{", "}", Repeat, "repeat"),
)


class _Parser:
    def __init__(self, src: str):
        self.src = src

    # ---- atoms ----

    def _bracketed(self, pos: int, opening: str, closing: str, wrap, what: str) -> Tuple[int, Node]:
        if not self.src.startswith(opening, pos):
            raise RecognitionError(pos, f"expected {opening!r}")
        end, _inner = take_balanced(self.src, pos + 1, opening, closing)
        close = end - 1
        # the interior only sees text up to its closing bracket
        inner = _Parser(self.src[:close])
        with context(pos, f"{what} {opening}...{closing}"):
            stop, node = inner.rhs(pos + 1)
            stop = skip_ws(inner.src, stop)
            if stop != close:
                raise UnexpectedInputError(stop, f"expected {closing!r}")
        return end, wrap(node)

    def _string(self, pos: int) -> Tuple[int, Node]:
        end, text = string_literal(self.src, pos)
        return end, StringLiteral(text)

    def _regex(self, pos: int) -> Tuple[int, Node]:
        end, text = regex_literal(self.src, pos)
        return end, RegexLiteral(text)

    def _terminal(self, pos: int) -> Tuple[int, Node]:
        end, name = identifier(self.src, pos)
        return end, Terminal(name)

    def _atom(self, pos: int) -> Tuple[int, Node]:
        """Ordered choice: first recognizer that matches wins."""
        pos = skip_ws(self.src, pos)
        for opening, closing, wrap, what in _BRACKETS:
            try:
                return self._bracketed(pos, opening, closing, wrap, what)
            except RecognitionError:
                pass
        for recognize in (self._string, self._regex, self._terminal):
            try:
                return recognize(pos)
            except RecognitionError:
                pass
        raise RecognitionError(pos, "expected a term")

    def _term(self, pos: int) -> Tuple[int, Node]:
        pos, node = self._atom(pos)
        after = skip_ws(self.src, pos)
        kind = POSTFIX_OPS.get(self.src[after:after + 1])
        if kind is None:
            return pos, node
        return after + 1, RegexExt(node, kind)

    # ---- operators ----

    def _node(self, pos: int) -> Tuple[int, Node]:
        """A term plus the `,`/`|` chain hanging off it, folded to the right."""
        pos, first = self._term(pos)
        operands: List[Node] = [first]
        kinds: List[str] = []
        while True:
            after = skip_ws(self.src, pos)
            kind = BINARY_OPS.get(self.src[after:after + 1])
            if kind is None:
                break
            try:
                nxt, operand = self._term(after + 1)
            except RecognitionError:
                # dangling operator: leave it for the caller to report
                break
            kinds.append(kind)
            operands.append(operand)
            pos = nxt

        node = operands[-1]
        for left, kind in zip(reversed(operands[:-1]), reversed(kinds)):
            node = Symbol(left, kind, node)
        return pos, node

    def rhs(self, pos: int) -> Tuple[int, Node]:
        """Collect nodes until no term matches; juxtaposition is concatenation."""
        pos, node = self._node(pos)
        items = [node]
        while True:
            try:
                pos, node = self._node(pos)
            except RecognitionError:
                break
            items.append(node)
        if len(items) == 1:
            return pos, items[0]
        return pos, Multiple(tuple(items))

    # ---- rules ----

    def _expect(self, pos: int, *lits: str) -> int:
        pos = skip_ws(self.src, pos)
        for lit in lits:
            if self.src.startswith(lit, pos):
                return pos + len(lit)
        expected = " or ".join(repr(l) for l in lits)
        raise RecognitionError(pos, f"expected {expected}")

    def rule(self, start: int) -> Tuple[int, Expression]:
        try:
            pos, lhs = identifier(self.src, start)
            pos = self._expect(pos, "::=", "=")
            with context(start, f"rule '{lhs}'"):
                pos, rhs = self.rhs(pos)
                pos = self._expect(pos, ";")
        except RecognitionError as e:
            raise MalformedRuleError.from_error(e, start) from e
        return pos, Expression(lhs, rhs)


def parse_grammar(src: str) -> Grammar:
    """Parse every `name ::= rhs ;` rule of src, in order.

    Raises a ParseError subclass on the first malformed rule; nothing parsed
    before it is returned.
    """
    p = _Parser(src)
    expressions: List[Expression] = []
    pos = skip_ws(src, 0)
    try:
        while pos < len(src):
            start = pos
            try:
                pos, expr = p.rule(pos)
            except RecursionError:
                # bracket nesting deeper than the interpreter stack allows
                raise NestingTooDeepError.at_rule(start) from None
            expressions.append(expr)
            pos = skip_ws(src, pos)
    except ParseError as e:
        e.attach(src)
        raise
    return Grammar(expressions)
