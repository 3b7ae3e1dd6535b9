# ebnf/__init__.py
"""ebnf: parse EBNF grammar text into an AST.

    >>> from ebnf import parse
    >>> g = parse("digits ::= #'[0-9]+';")
    >>> g.expressions[0].rhs
    RegexLiteral(text='[0-9]+')

`,` and `|` have equal precedence and associate to the right; see
`ebnf.grammar.parser` for the exact tree shapes.
"""

from .grammar.ast import (
    Grammar, Expression, Node,
    StringLiteral, RegexLiteral, Terminal, Group, Optional, Repeat,
    RegexExt, Multiple, Symbol, Unknown,
    RegexExtKind, SymbolKind, format_node,
)
from .grammar.errors import (
    ParseError, RecognitionError, IncompleteDelimitedError,
    UnexpectedInputError, MalformedRuleError, NestingTooDeepError, Frame,
)
from .grammar.parser import parse_grammar
from .grammar.loader import load_grammar_text
from .codegen.emit_json import emit_json_to_string, grammar_to_obj, node_to_obj


def parse(source: str) -> Grammar:
    """Parse grammar source; raises ParseError on the first malformed rule."""
    return parse_grammar(source)


get_grammar = parse
