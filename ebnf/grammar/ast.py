# ebnf/grammar/ast.py
"""Grammar AST

- Grammar    : ordered list of Expression (source order, duplicates allowed)
- Expression : one rule, `lhs ::= rhs ;`
- Node       : closed set of frozen variants; children are owned, never shared

Literal payloads keep the raw text between the quotes. Escapes such as `\\n`
are validated by the recognizer but not decoded.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union


class RegexExtKind:
    """Postfix operator forms: `*`, `+`, `?`."""
    ZERO_OR_MORE = "ZeroOrMore"
    ONE_OR_MORE  = "OneOrMore"
    OPTIONAL     = "Optional"


class SymbolKind:
    """Explicit binary operators: `,` and `|`."""
    CONCATENATION = "Concatenation"
    ALTERNATION   = "Alternation"


POSTFIX_OPS = {
    "*": RegexExtKind.ZERO_OR_MORE,
    "+": RegexExtKind.ONE_OR_MORE,
    "?": RegexExtKind.OPTIONAL,
}

BINARY_OPS = {
    ",": SymbolKind.CONCATENATION,
    "|": SymbolKind.ALTERNATION,
}

# ---- Node variants ----

@dataclass(frozen=True)
class StringLiteral:
    text: str  # raw, escapes left as written

@dataclass(frozen=True)
class RegexLiteral:
    text: str  # raw pattern; compiling it is the consumer's job

@dataclass(frozen=True)
class Terminal:
    name: str  # reference to a rule name (not resolved here)

@dataclass(frozen=True)
class Group:
    node: "Node"

@dataclass(frozen=True)
class Optional:
    node: "Node"  # [ ... ]

@dataclass(frozen=True)
class Repeat:
    node: "Node"  # { ... }

@dataclass(frozen=True)
class RegexExt:
    node: "Node"
    kind: str  # RegexExtKind.*

@dataclass(frozen=True)
class Multiple:
    nodes: Tuple["Node", ...]  # two or more, juxtaposed

    def __post_init__(self) -> None:
        if len(self.nodes) < 2:
            raise ValueError("Multiple needs at least two nodes")

@dataclass(frozen=True)
class Symbol:
    left: "Node"
    kind: str  # SymbolKind.*
    right: "Node"

@dataclass(frozen=True)
class Unknown:
    pass


Node = Union[
    StringLiteral, RegexLiteral, Terminal, Group, Optional, Repeat,
    RegexExt, Multiple, Symbol, Unknown,
]


@dataclass(frozen=True)
class Expression:
    lhs: str
    rhs: Node

    def __str__(self) -> str:
        return f"{self.lhs} ::= {format_node(self.rhs)};"


@dataclass
class Grammar:
    expressions: List[Expression] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.expressions)

    def __iter__(self) -> Iterator[Expression]:
        return iter(self.expressions)

    def rule_names(self) -> List[str]:
        """Left-hand names in source order (duplicates kept)."""
        return [e.lhs for e in self.expressions]

    def find(self, name: str) -> List[Expression]:
        return [e for e in self.expressions if e.lhs == name]

    def __str__(self) -> str:
        return "\n".join(str(e) for e in self.expressions)


# ---- source formatting ----

def _quote(text: str) -> str:
    # `\'` only occurs in '...' literals, `\"` only in "..." ones
    if '\\"' in text or ("'" in text and "\\'" not in text):
        return f'"{text}"'
    return f"'{text}'"

def format_node(node: Node) -> str:
    """Render a node back to grammar text.

    Trees produced by the parser re-parse to an equal tree: a Symbol's left
    operand is always a single term, so operator chains need no parentheses.
    """
    if isinstance(node, StringLiteral):
        return _quote(node.text)
    if isinstance(node, RegexLiteral):
        return "#" + _quote(node.text)
    if isinstance(node, Terminal):
        return node.name
    if isinstance(node, Group):
        return f"( {format_node(node.node)} )"
    if isinstance(node, Optional):
        return f"[ {format_node(node.node)} ]"
    if isinstance(node, Repeat):
        return f"{{ {format_node(node.node)} }}"
    if isinstance(node, RegexExt):
        op = {v: k for k, v in POSTFIX_OPS.items()}[node.kind]
        return format_node(node.node) + op
    if isinstance(node, Multiple):
        return " ".join(format_node(n) for n in node.nodes)
    if isinstance(node, Symbol):
        op = {v: k for k, v in BINARY_OPS.items()}[node.kind]
        sep = ", " if op == "," else " | "
        return format_node(node.left) + sep + format_node(node.right)
    if isinstance(node, Unknown):
        raise ValueError("Unknown node has no source form")
    raise AssertionError(f"unknown node: {node!r}")
