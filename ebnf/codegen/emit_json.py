# ebnf/codegen/emit_json.py
"""JSON emit for a parsed Grammar.

Shape (externally tagged, one key per variant)
----------------------------------------------
    {"expressions": [{"lhs": "name", "rhs": <node>}, ...]}

    <node> := {"StringLiteral": "raw"}
            | {"RegexLiteral": "raw"}
            | {"Terminal": "name"}
            | {"Group": <node>} | {"Optional": <node>} | {"Repeat": <node>}
            | {"RegexExt": [<node>, "ZeroOrMore" | "OneOrMore" | "Optional"]}
            | {"Multiple": [<node>, <node>, ...]}
            | {"Symbol": [<node>, "Concatenation" | "Alternation", <node>]}
            | "Unknown"

Literal payloads are emitted raw, exactly as stored in the AST.
"""

from __future__ import annotations
import json
from typing import Any, Dict

from ..grammar.ast import (
    StringLiteral, RegexLiteral, Terminal, Group, Optional, Repeat,
    RegexExt, Multiple, Symbol, Unknown, Expression, Grammar, Node,
)


def node_to_obj(node: Node) -> Any:
    if isinstance(node, StringLiteral):
        return {"StringLiteral": node.text}
    if isinstance(node, RegexLiteral):
        return {"RegexLiteral": node.text}
    if isinstance(node, Terminal):
        return {"Terminal": node.name}
    if isinstance(node, (Group, Optional, Repeat)):
        return {type(node).__name__: node_to_obj(node.node)}
    if isinstance(node, RegexExt):
        return {"RegexExt": [node_to_obj(node.node), node.kind]}
    if isinstance(node, Multiple):
        return {"Multiple": [node_to_obj(n) for n in node.nodes]}
    if isinstance(node, Symbol):
        return {"Symbol": [node_to_obj(node.left), node.kind, node_to_obj(node.right)]}
    if isinstance(node, Unknown):
        return "Unknown"
    raise AssertionError(f"unknown node: {node!r}")


def expression_to_obj(expr: Expression) -> Dict[str, Any]:
    return {"lhs": expr.lhs, "rhs": node_to_obj(expr.rhs)}


def grammar_to_obj(g: Grammar) -> Dict[str, Any]:
    return {"expressions": [expression_to_obj(e) for e in g.expressions]}


def emit_json_to_string(g: Grammar, indent: int = 2) -> str:
    return json.dumps(grammar_to_obj(g), indent=indent, ensure_ascii=False) + "\n"
