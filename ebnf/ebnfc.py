# ebnf/ebnfc.py
"""ebnfc – ebnf CLI

Usage
    $ python -m ebnf.ebnfc check grammar.ebnf -D
    $ python -m ebnf.ebnfc build grammar.ebnf -o out/grammar.json

Commands
--------
- check : parse the grammar and print a one-line summary
- build : parse the grammar and emit its AST as JSON (file or stdout)

With -D/--debug the pipeline steps and the parsed rules go to stderr.
"""

from __future__ import annotations
import argparse
import pathlib
import sys
from typing import Optional

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _load(grammar_path: str, debug: bool):
    from .grammar.loader import load_grammar_text
    from .grammar.parser import parse_grammar

    src = load_grammar_text(grammar_path)
    if debug: _eprint(f"[DEBUG] read {grammar_path} | chars={len(src)}")

    g = parse_grammar(src)
    if debug: _eprint("[DEBUG] AST ready | rules=%d" % len(g))
    return g


def _print_rules(g) -> None:
    _eprint("\n[RULES]")
    for expr in g:
        _eprint("  " + str(expr))


def _run_load(args):
    """Load or report; returns (grammar, exit_code)."""
    try:
        return _load(args.file, debug=args.debug), 0
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return None, 2
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return None, 2

# ------------------------------
# commands
# ------------------------------

def cmd_check(args) -> int:
    g, rc = _run_load(args)
    if g is None:
        return rc

    if args.debug:
        _print_rules(g)

    names = g.rule_names()
    dupes = sorted({n for n in names if names.count(n) > 1})
    print(f"[CHECK OK] rules={len(g)} names={len(set(names))}")
    if dupes:
        # allowed by the grammar model, but usually a mistake
        _eprint("[WARN] rules defined more than once: " + ", ".join(dupes))
    return 0


def cmd_build(args) -> int:
    g, rc = _run_load(args)
    if g is None:
        return rc

    if args.debug:
        _print_rules(g)

    from .codegen.emit_json import emit_json_to_string
    src = emit_json_to_string(g, indent=args.indent)

    if args.output is None:
        sys.stdout.write(src)
        return 0

    out_path = pathlib.Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(src, encoding="utf-8")
    print(f"[EMIT] json -> {out_path}")
    if args.debug:
        _eprint(f"[DEBUG] bytes={len(src)}")
    return 0

# ------------------------------
# entry point
# ------------------------------

def main(argv: Optional[list] = None) -> int:
    ap = argparse.ArgumentParser(prog="ebnfc", description="EBNF grammar to AST")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="parse a grammar and report the rule count")
    p_check.add_argument("file", help="grammar file")
    p_check.add_argument("-D", "--debug", action="store_true", help="print pipeline details")
    p_check.set_defaults(func=cmd_check)

    p_build = sub.add_parser("build", help="emit the grammar AST as JSON")
    p_build.add_argument("file", help="grammar file")
    p_build.add_argument("-o", "--output", help="output path (default: stdout)")
    p_build.add_argument("--indent", type=int, default=2, help="JSON indent")
    p_build.add_argument("-D", "--debug", action="store_true", help="print pipeline details")
    p_build.set_defaults(func=cmd_build)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
