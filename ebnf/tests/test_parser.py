from pathlib import Path

import pytest

from ebnf import parse, get_grammar
from ebnf.grammar.ast import (
    StringLiteral, RegexLiteral, Terminal, Group, Optional, Repeat,
    RegexExt, Multiple, Symbol, Expression, Grammar,
    RegexExtKind, SymbolKind,
)
from ebnf.grammar.errors import (
    ParseError, IncompleteDelimitedError, UnexpectedInputError,
    MalformedRuleError, NestingTooDeepError,
)

GRAMMARS = Path(__file__).parent / "grammar_test"

ALT = SymbolKind.ALTERNATION
CAT = SymbolKind.CONCATENATION
a, b, c, d = (StringLiteral(s) for s in "abcd")


def rhs(src):
    g = parse(src)
    assert len(g.expressions) == 1
    return g.expressions[0].rhs


def test_single_literal_rule():
    assert parse("name ::= 'x';") == Grammar([Expression("name", StringLiteral("x"))])


def test_plain_equals_is_accepted():
    assert parse("a = b;").expressions == [Expression("a", Terminal("b"))]


def test_get_grammar_alias():
    assert get_grammar("a ::= b;") == parse("a ::= b;")


def test_alternation_chains_to_the_right():
    assert rhs("f ::= 'a' | 'b' | 'c';") == Symbol(a, ALT, Symbol(b, ALT, c))


def test_mixed_operators_share_precedence():
    assert rhs("f ::= 'a' | 'b' , 'c' , 'd';") == \
        Symbol(a, ALT, Symbol(b, CAT, Symbol(c, CAT, d)))
    assert rhs("f ::= 'a' , 'b' | 'c';") == Symbol(a, CAT, Symbol(b, ALT, c))


def test_operators_without_spaces():
    assert rhs("f ::= 'a'|'b','c';") == Symbol(a, ALT, Symbol(b, CAT, c))


def test_implicit_concatenation():
    assert rhs("f ::= 'a' 'b';") == Multiple((a, b))
    assert rhs("f ::= 'a' 'b' 'c';") == Multiple((a, b, c))


def test_juxtaposition_collects_operator_chains():
    assert rhs("f ::= 'a' 'b' | 'c';") == Multiple((a, Symbol(b, ALT, c)))
    assert rhs("f ::= 'a' | 'b' 'c';") == Multiple((Symbol(a, ALT, b), c))


def test_postfix_binds_tighter_than_operators():
    assert rhs("f ::= 'a'* | 'b';") == \
        Symbol(RegexExt(a, RegexExtKind.ZERO_OR_MORE), ALT, b)


def test_postfix_kinds():
    assert rhs("f ::= x+ y? z*;") == Multiple((
        RegexExt(Terminal("x"), RegexExtKind.ONE_OR_MORE),
        RegexExt(Terminal("y"), RegexExtKind.OPTIONAL),
        RegexExt(Terminal("z"), RegexExtKind.ZERO_OR_MORE),
    ))


def test_postfix_after_whitespace():
    assert rhs("f ::= x *;") == RegexExt(Terminal("x"), RegexExtKind.ZERO_OR_MORE)


def test_bracket_forms():
    assert rhs("f ::= [ x ] { y };") == Multiple((
        Optional(Terminal("x")), Repeat(Terminal("y")),
    ))


def test_nested_groups():
    assert rhs("f ::= ( ('a' 'b') 'c' );") == \
        Group(Multiple((Group(Multiple((a, b))), c)))


def test_nested_mixed_brackets():
    assert rhs("f ::= [ { x } ( y | z ) ];") == Optional(Multiple((
        Repeat(Terminal("x")),
        Group(Symbol(Terminal("y"), ALT, Terminal("z"))),
    )))


def test_group_with_postfix():
    assert rhs("f ::= ( 'a' | 'b' )+;") == \
        RegexExt(Group(Symbol(a, ALT, b)), RegexExtKind.ONE_OR_MORE)


def test_quoted_brackets_inside_group():
    assert rhs("f ::= ( ')' );") == Group(StringLiteral(")"))
    assert rhs("f ::= ( '(' x ')' );") == Group(Multiple((
        StringLiteral("("), Terminal("x"), StringLiteral(")"),
    )))


def test_operator_characters_inside_literals():
    assert rhs("f ::= ',' | '|';") == Symbol(StringLiteral(","), ALT, StringLiteral("|"))


def test_regex_literal():
    assert rhs("digits ::= #'[0-9]+';") == RegexLiteral("[0-9]+")
    assert rhs('w ::= #"[a-z]"*;') == RegexExt(RegexLiteral("[a-z]"), RegexExtKind.ZERO_OR_MORE)


def test_escaped_quote_stays_raw():
    node = rhs(r"f ::= '\'';")
    assert node == StringLiteral(r"\'")
    assert len(node.text) == 2


def test_escape_sequences_are_not_decoded():
    assert rhs(r"f ::= 'a\nb';") == StringLiteral("a\\nb")


def test_other_quote_inside_literal():
    assert rhs("f ::= \"it's\";") == StringLiteral("it's")


def test_unicode_identifiers():
    g = parse("règle ::= número_1;")
    assert g.expressions == [Expression("règle", Terminal("número_1"))]


def test_rule_count_and_order():
    src = """
        a ::= 'x';
        b = a b;

        c ::= [ b ] ;
    """
    g = parse(src)
    assert len(g.expressions) == src.count(";")
    assert g.rule_names() == ["a", "b", "c"]


def test_duplicate_names_are_kept():
    g = parse("a ::= 'x'; a ::= 'y';")
    assert g.rule_names() == ["a", "a"]
    assert [e.rhs for e in g.find("a")] == [StringLiteral("x"), StringLiteral("y")]


def test_whitespace_is_free():
    assert parse("f::='a'|'b';") == parse("\n f\n::=\n 'a'\n |\n 'b'\n ;\n")


@pytest.mark.parametrize("src", ["", "   \n\t "])
def test_empty_source(src):
    assert parse(src) == Grammar([])


def test_reparse_is_identical():
    src = "f ::= ( a | b )* [ c , d ] { #'e' };"
    assert parse(src) == parse(src)


def test_filter_fixture():
    g = parse((GRAMMARS / "filter.ebnf").read_text(encoding="utf-8"))
    assert g.rule_names() == ["filter", "first", "number", "digits"]
    assert g.find("digits")[0].rhs == RegexLiteral("[0-9]+")
    assert g.find("number")[0].rhs == Multiple((
        Terminal("digits"),
        RegexExt(Group(Multiple((
            Group(Symbol(StringLiteral("."), ALT, StringLiteral(","))),
            RegexExt(Terminal("digits"), RegexExtKind.OPTIONAL),
        ))), RegexExtKind.OPTIONAL),
    ))
    assert len(g.find("filter")[0].rhs.nodes) == 8


# ---- failures ----

def test_unterminated_group():
    with pytest.raises(IncompleteDelimitedError):
        parse("f ::= ( 'a' ;")


def test_unterminated_group_reports_position():
    with pytest.raises(IncompleteDelimitedError) as ei:
        parse("a ::= 'x';\nf ::= ( 'a' ;")
    err = ei.value
    assert isinstance(err, SyntaxError)
    assert (err.lineno, err.offset) == (2, 7)
    assert "2:7" in str(err)


def test_frames_trace_nesting():
    with pytest.raises(IncompleteDelimitedError) as ei:
        parse("f ::= [ ( 'a' ];")
    assert [fr.context for fr in ei.value.frames] == ["optional [...]", "rule 'f'"]


def test_leftover_text_in_bracket():
    with pytest.raises(UnexpectedInputError):
        parse("f ::= ( 'a' ; );")


@pytest.mark.parametrize("src", [
    "f ::= 'a'",            # missing ';'
    "::= 'a';",             # missing name
    "f 'a';",               # missing '::='
    "f := 'a';",
    "f ::= ;",              # empty right-hand side
    "f ::= 'a' | ;",        # dangling operator
    "f ::= ( );",           # empty group
    r"f ::= 'a\q';",        # bad escape
    "f ::= 'a'; g ::= @;",
])
def test_malformed_rule(src):
    with pytest.raises(MalformedRuleError) as ei:
        parse(src)
    assert isinstance(ei.value, ParseError)
    assert ei.value.frames[-1].context == "rule"


def test_failure_discards_earlier_rules():
    with pytest.raises(ParseError) as ei:
        parse("a ::= 'x';\nb ::= 'y'\n")
    assert ei.value.source == "a ::= 'x';\nb ::= 'y'\n"
    assert ei.value.lineno == 3


def test_deep_nesting_is_a_reported_failure():
    depth = 1000
    src = "a ::= 'x';\nf ::= " + "(" * depth + "'a'" + ")" * depth + ";"
    with pytest.raises(ParseError) as ei:
        parse(src)
    err = ei.value
    assert isinstance(err, NestingTooDeepError)
    assert (err.lineno, err.offset) == (2, 1)
    assert "nesting too deep" in str(err)


def test_moderate_nesting_still_parses():
    depth = 20
    node = rhs("f ::= " + "(" * depth + "'a'" + ")" * depth + ";")
    for _ in range(depth):
        assert isinstance(node, Group)
        node = node.node
    assert node == a


def test_errors_survive_pickle_and_copy():
    import copy
    import pickle

    with pytest.raises(IncompleteDelimitedError) as ei:
        parse("f ::= [ ( 'a' ];")
    err = ei.value
    for clone in (pickle.loads(pickle.dumps(err)), copy.copy(err)):
        assert type(clone) is IncompleteDelimitedError
        assert clone.pos == err.pos
        assert clone.lineno == err.lineno
        assert clone.frames == err.frames
        assert str(clone) == str(err)
