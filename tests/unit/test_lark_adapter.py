#!/usr/bin/env python3
"""
Tests for converting Lark parse trees into syntree trees.
"""

import pytest
from lark import Lark, Token, Tree
from tests.test_utils import sx, S
from syntree.frontend.lark_adapter import from_lark
from syntree.pipeline import prettify
from syntree.shared.nodes import Expr, Head, line_marker

STATEMENTS_GRAMMAR = r"""
    start: block
    block: (call _NL)+
    call: NAME+

    _NL: /(\r?\n)+/

    %import common.CNAME -> NAME
    %import common.WS_INLINE
    %ignore WS_INLINE
"""


@pytest.fixture(scope="module")
def statements_parser():
    return Lark(STATEMENTS_GRAMMAR, parser="lalr", propagate_positions=True)


class TestTokens:
    def test_rule_becomes_head(self):
        tree = Tree("call", [Token("NAME", "f"), Token("NUMBER", "1"), Token("ESCAPED_STRING", '"hi"')])
        assert from_lark(tree) == Expr(Head.CALL, S("f"), 1, "hi")

    def test_float_token(self):
        assert from_lark(Tree("call", [Token("NAME", "f"), Token("NUMBER", "2.5")])) == sx("(call f 2.5)")

    def test_operator_token_is_symbol(self):
        assert from_lark(Tree("call", [Token("PLUS", "+")])) == sx("(call +)")

    def test_unknown_rule_is_opaque(self):
        result = from_lark(Tree("while_stmt", [Token("NAME", "c")]))
        assert result.head == "while_stmt"
        assert result.args == (S("c"),)

    def test_nested_trees(self):
        tree = Tree("block", [Tree("call", [Token("NAME", "f")]), Tree("call", [Token("NAME", "g")])])
        assert from_lark(tree) == sx("(block (call f) (call g))")


class TestLineMarkers:
    def test_statement_lines(self, statements_parser):
        tree = statements_parser.parse("f x\ng y z\n")
        result = from_lark(tree, file="demo.txt")
        assert result == Expr(
            "start",
            Expr(
                Head.BLOCK,
                line_marker(1, "demo.txt"), sx("(call f x)"),
                line_marker(2, "demo.txt"), sx("(call g y z)"),
            ),
        )

    def test_markers_disabled(self, statements_parser):
        tree = statements_parser.parse("f x\ng y z\n")
        result = from_lark(tree, line_markers=False)
        assert result == sx("(start (block (call f x) (call g y z)))")

    def test_prettify_strips_markers(self, statements_parser):
        tree = statements_parser.parse("f x\n")
        assert prettify(from_lark(tree)) == sx("(start (block (call f x)))")


class TestWithoutPositions:
    """Parsers built without propagate_positions never produce line markers."""

    WORDS_GRAMMAR = r"""
        start: block
        block: NAME+

        %import common.CNAME -> NAME
        %import common.WS
        %ignore WS
    """

    def test_token_lines_are_ignored(self):
        parser = Lark(self.WORDS_GRAMMAR, parser="lalr")
        assert from_lark(parser.parse("a b")) == sx("(start (block a b))")

    def test_statement_rules(self):
        parser = Lark(STATEMENTS_GRAMMAR, parser="lalr")
        result = from_lark(parser.parse("f x\ng y z\n"))
        assert result == sx("(start (block (call f x) (call g y z)))")

    def test_positions_enable_markers(self):
        parser = Lark(self.WORDS_GRAMMAR, parser="lalr", propagate_positions=True)
        assert from_lark(parser.parse("a b")) == sx("(start (block (line 1) a (line 1) b))")


class TestDeepParseTrees:
    def test_nested_rules(self):
        tree = Tree("call", [Token("NAME", "x")])
        for _ in range(3000):
            tree = Tree("call", [Token("NAME", "f"), tree])
        result = from_lark(tree)
        depth = 0
        while isinstance(result, Expr):
            depth += 1
            result = result.args[-1]
        assert depth == 3001
        assert result == S("x")
