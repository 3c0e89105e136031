#!/usr/bin/env python3
"""
Tests for inexpr and replace.
"""

import pytest
from tests.test_utils import sx, S
from syntree.passes.search import inexpr, replace


class TestInexpr:
    def test_literal_inside(self):
        assert inexpr(sx("(call + 2 2)"), 2)

    def test_subtree(self):
        assert inexpr(sx("(block (= y (call g x)) y)"), sx("(call g x)"))

    def test_root_counts(self):
        tree = sx("(call f x)")
        assert inexpr(tree, tree)

    def test_absent(self):
        assert not inexpr(sx("(call f x)"), S("y"))
        assert not inexpr(sx("(call f x)"), sx("(call f y)"))

    def test_symbol_does_not_match_string(self):
        assert not inexpr(sx('(call f "x")'), S("x"))


class TestReplace:
    def test_every_occurrence(self):
        result = replace(sx("(call + x (call * x y))"), S("x"), 1)
        assert result == sx("(call + 1 (call * 1 y))")

    def test_subtree(self):
        result = replace(sx("(block (call g x) (call g x))"), sx("(call g x)"), S("v"))
        assert result == sx("(block v v)")

    def test_replacement_containing_target_terminates(self):
        assert replace(S("x"), S("x"), sx("(call f x)")) == sx("(call f x)")
        result = replace(sx("(call + x 1)"), S("x"), sx("(call f x)"))
        assert result == sx("(call + (call f x) 1)")

    def test_no_match_returns_equal_tree(self):
        tree = sx("(call f x)")
        assert replace(tree, S("nope"), 1) == tree

    def test_outermost_match_wins(self):
        tree = sx("(call g (call g x))")
        assert replace(tree, sx("(call g x)"), S("v")) == sx("(call g v)")

    @pytest.mark.parametrize("tree, old, new", [
        ("(call + x 1)", "x", "(call f x)"),
        ("(block (= a 1) (call g a))", "(= a 1)", "(= b 2)"),
        ("(if c (block x) (block y))", "(block y)", "z"),
    ])
    def test_replacement_is_found_afterwards(self, tree, old, new):
        tree, old, new = sx(tree), sx(old), sx(new)
        assert inexpr(tree, old)
        assert inexpr(replace(tree, old, new), new)
