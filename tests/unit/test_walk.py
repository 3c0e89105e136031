#!/usr/bin/env python3
"""
Tests for the tree walker: visit order, rebuilding, and the difference
between prewalk and postwalk.
"""

from tests.test_utils import sx, S
from syntree.shared.nodes import Expr, Head, head_is
from syntree.shared.walk import identity, postwalk, prewalk, walk


def _recorder(seen):
    def record(x):
        seen.append(x)
        return x
    return record


def _increment_ints(x):
    if isinstance(x, int) and not isinstance(x, bool):
        return x + 1
    return x


class TestWalk:
    def test_one_level(self):
        result = walk(sx("(call f x)"), lambda a: S("z") if a == S("x") else a, identity)
        assert result == sx("(call f z)")

    def test_one_level_does_not_descend(self):
        tree = sx("(call f (call g x))")
        result = walk(tree, lambda a: S("z") if a == S("x") else a, identity)
        assert result == tree

    def test_leaf_goes_to_outer(self):
        assert walk(5, identity, lambda x: x + 1) == 6


class TestPostwalk:
    """f sees nodes after their children have been transformed."""

    def test_visits_children_before_parent(self):
        seen = []
        postwalk(_recorder(seen), sx("(call f (call g x))"))
        assert seen == [S("f"), S("g"), S("x"), sx("(call g x)"), sx("(call f (call g x))")]

    def test_rewrites_every_leaf(self):
        result = postwalk(_increment_ints, sx("(call + 1 (call * 2 3))"))
        assert result == sx("(call + 2 (call * 3 4))")

    def test_parent_sees_rewritten_children(self):
        def fold(x):
            if head_is(x, Head.CALL) and x.args[0] == S("+") and all(
                isinstance(a, int) for a in x.args[1:]
            ):
                return sum(x.args[1:])
            return x

        assert postwalk(fold, sx("(call + 1 (call + 2 3))")) == 6

    def test_leaf_root(self):
        assert postwalk(lambda x: x * 2 if isinstance(x, int) else x, 21) == 42

    def test_opaque_heads_are_walked(self):
        rename = lambda x: S("y") if x == S("x") else x
        result = postwalk(rename, sx("(while (call < x 1) (block x))"))
        assert result == sx("(while (call < y 1) (block y))")
        assert result.head == "while"

    def test_input_is_not_modified(self):
        tree = sx("(call + 1 (call * 2 3))")
        postwalk(_increment_ints, tree)
        assert tree == sx("(call + 1 (call * 2 3))")


class TestPrewalk:
    """f sees nodes before their children; the walk continues into f's output."""

    def test_visits_parent_before_children(self):
        seen = []
        prewalk(_recorder(seen), sx("(call f (call g x))"))
        assert seen == [sx("(call f (call g x))"), S("f"), sx("(call g x)"), S("g"), S("x")]

    def test_descends_into_rewritten_output(self):
        def f(x):
            if x == S("a"):
                return sx("(call g b)")
            if x == S("b"):
                return S("c")
            return x

        assert prewalk(f, sx("(call f a)")) == sx("(call f (call g c))")
        # postwalk never revisits what f produced
        assert postwalk(f, sx("(call f a)")) == sx("(call f (call g b))")

    def test_keeps_head_and_order(self):
        tree = sx("(for (= i (call : 1 n)) (block (call println i)))")
        assert prewalk(identity, tree) == tree

    def test_rewrite_of_root(self):
        result = prewalk(lambda x: Expr(Head.BLOCK, S("x")) if x == 1 else x, 1)
        assert result == sx("(block x)")
