#!/usr/bin/env python3
"""
Tests for the tree model: heads, symbols, Expr equality and the structural
predicates built on them.
"""

import pytest
from tests.test_utils import sx, S
from syntree.shared.errors import MalformedTreeInvariantViolation
from syntree.shared.nodes import (
    Expr, Head, Symbol, head_is, head_name, is_compound, is_line_marker,
    line_marker, makeif, marker_location, namify, rmlines,
)
from syntree.shared.source_location import SourceLocation


class TestHead:
    """Known tags map to Head members, unknown tags stay opaque strings."""

    def test_known_tag_maps_to_member(self):
        assert Head.of("block") is Head.BLOCK
        assert Head.of("=") is Head.ASSIGN

    def test_unknown_tag_is_kept_as_string(self):
        head = Head.of("while")
        assert head == "while"
        assert not isinstance(head, Head)

    def test_symbol_tag(self):
        assert Head.of(Symbol("call")) is Head.CALL

    def test_member_equals_tag_string(self):
        assert Head.ASSIGN == "="
        assert head_name(Head.ARROW) == "->"
        assert head_name("while") == "while"

    def test_expr_normalizes_head(self):
        assert Expr("call", S("f")).head is Head.CALL
        assert Expr(Symbol("block")).head is Head.BLOCK


class TestExpr:
    """Expr is immutable and compared by value."""

    def test_structural_equality(self):
        a = Expr("call", S("f"), 1)
        b = Expr(Head.CALL, S("f"), 1)
        assert a == b
        assert hash(a) == hash(b)

    def test_opaque_heads_compare_by_text(self):
        assert Expr("while", 1) == Expr("while", 1)
        assert Expr("while", 1) != Expr("for", 1)

    def test_children_order_matters(self):
        assert Expr("call", S("f"), 1, 2) != Expr("call", S("f"), 2, 1)

    def test_symbol_is_not_string(self):
        assert Symbol("x") != "x"
        assert Expr("call", S("x")) != Expr("call", "x")

    def test_immutable(self):
        e = Expr("call", S("f"))
        with pytest.raises(AttributeError):
            e.head = Head.BLOCK
        with pytest.raises(AttributeError):
            e.args = ()

    def test_args_are_a_tuple(self):
        assert Expr("block", *[1, 2]).args == (1, 2)

    def test_repr(self):
        assert repr(Expr("call", S("f"), 1)) == "Expr('call', Symbol('f'), 1)"

    def test_with_args_keeps_head(self):
        e = sx("(call f x)")
        assert e.with_args([S("g")]) == sx("(call g)")

    def test_not_equal_to_other_types(self):
        assert Expr("block") != ("block",)


class TestPredicates:
    """is_compound, head_is, line markers."""

    def test_is_compound(self):
        assert is_compound(sx("(block)"))
        assert not is_compound(S("x"))
        assert not is_compound(3)

    def test_head_is_on_expr(self):
        node = sx("(block x)")
        assert head_is(node, "block")
        assert head_is(node, "call", "block")
        assert not head_is(node, "if")

    def test_head_is_on_leaves_checks_types(self):
        assert head_is("text", str, "string")
        assert head_is(3, int)
        assert not head_is(3, str)
        assert not head_is(S("block"), "block")

    def test_head_is_on_expr_ignores_types(self):
        assert not head_is(sx("(block)"), Expr)

    def test_line_markers(self):
        assert is_line_marker(line_marker(3))
        assert is_line_marker(sx('(line 3 "f.jl")'))
        assert not is_line_marker(S("line"))
        assert line_marker(3, "f.jl") == sx('(line 3 "f.jl")')

    def test_marker_location(self):
        loc = marker_location(line_marker(4, "a.jl"))
        assert loc == SourceLocation(4, "a.jl")
        assert str(loc) == "a.jl:4"
        assert str(marker_location(line_marker(7))) == "line 7"

    def test_marker_location_rejects_other_nodes(self):
        with pytest.raises(MalformedTreeInvariantViolation):
            marker_location(S("x"))
        with pytest.raises(MalformedTreeInvariantViolation):
            marker_location(Expr(Head.LINE))


class TestNamify:
    """namify follows first children down to a symbol."""

    def test_symbol(self):
        assert namify(S("Foo")) == S("Foo")

    def test_parametric_type(self):
        assert namify(sx("(curly Foo T)")) == S("Foo")

    def test_subtype_declaration(self):
        assert namify(sx("(<: (curly Bar T) (curly Vector T))")) == S("Bar")

    def test_empty_expr_fails(self):
        node = Expr(Head.CURLY)
        with pytest.raises(MalformedTreeInvariantViolation) as exc_info:
            namify(node)
        assert exc_info.value.node == node

    def test_non_symbol_leaf_fails(self):
        with pytest.raises(MalformedTreeInvariantViolation):
            namify(Expr(Head.CURLY, 3))


class TestRmlines:
    def test_removes_direct_markers(self):
        assert rmlines(sx("(block (line 1) x (line 2) y)")) == sx("(block x y)")

    def test_does_not_recurse(self):
        tree = sx("(block (block (line 1) x))")
        assert rmlines(tree) == tree

    def test_leaf_passes_through(self):
        assert rmlines(S("x")) == S("x")


class TestMakeif:
    def test_chain_with_else(self):
        result = makeif([(S("a"), 1), (S("b"), 2)], 3)
        assert result == sx("(if a 1 (if b 2 3))")

    def test_without_else(self):
        assert makeif([(S("a"), 1)]) == sx("(if a 1)")

    def test_no_clauses(self):
        assert makeif([], 5) == 5
