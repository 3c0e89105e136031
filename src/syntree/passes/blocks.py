"""
Block Normalization Passes

- unblock: drop redundant single-statement `block` wrappers
- block: the dual, wrap a statement in a `block`
- flatten: splice nested blocks into their parent block
- striplines: remove line markers everywhere
"""

from ..shared.nodes import Expr, Head, Node, head_is, rmlines
from ..shared.walk import postwalk, prewalk


def unblock(node: Node) -> Node:
    """
    Remove outer `block`s from a node when the block is redundant, i.e.
    contains a single statement once line markers are ignored.
    """
    while head_is(node, Head.BLOCK):
        statements = rmlines(node).args
        if len(statements) != 1:
            break
        node = statements[0]
    return node


def block(node: Node) -> Node:
    return node if head_is(node, Head.BLOCK) else Expr(Head.BLOCK, node)


def flatten1(node: Node) -> Node:
    """Splice the children of direct `block` children into this block."""
    if not head_is(node, Head.BLOCK):
        return node
    spliced = []
    for child in node.args:
        if head_is(child, Head.BLOCK):
            spliced.extend(child.args)
        else:
            spliced.append(child)
    return Expr(Head.BLOCK, *spliced)


def flatten(tree: Node) -> Node:
    """Collapse blocks-of-blocks in one bottom-up traversal, keeping order."""
    return postwalk(flatten1, tree)


def striplines(tree: Node) -> Node:
    """Remove every line marker held by a compound node."""
    return prewalk(rmlines, tree)

