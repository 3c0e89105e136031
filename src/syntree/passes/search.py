"""
Search & Substitution

Value-equality search and subtree replacement on top of the walker.
"""

from ..shared.nodes import Expr, Node
from ..shared.walk import postwalk


def inexpr(tree: Node, target: Node) -> bool:
    """
    Simple expression match; `True` if a node equal to `target` can be found
    anywhere inside `tree` (the root included).

        inexpr(read("(call + 2 2)"), 2) == True
    """
    found = False

    def check(node: Node) -> Node:
        nonlocal found
        if not found and node == target:
            found = True
        return node

    postwalk(check, tree)
    return found


def replace(tree: Node, old: Node, new: Node) -> Node:
    """
    Replace every node equal to `old` with `new`, top-down.

    A replaced node is not scanned again, so `new` may itself contain `old`:

        replace(x, x, (call f x)) == (call f x)
    """
    if tree == old:
        return new
    if not isinstance(tree, Expr):
        return tree
    stack = [(tree, [])]
    while True:
        node, done = stack[-1]
        if len(done) < len(node.args):
            child = node.args[len(done)]
            if child == old:
                done.append(new)
            elif isinstance(child, Expr):
                stack.append((child, []))
            else:
                done.append(child)
            continue
        stack.pop()
        result = node.with_args(done)
        if not stack:
            return result
        stack[-1][1].append(result)
