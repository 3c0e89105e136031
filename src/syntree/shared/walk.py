"""
Tree Walker

Generic pre-order and post-order rewrite combinators. Both work on any head
tag: adding a tag to the vocabulary needs no change here.

postwalk and prewalk keep an explicit stack of partially rebuilt nodes
instead of recursing, so tree depth is bounded by memory, not by the
interpreter's recursion limit.
"""

from typing import Any, Callable, List, Tuple

from .nodes import Expr, Node

Rewrite = Callable[[Node], Node]

# (node being rebuilt, its already rewritten children)
_Frame = Tuple[Expr, List[Node]]


def identity(x: Any) -> Any:
    return x


def walk(x: Node, inner: Rewrite, outer: Rewrite) -> Node:
    """
    One level of descent: rebuild `x` with `inner` applied to each child,
    then apply `outer` to the result. Leaves go straight to `outer`.
    """
    if isinstance(x, Expr):
        return outer(x.with_args([inner(a) for a in x.args]))
    return outer(x)


def postwalk(f: Rewrite, x: Node) -> Node:
    """
    Apply `f` to every node of the tree, bottom-up.

    `f` sees nodes *after* their children have been transformed.
    See also `prewalk`.
    """
    if not isinstance(x, Expr):
        return f(x)
    stack: List[_Frame] = [(x, [])]
    while True:
        node, done = stack[-1]
        if len(done) < len(node.args):
            child = node.args[len(done)]
            if isinstance(child, Expr):
                stack.append((child, []))
            else:
                done.append(f(child))
            continue
        stack.pop()
        result = f(node.with_args(done))
        if not stack:
            return result
        stack[-1][1].append(result)


def prewalk(f: Rewrite, x: Node) -> Node:
    """
    Apply `f` to every node of the tree, top-down.

    `f` sees nodes *before* they are transformed, and the walk continues into
    the children of whatever `f` returns. This makes `prewalk` prone to
    infinite loops when `f` can re-create its own input shape; try `postwalk`
    first.
    """
    root = f(x)
    if not isinstance(root, Expr):
        return root
    stack: List[_Frame] = [(root, [])]
    while True:
        node, done = stack[-1]
        if len(done) < len(node.args):
            child = f(node.args[len(done)])
            if isinstance(child, Expr):
                stack.append((child, []))
            else:
                done.append(child)
            continue
        stack.pop()
        result = node.with_args(done)
        if not stack:
            return result
        stack[-1][1].append(result)
