"""
Tree Nodes

The generic tree every syntree pass consumes and produces.

Design:
- A node is either a leaf (any immutable Python value) or an `Expr`
- `Expr` is a head tag plus an ordered tuple of children
- Heads come from the `Head` vocabulary when known; unknown tags are kept as
  plain strings so unrecognized shapes pass through every pass unchanged
- Nodes are immutable and compared by value; passes build new nodes instead
  of editing old ones
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Tuple, Union
from typing_extensions import TypeAlias

from .errors import MalformedTreeInvariantViolation
from .source_location import SourceLocation


class Head(str, Enum):
    """Known head tags. Members compare equal to their tag string."""
    BLOCK = "block"
    CALL = "call"
    FUNCTION = "function"
    ASSIGN = "="
    ARROW = "->"
    TYPED = "::"
    TUPLE = "tuple"
    PARAMETERS = "parameters"
    KW = "kw"
    LINE = "line"
    IF = "if"
    QUOTE = "quote"
    DOT = "."
    REF = "ref"
    CURLY = "curly"
    SUBTYPE = "<:"
    ADD_ASSIGN = "+="
    CTRANSPOSE = "'"
    TRANSPOSE = ".'"
    MACROCALL = "macrocall"
    RETURN = "return"

    @classmethod
    def of(cls, tag: Union["Head", str, "Symbol"]) -> "HeadTag":
        """Known tags map to their member; anything else stays an opaque string."""
        if isinstance(tag, Head):
            return tag
        if isinstance(tag, Symbol):
            tag = tag.name
        try:
            return cls(tag)
        except ValueError:
            return str(tag)


HeadTag: TypeAlias = Union[Head, str]


def head_name(head: HeadTag) -> str:
    """Plain tag string for a head, whether known or opaque."""
    return head.value if isinstance(head, Head) else head


@dataclass(frozen=True)
class Symbol:
    """Identifier leaf. Never equal to a string literal with the same text."""
    name: str

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"


_COMPOUND = object()


class Expr:
    """
    Compound node: a head tag and an ordered tuple of children.

    Immutable: attributes are fixed at construction. Equality and hashing
    are structural, so "the same subtree twice" always means equal values.
    """
    __slots__ = ('head', 'args')

    def __init__(self, head: Union[HeadTag, Symbol], *args: Any):
        object.__setattr__(self, 'head', Head.of(head))
        object.__setattr__(self, 'args', tuple(args))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Expr is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Expr is immutable; cannot delete {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expr):
            return NotImplemented
        # Explicit stack: trees may be nested deeper than the recursion limit
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if a.head != b.head or len(a.args) != len(b.args):
                return False
            for x, y in zip(a.args, b.args):
                x_compound, y_compound = isinstance(x, Expr), isinstance(y, Expr)
                if x_compound and y_compound:
                    pending.append((x, y))
                elif x_compound or y_compound:
                    return False
                elif x is not y and x != y:
                    return False
        return True

    def __hash__(self) -> int:
        # Shallow: head, arity, leaf children and the heads of compound children
        return hash((head_name(self.head), tuple(
            (_COMPOUND, head_name(a.head), len(a.args)) if isinstance(a, Expr) else a
            for a in self.args
        )))

    def __repr__(self) -> str:
        parts = [repr(head_name(self.head))] + [repr(a) for a in self.args]
        return f"Expr({', '.join(parts)})"

    def with_args(self, args: Iterable[Any]) -> "Expr":
        """Same head, new children."""
        return Expr(self.head, *args)


Node: TypeAlias = Any  # Expr | Symbol | literal leaf


# ============================================
# STRUCTURAL PREDICATES
# ============================================

def is_compound(node: Node) -> bool:
    return isinstance(node, Expr)


def head_is(node: Node, *tags: Any) -> bool:
    """
    Test the shape of a node.

    For an `Expr`, true iff its head is one of the string tags. For a leaf,
    true iff one of the tags is a type the leaf is an instance of, so one
    call can pick up every string-like node:

        head_is(node, str, "string")
    """
    if isinstance(node, Expr):
        return any(isinstance(t, str) and node.head == t for t in tags)
    return any(isinstance(t, type) and isinstance(node, t) for t in tags)


def is_line_marker(node: Node) -> bool:
    return head_is(node, Head.LINE)


def line_marker(line: int, file: Optional[str] = None) -> Expr:
    """Build a line marker for `line` (and `file`, when known)."""
    if file is None:
        return Expr(Head.LINE, line)
    return Expr(Head.LINE, line, file)


def marker_location(node: Node) -> SourceLocation:
    if not is_line_marker(node) or not node.args:
        raise MalformedTreeInvariantViolation("Not a line marker", node)
    file = node.args[1] if len(node.args) > 1 else None
    return SourceLocation(line=node.args[0], file=file)


def namify(node: Node) -> Symbol:
    """
    Pull the bare name out of expressions like `Foo{T}` or `Bar{T} <: Vector{T}`,
    i.e. follow first children until a symbol is reached.
    """
    while isinstance(node, Expr):
        if not node.args:
            raise MalformedTreeInvariantViolation("Cannot namify a node without children", node)
        node = node.args[0]
    if not isinstance(node, Symbol):
        raise MalformedTreeInvariantViolation("Cannot namify a non-symbol leaf", node)
    return node


def rmlines(node: Node) -> Node:
    """Remove the direct line-marker children of a node; leaves pass through."""
    if not isinstance(node, Expr):
        return node
    return node.with_args(a for a in node.args if not is_line_marker(a))


def makeif(clauses: Iterable[Tuple[Node, Node]], els: Node = None) -> Node:
    """
    Fold `(condition, body)` pairs into nested `if` nodes:

        makeif([(a, x), (b, y)], z) == (if a x (if b y z))

    The innermost else branch is omitted when `els` is None.
    """
    result = els
    for condition, body in reversed(list(clauses)):
        if result is None:
            result = Expr(Head.IF, condition, body)
        else:
            result = Expr(Head.IF, condition, body, result)
    return result
