"""
Lark Adapter

Turns parse trees produced by any Lark grammar into syntree nodes, so a
language front end written with Lark can feed the rewrite passes:

- rule name          -> head tag
- string tokens      -> str literals (quotes and escapes removed)
- number tokens      -> int / float
- any other token    -> Symbol

When the parser ran with `propagate_positions=True`, a line marker is
inserted before each child of a statement rule (by default `block`). Without
it rules carry no positions and no markers are inserted, even though the
lexer still numbers every token.

Conversion keeps an explicit stack (Transformer_NonRecursive), so deeply
nested parse trees convert without hitting the recursion limit.
"""

import ast
import logging
from typing import Any, Iterable, NamedTuple, Optional, Tuple

from lark import Token
from lark import Tree as LarkTree
from lark.visitors import Transformer_NonRecursive

from ..shared.nodes import Expr, Node, Symbol, line_marker

logger = logging.getLogger(__name__)

STRING_TOKENS = frozenset({"STRING", "ESCAPED_STRING"})
NUMBER_TOKENS = frozenset({
    "NUMBER", "INT", "SIGNED_INT", "DECIMAL", "FLOAT", "SIGNED_FLOAT", "SIGNED_NUMBER", "DIGIT",
})


class _Positioned(NamedTuple):
    node: Node
    line: Optional[int]


def _unwrap(child: Any) -> Tuple[Node, Optional[int]]:
    if isinstance(child, _Positioned):
        return child.node, child.line
    return child, None


class LarkTreeConverter(Transformer_NonRecursive):
    """
    Lark parse tree -> syntree nodes.

    Every rule is converted generically by `__default__`; results travel up
    wrapped with their source line until the parent decides on markers.
    Lark dispatches on rule names, so instance state is underscore-prefixed.
    """

    def __init__(
        self,
        file: Optional[str] = None,
        statement_rules: Iterable[str] = ("block",),
        line_markers: bool = True,
    ) -> None:
        super().__init__(visit_tokens=True)
        self._file = file
        self._statement_rules = frozenset(statement_rules)
        self._line_markers = line_markers

    def __default__(self, data, children, meta):
        tag = str(data)
        line = getattr(meta, "line", None)
        # Rule positions exist only under propagate_positions
        marks_lines = self._line_markers and line is not None and tag in self._statement_rules
        args = []
        for child in children:
            node, child_line = _unwrap(child)
            if marks_lines and child_line is not None:
                args.append(line_marker(child_line, self._file))
            args.append(node)
        return _Positioned(Expr(tag, *args), line)

    def __default_token__(self, token: Token):
        return _Positioned(self.convert_token(token), token.line)

    def convert_token(self, token: Token) -> Node:
        text = str(token)
        if token.type in STRING_TOKENS:
            return ast.literal_eval(text)
        if token.type in NUMBER_TOKENS:
            try:
                return int(text)
            except ValueError:
                return float(text)
        return Symbol(text)


def from_lark(tree: LarkTree, **options: Any) -> Node:
    """Convert a Lark tree; `options` are LarkTreeConverter arguments."""
    converted = LarkTreeConverter(**options).transform(tree)
    node, _ = _unwrap(converted)
    logger.debug(f"Converted Lark tree '{tree.data}'")
    return node
