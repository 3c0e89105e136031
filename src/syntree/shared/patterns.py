"""
Rewrite Rules

Declarative rewrite rules as ordered lists of (shape matcher, builder) pairs.
A matcher returns a bindings dict on success and None on failure; the first
rule whose matcher succeeds wins, and a node no rule matches falls through
unchanged. Order rules most specific first.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .nodes import Expr, Node, Symbol

logger = logging.getLogger(__name__)

Bindings = Dict[str, Any]
Matcher = Callable[[Node], Optional[Bindings]]


@dataclass(frozen=True)
class Rule:
    """One rewrite: `build(**bindings)` replaces any node `match` accepts."""
    name: str
    match: Matcher
    build: Callable[..., Node]


def first_match(rules: Sequence[Rule], node: Node) -> Optional[Tuple[Rule, Bindings]]:
    """First rule accepting `node` with its bindings, or None."""
    for rule in rules:
        bindings = rule.match(node)
        if bindings is not None:
            return rule, bindings
    return None


def apply_rules(rules: Sequence[Rule], node: Node) -> Node:
    """Rewrite `node` with the first matching rule; unchanged when none match."""
    found = first_match(rules, node)
    if found is None:
        return node
    rule, bindings = found
    logger.debug(f"[rules] {rule.name} matched")
    return rule.build(**bindings)


# ============================================
# SHAPE HELPERS
# ============================================

def args_of(node: Node, head: str, arity: Optional[int] = None) -> Optional[Tuple[Node, ...]]:
    """Children of `node` when it has head `head` (and exactly `arity` children)."""
    if not isinstance(node, Expr) or node.head != head:
        return None
    if arity is not None and len(node.args) != arity:
        return None
    return node.args


def call_of(node: Node, name: Optional[str] = None) -> Optional[Tuple[Node, Tuple[Node, ...]]]:
    """
    `(callee, arguments)` of a call node. With `name`, the callee must be that
    symbol.
    """
    parts = args_of(node, "call")
    if not parts:
        return None
    callee, rest = parts[0], parts[1:]
    if name is not None and callee != Symbol(name):
        return None
    return callee, rest
