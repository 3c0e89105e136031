"""
Tree Serialization to S-Expressions
====================================

Converts trees to canonical S-expression text for testing and debugging.
The format is the one `syntree.frontend.sexpr` reads back:

    (head arg1 arg2 ...)    Expr
    name                    Symbol
    |a b|                   Symbol whose name would not read back bare
                            (backslash escapes for \\ and |)
    "text"                  str literal (backslash escapes for \\ and ")
    12  3.5  true  false    numbers and booleans
    +inf  -inf  +nan        non-finite floats
    ()                      None

Serialization is lossless for every tree built from these leaves (NaN reads
back as NaN, which never compares equal to itself). Other leaves (live
function references, arbitrary objects) are written with str() and do not
read back.
"""

import math
import re
from typing import Any, List, Tuple

from .shared.nodes import Expr, Symbol, head_name
from .utils.config import (
    BOOLEAN_FALSE_LITERAL, BOOLEAN_TRUE_LITERAL, NAN_LITERAL, NEGATIVE_INFINITY_LITERAL,
    NONE_LITERAL, POSITIVE_INFINITY_LITERAL, PRETTY_INDENT, PRETTY_MAX_LINE,
    STRING_QUOTE_CHAR, SYMBOL_QUOTE_CHAR,
)

_INT_RE = re.compile(r"[+-]?\d+\Z")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?\Z")
# Mirrors the ATOM terminal of frontend/sexpr.lark
_BARE_SYMBOL_RE = re.compile(r'[^\s()";|][^\s()";]*\Z')

_SPECIAL_ATOMS = {
    BOOLEAN_TRUE_LITERAL: True,
    BOOLEAN_FALSE_LITERAL: False,
    POSITIVE_INFINITY_LITERAL: math.inf,
    NEGATIVE_INFINITY_LITERAL: -math.inf,
    NAN_LITERAL: math.nan,
}


def atom_value(text: str) -> Any:
    """Value of a bare atom: boolean, number, non-finite float or Symbol."""
    if text in _SPECIAL_ATOMS:
        return _SPECIAL_ATOMS[text]
    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)
    return Symbol(text)


def _dump_symbol(name: str) -> str:
    if _BARE_SYMBOL_RE.match(name) and isinstance(atom_value(name), Symbol):
        return name
    escaped = name.replace("\\", "\\\\").replace(SYMBOL_QUOTE_CHAR, "\\" + SYMBOL_QUOTE_CHAR)
    return f"{SYMBOL_QUOTE_CHAR}{escaped}{SYMBOL_QUOTE_CHAR}"


def _dump_float(x: float) -> str:
    if math.isnan(x):
        return NAN_LITERAL
    if math.isinf(x):
        return POSITIVE_INFINITY_LITERAL if x > 0 else NEGATIVE_INFINITY_LITERAL
    return repr(x)


def _dump_leaf(x: Any) -> str:
    if x is None:
        return NONE_LITERAL
    if isinstance(x, bool):
        return BOOLEAN_TRUE_LITERAL if x else BOOLEAN_FALSE_LITERAL
    if isinstance(x, int):
        return str(x)
    if isinstance(x, float):
        return _dump_float(x)
    if isinstance(x, Symbol):
        return _dump_symbol(x.name)
    if isinstance(x, str):
        escaped = x.replace("\\", "\\\\").replace('"', '\\"')
        return f"{STRING_QUOTE_CHAR}{escaped}{STRING_QUOTE_CHAR}"
    return str(x)


def _layout(head: str, parts: List[List[str]], indent: int, indent_str: str,
            max_line: float) -> List[str]:
    """Keeps short forms on one line; breaks only when needed."""
    if all(len(p) == 1 for p in parts):
        width = len(head) + 2 + sum(len(p[0]) + 1 for p in parts)
        if width <= max_line:
            return ["(" + " ".join([head] + [p[0] for p in parts]) + ")"]
    next_prefix = indent_str * (indent + 1)
    # Head on the same line as ( to avoid an orphan (
    lines = ["(" + head]
    for p in parts:
        lines.append(next_prefix + p[0])
        lines.extend(p[1:])
    lines.append(indent_str * indent + ")")
    return lines


def _pretty_dumps(node: Any, indent: int = 0, indent_str: str = PRETTY_INDENT,
                  max_line: float = PRETTY_MAX_LINE) -> str:
    """
    Pretty-print a tree, children before parents on an explicit stack so
    deep trees print without recursion. Each finished node is a list of
    lines; the text is joined once at the end.
    """
    if not isinstance(node, Expr):
        return _dump_leaf(node)
    stack: List[Tuple[Expr, int, List[List[str]]]] = [(node, indent, [])]
    while True:
        expr, level, parts = stack[-1]
        if len(parts) < len(expr.args):
            child = expr.args[len(parts)]
            if isinstance(child, Expr):
                stack.append((child, level + 1, []))
            else:
                # Literal newlines (inside strings or quoted symbols) force a break
                parts.append(_dump_leaf(child).split("\n"))
            continue
        stack.pop()
        lines = _layout(_dump_symbol(head_name(expr.head)), parts, level, indent_str, max_line)
        if not stack:
            return "\n".join(lines)
        stack[-1][2].append(lines)


def dumps(node: Any, pretty: bool = True, max_line: int = PRETTY_MAX_LINE) -> str:
    """
    Serialize a tree to S-expression text.

    Args:
        node: Tree to serialize
        pretty: Break long lists over indented lines (default True). Set False
            for compact single-line output.
        max_line: Longest list kept on one line when pretty
    """
    if pretty:
        return _pretty_dumps(node, max_line=max_line)
    return _pretty_dumps(node, max_line=float("inf"))
