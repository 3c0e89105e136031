"""
Resyntax Passes

Generated code tends to spell operators as plain calls to the primitive
behind them, sometimes with live function objects as the callee. These
passes turn such calls back into the surface syntax a person would write:

    (call <function getindex> a i)   --unresolve-->   (call getindex a i)
    (call getindex a i)              --resyntax--->   (ref a i)
"""

import inspect
from typing import Any, Callable, List, Optional

from ..shared.nodes import Expr, Head, Node, Symbol
from ..shared.patterns import Bindings, Rule, apply_rules, args_of, call_of
from ..shared.walk import prewalk

FunctionName = Callable[[Any], str]


def default_function_name(ref: Any) -> str:
    """Declared name of a routine."""
    return ref.__name__


def unresolve1(x: Node, function_name: FunctionName = default_function_name) -> Node:
    if inspect.isroutine(x):
        return Symbol(function_name(x))
    return x


def unresolve(tree: Node, function_name: Optional[FunctionName] = None) -> Node:
    """Replace live function references with their names."""
    lookup = function_name if function_name is not None else default_function_name
    return prewalk(lambda x: unresolve1(x, lookup), tree)


# ============================================
# DESUGARING TABLE
# ============================================

def _quoted_symbol(node: Node) -> bool:
    quoted = args_of(node, Head.QUOTE, 1)
    return quoted is not None and isinstance(quoted[0], Symbol)


def _setfield(node: Node) -> Optional[Bindings]:
    call = call_of(node, "setfield!")
    if call is None or len(call[1]) != 3:
        return None
    x, f, v = call[1]
    if not _quoted_symbol(f):
        return None
    return {"x": x, "f": f, "v": v}


def _setfield_increment(node: Node) -> Optional[Bindings]:
    found = _setfield(node)
    if found is None:
        return None
    plus = call_of(found["v"], "+")
    if plus is None or len(plus[1]) != 2:
        return None
    current, step = plus[1]
    if current != Expr(Head.DOT, found["x"], found["f"]):
        return None
    return {"x": found["x"], "f": found["f"], "v": step}


def _call_with(names, arity: Optional[int] = None, min_arity: int = 0):
    def match(node: Node) -> Optional[Bindings]:
        for name in names:
            call = call_of(node, name)
            if call is None:
                continue
            args = call[1]
            if arity is not None and len(args) != arity:
                return None
            if len(args) < min_arity:
                return None
            return {"args": args}
        return None
    return match


RESYNTAX_RULES: List[Rule] = [
    Rule("setfield-increment", _setfield_increment,
         lambda x, f, v: Expr(Head.ADD_ASSIGN, Expr(Head.DOT, x, f), v)),
    Rule("setfield", _setfield,
         lambda x, f, v: Expr(Head.ASSIGN, Expr(Head.DOT, x, f), v)),
    Rule("getindex", _call_with(("getindex", "getitem"), min_arity=1),
         lambda args: Expr(Head.REF, *args)),
    Rule("tuple", _call_with(("tuple",)),
         lambda args: Expr(Head.TUPLE, *args)),
    Rule("ctranspose", _call_with(("ctranspose",), arity=1),
         lambda args: Expr(Head.CTRANSPOSE, *args)),
    Rule("transpose", _call_with(("transpose",), arity=1),
         lambda args: Expr(Head.TRANSPOSE, *args)),
]


def resyntax(tree: Node) -> Node:
    """Rewrite primitive calls back into operator syntax."""
    return prewalk(lambda x: apply_rules(RESYNTAX_RULES, x), tree)
