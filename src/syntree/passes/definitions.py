"""
Function Definition Normalization

Two surface forms define the same callable:

    long:   (function (call f x y) (block body))
            (function (:: (call f x y) T) (block body))
            (function (tuple x y) (block body))          anonymous
    short:  (= (call f x y) body)
            (= (:: (call f x y) T) body)
            (-> (tuple x y) body)  or  (-> x body)       anonymous

longdef/shortdef rewrite every definition in a tree to one form; splitdef
and splitarg take a definition apart into its named components.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..shared.errors import AmbiguousDefault, NotAFunctionDefinition
from ..shared.nodes import Expr, Head, Node, Symbol, head_is
from ..shared.patterns import Bindings, Rule, apply_rules, args_of, call_of, first_match
from ..shared.walk import prewalk
from ..utils.config import ANY_TYPE_NAME
from .blocks import block

logger = logging.getLogger(__name__)

ANY_TYPE = Symbol(ANY_TYPE_NAME)

FunctionParts = Dict[str, Any]


def _bind(parts: Optional[Sequence[Node]], *names: str) -> Optional[Bindings]:
    if parts is None:
        return None
    return dict(zip(names, parts))


# ============================================
# SHAPE MATCHERS
# ============================================

def _named_signature(sig: Node) -> Optional[Bindings]:
    call = call_of(sig)
    if call is None:
        return None
    f, args = call
    return {"f": f, "args": args}


def _typed_signature(sig: Node) -> Optional[Bindings]:
    typed = args_of(sig, Head.TYPED, 2)
    if typed is None:
        return None
    found = _named_signature(typed[0])
    if found is None:
        return None
    return {**found, "rtype": typed[1]}


def _with_body(parts: Optional[Tuple[Node, ...]], signature) -> Optional[Bindings]:
    if parts is None:
        return None
    found = signature(parts[0])
    if found is None:
        return None
    return {**found, "body": parts[1]}


def _with_block_body(parts: Optional[Tuple[Node, ...]], signature) -> Optional[Bindings]:
    # Long forms always carry a block body; (function (call f x) x) is not a definition
    if parts is None or not head_is(parts[1], Head.BLOCK):
        return None
    return _with_body(parts, signature)


def _tuple_signature(sig: Node) -> Optional[Bindings]:
    args = args_of(sig, Head.TUPLE)
    return None if args is None else {"args": args}


def _short_named(node: Node) -> Optional[Bindings]:
    return _with_body(args_of(node, Head.ASSIGN, 2), _named_signature)


def _short_typed(node: Node) -> Optional[Bindings]:
    return _with_body(args_of(node, Head.ASSIGN, 2), _typed_signature)


def _arrow_tuple(node: Node) -> Optional[Bindings]:
    return _with_body(args_of(node, Head.ARROW, 2), _tuple_signature)


def _arrow_single(node: Node) -> Optional[Bindings]:
    return _bind(args_of(node, Head.ARROW, 2), "arg", "body")


def _long_named(node: Node) -> Optional[Bindings]:
    return _with_block_body(args_of(node, Head.FUNCTION, 2), _named_signature)


def _long_typed(node: Node) -> Optional[Bindings]:
    return _with_block_body(args_of(node, Head.FUNCTION, 2), _typed_signature)


def _long_anonymous(node: Node) -> Optional[Bindings]:
    return _with_block_body(args_of(node, Head.FUNCTION, 2), _tuple_signature)


# ============================================
# REWRITE RULES
# ============================================

LONGDEF_RULES: List[Rule] = [
    Rule("short-named", _short_named,
         lambda f, args, body: Expr(Head.FUNCTION, Expr(Head.CALL, f, *args), block(body))),
    Rule("short-typed", _short_typed,
         lambda f, args, rtype, body: Expr(
             Head.FUNCTION, Expr(Head.TYPED, Expr(Head.CALL, f, *args), rtype), block(body))),
    Rule("arrow-tuple", _arrow_tuple,
         lambda args, body: Expr(Head.FUNCTION, Expr(Head.TUPLE, *args), block(body))),
    Rule("arrow-single", _arrow_single,
         lambda arg, body: Expr(Head.FUNCTION, Expr(Head.TUPLE, arg), block(body))),
]

SHORTDEF_RULES: List[Rule] = [
    Rule("long-named", _long_named,
         lambda f, args, body: Expr(Head.ASSIGN, Expr(Head.CALL, f, *args), body)),
    Rule("long-typed", _long_typed,
         lambda f, args, rtype, body: Expr(
             Head.ASSIGN, Expr(Head.TYPED, Expr(Head.CALL, f, *args), rtype), body)),
    Rule("long-anonymous", _long_anonymous,
         lambda args, body: Expr(Head.ARROW, Expr(Head.TUPLE, *args), body)),
    Rule("arrow-tuple", _arrow_tuple,
         lambda args, body: Expr(Head.ARROW, Expr(Head.TUPLE, *args), body)),
    Rule("arrow-single", _arrow_single,
         lambda arg, body: Expr(Head.ARROW, Expr(Head.TUPLE, arg), body)),
]

_LONG_SHAPES: List[Rule] = [
    Rule("long-named", _long_named, lambda **parts: parts),
    Rule("long-typed", _long_typed, lambda **parts: parts),
    Rule("long-anonymous", _long_anonymous, lambda **parts: {"f": None, **parts}),
]


def longdef1(node: Node) -> Node:
    return apply_rules(LONGDEF_RULES, node)


def longdef(tree: Node) -> Node:
    """Rewrite every short-form definition in `tree` to long form."""
    return prewalk(longdef1, tree)


def shortdef1(node: Node) -> Node:
    return apply_rules(SHORTDEF_RULES, node)


def shortdef(tree: Node) -> Node:
    """Rewrite every long-form definition in `tree` to short form."""
    return prewalk(shortdef1, tree)


# ============================================
# DECOMPOSITION
# ============================================

def _split_long(node: Node) -> Optional[Bindings]:
    found = first_match(_LONG_SHAPES, longdef1(node))
    if found is None:
        return None
    rule, bindings = found
    return rule.build(**bindings)


def is_def(node: Node) -> bool:
    """Test for function definition nodes (either form)."""
    return _split_long(node) is not None


def splitkwargs(args: Sequence[Node]) -> Tuple[List[Node], List[Node]]:
    """
    Split an argument list into positional and keyword arguments. A leading
    `parameters` node holds the keyword arguments.
    """
    if args and isinstance(args[0], Expr) and args[0].head == Head.PARAMETERS:
        return list(args[1:]), list(args[0].args)
    return list(args), []


def splitdef(fdef: Node) -> FunctionParts:
    """
    Match a function definition such as

        (function (:: (call fname (parameters kwargs...) args...) rtype) body)

    in either form and return a dict with keys `name`, `args`, `kwargs` and
    `body`. When a return type is declared, `rtype` is in the dict too.
    Anonymous functions have `name` None.
    """
    parts = _split_long(fdef)
    if parts is None:
        raise NotAFunctionDefinition(fdef)
    args, kwargs = splitkwargs(parts["args"])
    di: FunctionParts = {"name": parts["f"], "args": args, "kwargs": kwargs, "body": parts["body"]}
    if "rtype" in parts:
        di["rtype"] = parts["rtype"]
    return di


_ARG_SHAPES: List[Rule] = [
    Rule("type-only", lambda n: _bind(args_of(n, Head.TYPED, 1), "T"),
         lambda T: (None, T)),
    Rule("name-and-type", lambda n: _bind(args_of(n, Head.TYPED, 2), "name", "T"),
         lambda name, T: (name, T)),
    Rule("bare-name", lambda n: {"name": n},
         lambda name: (name, ANY_TYPE)),
]


def _split_var(arg: Node) -> Tuple[Optional[Node], Node]:
    return apply_rules(_ARG_SHAPES, arg)


def splitarg(arg_expr: Node) -> Tuple[Optional[Node], Node, Any]:
    """
    Match a function argument (from a definition or a call) such as
    `x::Int=2` and return `(name, type, default)`. `default` is None when
    there is none, and the type is `Any` when none is declared:

        splitarg(read("(kw (:: x Int) 2)")) == (x, Int, 2)
        splitarg(read("y"))                 == (y, Any, None)

    A literal None default would be indistinguishable from "no default" and
    raises AmbiguousDefault; quote it as Symbol("nothing") instead.
    """
    assigned = args_of(arg_expr, Head.KW, 2) or args_of(arg_expr, Head.ASSIGN, 2)
    if assigned is not None:
        arg, default = assigned
        if default is None:
            raise AmbiguousDefault(arg_expr)
        name, T = _split_var(arg)
        return name, T, default
    name, T = _split_var(arg_expr)
    return name, T, None
