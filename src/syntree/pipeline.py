"""
Pretty-Printing Pipeline

prettify makes generated code nicer to look at; expand runs an external
macro expander and makes its output readable the same way.
"""

import logging
from typing import Any, Callable, Optional

from .passes.base import PassManager, RewriteContext
from .passes.gensyms import AliasTable, alias_gensyms
from .passes.prettify import PRETTIFY_PASSES
from .passes.resyntax import FunctionName
from .shared.nodes import Node

logger = logging.getLogger(__name__)

Expander = Callable[[Any, Node], Node]


def build_prettify_manager() -> PassManager:
    manager = PassManager()
    for pass_class in PRETTIFY_PASSES:
        manager.register_pass(pass_class)
    return manager


# Passes are instantiated per run, so one manager is safe to share
_prettify_manager = build_prettify_manager()


def prettify(
    tree: Node,
    keep_lines: bool = False,
    *,
    table: Optional[AliasTable] = None,
    function_name: Optional[FunctionName] = None,
    dump_tree: bool = False,
) -> Node:
    """
    Make generated code generally nicer to look at: flatten blocks, name
    function references, restore operator syntax, alias gensyms and, unless
    `keep_lines`, strip line markers.

    Pass a table built with the `first_unused` strategy for reproducible
    aliases.
    """
    ctx = RewriteContext(keep_lines=keep_lines, alias_table=table, function_name=function_name)
    return _prettify_manager.run_all(tree, ctx, dump_tree=dump_tree)


def expand(expander: Expander, context: Any, expr: Node, table: Optional[AliasTable] = None) -> Node:
    """
    More readable macro expansion: `expander(context, expr)` with the gensyms
    of the result aliased.
    """
    expanded = expander(context, expr)
    logger.debug("Aliasing gensyms of expanded expression")
    return alias_gensyms(expanded, table)
