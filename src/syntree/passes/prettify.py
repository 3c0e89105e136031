"""
Prettify Passes

The cleanup pipeline as schedulable passes. The `requires` chain fixes the
order: flatten, unresolve, resyntax, alias gensyms, strip line markers.
"""

from ..shared.nodes import Node
from .base import BasePass, RewriteContext
from .blocks import flatten, striplines
from .gensyms import AliasTable, alias_gensyms
from .resyntax import resyntax, unresolve


class FlattenPass(BasePass):
    def run(self, tree: Node, ctx: RewriteContext) -> Node:
        return flatten(tree)


class UnresolvePass(BasePass):
    requires = [FlattenPass]

    def run(self, tree: Node, ctx: RewriteContext) -> Node:
        return unresolve(tree, ctx.function_name)


class ResyntaxPass(BasePass):
    requires = [UnresolvePass]

    def run(self, tree: Node, ctx: RewriteContext) -> Node:
        return resyntax(tree)


class AliasGensymsPass(BasePass):
    """
    Aliases gensyms with `ctx.alias_table`, creating a fresh table on the
    context when it has none so the words chosen stay readable after the run.
    """
    requires = [ResyntaxPass]

    def run(self, tree: Node, ctx: RewriteContext) -> Node:
        if ctx.alias_table is None:
            ctx.alias_table = AliasTable()
        return alias_gensyms(tree, ctx.alias_table)


class StripLinesPass(BasePass):
    """Skipped when the context keeps line markers."""
    requires = [AliasGensymsPass]

    def run(self, tree: Node, ctx: RewriteContext) -> Node:
        if ctx.keep_lines:
            return tree
        return striplines(tree)


PRETTIFY_PASSES = [FlattenPass, UnresolvePass, ResyntaxPass, AliasGensymsPass, StripLinesPass]
