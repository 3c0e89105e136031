"""
Rewrite passes built on the tree walker.
"""

from .base import BasePass, PassManager, RewriteContext
from .search import inexpr, replace
from .blocks import unblock, block, flatten, flatten1, striplines
from .gensyms import AliasTable, alias_gensyms, gensym, is_gensym, random_choice, first_unused
from .definitions import (
    longdef, longdef1, shortdef, shortdef1, is_def,
    splitdef, splitkwargs, splitarg, ANY_TYPE,
)
from .resyntax import unresolve, resyntax, default_function_name
from .prettify import (
    FlattenPass, UnresolvePass, ResyntaxPass, AliasGensymsPass, StripLinesPass,
    PRETTIFY_PASSES,
)
