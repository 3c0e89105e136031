"""
syntree: walk, match, normalize and pretty-print code trees.
"""

from .shared import (
    Head, Symbol, Expr, Node, SourceLocation,
    is_compound, head_is, is_line_marker, line_marker, marker_location,
    namify, rmlines, makeif,
    walk, postwalk, prewalk,
    SyntreeError, NotAFunctionDefinition, AmbiguousDefault, AliasExhaustion,
    AliasStrategyError, MalformedTreeInvariantViolation, SexprSyntaxError,
)
from .passes import (
    inexpr, replace,
    unblock, block, flatten, striplines,
    AliasTable, alias_gensyms, gensym, is_gensym, random_choice, first_unused,
    longdef, shortdef, is_def, splitdef, splitkwargs, splitarg,
    unresolve, resyntax,
)
from .pipeline import prettify, expand
from .serialization import dumps
from .frontend import read, read_all, from_lark

__version__ = "0.1.0"
