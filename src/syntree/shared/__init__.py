"""
Shared components: tree model, walker, rewrite rules, errors.
"""

from .source_location import SourceLocation
from .errors import (
    SyntreeError, NotAFunctionDefinition, AmbiguousDefault, AliasExhaustion,
    AliasStrategyError, MalformedTreeInvariantViolation, SexprSyntaxError, format_error,
)
from .nodes import (
    Head, HeadTag, Symbol, Expr, Node, head_name,
    is_compound, head_is, is_line_marker, line_marker, marker_location,
    namify, rmlines, makeif,
)
from .walk import walk, postwalk, prewalk, identity
from .patterns import Rule, Bindings, first_match, apply_rules, args_of, call_of
