"""
Error Reporting

Every error raised by syntree is a contract or input-shape violation, never a
transient condition: nothing in the library retries or recovers, errors
propagate to the immediate caller carrying the offending node.
"""

import os
from typing import Any, Optional

from ..utils.config import COLOR_ENV_VAR


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get(COLOR_ENV_VAR, "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


_NO_NODE = object()


def _render_node(node: Any) -> str:
    from ..serialization import dumps
    return dumps(node, pretty=False)


# ============================================================================
# Exception Classes
# ============================================================================

class SyntreeError(Exception):
    """Base exception for all syntree errors"""
    error_code = "E0000"

    def __init__(self, message: str, node: Any = _NO_NODE, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.node = None if node is _NO_NODE else node
        self.has_node = node is not _NO_NODE
        if error_code is not None:
            self.error_code = error_code

    def __str__(self):
        if self.has_node:
            return f"[{self.error_code}] {self.message}: {_render_node(self.node)}"
        return f"[{self.error_code}] {self.message}"


class NotAFunctionDefinition(SyntreeError):
    """Input matched none of the recognized definition shapes."""
    error_code = "E0101"

    def __init__(self, node: Any):
        super().__init__("Not a function definition", node)


class AmbiguousDefault(SyntreeError):
    """
    A parameter default of literal `None` cannot be told apart from "no
    default". Callers must pass a quoted value such as Symbol("nothing").
    """
    error_code = "E0102"

    def __init__(self, node: Any):
        super().__init__(
            "splitarg cannot handle a None default; use a quoted value such as Symbol('nothing')",
            node,
        )


class AliasExhaustion(SyntreeError):
    """The word list ran out of unused words during one aliasing run."""
    error_code = "E0103"

    def __init__(self, node: Any, available: int):
        super().__init__(f"No unused alias left ({available} words in list)", node)
        self.available = available


class AliasStrategyError(SyntreeError):
    """An alias strategy picked a word that is already used or not in the list."""
    error_code = "E0105"

    def __init__(self, node: Any, word: Any):
        super().__init__(f"Alias strategy returned unavailable word {word!r}", node)
        self.word = word


class MalformedTreeInvariantViolation(SyntreeError):
    """The caller handed in a tree that breaks a structural contract."""
    error_code = "E0104"


class SexprSyntaxError(SyntreeError):
    """S-expression text could not be read into a tree."""
    error_code = "E0001"

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self):
        if self.line is not None:
            return f"[{self.error_code}] {self.message} (line {self.line}, column {self.column})"
        return f"[{self.error_code}] {self.message}"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_error(error: SyntreeError, color: Optional[bool] = None) -> str:
    """
    Render an error as a one-or-two line diagnostic.

    Example output (plain, no color)::

        error[E0101]: Not a function definition
         --> (call f x)
    """
    use_color = color if color is not None else _use_color()
    out = [
        _style(f"error[{error.error_code}]", _BOLD, _RED, color=use_color)
        + _style(f": {error.message}", _BOLD, color=use_color)
    ]
    if error.has_node:
        out.append(_style(" --> ", _BOLD, _BLUE, color=use_color) + _render_node(error.node))
    elif isinstance(error, SexprSyntaxError) and error.line is not None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=use_color) + f"{error.line}:{error.column}")
    return "\n".join(out)
