"""
S-Expression Reader

Reads the canonical text form written by `syntree.serialization.dumps`
back into trees. This is not a language parser: it only knows the tree
model's own notation.
"""

import logging
import re
from functools import lru_cache
from typing import List

from lark import Lark, v_args
from lark.exceptions import UnexpectedInput, VisitError
from lark.visitors import Transformer_NonRecursive

from ..serialization import atom_value
from ..shared.errors import SexprSyntaxError
from ..shared.nodes import Expr, Node, Symbol
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, SEXPR_GRAMMAR_FILE

logger = logging.getLogger(__name__)

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


@v_args(inline=True)
class SexprTransformer(Transformer_NonRecursive):
    """
    Converts the Lark parse tree of an S-expression into syntree nodes.
    Non-recursive, so nesting depth is not limited by the interpreter stack.
    """

    def list(self, *items):
        if not items:
            return None
        head, *args = items
        if not isinstance(head, Symbol):
            raise SexprSyntaxError(f"List head must be a symbol, got {head!r}")
        return Expr(head, *args)

    def string(self, token):
        return _ESCAPE_RE.sub(r"\1", token[1:-1])

    def quoted_symbol(self, token):
        return Symbol(_ESCAPE_RE.sub(r"\1", token[1:-1]))

    def atom(self, token):
        return atom_value(str(token))

    def forms(self, *items):
        return list(items)


class SexprParser:
    """
    S-expression reader.

    - Lark LALR parser with native caching
    - Lark errors are converted to SexprSyntaxError with line/column
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        self.parser = Lark.open(
            SEXPR_GRAMMAR_FILE,
            start=["start", "forms"],
            parser="lalr",              # Required for caching
            cache=cache_file,
            maybe_placeholders=False,
        )
        self.transformer = SexprTransformer()
        logger.debug(f"S-expression parser ready (cache: {cache_file})")

    def _run(self, text: str, start: str):
        try:
            tree = self.parser.parse(text, start=start)
            return self.transformer.transform(tree)
        except UnexpectedInput as e:
            raise SexprSyntaxError(
                f"Invalid S-expression: {e.__class__.__name__}",
                line=getattr(e, "line", None),
                column=getattr(e, "column", None),
            ) from e
        except VisitError as e:
            if isinstance(e.orig_exc, SexprSyntaxError):
                raise e.orig_exc from None
            raise

    def parse(self, text: str) -> Node:
        """Read exactly one tree."""
        return self._run(text, "start")

    def parse_all(self, text: str) -> List[Node]:
        """Read every top-level tree in `text` (possibly none)."""
        return self._run(text, "forms")


@lru_cache(maxsize=None)
def default_parser() -> SexprParser:
    return SexprParser()


def read(text: str) -> Node:
    """Read one tree from S-expression text."""
    return default_parser().parse(text)


def read_all(text: str) -> List[Node]:
    """Read all trees from S-expression text."""
    return default_parser().parse_all(text)
