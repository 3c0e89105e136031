"""
Front ends producing syntree trees.
"""

from .sexpr import SexprParser, read, read_all
from .lark_adapter import LarkTreeConverter, from_lark

__all__ = ["SexprParser", "read", "read_all", "LarkTreeConverter", "from_lark"]
