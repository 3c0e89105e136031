"""
Configuration constants to replace magic strings throughout syntree
"""

import os
import tempfile
from pathlib import Path

# Gensym policy: any identifier containing this substring was synthesized
GENSYM_MARKER = "#"

# Type reported by splitarg for parameters without an annotation
ANY_TYPE_NAME = "Any"

# Word list used by the gensym aliaser (one word per whitespace-separated token)
DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_WORDLIST_FILE = DATA_DIR / "animals.txt"
WORDLIST_ENV_VAR = "SYNTREE_WORDLIST"

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
SEXPR_GRAMMAR_FILE = Path(__file__).resolve().parent.parent / "frontend" / "sexpr.lark"
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "syntree_sexpr_parser.cache")

# Printer formatting constants
PRETTY_MAX_LINE = 100  # Longest one-line rendering before breaking a list
PRETTY_INDENT = "  "
NONE_LITERAL = "()"
BOOLEAN_TRUE_LITERAL = "true"
BOOLEAN_FALSE_LITERAL = "false"
STRING_QUOTE_CHAR = '"'
SYMBOL_QUOTE_CHAR = "|"  # |a b| is the symbol named "a b"
POSITIVE_INFINITY_LITERAL = "+inf"
NEGATIVE_INFINITY_LITERAL = "-inf"
NAN_LITERAL = "+nan"

# Diagnostics
COLOR_ENV_VAR = "SYNTREE_COLOR"

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"
