"""
syntree utilities package
"""

from .io_utils import read_source_file, load_wordlist, resolve_wordlist_path

__all__ = ["read_source_file", "load_wordlist", "resolve_wordlist_path"]
