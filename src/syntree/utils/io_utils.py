"""
Centralized file I/O utilities.

- Single place for encoding and resource-path handling
- Use Path.read_text() consistently (no raw open/read)
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple, Union

from .config import DEFAULT_FILE_ENCODING, DEFAULT_WORDLIST_FILE, WORDLIST_ENV_VAR

logger = logging.getLogger(__name__)


def read_source_file(path: Union[Path, str]) -> str:
    """Read a text file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING)


def resolve_wordlist_path(path: Optional[Union[Path, str]] = None) -> Path:
    """Explicit path, then $SYNTREE_WORDLIST, then the packaged animals.txt."""
    if path is not None:
        return Path(path)
    override = os.environ.get(WORDLIST_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_WORDLIST_FILE


@lru_cache(maxsize=None)
def _load_words(path: Path) -> Tuple[str, ...]:
    seen = set()
    words = []
    for word in read_source_file(path).split():
        word = word.lower()
        if word not in seen:
            seen.add(word)
            words.append(word)
    logger.debug(f"Loaded {len(words)} alias words from {path}")
    return tuple(words)


def load_wordlist(path: Optional[Union[Path, str]] = None) -> Tuple[str, ...]:
    """
    Load the alias word list.

    Words are lowercased and de-duplicated (first occurrence wins), so two
    distinct entries can never produce the same alias. The result is cached
    per path and shared read-only for the life of the process.
    """
    return _load_words(resolve_wordlist_path(path).resolve())
