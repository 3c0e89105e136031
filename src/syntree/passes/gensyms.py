"""
Gensym Aliasing

Compiler- and macro-generated identifiers (gensyms) are hard to read:
`##tmp#412`. alias_gensyms replaces each distinct gensym in a tree with a
distinct word from a fixed word list, so generated code is far easier to
follow.

Alias table invariants, per run:
- injective: two distinct gensyms never share a word
- stable: every occurrence of one gensym gets the same word
"""

import itertools
import logging
import random
from typing import Callable, Dict, Iterable, Iterator, Optional, Sequence

from ..shared.errors import AliasExhaustion, AliasStrategyError
from ..shared.nodes import Node, Symbol
from ..shared.walk import prewalk
from ..utils.config import GENSYM_MARKER
from ..utils.io_utils import load_wordlist

logger = logging.getLogger(__name__)

Strategy = Callable[[Sequence[str]], str]

# Process-wide sequence shared by every gensym() call without its own counter.
# Only name minting reads it; alias tables keep no state between runs.
_gensym_counter = itertools.count(1)


def gensym(tag: str = "", counter: Optional[Iterator[int]] = None) -> Symbol:
    """
    Fresh generated identifier such as Symbol("##tmp#1") for gensym("tmp").

    Names are numbered from one process-wide counter, so they stay distinct
    across an interpreter session. Pass `counter` (e.g. `itertools.count(1)`)
    for a private, reproducible sequence.
    """
    source = counter if counter is not None else _gensym_counter
    return Symbol(f"##{tag}{GENSYM_MARKER}{next(source)}")


def is_gensym(node: Node) -> bool:
    return isinstance(node, Symbol) and GENSYM_MARKER in node.name


# ============================================
# SELECTION STRATEGIES
# ============================================

def random_choice(rng: Optional[random.Random] = None) -> Strategy:
    """Pick uniformly among the unused words."""
    rng = rng if rng is not None else random.Random()

    def choose(candidates: Sequence[str]) -> str:
        return rng.choice(candidates)

    return choose


def first_unused(candidates: Sequence[str]) -> str:
    """Deterministic: the lexicographically smallest unused word."""
    return min(candidates)


# ============================================
# ALIAS TABLE
# ============================================

class AliasTable:
    """
    Gensym -> word mapping for a single aliasing run.

    Words are lowercased and de-duplicated; words that would themselves look
    like gensyms are dropped so aliased output is never re-aliased.
    """

    def __init__(self, words: Optional[Iterable[str]] = None, strategy: Optional[Strategy] = None):
        source = load_wordlist() if words is None else words
        self.words = tuple(dict.fromkeys(
            w.lower() for w in source if GENSYM_MARKER not in w
        ))
        self.strategy = strategy if strategy is not None else random_choice()
        self._aliases: Dict[Symbol, Symbol] = {}
        self._used: set = set()

    def alias(self, sym: Symbol) -> Symbol:
        """Word for `sym`, choosing and recording a new one on first sight."""
        existing = self._aliases.get(sym)
        if existing is not None:
            return existing

        candidates = [w for w in self.words if w not in self._used]
        if not candidates:
            raise AliasExhaustion(sym, len(self.words))

        word = self.strategy(candidates)
        if word in self._used or word not in self.words:
            raise AliasStrategyError(sym, word)

        self._used.add(word)
        alias = Symbol(word)
        self._aliases[sym] = alias
        logger.debug(f"[alias_gensyms] {sym.name} -> {word}")
        return alias

    def mapping(self) -> Dict[Symbol, Symbol]:
        """Copy of the aliases chosen so far."""
        return dict(self._aliases)

    def __contains__(self, sym: object) -> bool:
        return sym in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)


def alias_gensyms(tree: Node, table: Optional[AliasTable] = None) -> Node:
    """
    Replace gensyms with words from the alias table. A fresh table (and so a
    fresh, independent choice of words) is used unless one is passed in.
    """
    table = table if table is not None else AliasTable()
    return prewalk(lambda x: table.alias(x) if is_gensym(x) else x, tree)
