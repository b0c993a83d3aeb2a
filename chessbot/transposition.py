"""
Transposition table: a fixed-size cache of search results keyed by position.

Chess positions are reached by many move orders ("transpositions"). Caching
the result of a search lets the engine skip repeated work and, just as
important, remember which move was best so it can be tried first next time.

The table is a flat list of `num_slots` slots. A position's slot is
`key % num_slots`, where the key is the 64-bit polyglot Zobrist hash from
python-chess. Each slot holds at most one entry and every store overwrites
whatever was there; there is no depth-preferred replacement.

Different positions can share a slot, and in rare cases even a full 64-bit
key. A probe therefore only returns an entry whose stored key equals the
probed key; anything else is a miss.

Not thread-safe: the search is single-threaded and owns the table.
"""

import enum
from dataclasses import dataclass

import chess

from chessbot.constants import TT_SLOTS


class Bound(enum.IntEnum):
    """How the stored score relates to the true score of the position."""

    UPPER = 1  # fail-low: true score <= stored score
    LOWER = 2  # fail-high: true score >= stored score
    EXACT = 3


@dataclass(frozen=True)
class TTEntry:
    """
    A cached search result.

    Attributes:
        key:       Zobrist hash of the position the entry was stored for.
        best_move: Best (or refuting) move found, or None if no move improved
                   on the initial bound (e.g. a quiescence stand-pat).
        depth:     Remaining depth the result was searched to.
        score:     Score from the perspective of the side to move.
        bound:     Whether score is exact or a lower/upper bound.
    """

    key: int
    best_move: chess.Move | None
    depth: int
    score: int
    bound: Bound


class TranspositionTable:
    """
    Always-replace hash table of TTEntry objects.

    Args:
        num_slots: Number of slots. Must be a positive power of two.
    """

    def __init__(self, num_slots: int = TT_SLOTS) -> None:
        if num_slots <= 0 or num_slots & (num_slots - 1):
            raise ValueError(f"num_slots must be a positive power of two, got {num_slots}")
        self.num_slots = num_slots
        self._slots: list[TTEntry | None] = [None] * num_slots

    def __len__(self) -> int:
        """Number of occupied slots."""
        return sum(1 for entry in self._slots if entry is not None)

    def index(self, key: int) -> int:
        """Slot a key maps to."""
        return key % self.num_slots

    def probe(self, key: int) -> TTEntry | None:
        """
        Look up the entry for a position.

        Returns:
            The stored entry if its key matches, otherwise None (empty slot
            or a different position occupying the slot).
        """
        entry = self._slots[self.index(key)]
        if entry is None or entry.key != key:
            return None
        return entry

    def store(
        self,
        key: int,
        best_move: chess.Move | None,
        depth: int,
        score: int,
        bound: Bound,
    ) -> None:
        """Write an entry, unconditionally replacing the slot's occupant."""
        self._slots[self.index(key)] = TTEntry(key, best_move, depth, score, bound)

    def clear(self) -> None:
        self._slots = [None] * self.num_slots
