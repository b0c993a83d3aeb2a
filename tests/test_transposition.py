import chess
import pytest

from chessbot.transposition import Bound, TTEntry, TranspositionTable

E2E4 = chess.Move.from_uci("e2e4")
D2D4 = chess.Move.from_uci("d2d4")


def test_store_then_probe_returns_entry() -> None:
    tt = TranspositionTable(1 << 10)
    key = 0x9D39247E33776D41
    tt.store(key, E2E4, 5, 42, Bound.EXACT)

    assert tt.probe(key) == TTEntry(key, E2E4, 5, 42, Bound.EXACT)


def test_probe_empty_slot_is_miss() -> None:
    tt = TranspositionTable(1 << 10)
    assert tt.probe(12345) is None
    assert len(tt) == 0


def test_colliding_key_is_a_miss() -> None:
    tt = TranspositionTable(16)
    tt.store(5, E2E4, 3, 10, Bound.LOWER)

    assert tt.index(5) == tt.index(21)
    assert tt.probe(21) is None
    assert tt.probe(5) is not None


def test_store_always_overwrites_slot() -> None:
    tt = TranspositionTable(16)
    tt.store(5, E2E4, 10, 10, Bound.EXACT)
    # Shallower result for a different key in the same slot still replaces it.
    tt.store(21, D2D4, 1, -7, Bound.UPPER)

    assert tt.probe(5) is None
    assert tt.probe(21) == TTEntry(21, D2D4, 1, -7, Bound.UPPER)
    assert len(tt) == 1


def test_store_same_key_keeps_latest() -> None:
    tt = TranspositionTable(16)
    tt.store(7, E2E4, 8, 100, Bound.EXACT)
    tt.store(7, None, 0, -3, Bound.UPPER)

    entry = tt.probe(7)
    assert entry.depth == 0
    assert entry.best_move is None
    assert entry.bound is Bound.UPPER


def test_clear_empties_table() -> None:
    tt = TranspositionTable(16)
    for key in range(4):
        tt.store(key, None, 1, key, Bound.EXACT)
    assert len(tt) == 4

    tt.clear()
    assert len(tt) == 0
    assert tt.probe(1) is None


@pytest.mark.parametrize("num_slots", [0, -8, 3, 1000])
def test_size_must_be_power_of_two(num_slots: int) -> None:
    with pytest.raises(ValueError):
        TranspositionTable(num_slots)
