#!/usr/bin/env python3
"""
Benchmark: nodes, time, and chosen move per depth on fixed positions.

Run before and after each search change (ordering, reductions, evaluation
terms) to quantify its effect. A lower node count at the same depth means
more effective pruning; higher NPS means cheaper nodes. The "Hanging queen"
position has a known best move (d2d5) that must be found from depth 3 on.

Every position is searched at depths 1..--max-depth with a fresh session per
position, so results do not depend on the order positions are run in.

Usage: python3 tools/bench.py [--max-depth N] [--slots POW2] [-v]
"""
import argparse
import logging
import os
import sys
import time

# Make `chessbot` importable when run as `python3 tools/bench.py` from a
# checkout: sys.path[0] is tools/, not the repo root.
REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

import chess

from chessbot.search import SearchSession, search

# Effectively infinite clock: only --max-depth ends a search.
CLOCK_MS = 10**12

# Fixed forever: the same positions are used for every version comparison.
POSITIONS = [
    ("Start",         chess.STARTING_FEN, None),
    ("Hanging queen", "4k3/8/8/3q4/8/8/3Q4/4K3 w - - 0 1", "d2d5"),
    ("Back rank",     "6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1", "a1a8"),
    ("Mid-open",      "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4", None),
    ("Complex mid",   "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8", None),
    ("Rook ending",   "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1", None),
    ("Pawn race",     "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1", None),
]


def run_position(label: str, fen: str, expected: str | None, max_depth: int, slots: int) -> list[dict]:
    """Search one position at every depth from 1 to max_depth.

    Args:
        label: Human-readable position name for display.
        fen: Position to search.
        expected: Known best move in UCI notation, or None.
        max_depth: Deepest iteration to run.
        slots: Transposition table size for the position's session.

    Returns:
        One dict per depth with keys: label, depth, move, ok, score, nodes,
        nps, time_ms.
    """
    board = chess.Board(fen)
    session = SearchSession.with_slots(slots)
    rows = []

    for depth in range(1, max_depth + 1):
        start = time.monotonic()
        result = search(board, CLOCK_MS, session, max_depth=depth)
        time_ms = max(1, int((time.monotonic() - start) * 1000))
        move = result.move.uci() if result.move else "(none)"
        rows.append({
            "label": label,
            "depth": result.depth,
            "move": move,
            "ok": "" if expected is None else ("ok" if move == expected else "MISS"),
            "score": result.score,
            "nodes": result.nodes,
            "nps": result.nodes * 1000 // time_ms,
            "time_ms": time_ms,
        })

    return rows


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--max-depth", type=int, default=5)
    parser.add_argument("--slots", type=int, default=1 << 20, help="TT slots (power of two)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every iteration")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    print(
        f"{'Position':<14} {'Depth':>5} {'Move':<7} {'':<4} {'Score':>9} "
        f"{'Nodes':>9} {'NPS':>8} {'Time(ms)':>9}"
    )
    print("-" * 72)

    misses = 0
    total_nodes = total_time = 0
    for label, fen, expected in POSITIONS:
        for r in run_position(label, fen, expected, args.max_depth, args.slots):
            # Known best moves are only required from depth 3 on.
            if r["ok"] == "MISS" and r["depth"] >= 3:
                misses += 1
            total_nodes += r["nodes"]
            total_time += r["time_ms"]
            print(
                f"{r['label']:<14} {r['depth']:>5} {r['move']:<7} {r['ok']:<4} {r['score']:>9} "
                f"{r['nodes']:>9,} {r['nps']:>8,} {r['time_ms']:>9,}"
            )

    print("-" * 72)
    print(f"{'TOTAL':<14} {'':>5} {'':<7} {'':<4} {'':>9} {total_nodes:>9,} "
          f"{total_nodes * 1000 // max(1, total_time):>8,} {total_time:>9,}")
    print()
    print(f"Known-move misses at depth >= 3: {misses}")


if __name__ == "__main__":
    main()
