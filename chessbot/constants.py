"""
Engine constants: piece values, special scores, search parameters, and
table sizes.

All numeric constants used by the search are defined here so that the other
modules never need to introduce magic numbers of their own.

Piece values follow the centipawn convention (1 pawn = 100 cp). The king is
given a large value even though it can never be captured: every position has
exactly one king per side, so its material cancels out in the evaluation.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 300
BISHOP_VALUE: int = 320
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
KING_VALUE: int = 10_000

# Mapping from python-chess piece type constants to centipawn values.
PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# INF doubles as the mate constant: a side that is mated at distance `ply`
# from the root scores `ply - INF`, so shallower mates are preferred.

INF: int = 20_000_000
DRAW_SCORE: int = 0

# Returned at non-root nodes that repeat an earlier position. Negative rather
# than zero so the engine steers away from repetitions instead of accepting them.
REPETITION_SCORE: int = -2_000

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

# Hard ceiling for iterative deepening. The clock always stops the search
# well before this.
MAX_DEPTH: int = 100

# Stop once elapsed * SAFETY_FACTOR exceeds the time left on the clock, i.e.
# spend roughly 1/300 of the remaining clock on a single move.
SAFETY_FACTOR: int = 300

# Quiescence delta pruning: a stand-pat score this far below alpha is
# assumed to be beyond the reach of any single capture.
DELTA_MARGIN: int = 1_000

# Late move reductions: reduce by LMR_REDUCTION plies once depth >= LMR_MIN_DEPTH
# and at least LMR_MIN_MOVE_INDEX moves have already been tried.
LMR_MIN_DEPTH: int = 3
LMR_MIN_MOVE_INDEX: int = 3
LMR_REDUCTION: int = 1

# ---------------------------------------------------------------------------
# Move ordering
# ---------------------------------------------------------------------------

# The TT move is searched first. Its score replaces (never adds to) the
# capture/history score and must stay above any history value a long game
# can accumulate.
TT_MOVE_SCORE: int = 1 << 48

# Base for captures: 10_000 + 10 * victim - attacker, on piece type ordinals.
CAPTURE_BASE_SCORE: int = 10_000
MVV_VICTIM_WEIGHT: int = 10

# ---------------------------------------------------------------------------
# Transposition table
# ---------------------------------------------------------------------------
# Number of slots (a power of two). Each slot is a list cell holding an
# entry or None; 8M slots is ~64 MB of pointers before any entries exist.
TT_SLOTS: int = 1 << 23
