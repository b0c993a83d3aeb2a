"""
Move ordering: TT move first, then MVV-LVA captures, then quiet moves by
history score.

Alpha-beta prunes best when the best move is searched first. Each move gets a
priority score from exactly one of three branches (they never add up):

    TT move   -> TT_MOVE_SCORE
    capture   -> 10_000 + 10 * victim - attacker
    quiet     -> history score for (from_square, to_square)

MVV-LVA (Most Valuable Victim - Least Valuable Aggressor) is computed on the
python-chess piece type ordinals (pawn = 1 ... king = 6), so PxQ outranks QxP
and every capture of a bigger piece outranks every capture of a smaller one.

The history table records which quiet moves caused beta cutoffs. It is keyed
by (from, to) square only, lives for the whole game, and only ever grows.

The root is ordered without history (history=None): behind the TT move and
the captures, root quiet moves keep generation order, so equal-scoring root
moves resolve the same way on every iteration.
"""

from typing import Iterable

import chess

from chessbot.constants import CAPTURE_BASE_SCORE, MVV_VICTIM_WEIGHT, TT_MOVE_SCORE


class HistoryTable:
    """64x64 table of cutoff counts for quiet moves."""

    def __init__(self) -> None:
        self._table: list[list[int]] = [[0] * 64 for _ in range(64)]

    def score(self, from_square: chess.Square, to_square: chess.Square) -> int:
        return self._table[from_square][to_square]

    def bump(self, from_square: chess.Square, to_square: chess.Square, amount: int) -> None:
        """Add `amount` (non-negative) to a move's history score."""
        if amount < 0:
            raise ValueError(f"history scores only increase, got amount={amount}")
        self._table[from_square][to_square] += amount

    def clear(self) -> None:
        self._table = [[0] * 64 for _ in range(64)]

    def nonzero(self) -> dict[tuple[chess.Square, chess.Square], int]:
        """Snapshot of all non-zero entries, keyed by (from, to)."""
        return {
            (from_square, to_square): value
            for from_square, row in enumerate(self._table)
            for to_square, value in enumerate(row)
            if value
        }


def captured_piece_type(board: chess.Board, move: chess.Move) -> chess.PieceType:
    # En passant: the captured pawn is not on move.to_square.
    if board.is_en_passant(move):
        return chess.PAWN
    return board.piece_type_at(move.to_square)


def score_move(
    board: chess.Board,
    move: chess.Move,
    tt_move: chess.Move | None,
    history: HistoryTable | None,
) -> int:
    """
    Priority of a move for search ordering (higher is searched earlier).

    Args:
        board:   Position the move is played from. Not modified.
        move:    A legal move in that position.
        tt_move: Best move stored in the transposition table for this exact
                 position, or None.
        history: Quiet-move cutoff history, or None to leave quiet moves
                 at 0 (root ordering).
    """
    if move == tt_move:
        return TT_MOVE_SCORE
    if board.is_capture(move):
        victim = captured_piece_type(board, move)
        attacker = board.piece_type_at(move.from_square)
        return CAPTURE_BASE_SCORE + MVV_VICTIM_WEIGHT * victim - attacker
    if history is None:
        return 0
    return history.score(move.from_square, move.to_square)


def order_moves(
    board: chess.Board,
    moves: Iterable[chess.Move],
    tt_move: chess.Move | None,
    history: HistoryTable | None,
) -> list[chess.Move]:
    """
    Sort moves from highest to lowest priority.

    The sort is stable, so equally scored moves keep their generation order.
    tt_move can only match a move that is actually in `moves`, which means a
    stale suggestion from a colliding hash entry is never searched unless it
    is legal here.
    """
    return sorted(
        moves,
        key=lambda move: score_move(board, move, tt_move, history),
        reverse=True,
    )
