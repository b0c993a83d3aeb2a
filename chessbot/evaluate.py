"""
Static evaluation: material plus a simple centrality term.

The search needs a numeric score for every leaf so that it can compare
positions. This evaluator is small: it counts material and
rewards pieces for standing near the centre of the board.

Centrality for a square on rank r, file f (both 0-7, a1 = 0) is

    -|7 - r - f| - |r - f|

which is -1 on d4/e4/d5/e5 and falls off towards the corners. The term is
symmetric under a vertical flip of the board, so both sides can share it
without mirroring. It is weighted by (6 - piece_type): pawns get the most
positional weight, the king none.

The score is returned from the perspective of the side to move (the negamax
convention): positive means the mover is ahead.
"""

import chess

from chessbot.constants import PIECE_VALUES


def centrality(square: chess.Square) -> int:
    """Return the centrality of a square (0 is never reached; -1 is best)."""
    rank = chess.square_rank(square)
    file = chess.square_file(square)
    return -abs(7 - rank - file) - abs(rank - file)


def evaluate(board: chess.Board) -> int:
    """
    Centipawn evaluation from the side-to-move's perspective.

    Args:
        board: The current board position. Not modified.

    Returns:
        White-minus-black material and centrality, negated when Black is to
        move.

    Example:
        >>> import chess
        >>> evaluate(chess.Board())
        0
    """
    score = 0

    for color in (chess.WHITE, chess.BLACK):
        for piece_type in chess.PIECE_TYPES:
            for square in chess.scan_forward(board.pieces_mask(piece_type, color)):
                score += PIECE_VALUES[piece_type]
                score += centrality(square) * (6 - piece_type)
        # After White: -white. After Black: white - black.
        score = -score

    return score if board.turn == chess.WHITE else -score
