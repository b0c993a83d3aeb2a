import chess
import pytest

from chessbot.evaluate import centrality, evaluate


def test_start_position_is_balanced() -> None:
    assert evaluate(chess.Board()) == 0


def test_score_is_from_side_to_move() -> None:
    board = chess.Board()
    board.push_uci("e2e4")
    # Pawn e2 -> e4 improves centrality from -5 to -1 at weight 5.
    assert evaluate(board) == -20

    board.push_uci("e7e5")
    assert evaluate(board) == 0


def test_missing_queen_counts_material_and_centrality() -> None:
    board = chess.Board("rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
    # Queen value minus its d8 centrality (-7) at weight 1.
    assert evaluate(board) == 893

    board.turn = chess.BLACK
    assert evaluate(board) == -893


@pytest.mark.parametrize(
    "square,expected",
    [
        (chess.D4, -1),
        (chess.E4, -1),
        (chess.D5, -1),
        (chess.E5, -1),
        (chess.A1, -7),
        (chess.H1, -7),
        (chess.A8, -7),
        (chess.H8, -7),
        (chess.E2, -5),
    ],
)
def test_centrality(square: chess.Square, expected: int) -> None:
    assert centrality(square) == expected


def test_king_gets_no_positional_weight() -> None:
    corner = chess.Board("k7/8/8/8/8/8/8/K7 w - - 0 1")
    centre = chess.Board("k7/8/8/8/3K4/8/8/8 w - - 0 1")
    assert evaluate(corner) == evaluate(centre) == 0


def test_evaluate_does_not_modify_board() -> None:
    board = chess.Board("r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4")
    fen_before = board.fen()
    evaluate(board)
    assert board.fen() == fen_before
