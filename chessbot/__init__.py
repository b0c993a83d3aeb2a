"""
Chess move chooser.

This package picks one move per turn under a wall-clock budget using
iterative-deepening negamax with alpha-beta pruning, a transposition table,
quiescence search, and a material + centrality evaluation. Board
representation and move generation come from python-chess.

Modules:
    constants     — Piece values, special scores, search parameters
    evaluate      — Static evaluation (material + centrality)
    transposition — Always-replace transposition table
    move_ordering — TT move, MVV-LVA captures, history heuristic
    timer         — Turn clock polled by the search
    search        — Negamax search and iterative deepening driver
"""

from chessbot.search import SearchResult, SearchSession, choose_move, search
from chessbot.timer import Timer

__all__ = ["SearchResult", "SearchSession", "Timer", "choose_move", "search"]
