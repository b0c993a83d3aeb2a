"""
Search entry point: iterative-deepening negamax with alpha-beta pruning,
a transposition table, quiescence search, move ordering, late move
reductions, and check extensions.

The stable public interface is choose_move() (one move per turn) and search()
(the same, plus score / depth / node count). Everything below them is an
implementation detail.

Search features:

1. Principal variation search: the first (best-ordered) move is searched with
   the full (alpha, beta) window; later moves get a null window
   (alpha, alpha + 1) and are re-searched with the full window only when they
   surprise us by landing strictly inside it.

2. Late move reductions: from depth 3, the fourth and later moves are first
   searched one ply shallower. A reduced search that beats alpha is repeated
   at full depth before its score is trusted.

3. Check extensions: a node whose side to move is in check is searched one
   ply deeper. The extension is not capped, so long checking sequences can
   carry the search well past the nominal depth.

4. Quiescence search: nodes at depth <= 0 only search captures, with the
   static evaluation as a stand-pat lower bound, so leaves are not scored in
   the middle of an exchange. Whether a node is a quiescence node is decided
   once on entry; a check extension does not turn it back into a full node.

5. Transposition table and history heuristic: both live in a SearchSession
   that outlives a single move. The table is probed on entry and written on
   exit; the history table is bumped by depth**2 whenever a quiet move causes
   a beta cutoff.

Time management:
    The timer is polled on entry to every node. Once
    elapsed * SAFETY_FACTOR exceeds the remaining clock, the node sets
    state.aborted and returns 0. Every later node sees the flag and unwinds
    immediately. The iterative deepening driver throws away the root result
    of an aborted iteration and returns the move from the last iteration that
    finished.

Threading model:
    None. One search runs at a time on the caller's thread, and the session's
    tables are mutated in place without locks.
"""

import logging
from dataclasses import dataclass, field

import chess
import chess.polyglot

from chessbot.constants import (
    DELTA_MARGIN,
    DRAW_SCORE,
    INF,
    LMR_MIN_DEPTH,
    LMR_MIN_MOVE_INDEX,
    LMR_REDUCTION,
    MAX_DEPTH,
    REPETITION_SCORE,
    SAFETY_FACTOR,
    TT_SLOTS,
)
from chessbot.evaluate import evaluate
from chessbot.move_ordering import HistoryTable, order_moves
from chessbot.timer import Timer
from chessbot.transposition import Bound, TranspositionTable

_log = logging.getLogger(__name__)


@dataclass
class SearchSession:
    """
    Search memory shared by every turn of one game.

    Create one session per game and pass it to each choose_move() call. The
    transposition table and the history table are carried from
    turn to turn: results from the previous move's search are often still
    valid, and old entries are simply overwritten as new positions hash to
    their slots.

    Attributes:
        tt:      Always-replace transposition table.
        history: Quiet-move cutoff history. Grows for the whole game.
    """

    tt: TranspositionTable = field(default_factory=TranspositionTable)
    history: HistoryTable = field(default_factory=HistoryTable)

    @classmethod
    def with_slots(cls, num_slots: int = TT_SLOTS) -> "SearchSession":
        return cls(tt=TranspositionTable(num_slots))

    def clear(self) -> None:
        """Forget everything (e.g. at the start of a new game)."""
        self.tt.clear()
        self.history.clear()


@dataclass
class SearchState:
    """
    Mutable state for one choose_move() call.

    Attributes:
        session:    Transposition and history tables.
        timer:      Turn clock polled at every node.
        aborted:    Set once the clock runs out. Nodes return 0 while it is
                    set and skip their transposition table write.
        node_count: Nodes visited in the current iteration.
        max_ply:    Deepest ply reached in the current iteration
                    (extensions and quiescence included).
        best_move:  Best root move found so far in the current iteration.
        best_score: Score of best_move from the side-to-move's perspective.
    """

    session: SearchSession
    timer: Timer
    aborted: bool = False
    node_count: int = 0
    max_ply: int = 0
    best_move: chess.Move | None = None
    best_score: int = -INF


@dataclass
class SearchResult:
    """
    Outcome of an iterative deepening search.

    Attributes:
        move:  Best move of the last completed iteration (None only when the
               side to move has no legal moves).
        score: Its score in centipawns from the side-to-move's perspective.
               Mate scores are close to +/-INF.
        depth: Deepest iteration that completed.
        nodes: Nodes visited over all iterations.
    """

    move: chess.Move | None
    score: int
    depth: int
    nodes: int


def negamax(
    board: chess.Board,
    depth: int,
    alpha: int,
    beta: int,
    ply: int,
    state: SearchState,
) -> int:
    """
    Fail-soft alpha-beta search with quiescence at the frontier.

    Args:
        board: Current position. Modified in place via push/pop and always
               restored before returning.
        depth: Remaining depth in plies. At depth <= 0 only captures are
               searched.
        alpha: Lower bound of the search window.
        beta:  Upper bound of the search window.
        ply:   Distance from the root. At ply 0 the best move is recorded in
               state.best_move.
        state: Per-search state (clock, counters, session tables).

    Returns:
        Score from the perspective of the side to move. 0 if the search was
        aborted, REPETITION_SCORE for a repeated position below the root,
        ply - INF when checkmated.
    """
    state.node_count += 1
    state.max_ply = max(state.max_ply, ply)

    # A repeat of an earlier position is scored below a draw so the engine
    # steers away from it. The root is exempt: it must still pick a move.
    if ply > 0 and board.is_repetition(2):
        return REPETITION_SCORE

    # Out of time: flag the abort so every other node unwinds at once and the
    # driver knows to discard this iteration.
    if state.aborted or state.timer.expired(SAFETY_FACTOR):
        state.aborted = True
        return 0

    tt = state.session.tt
    history = state.session.history
    key = chess.polyglot.zobrist_hash(board)
    entry = tt.probe(key)

    # TT cutoff: a result searched at least this deep whose bound settles the
    # window. Never at the root, which has to produce a move.
    if ply > 0 and entry is not None and entry.depth >= depth and (
        entry.bound == Bound.EXACT
        or (entry.bound == Bound.LOWER and entry.score >= beta)
        or (entry.bound == Bound.UPPER and entry.score <= alpha)
    ):
        return entry.score

    quiescent = depth <= 0
    in_check = board.is_check()
    best_score = -INF
    best_move = None

    if quiescent:
        # Stand pat: the side to move may decline every capture.
        best_score = evaluate(board)
        if best_score >= beta:
            return best_score - ply if best_score > 0 else best_score + ply
        # Delta pruning: no single capture can close a gap this large.
        if best_score < alpha - DELTA_MARGIN:
            return alpha
        if best_score > alpha:
            alpha = best_score

    # Quiescence only looks at captures. Root quiet moves keep generation
    # order; history only reorders interior nodes.
    moves = board.generate_legal_captures() if quiescent else board.generate_legal_moves()
    tt_move = entry.best_move if entry is not None else None
    ordered = order_moves(board, moves, tt_move, history if ply > 0 else None)

    # Check extension. The quiescent flag above is not re-derived.
    if in_check:
        depth += 1

    original_alpha = alpha
    for i, move in enumerate(ordered):
        board.push(move)
        # Swap and negate the window for the child (negamax convention).
        if i == 0:
            score = -negamax(board, depth - 1, -beta, -alpha, ply + 1, state)
        else:
            # Later moves: null window, reduced by one ply once they are late
            # enough and nobody is in check.
            reduction = 0
            if depth >= LMR_MIN_DEPTH and i >= LMR_MIN_MOVE_INDEX and not in_check:
                reduction = LMR_REDUCTION
            score = -negamax(board, depth - reduction - 1, -alpha - 1, -alpha, ply + 1, state)
            # A reduced search that beats alpha is not trusted until it holds
            # at full depth.
            if score > alpha and reduction > 0:
                score = -negamax(board, depth - 1, -alpha - 1, -alpha, ply + 1, state)
            # Inside the window: the null window only proved a bound, so
            # re-search with the full window for the real score.
            if alpha < score < beta:
                score = -negamax(board, depth - 1, -beta, -alpha, ply + 1, state)
        board.pop()

        if score > best_score:
            best_score = score
            best_move = move
            if ply == 0:
                state.best_move = move
                state.best_score = score

            if score > alpha:
                alpha = score

            # Beta cutoff: the opponent will avoid this line. Only quiet moves
            # earn history; captures are already ordered by MVV-LVA.
            if alpha >= beta:
                if not board.is_capture(move):
                    history.bump(move.from_square, move.to_square, depth * depth)
                break

    # No legal moves: checkmate (mated sooner is worse) or stalemate.
    if not quiescent and not ordered:
        return ply - INF if in_check else DRAW_SCORE

    # Store unless aborted; scores of an aborted subtree are placeholders.
    # The slot is overwritten whatever it held before.
    if not state.aborted:
        if best_score >= beta:
            bound = Bound.LOWER
        elif best_score > original_alpha:
            bound = Bound.EXACT
        else:
            bound = Bound.UPPER
        tt.store(key, best_move, depth, best_score, bound)

    return best_score


def search(
    board: chess.Board,
    timer: Timer | float,
    session: SearchSession | None = None,
    max_depth: int = MAX_DEPTH,
) -> SearchResult:
    """
    Iterative deepening: search depth 1, 2, 3, ... until the clock says stop.

    After every completed iteration the driver stops if
    elapsed * SAFETY_FACTOR > remaining. The same test inside the tree
    aborts an iteration that runs long; its partial result is discarded in
    favour of the previous iteration's move.

    Args:
        board:     Position to move from. Restored before returning.
        timer:     Turn timer, or the milliseconds left on the clock.
        session:   Tables carried across turns. A fresh session is created
                   when omitted, which throws away all cross-turn learning.
        max_depth: Deepest iteration to run.

    Returns:
        SearchResult for the last completed iteration. If not even depth 1
        completed, the move is the partial root result or, failing that, the
        first legal move. The move is None only when there are no legal moves.
    """
    # Allocate the session before the clock starts: a default session builds
    # a full-size transposition table.
    if session is None:
        session = SearchSession()
    if not isinstance(timer, Timer):
        timer = Timer(timer)

    legal_moves = list(board.legal_moves)
    if not legal_moves:
        return SearchResult(move=None, score=0, depth=0, nodes=0)

    state = SearchState(session=session, timer=timer)
    completed_depth = 0
    total_nodes = 0

    for depth in range(1, max_depth + 1):
        prev_best_move = state.best_move
        prev_best_score = state.best_score
        state.node_count = 0
        state.max_ply = 0

        negamax(board, depth, -INF, INF, 0, state)
        total_nodes += state.node_count

        if state.aborted:
            if completed_depth > 0:
                state.best_move = prev_best_move
                state.best_score = prev_best_score
            _log.debug("depth %d aborted after %d nodes", depth, state.node_count)
            break

        completed_depth = depth
        elapsed_ms = timer.elapsed_ms
        _log.info(
            "depth %d; score %d; time %d; pv %s; nodes %d; nps %d; max ply %d",
            depth,
            state.best_score,
            elapsed_ms,
            state.best_move.uci() if state.best_move is not None else "(none)",
            state.node_count,
            state.node_count * 1000 // (elapsed_ms + 1),
            state.max_ply,
        )

        if timer.expired(SAFETY_FACTOR):
            break

    move = state.best_move if state.best_move is not None else legal_moves[0]
    score = state.best_score if state.best_move is not None else 0
    return SearchResult(move=move, score=score, depth=completed_depth, nodes=total_nodes)


def choose_move(
    board: chess.Board,
    timer: Timer | float,
    session: SearchSession | None = None,
    max_depth: int = MAX_DEPTH,
) -> chess.Move | None:
    """
    Return the move to play this turn.

    Thin wrapper around search() for callers that only need the move. Pass
    the same session every turn of a game.
    """
    return search(board, timer, session, max_depth).move
