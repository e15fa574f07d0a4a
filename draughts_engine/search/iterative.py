"""
Iterative deepening driver.

Runs the alpha-beta search at depth 1, 2, ... up to a maximum. Every
completed depth replaces the current answer; a cancelled depth is thrown
away entirely. The engine can therefore be stopped at any time and still
answer with the result of the last completed depth.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Optional

from draughts_engine.board.draughts_board import DraughtsBoard, Move
from draughts_engine.evaluation.base import INFINITY
from draughts_engine.search.alphabeta import CANCELLED, AlphaBetaSearch, SearchNode

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    Outcome of an iterative deepening search.

    Attributes:
        best_move: Move to play (None only if the position has no moves)
        score: Score of best_move from the searching side's perspective
        depth: Deepest completed iteration (0 if none completed)
        nodes: Search calls made
        elapsed: Wall-clock seconds spent
        cancelled: True if a stop request or the deadline ended the search
    """

    best_move: Optional[Move]
    score: int
    depth: int
    nodes: int = 0
    elapsed: float = 0.0
    cancelled: bool = False


def iterative_deepening(
    search: AlphaBetaSearch,
    board: DraughtsBoard,
    max_depth: int,
    time_limit: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """
    Find the best move for the side to move by iterative deepening.

    Args:
        search: Search state (evaluator, transposition table, stop flag)
        board: Root position, restored before returning
        max_depth: Deepest iteration to run
        time_limit: Seconds before the search stops itself (None = no limit)
        rng: Source for the fallback move when no iteration completes

    Returns:
        SearchResult of the last completed iteration
    """
    start_time = time.monotonic()
    search.perspective = board.turn
    search.nodes = 0

    legal_moves = board.legal_moves
    if not legal_moves:
        logger.debug("No legal moves in %s", board.fen())
        return SearchResult(None, search.evaluator.evaluate(board, search.perspective), 0)

    if len(legal_moves) == 1:
        move = legal_moves[0]
        board.push(move)
        score = search.evaluator.evaluate(board, search.perspective)
        board.pop()
        logger.debug("Forced move %s, score %d", move, score)
        return SearchResult(move, score, 0, elapsed=time.monotonic() - start_time)

    search.deadline = start_time + time_limit if time_limit is not None else None

    best_move: Optional[Move] = None
    best_score = 0
    completed_depth = 0
    cancelled = False

    try:
        for depth in range(1, max_depth + 1):
            root = SearchNode(board)
            score = search.search(root, -INFINITY, INFINITY, depth)

            if score is CANCELLED:
                # Discard the unfinished iteration
                cancelled = True
                logger.debug("Search stopped during depth %d", depth)
                break

            completed_depth = depth
            best_score = score
            if root.best_move is not None:
                best_move = root.best_move

            logger.info(
                f"depth {depth} score {score} move {best_move} nodes {search.nodes} "
                f"time {time.monotonic() - start_time:.3f}s"
            )
    finally:
        search.deadline = None

    if best_move is not None and best_move not in legal_moves:
        logger.warning(f"Discarding cached move {best_move}: not legal in {board.fen()}")
        best_move = None

    if best_move is None:
        best_move = (rng or random).choice(legal_moves)
        logger.debug(f"No completed search result, playing {best_move}")

    return SearchResult(
        best_move=best_move,
        score=best_score,
        depth=completed_depth,
        nodes=search.nodes,
        elapsed=time.monotonic() - start_time,
        cancelled=cancelled,
    )
