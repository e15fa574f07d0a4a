"""
Alpha-Beta Search

This module implements the core search algorithm of the engine: two mutually
recursive procedures, search_max for the side the engine plays and
search_min for the opponent, with alpha-beta pruning, a transposition table
and evaluation-based move ordering.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Optimization that prunes branches that can't affect result
    - Transposition Table: Reuse results of positions already searched
    - Move Ordering: Search likely best moves first to maximize pruning

Cancellation:
    A stop request is checked once at the entry of every search call. When
    it fires, the call returns CANCELLED instead of a score. Every caller
    checks the result of its child, undoes its move and passes CANCELLED up,
    so the whole call chain unwinds with the board restored.

Algorithm Complexity:
    - Minimax: O(b^d) where b=branching factor (~10 in draughts), d=depth
    - Alpha-Beta: O(b^(d/2)) with perfect move ordering

References:
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
    - Transposition Table: https://www.chessprogramming.org/Transposition_Table
"""

import threading
import time
from typing import Optional, Union

from draughts_engine.board.draughts_board import WHITE, DraughtsBoard, Move
from draughts_engine.evaluation.base import Evaluator
from draughts_engine.search.ordering import order_moves
from draughts_engine.search.transposition import (
    NodeType,
    TranspositionTable,
    TTEntry,
    ZobristHasher,
)


class _Cancelled:
    """Result of a search call that observed a stop request."""

    def __repr__(self) -> str:
        return "CANCELLED"


CANCELLED = _Cancelled()

SearchValue = Union[int, _Cancelled]


class SearchNode:
    """
    A position in the search tree plus the best move found there.

    Created fresh for every search call and discarded on return.
    """

    def __init__(self, board: DraughtsBoard):
        self.board = board
        self.best_move: Optional[Move] = None


def entry_is_usable(entry: TTEntry, alpha: int, beta: int) -> bool:
    """
    Check whether a cached result settles a node for the window (alpha, beta).

    Exact scores always do. A lower bound only does when it already fails
    high, an upper bound only when it already fails low.
    """
    if entry.node_type is NodeType.EXACT:
        return True
    if entry.node_type is NodeType.LOWER_BOUND:
        return entry.value >= beta
    return entry.value <= alpha


class AlphaBetaSearch:
    """
    Alpha-beta search state for one engine.

    The stop flag, the deadline and the transposition table belong to this
    object; two engines never share them.

    Attributes:
        evaluator: Static evaluation function
        transposition_table: Cache of search results
        hasher: Zobrist hasher for positions
        stop_event: Stop request flag, cleared when observed
        perspective: Color of the maximizing side (the engine)
        deadline: time.monotonic() value at which the search stops itself
        nodes: Search calls made since the counter was reset
    """

    def __init__(
        self,
        evaluator: Evaluator,
        transposition_table: Optional[TranspositionTable] = None,
        hasher: Optional[ZobristHasher] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.evaluator = evaluator
        self.transposition_table = (
            transposition_table if transposition_table is not None else TranspositionTable()
        )
        self.hasher = hasher if hasher is not None else ZobristHasher()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self.perspective = WHITE
        self.deadline: Optional[float] = None
        self.nodes = 0

    def stop_requested(self) -> bool:
        """
        Check for a stop request or an expired deadline.

        A stop request is consumed by the check, so it cancels exactly one
        search.
        """
        if self.stop_event.is_set():
            self.stop_event.clear()
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def search(self, node: SearchNode, alpha: int, beta: int, depth: int) -> SearchValue:
        """Search from the root; the side the engine plays maximizes."""
        return self.search_max(node, alpha, beta, depth)

    def _probe(self, board: DraughtsBoard, depth: int):
        key = self.hasher.hash(board)
        occupancy = board.occupancy() if self.transposition_table.verify else None
        entry = self.transposition_table.lookup(key, depth, occupancy, board.turn)
        return key, occupancy, entry

    def search_max(self, node: SearchNode, alpha: int, beta: int, depth: int) -> SearchValue:
        """
        Search a node where the engine's side is to move.

        Args:
            node: Node to search; node.best_move receives the best move
            alpha: Best score the maximizer is already assured of
            beta: Best score the minimizer is already assured of
            depth: Remaining depth

        Returns:
            Score of the node, or CANCELLED
        """
        if self.stop_requested():
            return CANCELLED
        self.nodes += 1

        board = node.board
        if depth == 0:
            return self.evaluator.evaluate(board, self.perspective)

        key, occupancy, entry = self._probe(board, depth)
        if entry is not None and entry_is_usable(entry, alpha, beta):
            node.best_move = entry.best_move
            return entry.value

        moves = order_moves(board, board.legal_moves, self.evaluator, self.perspective, descending=True)
        best_move = None

        for move in moves:
            board.push(move)
            value = self.search_min(SearchNode(board), alpha, beta, depth - 1)
            board.pop()

            if value is CANCELLED:
                return CANCELLED

            if value > alpha:
                alpha = value
                best_move = move

            # Beta cutoff: the minimizer will not allow this node
            if alpha >= beta:
                self.transposition_table.store(
                    key, depth, beta, NodeType.LOWER_BOUND, best_move, occupancy, board.turn
                )
                return beta

        node.best_move = best_move
        # No move beat alpha: the score is only an upper bound
        node_type = NodeType.EXACT if best_move is not None else NodeType.UPPER_BOUND
        self.transposition_table.store(key, depth, alpha, node_type, best_move, occupancy, board.turn)
        return alpha

    def search_min(self, node: SearchNode, alpha: int, beta: int, depth: int) -> SearchValue:
        """
        Search a node where the opponent is to move.

        Mirror image of search_max: lowers beta and cuts off when beta
        drops to alpha.
        """
        if self.stop_requested():
            return CANCELLED
        self.nodes += 1

        board = node.board
        if depth == 0:
            return self.evaluator.evaluate(board, self.perspective)

        key, occupancy, entry = self._probe(board, depth)
        if entry is not None and entry_is_usable(entry, alpha, beta):
            node.best_move = entry.best_move
            return entry.value

        moves = order_moves(board, board.legal_moves, self.evaluator, self.perspective, descending=False)
        best_move = None

        for move in moves:
            board.push(move)
            value = self.search_max(SearchNode(board), alpha, beta, depth - 1)
            board.pop()

            if value is CANCELLED:
                return CANCELLED

            if value < beta:
                beta = value
                best_move = move

            # Alpha cutoff: the maximizer will not allow this node
            if beta <= alpha:
                self.transposition_table.store(
                    key, depth, alpha, NodeType.UPPER_BOUND, best_move, occupancy, board.turn
                )
                return alpha

        node.best_move = best_move
        # No move beat beta: the score is only a lower bound
        node_type = NodeType.EXACT if best_move is not None else NodeType.LOWER_BOUND
        self.transposition_table.store(key, depth, beta, node_type, best_move, occupancy, board.turn)
        return beta
