"""
Player Facade

This module exposes the engine to whatever harness runs the game: a
tournament tool, a self-play loop, or the command line. A harness only
needs three operations:

    - request_move(board): Best move for the side to move (None if none)
    - last_score(): Score that came with the last returned move
    - request_stop(): Ask the running search to stop (thread-safe)

Threading:
    request_move blocks the calling thread until the search ends.
    request_stop may be called from any other thread; it sets a
    threading.Event that the search checks once per node. The request is
    consumed by the search it stops.
"""

import logging
import random
from typing import Optional

from draughts_engine.board.draughts_board import COLOR_NAMES, DraughtsBoard, Move
from draughts_engine.config import EngineConfig
from draughts_engine.evaluation import Evaluator, create_evaluator
from draughts_engine.search.alphabeta import AlphaBetaSearch
from draughts_engine.search.iterative import SearchResult, iterative_deepening
from draughts_engine.search.transposition import TranspositionTable, ZobristHasher

logger = logging.getLogger(__name__)


class DraughtsEngine:
    """
    Search-based draughts player.

    Each engine owns its transposition table, Zobrist table and stop flag,
    so two engines in one process (self-play) never interfere.

    Attributes:
        config: Engine configuration
        evaluator: Position evaluation function
        transposition_table: Cache of search results, kept across moves
        search: Alpha-beta search state
        last_result: SearchResult of the last request_move call
        side: Color the engine last searched for (None before the first move)
    """

    def __init__(self, config: Optional[EngineConfig] = None, evaluator: Optional[Evaluator] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (default: EngineConfig())
            evaluator: Evaluator overriding config.evaluator
        """
        self.config = config if config is not None else EngineConfig()
        self.evaluator = (
            evaluator
            if evaluator is not None
            else create_evaluator(self.config.evaluator, self.config.weights)
        )
        self.transposition_table = TranspositionTable(
            max_size=self.config.tt_max_entries, verify=self.config.tt_verify
        )
        self.search = AlphaBetaSearch(
            self.evaluator,
            transposition_table=self.transposition_table,
            hasher=ZobristHasher(self.config.seed),
        )
        self.rng = random.Random(self.config.seed)
        self.last_result: Optional[SearchResult] = None
        self.side: Optional[bool] = None
        self.name = f"DraughtsEngine(depth={self.config.max_depth})"

    def request_move(self, board: DraughtsBoard) -> Optional[Move]:
        """
        Search the position and return the move to play.

        The search runs on a copy of board, so the caller's position is
        never touched.

        Args:
            board: Position with the engine's side to move

        Returns:
            A legal move, or None if the position has no legal moves
        """
        logger.info(
            f"Search started: {COLOR_NAMES[board.turn]} to move, "
            f"depth={self.config.max_depth}, time_limit={self.config.time_limit}, "
            f"position={board.fen()}"
        )

        # Cached scores are relative to the side that searched them
        if self.side is not None and board.turn != self.side:
            logger.info(f"Now playing {COLOR_NAMES[board.turn]}: clearing transposition table")
            self.transposition_table.clear()
        self.side = board.turn

        result = iterative_deepening(
            self.search,
            board.copy(),
            self.config.max_depth,
            time_limit=self.config.time_limit,
            rng=self.rng,
        )
        self.last_result = result

        logger.info(
            f"Search {'stopped' if result.cancelled else 'complete'}: "
            f"best_move={result.best_move}, score={result.score}, depth={result.depth}, "
            f"nodes={result.nodes}, time={int(result.elapsed * 1000)}ms, "
            f"{self.transposition_table}"
        )
        return result.best_move

    def last_score(self) -> int:
        """Score of the last returned move, from the engine's perspective."""
        return self.last_result.score if self.last_result is not None else 0

    def request_stop(self):
        """Ask the running (or next) search to stop as soon as possible."""
        logger.debug("Stop requested")
        self.search.stop_event.set()

    def new_game(self):
        """Forget everything learned in the previous game."""
        logger.info("New game: clearing transposition table")
        self.transposition_table.clear()
        self.search.stop_event.clear()
        self.rng = random.Random(self.config.seed)
        self.last_result = None
        self.side = None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"DraughtsEngine({self.config!r}, evaluator={self.evaluator!r})"


class RandomPlayer:
    """
    Baseline player that picks a uniformly random legal move.

    Useful as a sparring partner and as a sanity check for the engine.
    """

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self.name = "RandomPlayer"

    def request_move(self, board: DraughtsBoard) -> Optional[Move]:
        moves = board.legal_moves
        if not moves:
            return None
        return self.rng.choice(moves)

    def last_score(self) -> int:
        return 0

    def request_stop(self):
        pass

    def new_game(self):
        pass

    def __str__(self) -> str:
        return self.name
