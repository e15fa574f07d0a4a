"""
Draughts Engine Testing and Benchmarking

This module provides a small suite of draughts positions with known best
moves and helpers to run the engine over them.

Test Suite:
    Each position has one or more acceptable moves in PDN notation
    ("32-28", "28x19x10"). The positions cover the capture rules (forced
    capture, majority rule) and short tactics that any search of depth 3
    or more must solve.

Evaluation Metrics:
    - Correct Moves: Number of positions where the engine found a best move
    - Time per Position: Average thinking time
    - Nodes Searched: Total search calls
    - Depth Reached: Deepest completed iteration
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from draughts_engine.board.draughts_board import DraughtsBoard
from draughts_engine.config import EngineConfig
from draughts_engine.engine import DraughtsEngine
from draughts_engine.evaluation.base import Evaluator

logger = logging.getLogger(__name__)


@dataclass
class TestPosition:
    """
    A test position with expected best move(s).

    Attributes:
        fen: Board position in PDN FEN notation
        best_moves: List of acceptable best moves (PDN format)
        description: Human-readable description of the position
        id: Position identifier (e.g., "DR.01")
    """
    __test__ = False

    fen: str
    best_moves: List[str]
    description: str = ""
    id: str = ""


@dataclass
class TestResult:
    """
    Result of testing a single position.

    Attributes:
        position: The test position
        found_move: Move the engine found (PDN format)
        score: Score of the found move
        correct: Whether the engine found a best move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of search calls
        depth: Deepest completed iteration
    """
    __test__ = False

    position: TestPosition
    found_move: str
    score: int
    correct: bool
    time_taken: float
    nodes_searched: int = 0
    depth: int = 0


# ============================================================================
# Draughts Test Suite
# ============================================================================

DRAUGHTS_POSITIONS = [
    TestPosition(
        id="DR.01",
        fen="W:W28:B23",
        best_moves=["28x19"],
        description="White must capture"
    ),
    TestPosition(
        id="DR.02",
        fen="W:W32:B17,27,28",
        best_moves=["32x21x12"],
        description="Majority rule: the double capture beats the single one"
    ),
    TestPosition(
        id="DR.03",
        fen="W:W38,49:B28",
        best_moves=["49-43", "49-44"],
        description="White waits; either advance of 38 hangs a man"
    ),
    TestPosition(
        id="DR.04",
        fen="B:W23:B2,13",
        best_moves=["2-8", "2-7"],
        description="Black waits; either advance of 13 hangs a man"
    ),
]


def evaluate_position(
    position: TestPosition,
    engine: DraughtsEngine,
    verbose: bool = False,
) -> TestResult:
    """
    Evaluate a single test position.

    Args:
        position: Test position to evaluate
        engine: Engine to ask for a move
        verbose: If True, print detailed output

    Returns:
        TestResult with engine's move and whether it was correct

    Raises:
        ValueError: If the position's FEN is invalid
    """
    board = DraughtsBoard(position.fen)

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(f"FEN: {position.fen}")
        print(f"Expected moves: {position.best_moves}")

    start_time = time.time()
    best_move = engine.request_move(board)
    time_taken = time.time() - start_time

    found_move = best_move.pdn() if best_move is not None else ""
    correct = found_move in position.best_moves
    result = engine.last_result

    if verbose:
        print(f"Engine found: {found_move} (score: {engine.last_score()})")
        print(f"Nodes searched: {result.nodes:,}")
        print(f"Depth: {result.depth}")
        print(f"Time: {time_taken:.2f}s")
        print(f"Result: {'✓ CORRECT' if correct else '✗ WRONG'}")

    return TestResult(
        position=position,
        found_move=found_move,
        score=engine.last_score(),
        correct=correct,
        time_taken=time_taken,
        nodes_searched=result.nodes,
        depth=result.depth,
    )


def run_suite(
    config: Optional[EngineConfig] = None,
    positions: Optional[List[TestPosition]] = None,
    evaluator: Optional[Evaluator] = None,
    verbose: bool = False,
    progress: bool = True,
) -> Dict[str, Any]:
    """
    Run the engine over a list of test positions.

    Every position starts from an empty transposition table.

    Args:
        config: Engine configuration (default: EngineConfig())
        positions: Positions to test (default: DRAUGHTS_POSITIONS)
        evaluator: Evaluator overriding config.evaluator
        verbose: If True, print detailed results
        progress: If True, show a progress bar

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of TestResult objects
            - avg_time: Average time per position
            - total_time: Total search time
            - nodes: Total search calls
            - nps: Search calls per second
            - tt_hit_rate: Average table hit rate (percent)
    """
    positions = DRAUGHTS_POSITIONS if positions is None else positions
    engine = DraughtsEngine(config, evaluator)

    if verbose:
        print("=" * 70)
        print(f"DRAUGHTS TEST SUITE ({engine.name})")
        print("=" * 70)

    results = []
    correct_count = 0
    total_time = 0.0
    total_nodes = 0
    hit_rates = []

    for position in tqdm(positions, desc="Positions", unit="pos", disable=not progress or verbose):
        engine.new_game()
        result = evaluate_position(position, engine, verbose=verbose)
        results.append(result)

        if result.correct:
            correct_count += 1
        else:
            logger.debug(f"{position.id}: expected {position.best_moves}, got {result.found_move}")

        total_time += result.time_taken
        total_nodes += result.nodes_searched
        hit_rates.append(engine.transposition_table.get_stats()['hit_rate'])

    avg_time = total_time / len(positions) if positions else 0
    percentage = (correct_count / len(positions) * 100) if positions else 0
    nps = total_nodes / total_time if total_time > 0 else 0
    tt_hit_rate = sum(hit_rates) / len(hit_rates) if hit_rates else 0

    if verbose:
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Score: {correct_count}/{len(positions)} ({percentage:.1f}%)")
        print(f"Average time: {avg_time:.2f}s")
        print(f"Total time: {total_time:.2f}s")
        print(f"Nodes/sec: {nps:,.0f}")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
        'total_time': total_time,
        'nodes': total_nodes,
        'nps': nps,
        'tt_hit_rate': tt_hit_rate,
    }
