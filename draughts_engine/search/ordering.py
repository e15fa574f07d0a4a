"""
Move ordering for alpha-beta search.

Moves are sorted by the static evaluation of the position they lead to, so
the move most likely to cause a cutoff is searched first. Ordering never
changes the search result, only how much of the tree gets pruned.
"""

from typing import List

from draughts_engine.board.draughts_board import DraughtsBoard, Move
from draughts_engine.evaluation.base import Evaluator


def order_moves(
    board: DraughtsBoard,
    moves: List[Move],
    evaluator: Evaluator,
    perspective: bool,
    descending: bool = True,
) -> List[Move]:
    """
    Order moves by one-ply look-ahead evaluation.

    Each move is pushed, the resulting position evaluated for perspective,
    and the move popped again. The sort is stable, so moves with equal
    scores keep their generation order.

    Args:
        board: Current position (restored before returning)
        moves: Legal moves to order
        evaluator: Evaluation function
        perspective: Color the evaluation is relative to
        descending: True for the maximizing side (best first),
                    False for the minimizing side (worst first)

    Returns:
        Sorted list of moves
    """

    def move_score(move: Move) -> int:
        board.push(move)
        score = evaluator.evaluate(board, perspective)
        board.pop()
        return score

    return sorted(moves, key=move_score, reverse=descending)
