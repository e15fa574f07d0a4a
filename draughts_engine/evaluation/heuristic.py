"""
Heuristic Draughts Evaluation

This module implements the multi-factor evaluation used by the engine.
All terms are computed for one color (the side the engine plays) and
added up; only the material term looks at the opponent.

Evaluation Components:
    - Material: man = 1, king = 2, multiplied by a per-square weight,
      own minus opponent
    - Back row: own pieces still on the own back row
    - Protected central squares: squares 16-35 covered by an own piece
    - Runaway men: own men with a free path to promotion
    - Trapped kings: own kings that have no move available (penalty)

The scoring is not zero-sum: evaluating the same position for White and
for Black does not give negated scores.
"""

import numpy as np
from typing import Dict, Optional

from draughts_engine.board.draughts_board import (
    BACK_ROW_SQUARES,
    EMPTY,
    KING_OF,
    MAN_OF,
    PROMOTION_ROW,
    WHITE,
    DraughtsBoard,
    PieceKind,
)
from draughts_engine.board.representation import (
    DIAGONALS,
    RAYS,
    coordinates_to_square,
    occupancy_array,
    square_to_coordinates,
)
from draughts_engine.config import EvalWeights
from draughts_engine.evaluation.base import Evaluator

# fmt: off
# ============================================================================
# Square Weights
# ============================================================================
# Weight of a piece on each square, indexed by square - 1.
# Edge squares and both back rows carry the highest weights.
# ============================================================================

SQUARE_WEIGHTS = np.array([
    5, 5, 5, 5, 5,   # 1-5
    5, 4, 4, 4, 4,   # 6-10
    4, 3, 3, 3, 5,   # 11-15
    5, 3, 2, 2, 4,   # 16-20
    4, 2, 1, 3, 5,   # 21-25
    5, 3, 1, 2, 4,   # 26-30
    4, 2, 2, 3, 5,   # 31-35
    5, 3, 3, 3, 4,   # 36-40
    4, 4, 4, 4, 5,   # 41-45
    5, 5, 5, 5, 5,   # 46-50
], dtype=np.int32)
# fmt: on

# Central band scanned for protected squares
CENTRAL_SQUARES = range(16, 36)

OWN_PIECES = (PieceKind.OWN_MAN, PieceKind.OWN_KING)


class HeuristicEvaluator(Evaluator):
    """
    Multi-factor evaluation: material, back row, protected central squares,
    runaway men and trapped kings.

    Attributes:
        weights: EvalWeights applied to the terms
    """

    def __init__(self, weights: Optional[EvalWeights] = None):
        self.weights = weights if weights is not None else EvalWeights()

    def evaluate(self, board: DraughtsBoard, perspective: bool) -> int:
        """
        Evaluate a position for perspective.

        Args:
            board: Position to evaluate
            perspective: Color the score is relative to

        Returns:
            int: Weighted sum of the evaluation terms
        """
        terms = self.breakdown(board, perspective)
        w = self.weights

        return (
            w.material * terms['material']
            + w.back_row * terms['back_row']
            + w.protected * terms['protected']
            + w.runaway * terms['runaway']
            - w.trapped_king * terms['trapped_kings']
        )

    def breakdown(self, board: DraughtsBoard, perspective: bool) -> Dict[str, int]:
        """
        Compute the unweighted evaluation terms.

        Returns:
            Dictionary with keys material, back_row, protected, runaway,
            trapped_kings
        """
        return {
            'material': self.material(board, perspective),
            'back_row': self.back_row(board, perspective),
            'protected': self.protected_squares(board, perspective),
            'runaway': self.runaway_men(board, perspective),
            'trapped_kings': self.trapped_kings(board, perspective),
        }

    def material(self, board: DraughtsBoard, perspective: bool) -> int:
        """Square-weighted material, own minus opponent."""
        occupancy = occupancy_array(board)
        opponent = not perspective

        values = (
            self.weights.man * (occupancy == MAN_OF[perspective])
            + self.weights.king * (occupancy == KING_OF[perspective])
            - self.weights.man * (occupancy == MAN_OF[opponent])
            - self.weights.king * (occupancy == KING_OF[opponent])
        )
        return int(np.dot(SQUARE_WEIGHTS, values))

    def back_row(self, board: DraughtsBoard, perspective: bool) -> int:
        """Number of own pieces on the own back row."""
        return sum(
            1 for square in BACK_ROW_SQUARES[perspective]
            if board.relative_piece_at(square, perspective) in OWN_PIECES
        )

    def protected_squares(self, board: DraughtsBoard, perspective: bool) -> int:
        """Number of protected squares in the central band."""
        return sum(
            1 for square in CENTRAL_SQUARES
            if self.is_square_protected(board, square, perspective)
        )

    def is_square_protected(self, board: DraughtsBoard, square: int, perspective: bool) -> bool:
        """
        Check whether perspective covers a square.

        For either diagonal through the square, the square is protected when
        the neighbour on one side is empty and, on the other side, either
        the neighbour is an own piece or the first piece met walking
        outward is an own king.

        Args:
            board: Position
            square: Square to test (1-50)
            perspective: Covering color

        Returns:
            bool: True if the square is protected
        """
        for first, second in DIAGONALS:
            for near, far in ((first, second), (second, first)):
                near_ray = RAYS[square][near]
                far_ray = RAYS[square][far]
                if not near_ray or not far_ray:
                    continue
                if board.relative_piece_at(far_ray[0], perspective) != PieceKind.EMPTY:
                    continue

                if board.relative_piece_at(near_ray[0], perspective) in OWN_PIECES:
                    return True
                if self._first_piece(board, near_ray, perspective) == PieceKind.OWN_KING:
                    return True

        return False

    @staticmethod
    def _first_piece(board: DraughtsBoard, ray, perspective: bool) -> PieceKind:
        for square in ray:
            kind = board.relative_piece_at(square, perspective)
            if kind != PieceKind.EMPTY:
                return kind
        return PieceKind.EMPTY

    def runaway_men(self, board: DraughtsBoard, perspective: bool) -> int:
        """Number of own men with a free path to the promotion row."""
        return sum(
            1 for square in board.pieces(perspective)
            if board.relative_piece_at(square, perspective) == PieceKind.OWN_MAN
            and self.has_free_path(board, square, perspective)
        )

    @staticmethod
    def has_free_path(board: DraughtsBoard, square: int, perspective: bool) -> bool:
        """
        Check whether a man can walk to promotion unhindered.

        Walking two rows at a time towards the promotion row, both diagonal
        successors and the square two rows straight ahead must be empty
        until the promotion row is reached.
        """
        row, col = square_to_coordinates(square)
        step = -1 if perspective == WHITE else 1
        promotion_row = PROMOTION_ROW[perspective]

        while (promotion_row - row) * step > 0:
            ahead = row + step
            for side in (-1, 1):
                target = coordinates_to_square(ahead, col + side)
                if target is not None and board.piece_at(target) != EMPTY:
                    return False
            if ahead == promotion_row:
                break

            straight = coordinates_to_square(row + 2 * step, col)
            if straight is not None and board.piece_at(straight) != EMPTY:
                return False
            row += 2 * step

        return True

    def trapped_kings(self, board: DraughtsBoard, perspective: bool) -> int:
        """
        Number of own kings that do not start any available move.

        The own side's legal moves are used whoever is to move, so a king
        that cannot move, or may not move because a capture elsewhere is
        mandatory, counts as trapped.
        """
        kings = {
            square for square in board.pieces(perspective)
            if board.relative_piece_at(square, perspective) == PieceKind.OWN_KING
        }
        if not kings:
            return 0

        for move in board.generate_moves(perspective):
            if move.is_king_move:
                kings.discard(move.origin)

        return len(kings)

    def __repr__(self) -> str:
        return f"HeuristicEvaluator(weights={self.weights})"
