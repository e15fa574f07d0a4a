"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between evaluators without
modifying the search algorithm.

Key Principles:
    1. Evaluators are stateless
    2. evaluate() scores a position from a fixed color's perspective,
       normally the side the engine plays, whoever is to move
    3. Positive = advantage for that color, negative = disadvantage
    4. Scores are integers

Convention:
    - A man on the least valuable square is worth 1
    - The search window runs from -INFINITY to INFINITY, far outside
      any score an evaluator returns
"""

from abc import ABC, abstractmethod

from draughts_engine.board.draughts_board import DraughtsBoard


# Search window bound, beyond any evaluation
INFINITY = 100000


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search algorithm.

    Methods:
        evaluate(board, perspective): Returns the position score
    """

    @abstractmethod
    def evaluate(self, board: DraughtsBoard, perspective: bool) -> int:
        """
        Evaluate a draughts position.

        Args:
            board: Position to evaluate
            perspective: Color the score is relative to (WHITE or BLACK)

        Returns:
            int: Score, positive when perspective is better off
        """
        pass

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
