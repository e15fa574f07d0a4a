"""
Material-only evaluation: every man counts 1 and every king counts 2.
"""

from draughts_engine.board.draughts_board import DraughtsBoard, is_king, piece_color
from draughts_engine.evaluation.base import Evaluator


class MaterialEvaluator(Evaluator):
    """Own material minus opponent material, ignoring piece placement."""

    def __init__(self, man_value: int = 1, king_value: int = 2):
        self.man_value = man_value
        self.king_value = king_value

    def evaluate(self, board: DraughtsBoard, perspective: bool) -> int:
        score = 0
        for piece in board.occupancy():
            color = piece_color(piece)
            if color is None:
                continue
            value = self.king_value if is_king(piece) else self.man_value
            score += value if color == perspective else -value
        return score
