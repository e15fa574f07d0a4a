"""
Evaluation Module

This module provides position evaluation functions for the draughts engine.
Evaluators are SWAPPABLE: the search works with any evaluator that
implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - HeuristicEvaluator: Material, back row, protected squares, runaway
      men and trapped kings
    - MaterialEvaluator: Plain man/king count

Data Flow:
    DraughtsBoard, perspective → evaluator.evaluate() → int
                                 Positive = perspective is better
"""

from typing import Optional

from draughts_engine.config import EvalWeights
from draughts_engine.evaluation.base import INFINITY, Evaluator
from draughts_engine.evaluation.heuristic import HeuristicEvaluator
from draughts_engine.evaluation.material import MaterialEvaluator


def create_evaluator(name: str = "heuristic", weights: Optional[EvalWeights] = None) -> Evaluator:
    """
    Build an evaluator by name.

    Args:
        name: 'heuristic' or 'material'
        weights: Weights for the heuristic evaluator

    Raises:
        ValueError: If name is unknown
    """
    if name == "heuristic":
        return HeuristicEvaluator(weights)
    if name == "material":
        if weights is not None:
            return MaterialEvaluator(man_value=weights.man, king_value=weights.king)
        return MaterialEvaluator()
    raise ValueError(f"Unknown evaluator: {name}")


__all__ = [
    'Evaluator',
    'HeuristicEvaluator',
    'MaterialEvaluator',
    'INFINITY',
    'create_evaluator',
]
