"""
Utilities Module

This module provides logging setup and the test suite used to benchmark
the draughts engine.

Key Components:
    - setup_logger: File or stderr logging for the engine
    - DRAUGHTS_POSITIONS: Positions with known best moves
    - run_suite / evaluate_position: Run the engine over test positions

Success Metrics:
    - All positions solved from depth 3 upwards
"""

from draughts_engine.utils.log import setup_logger
from draughts_engine.utils.testing import (
    DRAUGHTS_POSITIONS,
    TestPosition,
    TestResult,
    evaluate_position,
    run_suite,
)

__all__ = [
    'setup_logger',
    'DRAUGHTS_POSITIONS',
    'TestPosition',
    'TestResult',
    'evaluate_position',
    'run_suite',
]
