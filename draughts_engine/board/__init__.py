"""
Board Representation Module

This module provides the international draughts position that the search
engine consumes, plus geometry helpers and numpy array views.

Key Components:
    - DraughtsBoard: Position with legal moves, push/pop, PDN FEN
    - Move: Immutable move (steps, captured squares, king flag)
    - PieceKind: Piece on a square relative to a fixed color
    - board_to_array / occupancy_array: numpy views of a position

Data Flow:
    DraughtsBoard → board_to_array() → (10, 10) int8 grid
"""

from draughts_engine.board.draughts_board import (
    BLACK,
    BLACK_KING,
    BLACK_MAN,
    EMPTY,
    STARTING_FEN,
    WHITE,
    WHITE_KING,
    WHITE_MAN,
    DraughtsBoard,
    Move,
    PieceKind,
)
from draughts_engine.board.representation import (
    board_to_array,
    board_to_planes,
    occupancy_array,
)

__all__ = [
    'DraughtsBoard',
    'Move',
    'PieceKind',
    'STARTING_FEN',
    'WHITE',
    'BLACK',
    'EMPTY',
    'WHITE_MAN',
    'WHITE_KING',
    'BLACK_MAN',
    'BLACK_KING',
    'board_to_array',
    'board_to_planes',
    'occupancy_array',
]
