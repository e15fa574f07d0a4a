"""
Board Geometry and Array Representation

This module holds the square-numbering geometry of the 10x10 international
draughts board and converts positions into numpy arrays.

Square Numbering (PDN):
    - Only the 50 dark squares are numbered, 5 per row
    - Row 0 holds squares 1-5 (Black's back row, White's promotion row)
    - Row 9 holds squares 46-50 (White's back row, Black's promotion row)
    - On even rows the dark squares are columns 1, 3, 5, 7, 9
    - On odd rows the dark squares are columns 0, 2, 4, 6, 8

Board Orientation:
    - Row 0 = top of the diagram (Black's side)
    - Row 9 = bottom of the diagram (White's side)
    - Column 0 = left edge (square 46 is the bottom-left corner)

Data Flow:
    DraughtsBoard → occupancy_array() → (50,) int8 array of piece codes
    DraughtsBoard → board_to_array()  → (10, 10) int8 grid of piece codes
    DraughtsBoard → board_to_planes() → (4, 10, 10) float32 piece planes
"""

import numpy as np
from typing import List, Optional, Tuple

BOARD_SIZE = 10
NUM_SQUARES = 50
SQUARES = range(1, NUM_SQUARES + 1)

# Diagonal directions as (row step, column step)
NORTH_WEST = 0
NORTH_EAST = 1
SOUTH_WEST = 2
SOUTH_EAST = 3
DIRECTIONS = ((-1, -1), (-1, 1), (1, -1), (1, 1))

# The two diagonals through a square, each as a pair of opposite directions
DIAGONALS = ((NORTH_WEST, SOUTH_EAST), (NORTH_EAST, SOUTH_WEST))


def square_to_coordinates(square: int) -> Tuple[int, int]:
    """
    Convert a PDN square number to (row, column) coordinates.

    Args:
        square: Square number (1-50)

    Returns:
        Tuple of (row, col), both 0-9

    Raises:
        ValueError: If square is outside 1-50
    """
    if not 1 <= square <= NUM_SQUARES:
        raise ValueError(f"Square must be in 1-{NUM_SQUARES}, got {square}")

    row = (square - 1) // 5
    col = 2 * ((square - 1) % 5) + (1 if row % 2 == 0 else 0)
    return row, col


def coordinates_to_square(row: int, col: int) -> Optional[int]:
    """
    Convert (row, column) coordinates to a PDN square number.

    Args:
        row: Row index (0-9), 0 is the top row
        col: Column index (0-9), 0 is the left edge

    Returns:
        Square number (1-50), or None for off-board or light squares
    """
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        return None
    if (row + col) % 2 == 0:
        return None
    return row * 5 + col // 2 + 1


def row_squares(row: int) -> Tuple[int, ...]:
    """Return the five square numbers on a row."""
    return tuple(range(row * 5 + 1, row * 5 + 6))


def _build_rays() -> List[Tuple[Tuple[int, ...], ...]]:
    rays: List[Tuple[Tuple[int, ...], ...]] = [()]
    for square in SQUARES:
        row, col = square_to_coordinates(square)
        square_rays = []
        for row_step, col_step in DIRECTIONS:
            ray = []
            r, c = row + row_step, col + col_step
            target = coordinates_to_square(r, c)
            while target is not None:
                ray.append(target)
                r += row_step
                c += col_step
                target = coordinates_to_square(r, c)
            square_rays.append(tuple(ray))
        rays.append(tuple(square_rays))
    return rays


# RAYS[square][direction] lists the squares met walking from square
# along direction, nearest first. RAYS[0] is unused.
RAYS = _build_rays()


def occupancy_array(board) -> np.ndarray:
    """
    Convert a board to a flat array of piece codes.

    Args:
        board: DraughtsBoard

    Returns:
        numpy array of shape (50,) with dtype int8, index i holds the
        piece code of square i + 1
    """
    return np.array(board.occupancy(), dtype=np.int8)


def board_to_array(board) -> np.ndarray:
    """
    Convert a board to a 10x10 grid of piece codes.

    Light squares and empty dark squares are 0.

    Args:
        board: DraughtsBoard

    Returns:
        numpy array of shape (10, 10) with dtype int8
    """
    grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    occupancy = occupancy_array(board)

    for index in np.flatnonzero(occupancy):
        row, col = square_to_coordinates(int(index) + 1)
        grid[row, col] = occupancy[index]

    return grid


def board_to_planes(board) -> np.ndarray:
    """
    Convert a board to one binary plane per piece code.

    Channels:
        0: White men    2: Black men
        1: White kings  3: Black kings

    Args:
        board: DraughtsBoard

    Returns:
        numpy array of shape (4, 10, 10) with dtype float32
    """
    grid = board_to_array(board)
    planes = np.zeros((4, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)

    for channel in range(4):
        planes[channel] = grid == channel + 1

    return planes
