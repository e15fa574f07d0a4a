"""
Transposition Table with Zobrist Hashing

This module implements a transposition table (TT) - a hash table that caches
search results to avoid re-searching positions reached through a different
move order. In draughts, transpositions are everywhere: two men moved in
either order give the same position.

References:
    - Zobrist Hashing: https://www.chessprogramming.org/Zobrist_Hashing
    - Transposition Table: https://www.chessprogramming.org/Transposition_Table
"""

import numpy as np
from typing import Dict, Optional, Tuple
from enum import Enum

from draughts_engine.board.draughts_board import DraughtsBoard, Move
from draughts_engine.board.representation import NUM_SQUARES, occupancy_array


class NodeType(Enum):
    """
    Type of node in search tree.

    This determines how we can use the cached value:
        - EXACT: The exact evaluation (all moves searched)
        - LOWER_BOUND: Fail-high, the value is at least this good
        - UPPER_BOUND: Fail-low, the value is at most this good
    """
    EXACT = 0
    LOWER_BOUND = 1
    UPPER_BOUND = 2


class TTEntry:
    """
    Entry in the transposition table.

    Attributes:
        zobrist_hash: 64-bit fingerprint of the position
        depth: Remaining search depth when the entry was stored
        value: Score of the position
        node_type: EXACT, LOWER_BOUND, or UPPER_BOUND
        best_move: Best move found in this position (may be None)
        occupancy: Piece codes of the position, only kept when the table
                   verifies fingerprints
        turn: Side to move when the entry was stored (None if unknown)
    """

    def __init__(
        self,
        zobrist_hash: int,
        depth: int,
        value: int,
        node_type: NodeType,
        best_move: Optional[Move] = None,
        occupancy: Optional[Tuple[int, ...]] = None,
        turn: Optional[bool] = None,
    ):
        self.zobrist_hash = zobrist_hash
        self.depth = depth
        self.value = value
        self.node_type = node_type
        self.best_move = best_move
        self.occupancy = occupancy
        self.turn = turn

    def __repr__(self) -> str:
        return (
            f"TTEntry(hash={self.zobrist_hash}, depth={self.depth}, "
            f"value={self.value}, type={self.node_type}, move={self.best_move})"
        )


# ============================================================================
# Zobrist Hashing
# ============================================================================
# One random 64-bit number per (square, piece) pair: 50 squares * 4 pieces.
# Hash = XOR of the numbers of all occupied squares.
# Only the occupancy is hashed; side to move and history are not. The table
# keeps the side to move in each entry instead.
# ============================================================================

class ZobristHasher:
    """
    Zobrist fingerprints for draughts positions.

    The random table is drawn once per hasher. The same seed gives the same
    table, and therefore the same fingerprints, across runs.

    Attributes:
        table: (50, 4) uint64 array indexed by [square - 1][piece code - 1]
    """

    def __init__(self, seed: Optional[int] = None):
        rng = np.random.default_rng(seed)
        self.table = rng.integers(
            0, 2**64 - 1, size=(NUM_SQUARES, 4), dtype=np.uint64, endpoint=True
        )

    def hash(self, board: DraughtsBoard) -> int:
        """
        Compute the Zobrist hash of a position.

        Args:
            board: Position to fingerprint

        Returns:
            64-bit integer hash (0 for an empty board)
        """
        occupancy = occupancy_array(board)
        squares = np.flatnonzero(occupancy)
        keys = self.table[squares, occupancy[squares] - 1]
        return int(np.bitwise_xor.reduce(keys))


class TranspositionTable:
    """
    Transposition table for caching search results.

    Entries are overwritten on every store and live until clear(). With
    max_size set, the oldest key is evicted first (FIFO) once the table is
    full. With verify set, entries keep the exact occupancy and a lookup for
    a different position sharing the fingerprint is rejected. An entry stored
    with the other side to move is always rejected: the fingerprint leaves
    the side to move out, so the same occupancy can be a max node in one
    line and a min node in another.

    Attributes:
        max_size: Maximum number of entries (None = unbounded)
        verify: Reject fingerprint collisions
        table: Dictionary mapping hash → TTEntry
    """

    def __init__(self, max_size: Optional[int] = None, verify: bool = False):
        """
        Initialize transposition table.

        Args:
            max_size: Maximum number of entries (default unbounded)
            verify: Store occupancy and check it on lookup
        """
        self.max_size = max_size
        self.verify = verify
        self.table: Dict[int, TTEntry] = {}
        self.hits = 0
        self.misses = 0
        self.stores = 0
        self.collisions = 0
        self.evictions = 0

    def store(
        self,
        zobrist_hash: int,
        depth: int,
        value: int,
        node_type: NodeType,
        best_move: Optional[Move] = None,
        occupancy: Optional[Tuple[int, ...]] = None,
        turn: Optional[bool] = None,
    ):
        """
        Store a search result, replacing any entry with the same hash.

        Args:
            zobrist_hash: Zobrist hash of the position
            depth: Remaining depth the result was searched to
            value: Score
            node_type: EXACT, LOWER_BOUND, or UPPER_BOUND
            best_move: Best move found (optional)
            occupancy: Position occupancy, kept only when verifying
            turn: Side to move in the position
        """
        if (
            self.max_size is not None
            and zobrist_hash not in self.table
            and len(self.table) >= self.max_size
        ):
            oldest = next(iter(self.table))
            del self.table[oldest]
            self.evictions += 1

        self.table[zobrist_hash] = TTEntry(
            zobrist_hash,
            depth,
            value,
            node_type,
            best_move,
            occupancy if self.verify else None,
            turn,
        )
        self.stores += 1

    def lookup(
        self,
        zobrist_hash: int,
        depth: int = 0,
        occupancy: Optional[Tuple[int, ...]] = None,
        turn: Optional[bool] = None,
    ) -> Optional[TTEntry]:
        """
        Look up a position in the transposition table.

        Args:
            zobrist_hash: Zobrist hash of the position
            depth: Current remaining depth (only use if cached depth >= this)
            occupancy: Position occupancy, checked when verifying
            turn: Side to move, checked against the stored side

        Returns:
            TTEntry if found for the same side to move and deep enough,
            None otherwise
        """
        entry = self.table.get(zobrist_hash)

        if entry is not None:
            if turn is not None and entry.turn is not None and entry.turn != turn:
                self.collisions += 1
            elif self.verify and occupancy is not None and entry.occupancy != occupancy:
                self.collisions += 1
            elif entry.depth >= depth:
                self.hits += 1
                return entry

        self.misses += 1
        return None

    def clear(self):
        """Clear all entries from the transposition table."""

        self.table.clear()
        self.hits = 0
        self.misses = 0
        self.stores = 0
        self.collisions = 0
        self.evictions = 0

    def get_stats(self) -> Dict[str, int | float]:
        """Get statistics about transposition table usage."""

        total_lookups = self.hits + self.misses
        hit_rate = (self.hits / total_lookups * 100) if total_lookups > 0 else 0

        return {
            'entries': len(self.table),
            'hits': self.hits,
            'misses': self.misses,
            'stores': self.stores,
            'collisions': self.collisions,
            'evictions': self.evictions,
            'hit_rate': hit_rate,
        }

    def __len__(self) -> int:
        return len(self.table)

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"TranspositionTable(entries={stats['entries']}, "
            f"hit_rate={stats['hit_rate']:.1f}%)"
        )
