"""
Search Module

This module implements the draughts search. The primary algorithm is
alpha-beta over two mutually recursive procedures, driven by iterative
deepening and backed by a transposition table for caching previously
searched positions.

Key Components:
    - AlphaBetaSearch: search_max / search_min with alpha-beta pruning
    - iterative_deepening: Anytime root driver returning a SearchResult
    - TranspositionTable / ZobristHasher: Position fingerprints and cache
    - order_moves: One-ply look-ahead ordering to improve pruning
"""

from draughts_engine.search.alphabeta import CANCELLED, AlphaBetaSearch, SearchNode
from draughts_engine.search.iterative import SearchResult, iterative_deepening
from draughts_engine.search.ordering import order_moves
from draughts_engine.search.transposition import (
    NodeType,
    TranspositionTable,
    TTEntry,
    ZobristHasher,
)

__all__ = [
    'AlphaBetaSearch',
    'CANCELLED',
    'SearchNode',
    'SearchResult',
    'iterative_deepening',
    'order_moves',
    'NodeType',
    'TranspositionTable',
    'TTEntry',
    'ZobristHasher',
]
