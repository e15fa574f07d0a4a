"""
Unit Tests for Zobrist Hashing and the Transposition Table
"""

import pytest

from draughts_engine.board import (
    BLACK,
    BLACK_KING,
    BLACK_MAN,
    WHITE,
    WHITE_KING,
    WHITE_MAN,
    DraughtsBoard,
    Move,
)
from draughts_engine.search.alphabeta import entry_is_usable
from draughts_engine.search.transposition import (
    NodeType,
    TranspositionTable,
    TTEntry,
    ZobristHasher,
)


class TestZobristHasher:
    """Tests for position fingerprints."""

    @pytest.fixture
    def hasher(self):
        return ZobristHasher(seed=7)

    def test_hash_is_idempotent(self, hasher):
        board = DraughtsBoard()

        assert hasher.hash(board) == hasher.hash(board)
        assert hasher.hash(board) == hasher.hash(board.copy())

    def test_hash_is_64_bit_int(self, hasher):
        value = hasher.hash(DraughtsBoard())

        assert isinstance(value, int)
        assert 0 <= value < 2**64

    def test_empty_board_hashes_to_zero(self, hasher):
        assert hasher.hash(DraughtsBoard(fen=None)) == 0

    def test_same_seed_same_table(self):
        board = DraughtsBoard()

        assert ZobristHasher(seed=1).hash(board) == ZobristHasher(seed=1).hash(board)
        assert ZobristHasher(seed=1).hash(board) != ZobristHasher(seed=2).hash(board)

    def test_one_square_changes_hash(self, hasher):
        """Changing the content of a single square always changes the fingerprint."""
        base = DraughtsBoard()
        base_hash = hasher.hash(base)
        seen = {base_hash}

        for square in range(1, 51):
            for piece in (WHITE_MAN, WHITE_KING, BLACK_MAN, BLACK_KING):
                if base.piece_at(square) == piece:
                    continue
                board = base.copy()
                board.set_piece_at(square, piece)
                value = hasher.hash(board)

                assert value != base_hash, f"Piece {piece} on {square} left the hash unchanged"
                seen.add(value)

        assert len(seen) > 150, "Single-square variants should hash apart"

    def test_history_independent(self, hasher):
        """Two move orders reaching the same position give the same hash."""
        first = DraughtsBoard()
        for text in ["31-26", "20-24", "32-27"]:
            first.push_pdn(text)

        second = DraughtsBoard()
        for text in ["32-27", "20-24", "31-26"]:
            second.push_pdn(text)

        assert first == second
        assert hasher.hash(first) == hasher.hash(second)

    def test_push_pop_restores_hash(self, hasher):
        board = DraughtsBoard()
        before = hasher.hash(board)

        for move in board.legal_moves:
            board.push(move)
            assert hasher.hash(board) != before
            board.pop()

        assert hasher.hash(board) == before


class TestTranspositionTable:
    """Tests for transposition table."""

    def test_store_and_lookup(self):
        tt = TranspositionTable()
        move = Move((32, 28))

        tt.store(12345, depth=5, value=150, node_type=NodeType.EXACT, best_move=move)
        entry = tt.lookup(12345, depth=5)

        assert entry is not None, "Should find stored entry"
        assert entry.value == 150, "Value should match"
        assert entry.depth == 5, "Depth should match"
        assert entry.node_type == NodeType.EXACT, "Node type should match"
        assert entry.best_move == move

    def test_shallow_entry_is_a_miss(self):
        tt = TranspositionTable()
        tt.store(12345, depth=3, value=100, node_type=NodeType.EXACT)

        assert tt.lookup(12345, depth=4) is None, "Entry searched to depth 3 cannot answer depth 4"
        assert tt.lookup(12345, depth=3) is not None
        assert tt.lookup(12345, depth=1) is not None
        assert tt.misses == 1
        assert tt.hits == 2

    def test_store_always_overwrites(self):
        tt = TranspositionTable()
        tt.store(12345, depth=6, value=100, node_type=NodeType.EXACT)
        tt.store(12345, depth=2, value=-40, node_type=NodeType.LOWER_BOUND)

        assert tt.lookup(12345, depth=6) is None, "Deeper entry was replaced"
        assert tt.lookup(12345, depth=2).value == -40
        assert len(tt) == 1

    def test_unknown_key(self):
        tt = TranspositionTable()

        assert tt.lookup(999) is None
        assert tt.misses == 1

    def test_verify_rejects_collisions(self):
        tt = TranspositionTable(verify=True)
        stored = DraughtsBoard().occupancy()
        other = DraughtsBoard("W:W31:B1").occupancy()

        tt.store(42, depth=4, value=7, node_type=NodeType.EXACT, occupancy=stored)

        assert tt.lookup(42, depth=4, occupancy=other) is None, "Different position with the same hash"
        assert tt.collisions == 1
        assert tt.lookup(42, depth=4, occupancy=stored).value == 7

    def test_other_side_to_move_is_a_miss(self):
        tt = TranspositionTable()
        tt.store(42, depth=4, value=7, node_type=NodeType.EXACT, turn=BLACK)

        assert tt.lookup(42, depth=2, turn=WHITE) is None, "Same occupancy, other side to move"
        assert tt.collisions == 1
        assert tt.misses == 1
        assert tt.lookup(42, depth=2, turn=BLACK).value == 7
        assert tt.lookup(42, depth=2).value == 7, "Lookups without a side are not checked"

    def test_occupancy_dropped_without_verify(self):
        tt = TranspositionTable()
        tt.store(42, depth=1, value=0, node_type=NodeType.EXACT, occupancy=(1, 2, 3))

        assert tt.table[42].occupancy is None

    def test_fifo_eviction(self):
        tt = TranspositionTable(max_size=2)
        tt.store(1, 1, 10, NodeType.EXACT)
        tt.store(2, 1, 20, NodeType.EXACT)
        tt.store(1, 2, 11, NodeType.EXACT)

        assert tt.evictions == 0, "Overwriting a key never evicts"

        tt.store(3, 1, 30, NodeType.EXACT)

        assert len(tt) == 2
        assert tt.evictions == 1
        assert tt.lookup(1) is None, "Oldest key goes first"
        assert tt.lookup(2).value == 20
        assert tt.lookup(3).value == 30

    def test_unbounded_by_default(self):
        tt = TranspositionTable()
        for key in range(1000):
            tt.store(key, 1, key, NodeType.EXACT)

        assert len(tt) == 1000
        assert tt.evictions == 0

    def test_clear(self):
        tt = TranspositionTable()
        tt.store(1, 1, 10, NodeType.EXACT)
        tt.lookup(1)
        tt.clear()

        assert len(tt) == 0
        assert tt.get_stats()['hits'] == 0
        assert tt.get_stats()['stores'] == 0

    def test_stats(self):
        tt = TranspositionTable()
        tt.store(1, 1, 10, NodeType.EXACT)
        tt.lookup(1)
        tt.lookup(2)

        stats = tt.get_stats()

        assert stats['entries'] == 1
        assert stats['hits'] == 1
        assert stats['misses'] == 1
        assert stats['hit_rate'] == pytest.approx(50.0)
        assert "50.0%" in repr(tt)


class TestEntryUsability:
    """Tests for the rule deciding whether a cached score settles a node."""

    @pytest.mark.parametrize("node_type, value, alpha, beta, usable", [
        (NodeType.EXACT, 5, -10, 10, True),
        (NodeType.EXACT, 50, -10, 10, True),
        (NodeType.LOWER_BOUND, 10, -10, 10, True),
        (NodeType.LOWER_BOUND, 5, -10, 10, False),
        (NodeType.UPPER_BOUND, -10, -10, 10, True),
        (NodeType.UPPER_BOUND, 5, -10, 10, False),
    ])
    def test_usability(self, node_type, value, alpha, beta, usable):
        entry = TTEntry(1, 3, value, node_type)

        assert entry_is_usable(entry, alpha, beta) is usable
