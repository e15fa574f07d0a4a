"""
International Draughts Board

This module implements the position the search engine works on: a 10x10
international draughts board with legal move generation, exactly reversible
push/pop, and PDN notation for positions (FEN) and moves.

Rules:
    - Men move one square diagonally forward
    - Men capture forwards and backwards
    - Kings fly: they move and capture along a whole diagonal
    - Capturing is mandatory, and the sequence taking the most pieces
      must be played (majority capture rule)
    - Captured pieces are removed only when the sequence is complete and
      may not be jumped twice
    - A man is promoted only if its move ends on the far row

Conventions:
    - White starts on squares 31-50 and moves first, towards squares 1-5
    - Black starts on squares 1-20 and moves towards squares 46-50
    - WHITE is True and BLACK is False (so `not turn` is the opponent)

References:
    - FMJD rules: https://fmjd.org/docs/Rules_of_the_game.pdf
    - PDN FEN: https://pdn.fmjd.org/fen.html
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

from draughts_engine.board.representation import (
    NORTH_EAST,
    NORTH_WEST,
    NUM_SQUARES,
    RAYS,
    SOUTH_EAST,
    SOUTH_WEST,
    SQUARES,
    board_to_array,
    row_squares,
)

WHITE = True
BLACK = False
COLORS = (WHITE, BLACK)
COLOR_NAMES = {WHITE: "white", BLACK: "black"}

# Absolute piece codes
EMPTY = 0
WHITE_MAN = 1
WHITE_KING = 2
BLACK_MAN = 3
BLACK_KING = 4

MAN_OF = {WHITE: WHITE_MAN, BLACK: BLACK_MAN}
KING_OF = {WHITE: WHITE_KING, BLACK: BLACK_KING}
PIECE_SYMBOLS = {EMPTY: ".", WHITE_MAN: "w", WHITE_KING: "W", BLACK_MAN: "b", BLACK_KING: "B"}

# A man reaching this row is promoted; the opposite row is its own back row
PROMOTION_ROW = {WHITE: 0, BLACK: 9}
PROMOTION_SQUARES = {color: frozenset(row_squares(row)) for color, row in PROMOTION_ROW.items()}
BACK_ROW_SQUARES = {WHITE: row_squares(9), BLACK: row_squares(0)}

FORWARD_DIRECTIONS = {
    WHITE: (NORTH_WEST, NORTH_EAST),
    BLACK: (SOUTH_WEST, SOUTH_EAST),
}

STARTING_FEN = (
    "W:W" + ",".join(str(s) for s in range(31, 51))
    + ":B" + ",".join(str(s) for s in range(1, 21))
)


class PieceKind(IntEnum):
    """Piece on a square, seen from a fixed color."""

    EMPTY = 0
    OWN_MAN = 1
    OWN_KING = 2
    OPPONENT_MAN = 3
    OPPONENT_KING = 4


def piece_color(piece: int) -> Optional[bool]:
    """Return the color of a piece code, or None for an empty square."""
    if piece in (WHITE_MAN, WHITE_KING):
        return WHITE
    if piece in (BLACK_MAN, BLACK_KING):
        return BLACK
    return None


def is_king(piece: int) -> bool:
    return piece in (WHITE_KING, BLACK_KING)


def relative_kind(piece: int, color: bool) -> PieceKind:
    """Resolve an absolute piece code relative to color."""
    if piece == EMPTY:
        return PieceKind.EMPTY
    own = piece_color(piece) == color
    if is_king(piece):
        return PieceKind.OWN_KING if own else PieceKind.OPPONENT_KING
    return PieceKind.OWN_MAN if own else PieceKind.OPPONENT_MAN


@dataclass(frozen=True)
class Move:
    """
    A draughts move.

    Attributes:
        steps: Squares visited, origin first and destination last
        captures: Squares of the captured pieces, in capture order
        is_king_move: True if the moving piece is a king
    """

    steps: Tuple[int, ...]
    captures: Tuple[int, ...] = ()
    is_king_move: bool = False

    @property
    def origin(self) -> int:
        return self.steps[0]

    @property
    def destination(self) -> int:
        return self.steps[-1]

    @property
    def is_capture(self) -> bool:
        return bool(self.captures)

    def pdn(self) -> str:
        """PDN move text: '32-28' for moves, '28x19x10' for captures."""
        if self.captures:
            return "x".join(str(square) for square in self.steps)
        return f"{self.origin}-{self.destination}"

    def __str__(self) -> str:
        return self.pdn()


@dataclass(frozen=True)
class _UndoRecord:
    piece: int
    captured: Tuple[Tuple[int, int], ...]


def _parse_square_token(token: str) -> Iterator[int]:
    if "-" in token:
        first, last = token.split("-", 1)
        start, end = int(first), int(last)
        if start > end:
            raise ValueError(f"Invalid square range: {token}")
        squares = range(start, end + 1)
    else:
        squares = [int(token)]

    for square in squares:
        if not 1 <= square <= NUM_SQUARES:
            raise ValueError(f"Square out of range: {square}")
        yield square


class DraughtsBoard:
    """
    An international draughts position with side to move and move history.

    Attributes:
        turn: Side to move (WHITE or BLACK)
        move_stack: Moves pushed since the position was set

    Methods:
        legal_moves: Legal moves for the side to move
        push: Apply a move in place
        pop: Undo the last move in place
        fen: PDN FEN of the position
    """

    def __init__(self, fen: Optional[str] = STARTING_FEN):
        """
        Create a board.

        Args:
            fen: PDN FEN to set up, STARTING_FEN by default.
                 None gives an empty board with White to move.

        Raises:
            ValueError: If the FEN is invalid
        """
        self._squares: List[int] = [EMPTY] * (NUM_SQUARES + 1)
        self.turn = WHITE
        self.move_stack: List[Move] = []
        self._stack: List[_UndoRecord] = []

        if fen is not None:
            self.set_fen(fen)

    # ------------------------------------------------------------------
    # Piece access
    # ------------------------------------------------------------------

    def piece_at(self, square: int) -> int:
        """Return the absolute piece code on square (1-50)."""
        return self._squares[square]

    def relative_piece_at(self, square: int, color: bool) -> PieceKind:
        """Return the piece on square as seen by color."""
        return relative_kind(self._squares[square], color)

    def set_piece_at(self, square: int, piece: int):
        if not 1 <= square <= NUM_SQUARES:
            raise ValueError(f"Square out of range: {square}")
        if piece not in PIECE_SYMBOLS:
            raise ValueError(f"Unknown piece code: {piece}")
        self._squares[square] = piece

    def remove_piece_at(self, square: int) -> int:
        piece = self._squares[square]
        self._squares[square] = EMPTY
        return piece

    def occupancy(self) -> Tuple[int, ...]:
        """Piece codes of squares 1-50, in square order."""
        return tuple(self._squares[1:])

    def pieces(self, color: bool) -> List[int]:
        """Squares holding a piece of color."""
        return [s for s in SQUARES if piece_color(self._squares[s]) == color]

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    @property
    def legal_moves(self) -> List[Move]:
        """Legal moves for the side to move (empty if the game is over)."""
        return self.generate_moves(self.turn)

    def generate_moves(self, color: bool) -> List[Move]:
        """
        Generate the legal moves of color, whoever is to move.

        Captures are mandatory and only sequences capturing the maximum
        number of pieces are returned.
        """
        captures = self._generate_captures(color)
        if captures:
            return captures
        return self._generate_quiet_moves(color)

    def _generate_quiet_moves(self, color: bool) -> List[Move]:
        moves = []
        squares = self._squares

        for square in SQUARES:
            piece = squares[square]
            if piece == EMPTY or piece_color(piece) != color:
                continue

            if is_king(piece):
                for ray in RAYS[square]:
                    for target in ray:
                        if squares[target] != EMPTY:
                            break
                        moves.append(Move((square, target), (), True))
            else:
                for direction in FORWARD_DIRECTIONS[color]:
                    ray = RAYS[square][direction]
                    if ray and squares[ray[0]] == EMPTY:
                        moves.append(Move((square, ray[0])))

        return moves

    def _generate_captures(self, color: bool) -> List[Move]:
        best_count = 0
        moves: List[Move] = []

        for square in SQUARES:
            piece = self._squares[square]
            if piece == EMPTY or piece_color(piece) != color:
                continue

            sequences: List[Tuple[Tuple[int, ...], Tuple[int, ...]]] = []
            # The moving piece leaves its square for the whole sequence
            self._squares[square] = EMPTY
            self._extend_capture(square, is_king(piece), color, [square], [], sequences)
            self._squares[square] = piece

            for path, captured in sequences:
                if len(captured) > best_count:
                    best_count = len(captured)
                    moves = []
                if len(captured) == best_count:
                    moves.append(Move(path, captured, is_king(piece)))

        return moves

    def _extend_capture(
        self,
        square: int,
        king: bool,
        color: bool,
        path: List[int],
        captured: List[int],
        sequences: List[Tuple[Tuple[int, ...], Tuple[int, ...]]],
    ):
        """Depth-first search of capture sequences continuing from square."""
        squares = self._squares
        extended = False

        for ray in RAYS[square]:
            index = 0
            if king:
                while index < len(ray) and squares[ray[index]] == EMPTY:
                    index += 1
            if index >= len(ray):
                continue

            victim = ray[index]
            target = squares[victim]
            # Captured pieces stay on the board until the sequence ends
            if target == EMPTY or piece_color(target) == color or victim in captured:
                continue

            landing = index + 1
            while landing < len(ray) and squares[ray[landing]] == EMPTY:
                extended = True
                path.append(ray[landing])
                captured.append(victim)
                self._extend_capture(ray[landing], king, color, path, captured, sequences)
                path.pop()
                captured.pop()
                if not king:
                    break
                landing += 1

        if not extended and captured:
            sequences.append((tuple(path), tuple(captured)))

    def is_game_over(self) -> bool:
        """A side without legal moves has lost."""
        return not self.legal_moves

    # ------------------------------------------------------------------
    # Making and unmaking moves
    # ------------------------------------------------------------------

    def push(self, move: Move):
        """
        Apply a move in place. The move is not checked for legality.

        Args:
            move: Move to play for the side to move
        """
        piece = self._squares[move.origin]
        captured = tuple((square, self._squares[square]) for square in move.captures)

        self._squares[move.origin] = EMPTY
        for square in move.captures:
            self._squares[square] = EMPTY

        color = piece_color(piece)
        if not is_king(piece) and color is not None and move.destination in PROMOTION_SQUARES[color]:
            self._squares[move.destination] = KING_OF[color]
        else:
            self._squares[move.destination] = piece

        self._stack.append(_UndoRecord(piece, captured))
        self.move_stack.append(move)
        self.turn = not self.turn

    def pop(self) -> Move:
        """
        Undo the last move in place.

        Returns:
            The move that was undone

        Raises:
            IndexError: If there is no move to undo
        """
        if not self.move_stack:
            raise IndexError("pop from empty move stack")

        move = self.move_stack.pop()
        record = self._stack.pop()

        self._squares[move.destination] = EMPTY
        self._squares[move.origin] = record.piece
        for square, piece in record.captured:
            self._squares[square] = piece

        self.turn = not self.turn
        return move

    def peek(self) -> Optional[Move]:
        """Return the last move pushed, or None."""
        return self.move_stack[-1] if self.move_stack else None

    # ------------------------------------------------------------------
    # Notation
    # ------------------------------------------------------------------

    def parse_pdn(self, text: str) -> Move:
        """
        Find the legal move described by PDN move text.

        Accepts '32-28', '28x10' (origin and destination only) and
        '28x19x10' (full capture path).

        Raises:
            ValueError: If the text is malformed, illegal or ambiguous
        """
        tokens = re.split(r"[-x]", text.strip().lower())
        try:
            squares = tuple(int(token) for token in tokens)
        except ValueError:
            raise ValueError(f"Invalid move text: {text!r}") from None
        if len(squares) < 2:
            raise ValueError(f"Invalid move text: {text!r}")

        legal = self.legal_moves
        exact = [move for move in legal if move.steps == squares]
        if exact:
            return exact[0]

        if len(squares) == 2:
            matches = [
                move for move in legal
                if move.origin == squares[0] and move.destination == squares[1]
            ]
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise ValueError(f"Ambiguous move: {text!r}")

        raise ValueError(f"Illegal move: {text!r}")

    def push_pdn(self, text: str) -> Move:
        """Parse PDN move text, push the move and return it."""
        move = self.parse_pdn(text)
        self.push(move)
        return move

    def set_fen(self, fen: str):
        """
        Set the position from a PDN FEN such as 'W:W31,32,K46:B1-20'.

        Raises:
            ValueError: If the FEN is invalid
        """
        fields = fen.strip().rstrip(".").split(":")
        turn = fields[0].strip().upper()
        if turn not in ("W", "B"):
            raise ValueError(f"Invalid side to move in FEN: {fen!r}")

        squares = [EMPTY] * (NUM_SQUARES + 1)
        for field in fields[1:]:
            field = field.strip()
            if not field:
                continue
            side = field[0].upper()
            if side not in ("W", "B"):
                raise ValueError(f"Invalid piece list in FEN: {field!r}")
            color = WHITE if side == "W" else BLACK

            for token in field[1:].split(","):
                token = token.strip()
                if not token:
                    continue
                king = token[0].upper() == "K"
                if king:
                    token = token[1:]
                try:
                    targets = list(_parse_square_token(token))
                except ValueError as e:
                    raise ValueError(f"Invalid FEN {fen!r}: {e}") from None

                for square in targets:
                    if squares[square] != EMPTY:
                        raise ValueError(f"Square {square} appears twice in FEN {fen!r}")
                    squares[square] = KING_OF[color] if king else MAN_OF[color]

        self._squares = squares
        self.turn = WHITE if turn == "W" else BLACK
        self.move_stack.clear()
        self._stack.clear()

    def fen(self) -> str:
        """Return the PDN FEN of the position."""
        parts = ["W" if self.turn == WHITE else "B"]
        for color, side in ((WHITE, "W"), (BLACK, "B")):
            tokens = [
                ("K" if is_king(self._squares[s]) else "") + str(s)
                for s in self.pieces(color)
            ]
            parts.append(side + ",".join(tokens))
        return ":".join(parts)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def copy(self) -> "DraughtsBoard":
        board = DraughtsBoard(fen=None)
        board._squares = list(self._squares)
        board.turn = self.turn
        board.move_stack = list(self.move_stack)
        board._stack = list(self._stack)
        return board

    def __eq__(self, other) -> bool:
        if not isinstance(other, DraughtsBoard):
            return NotImplemented
        return self.turn == other.turn and self._squares == other._squares

    __hash__ = None

    def __str__(self) -> str:
        grid = board_to_array(self)
        lines = []
        for row in range(grid.shape[0]):
            cells = []
            for col in range(grid.shape[1]):
                dark = (row + col) % 2 == 1
                cells.append(PIECE_SYMBOLS[int(grid[row, col])] if dark else " ")
            lines.append(" ".join(cells))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"DraughtsBoard('{self.fen()}')"
