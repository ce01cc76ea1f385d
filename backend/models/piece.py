from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from game_logic import Position, Move, is_in_bounds, is_valid_connection, midpoint

if TYPE_CHECKING:
    from models.board import Board


class PieceKind(Enum):
    TIGER = "TIGER"
    GOAT = "GOAT"

    @property
    def symbol(self) -> str:
        return self.value[0]


class Piece:
    """
    A tiger or a goat standing on the board.

    Behaviour that differs between the two kinds (how a move is resolved and
    which moves are generated) is looked up in the rule tables at the bottom
    of this module rather than overridden in subclasses.
    """

    __slots__ = ("kind", "position", "selected")

    def __init__(self, kind: PieceKind, position: Position, selected: bool = False):
        self.kind = kind
        self.position = Position(*position)
        # Only used by the presentation layer while a piece is being dragged
        self.selected = selected

    def __repr__(self):
        return f"Piece({self.kind.value}, {self.position})"

    @property
    def is_tiger(self) -> bool:
        return self.kind is PieceKind.TIGER

    @property
    def is_goat(self) -> bool:
        return self.kind is PieceKind.GOAT

    def clone(self) -> 'Piece':
        return Piece(self.kind, self.position)

    def can_move(self, board: 'Board', to: Position, distance: int = 1) -> bool:
        """
        Check if this piece could move to an empty square at most `distance`
        steps away along a board line.
        """
        x, y = self.position
        return (
            is_valid_connection(x, y, to[0], to[1], distance) and
            not board.is_piece_at(to)
        )

    def can_capture(self, board: 'Board', to: Position) -> bool:
        """
        Check if this piece can jump over a goat to land on `to`. Only tigers
        capture, always exactly two steps along a line.
        """
        if not self.is_tiger:
            return False
        x, y = self.position
        if max(abs(to[0] - x), abs(to[1] - y)) != 2:
            return False
        if not self.can_move(board, to, distance=2):
            return False
        return board.is_goat_at(Position(*midpoint(x, y, to[0], to[1])))

    def simulate_moves(self, board: 'Board') -> List[Position]:
        """Return every square this piece can slide to."""
        moves = []
        px, py = self.position
        for x in range(px - 1, px + 2):
            for y in range(py - 1, py + 2):
                if (x, y) != (px, py) and is_in_bounds(x, y):
                    if self.can_move(board, (x, y)):
                        moves.append(Position(x, y))
        return moves

    def simulate_captures(self, board: 'Board') -> List[Position]:
        """Return every landing square of a capture this piece can make."""
        if not self.is_tiger:
            return []
        captures = []
        px, py = self.position
        for x in range(px - 2, px + 3):
            for y in range(py - 2, py + 3):
                if (x, y) != (px, py) and is_in_bounds(x, y):
                    if self.can_capture(board, (x, y)):
                        captures.append(Position(x, y))
        return captures

    def num_possible_captures(self, board: 'Board') -> int:
        return len(self.simulate_captures(board))

    def is_trapped(self, board: 'Board') -> bool:
        """A tiger is trapped when it can neither slide nor capture."""
        px, py = self.position
        for x in range(px - 2, px + 3):
            for y in range(py - 2, py + 3):
                if (x, y) == (px, py) or not is_in_bounds(x, y):
                    continue
                if self.can_move(board, (x, y)) or self.can_capture(board, (x, y)):
                    return False
        return True

    def resolve_move(self, board: 'Board', to: Position) -> Optional[Move]:
        """
        Turn a requested destination into a legal Move for this piece, or
        None when the piece's rules reject it.
        """
        return _MOVE_RULES[self.kind](self, board, Position(*to))

    def legal_moves(self, board: 'Board') -> List[Move]:
        return _MOVE_GENERATORS[self.kind](self, board)


def _resolve_goat_move(piece: Piece, board: 'Board', to: Position) -> Optional[Move]:
    if piece.can_move(board, to):
        return Move(piece.position, to)
    return None


def _resolve_tiger_move(piece: Piece, board: 'Board', to: Position) -> Optional[Move]:
    if piece.can_move(board, to):
        return Move(piece.position, to)
    if piece.can_capture(board, to):
        jumped = midpoint(piece.position.x, piece.position.y, to.x, to.y)
        return Move(piece.position, to, Position(*jumped))
    return None


def _slide_moves(piece: Piece, board: 'Board') -> List[Move]:
    return [Move(piece.position, to) for to in piece.simulate_moves(board)]


def _tiger_moves(piece: Piece, board: 'Board') -> List[Move]:
    # A tiger that can capture must capture
    captures = piece.simulate_captures(board)
    if captures:
        px, py = piece.position
        return [
            Move(piece.position, to, Position(*midpoint(px, py, to.x, to.y)))
            for to in captures
        ]
    return _slide_moves(piece, board)


_MOVE_RULES = {
    PieceKind.GOAT: _resolve_goat_move,
    PieceKind.TIGER: _resolve_tiger_move,
}

_MOVE_GENERATORS = {
    PieceKind.GOAT: _slide_moves,
    PieceKind.TIGER: _tiger_moves,
}
