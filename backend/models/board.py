"""
Board and rules for Bagh Chal.

      0   1   2   3   4
    0 T - o - o - o - T
      | \\ | / | \\ | / |
    1 o - o - o - o - o
      | / | \\ | / | \\ |
    2 o - o - o - o - o
      | \\ | / | \\ | / |
    3 o - o - o - o - o
      | / | \\ | / | \\ |
    4 T - o - o - o - T
"""
from collections import deque
from typing import Deque, Dict, Iterator, List, Optional, Tuple

from game_logic import (
    BOARD_SIZE, CORNERS, TOTAL_GOATS, WINNING_CAPTURES, TIGER_COUNT,
    Position, Move, is_corner, is_in_bounds, is_outer_layer,
)
from models.game_state import GameState
from models.piece import Piece, PieceKind

HISTORY_LENGTH = 5

HistoryMove = Tuple[Position, Position]


class Board:
    """
    Full state of a Bagh Chal game: the pieces, whose turn it is and the
    progress counters. Rule violations are reported by returning False and
    never leave the board partially modified.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Restore the starting position: four tigers in the corners, all goats in hand."""
        self.pieces: Dict[Position, Piece] = {}
        for x, y in CORNERS:
            self._add(Piece(PieceKind.TIGER, Position(x, y)))
        self.goats_move = True
        self.goats_in_hand = TOTAL_GOATS
        self.tigers_trapped = 0
        self.goats_captured = 0
        self.move_history: Deque[HistoryMove] = deque(maxlen=HISTORY_LENGTH)

    def clone(self) -> 'Board':
        """Create a deep copy of the board."""
        new_board = Board.__new__(Board)
        new_board.pieces = {position: piece.clone() for position, piece in self.pieces.items()}
        new_board.goats_move = self.goats_move
        new_board.goats_in_hand = self.goats_in_hand
        new_board.tigers_trapped = self.tigers_trapped
        new_board.goats_captured = self.goats_captured
        new_board.move_history = deque(self.move_history, maxlen=HISTORY_LENGTH)
        return new_board

    def switch_turn(self) -> None:
        self.goats_move = not self.goats_move

    def _add(self, piece: Piece) -> None:
        self.pieces[piece.position] = piece

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def is_within_bounds(position) -> bool:
        return is_in_bounds(position[0], position[1])

    def get_piece_at(self, position) -> Optional[Piece]:
        return self.pieces.get(position)

    def is_piece_at(self, position) -> bool:
        return position in self.pieces

    def is_goat_at(self, position) -> bool:
        piece = self.pieces.get(position)
        return piece is not None and piece.is_goat

    def is_tiger_at(self, position) -> bool:
        piece = self.pieces.get(position)
        return piece is not None and piece.is_tiger

    def tigers(self) -> Iterator[Piece]:
        return (piece for piece in list(self.pieces.values()) if piece.is_tiger)

    def goats(self) -> Iterator[Piece]:
        return (piece for piece in list(self.pieces.values()) if piece.is_goat)

    @property
    def goats_on_board(self) -> int:
        return sum(1 for _ in self.goats())

    def num_tigers_trapped(self) -> int:
        return sum(1 for tiger in self.tigers() if tiger.is_trapped(self))

    def num_possible_captures(self) -> int:
        """Number of captures all tigers could make right now."""
        return sum(tiger.num_possible_captures(self) for tiger in self.tigers())

    def num_tigers_in_corners(self) -> int:
        return sum(1 for tiger in self.tigers() if is_corner(*tiger.position))

    def num_outside_goats(self) -> int:
        """Number of goats standing on the outer ring of the board."""
        return sum(1 for goat in self.goats() if is_outer_layer(*goat.position))

    def can_move_to(self, from_pos, to_pos) -> bool:
        """Check if the piece at `from_pos` could legally move (or capture) to `to_pos`."""
        piece = self.get_piece_at(from_pos)
        if piece is None:
            return False
        return piece.resolve_move(self, to_pos) is not None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def place_piece(self, position, kind: PieceKind = PieceKind.GOAT) -> bool:
        """
        Place a goat from the hand onto an empty square.

        Returns:
            True if the goat was placed, False if there are no goats in hand,
            the square is off the board or already occupied.
        """
        if kind is not PieceKind.GOAT:
            return False
        if self.goats_in_hand > 0 and self.is_within_bounds(position) and not self.is_piece_at(position):
            self._add(Piece(PieceKind.GOAT, Position(*position)))
            self.goats_in_hand -= 1
            return True
        return False

    def capture_at(self, position) -> bool:
        """Remove a goat at `position`. Returns False if there is no goat there."""
        if self.is_goat_at(position):
            del self.pieces[position]
            self.goats_captured += 1
            return True
        return False

    def move(self, from_pos, to_pos, simulated: bool = False) -> bool:
        """
        Move the piece at `from_pos` to `to_pos` following its rules; a tiger
        moving two squares over a goat captures it.

        Args:
            from_pos: Square of the piece to move
            to_pos: Destination square
            simulated: Skip the rule check (the move is already known to be legal);
                the destination must still be an empty square on the board

        Returns:
            True if the piece was moved, False otherwise
        """
        piece = self.get_piece_at(from_pos)
        if piece is None:
            return False

        if simulated:
            # Trusted as legal, but never allowed to land on another piece
            if not self.is_within_bounds(to_pos) or self.is_piece_at(to_pos):
                return False
            move = Move(piece.position, Position(*to_pos))
        else:
            move = piece.resolve_move(self, to_pos)
            if move is None:
                return False

        self.apply_move(move)
        return True

    def apply_move(self, move: Move) -> None:
        """Apply an already validated move."""
        if move.is_placement:
            self._add(Piece(PieceKind.GOAT, move.target))
            self.goats_in_hand -= 1
            return

        if move.capture is not None:
            self.capture_at(move.capture)

        piece = self.pieces.pop(move.origin)
        piece.position = move.target
        self._add(piece)

        # Placements never count towards repetition
        if self.goats_in_hand == 0:
            self.move_history.append((move.origin, move.target))

    # ------------------------------------------------------------------
    # Selection (human input)
    # ------------------------------------------------------------------

    def get_selected_piece(self) -> Optional[Piece]:
        for piece in self.pieces.values():
            if piece.selected:
                return piece
        return None

    def is_piece_selected(self) -> bool:
        return self.get_selected_piece() is not None

    def select_piece_at(self, position) -> bool:
        """Select a piece belonging to the side to move."""
        piece = self.get_piece_at(position)
        if piece is None:
            return False
        if (self.goats_move and piece.is_goat) or (not self.goats_move and piece.is_tiger):
            self.unselect_piece()
            piece.selected = True
            return True
        return False

    def unselect_piece(self) -> None:
        for piece in self.pieces.values():
            piece.selected = False

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def legal_moves(self) -> List[Move]:
        """Get all legal moves for the side to move."""
        if self.goats_move and self.goats_in_hand > 0:
            return [
                Move(None, Position(x, y))
                for x in range(BOARD_SIZE)
                for y in range(BOARD_SIZE)
                if not self.is_piece_at((x, y))
            ]

        pieces = self.goats() if self.goats_move else self.tigers()
        moves = []
        for piece in pieces:
            moves.extend(piece.legal_moves(self))
        return moves

    def legal_successors(self) -> List['Board']:
        """
        Get one cloned board per legal move of the side to move. The turn is
        not switched on the successors.
        """
        boards = []
        for move in self.legal_moves():
            board = self.clone()
            board.apply_move(move)
            boards.append(board)
        return boards

    # ------------------------------------------------------------------
    # Game end
    # ------------------------------------------------------------------

    def is_tiger_win(self) -> bool:
        return self.goats_captured >= WINNING_CAPTURES

    def is_goat_win(self) -> bool:
        self.tigers_trapped = self.num_tigers_trapped()
        return self.tigers_trapped >= TIGER_COUNT

    @staticmethod
    def history_string(move: HistoryMove, invert: bool = False) -> str:
        """
        Encode a history move as 'fromX fromY toX toY' digits, e.g. '1112'
        for a piece that went from (1, 1) to (1, 2). Inverted gives '1211'.
        """
        origin, target = move
        from_str = f"{origin[0]}{origin[1]}"
        to_str = f"{target[0]}{target[1]}"
        return to_str + from_str if invert else from_str + to_str

    def is_draw(self) -> bool:
        """Check for pieces moving back and forth or circling once all goats are placed."""
        if self.goats_in_hand != 0 or len(self.move_history) < HISTORY_LENGTH:
            return False

        history = self.move_history
        move1 = self.history_string(history[-1])
        move2 = self.history_string(history[-2])

        # Back and forth
        if (move1 == self.history_string(history[-3], invert=True) and
                move2 == self.history_string(history[-4], invert=True)):
            return True

        # Circling
        if move1 == self.history_string(history[-4]) and move2 == self.history_string(history[-5]):
            return True

        return False

    def blocked_outcome(self) -> GameState:
        """Result when the side to move has no legal move: that side loses."""
        return GameState.TIGER_WIN if self.goats_move else GameState.GOAT_WIN

    def game_state(self) -> GameState:
        if self.is_tiger_win():
            return GameState.TIGER_WIN
        if self.is_goat_win():
            return GameState.GOAT_WIN
        if self.is_draw():
            return GameState.DRAW
        return GameState.IN_PROGRESS

    def __str__(self):
        rows = []
        for y in range(BOARD_SIZE):
            rows.append("".join(
                self.pieces[(x, y)].kind.symbol if (x, y) in self.pieces else "."
                for x in range(BOARD_SIZE)
            ))
        return "\n".join(rows)
