from typing import NamedTuple, Optional, Tuple

BOARD_SIZE = 5
TOTAL_GOATS = 20
WINNING_CAPTURES = 5
TIGER_COUNT = 4

CORNERS = ((0, 0), (0, 4), (4, 0), (4, 4))


class Position(NamedTuple):
    """A board intersection; (0, 0) is the top-left corner."""
    x: int
    y: int

    def __str__(self):
        return f"({self.x}, {self.y})"


def is_in_bounds(x, y):
    """Check if coordinates are within the 5x5 board bounds."""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def is_outer_layer(x, y):
    """Check if a position is on the outer ring of the board."""
    return x == 0 or y == 0 or x == BOARD_SIZE - 1 or y == BOARD_SIZE - 1


def is_corner(x, y):
    return (x, y) in CORNERS


def has_diagonals(x, y):
    """
    Diagonal lines only pass through intersections whose coordinates are
    both even or both odd (the squares drawn with an X).
    """
    return x % 2 == y % 2


def step_towards(from_x, from_y, to_x, to_y, distance=1) -> Optional[Tuple[int, int]]:
    """
    Return the unit direction from one square to another if the destination
    lies on a straight or diagonal line within `distance` steps, else None.
    """
    dx = to_x - from_x
    dy = to_y - from_y
    if (dx, dy) == (0, 0):
        return None
    if abs(dx) > distance or abs(dy) > distance:
        return None
    if dx != 0 and dy != 0 and abs(dx) != abs(dy):
        return None
    return ((dx > 0) - (dx < 0), (dy > 0) - (dy < 0))


def is_valid_connection(from_x, from_y, to_x, to_y, distance=1):
    """
    Check if there is a board line from one position to another that is at
    most `distance` steps long. Orthogonal lines always exist; diagonal ones
    depend on the parity of the starting square.
    """
    if not is_in_bounds(to_x, to_y):
        return False
    step = step_towards(from_x, from_y, to_x, to_y, distance)
    if step is None:
        return False
    if step[0] != 0 and step[1] != 0:
        return has_diagonals(from_x, from_y)
    return True


def midpoint(from_x, from_y, to_x, to_y) -> Tuple[int, int]:
    """Return the square jumped over by a two-step move."""
    return ((from_x + to_x) // 2, (from_y + to_y) // 2)


class Move(NamedTuple):
    """
    A single legal action. `origin` is None for a goat placement and
    `capture` holds the jumped square for a tiger capture.
    """
    origin: Optional[Position]
    target: Position
    capture: Optional[Position] = None

    @property
    def is_placement(self) -> bool:
        return self.origin is None

    def notation(self) -> str:
        """Compact notation: p22, m0001, m0022c11."""
        if self.origin is None:
            return f"p{self.target.x}{self.target.y}"
        text = f"m{self.origin.x}{self.origin.y}{self.target.x}{self.target.y}"
        if self.capture is not None:
            text += f"c{self.capture.x}{self.capture.y}"
        return text
