from models.board import Board
from models.game_state import GameState

TIGER_WIN_SCORE = 100000
GOAT_WIN_SCORE = -100000
DRAW_SCORE = -50000

# Heuristic weights, all from the tiger's point of view
CAPTURED_GOAT_WEIGHT = 1000
POSSIBLE_CAPTURE_WEIGHT = 200
CORNER_TIGER_WEIGHT = 50
TRAPPED_TIGER_WEIGHT = -500
OUTSIDE_GOAT_WEIGHT = -10


def evaluate(state: GameState, board: Board, depth: int = 0) -> int:
    """
    Score a board from the tiger's perspective (positive is good for tigers).

    Terminal states get fixed scores regardless of depth. Otherwise the score
    is a weighted sum of captured goats, available captures, tigers in
    corners, trapped tigers and goats on the outer ring, plus the remaining
    search depth as a tie breaker.
    """
    if state is GameState.TIGER_WIN:
        return TIGER_WIN_SCORE
    if state is GameState.GOAT_WIN:
        return GOAT_WIN_SCORE
    if state is GameState.DRAW:
        return DRAW_SCORE

    return (
        CAPTURED_GOAT_WEIGHT * board.goats_captured +
        POSSIBLE_CAPTURE_WEIGHT * board.num_possible_captures() +
        CORNER_TIGER_WEIGHT * board.num_tigers_in_corners() +
        TRAPPED_TIGER_WEIGHT * board.num_tigers_trapped() +
        OUTSIDE_GOAT_WEIGHT * board.num_outside_goats() +
        depth
    )
