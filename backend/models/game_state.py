from enum import Enum


class GameState(Enum):
    """
    Outcome of a Bagh Chal board. Derived from the board counters and move
    history every time it is asked for, never stored.
    """

    IN_PROGRESS = "IN_PROGRESS"
    TIGER_WIN = "TIGERS_WIN"
    GOAT_WIN = "GOATS_WIN"
    DRAW = "DRAW"

    def is_terminal(self) -> bool:
        return self is not GameState.IN_PROGRESS

    @property
    def status_text(self) -> str:
        """Status line shown by the presentation layer."""
        return {
            GameState.IN_PROGRESS: "Running",
            GameState.TIGER_WIN: "Tigers Win!",
            GameState.GOAT_WIN: "Goats Win!",
            GameState.DRAW: "Draw!",
        }[self]
