"""
Game session shared with the presentation layer.

A session owns the authoritative Board together with the mode, per-side AI
settings, pause flag and the diagnostics of the last AI move. Human input
arrives already translated to board coordinates.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging
import time

from game_logic import Position
from models.board import Board
from models.game_state import GameState
from models.mcts_agent import MCTSAgent
from models.minimax_agent import MinimaxAgent
from models.random_agent import RandomAgent

logger = logging.getLogger(__name__)


class GameMode(Enum):
    PLAYER_VS_PLAYER = "pvp"
    PLAYER_VS_AI = "pvai"
    AI_VS_AI = "aivai"


class Algorithm(Enum):
    MINIMAX = "minimax"
    MINIMAX_AB = "alphabeta"
    MCTS = "mcts"
    RANDOM = "random"


@dataclass
class PlayerSettings:
    """AI settings for one side. `depth` applies to minimax, `time_seconds` to MCTS."""
    algorithm: Algorithm = Algorithm.MINIMAX_AB
    depth: int = 4
    time_seconds: float = 2


@dataclass
class Diagnostics:
    iterations: Optional[int] = None
    elapsed_ms: Optional[float] = None
    score: Optional[float] = None


def create_agent(settings: PlayerSettings):
    """Create the agent described by `settings`."""
    if settings.algorithm is Algorithm.MINIMAX:
        return MinimaxAgent(max_depth=settings.depth, use_alpha_beta=False)
    elif settings.algorithm is Algorithm.MINIMAX_AB:
        return MinimaxAgent(max_depth=settings.depth, use_alpha_beta=True)
    elif settings.algorithm is Algorithm.MCTS:
        return MCTSAgent(max_time_seconds=settings.time_seconds)
    elif settings.algorithm is Algorithm.RANDOM:
        return RandomAgent()
    else:
        raise ValueError(f"Unknown algorithm: {settings.algorithm}")


class GameSession:
    def __init__(self, mode: GameMode = GameMode.PLAYER_VS_AI, play_as_tiger: bool = True,
                 goat: Optional[PlayerSettings] = None, tiger: Optional[PlayerSettings] = None):
        self.mode = mode
        self.play_as_tiger = play_as_tiger
        self.goat = goat or PlayerSettings()
        self.tiger = tiger or PlayerSettings()
        self.board = Board()
        self.paused = False
        self.game_over = False
        self.state = GameState.IN_PROGRESS
        self.status = "Running"
        self.diagnostics = Diagnostics()

    def reset(self) -> None:
        self.board.reset()
        self.diagnostics = Diagnostics()
        self.game_over = False
        self.state = GameState.IN_PROGRESS
        self.status = "Paused" if self.paused else "Running"

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        if not self.game_over:
            self.status = "Paused" if self.paused else "Running"

    def current_settings(self) -> PlayerSettings:
        return self.goat if self.board.goats_move else self.tiger

    def is_ai_turn(self) -> bool:
        if self.mode is GameMode.AI_VS_AI:
            return True
        if self.mode is GameMode.PLAYER_VS_AI:
            # The human plays tiger, so the AI plays goat, and vice versa
            return self.board.goats_move == self.play_as_tiger
        return False

    def _accepts_human_input(self) -> bool:
        if self.paused or self.game_over or self.is_ai_turn():
            self.board.unselect_piece()
            return False
        return True

    def place(self, position) -> bool:
        """Place a goat for a human goat player and pass the turn."""
        if not self._accepts_human_input() or not self.board.goats_move:
            return False
        if not self.board.place_piece(position):
            return False
        self.board.switch_turn()
        self.update_status()
        return True

    def move(self, from_pos, to_pos) -> bool:
        """Move one of the side-to-move's pieces for a human player and pass the turn."""
        if not self._accepts_human_input():
            return False
        piece = self.board.get_piece_at(from_pos)
        if piece is None or piece.is_goat != self.board.goats_move:
            return False
        moved = self.board.move(from_pos, to_pos)
        self.board.unselect_piece()
        if not moved:
            return False
        self.board.switch_turn()
        self.update_status()
        return True

    def click(self, position) -> bool:
        """
        Handle a click on a board square: place a goat while goats remain in
        hand, otherwise select a piece or move the selected one.

        Returns:
            True if the click changed the board (placement, selection or move)
        """
        if not self._accepts_human_input():
            return False
        position = Position(*position)
        if self.board.goats_move and self.board.goats_in_hand > 0:
            return self.place(position)

        selected = self.board.get_selected_piece()
        if selected is None:
            return self.board.select_piece_at(position)
        return self.move(selected.position, position)

    def play_ai_turn(self) -> bool:
        """
        Let the configured agent play for the side to move and replace the
        board with its choice. Returns False if it is not an AI turn or the
        agent has no move, in which case the blocked side loses.
        """
        if self.paused or self.game_over or not self.is_ai_turn():
            return False

        settings = self.current_settings()
        agent = create_agent(settings)
        side = "GOAT" if self.board.goats_move else "TIGER"

        start_time = time.time()
        next_board = agent.get_move(self.board)
        elapsed_ms = round((time.time() - start_time) * 1000, 2)

        if isinstance(agent, MinimaxAgent):
            self.diagnostics = Diagnostics(agent.nodes_visited, elapsed_ms, agent.best_score)
        elif isinstance(agent, MCTSAgent):
            self.diagnostics = Diagnostics(agent.iterations, elapsed_ms, agent.win_ratio)
        else:
            self.diagnostics = Diagnostics(None, elapsed_ms, None)

        if next_board is None:
            logger.warning(f"{settings.algorithm.value} agent found no move for {side}")
            self.update_status()
            return False

        logger.info(
            f"{side} played by {settings.algorithm.value} in {elapsed_ms}ms "
            f"(iterations={self.diagnostics.iterations}, score={self.diagnostics.score})"
        )
        self.board = next_board
        self.update_status()
        return True

    def update_status(self) -> GameState:
        """Refresh the game state; a side left without a legal move on its turn loses."""
        self.state = self.board.game_state()
        if self.state is GameState.IN_PROGRESS and not self.board.legal_moves():
            self.state = self.board.blocked_outcome()
        if self.state.is_terminal():
            self.game_over = True
            self.status = self.state.status_text
            logger.info(f"Game over: {self.status}")
        return self.state
