from typing import Any, Dict, List, Optional
import logging
import time
import uuid

from game_logic import Move, Position
from models.board import Board
from models.game_state import GameState
from models.mcts_agent import MCTSAgent
from models.minimax_agent import MinimaxAgent
from models.random_agent import RandomAgent
from simulation.config import AgentConfig

logger = logging.getLogger(__name__)


class GameRunner:
    """
    Runs a single game between two AI agents and captures the results.
    """

    def __init__(self, tiger_config: AgentConfig, goat_config: AgentConfig, max_moves: int = 200):
        """
        Initialize a game runner with agent configurations.

        Args:
            tiger_config: Configuration for the Tiger agent
            goat_config: Configuration for the Goat agent
            max_moves: Number of moves after which the game is called a draw
        """
        self.tiger_config = tiger_config
        self.goat_config = goat_config
        self.max_moves = max_moves
        self.game_id = str(uuid.uuid4())
        self.move_history: List[str] = []

    def _create_agent(self, config: AgentConfig) -> Any:
        """
        Create an agent based on configuration.

        Args:
            config: Agent configuration

        Returns:
            An instance of the appropriate agent class
        """
        if config.algorithm == 'minimax':
            return MinimaxAgent(max_depth=config.depth, use_alpha_beta=False)
        elif config.algorithm == 'alphabeta':
            return MinimaxAgent(max_depth=config.depth, use_alpha_beta=True)
        elif config.algorithm == 'mcts':
            return MCTSAgent(
                max_time_seconds=config.time_seconds,
                max_iterations=config.iterations,
                choose_by_visits=config.choose_by_visits,
            )
        elif config.algorithm == 'random':
            return RandomAgent()
        else:
            raise ValueError(f"Unknown algorithm: {config.algorithm}")

    @staticmethod
    def infer_move(before: Board, after: Board) -> Optional[Move]:
        """
        Work out which move turned `before` into `after` by comparing the
        squares that changed.
        """
        vacated = [pos for pos in before.pieces if pos not in after.pieces]
        filled = [pos for pos in after.pieces if pos not in before.pieces]
        if len(filled) != 1:
            return None
        target = Position(*filled[0])

        if after.goats_in_hand < before.goats_in_hand:
            return Move(None, target)

        moved_kind = after.pieces[target].kind
        origin = next((pos for pos in vacated if before.pieces[pos].kind is moved_kind), None)
        if origin is None:
            return None
        capture = next((pos for pos in vacated if pos != origin), None)
        return Move(Position(*origin), target, Position(*capture) if capture is not None else None)

    def run_game(self) -> Dict:
        """
        Run a complete game and return statistics.

        Returns:
            Dict containing game statistics
        """
        board = Board()

        tiger_agent = self._create_agent(self.tiger_config)
        goat_agent = self._create_agent(self.goat_config)

        start_time = time.time()
        move_count = 0
        tiger_times = []
        goat_times = []
        reason = "STANDARD"
        state = board.game_state()

        while not state.is_terminal():
            if move_count >= self.max_moves:
                reason = "MOVE_LIMIT"
                break

            goats_turn = board.goats_move
            current_agent = goat_agent if goats_turn else tiger_agent

            move_start = time.time()
            next_board = current_agent.get_move(board)
            move_time = time.time() - move_start
            (goat_times if goats_turn else tiger_times).append(move_time)

            if next_board is None:
                # The side to move is blocked and loses
                state = board.blocked_outcome()
                reason = "NO_MOVES"
                break

            move = self.infer_move(board, next_board)
            self.move_history.append(move.notation() if move is not None else "?")

            board = next_board
            move_count += 1
            state = board.game_state()

        winner = {
            GameState.TIGER_WIN: "TIGER",
            GameState.GOAT_WIN: "GOAT",
        }.get(state, "DRAW")

        logger.info(
            f"Game {self.game_id}: {winner} ({reason}) after {move_count} moves, "
            f"{board.goats_captured} goats captured"
        )

        return {
            "game_id": self.game_id,
            "tiger_config": self.tiger_config.label(),
            "goat_config": self.goat_config.label(),
            "winner": winner,
            "reason": reason,
            "moves": move_count,
            "game_duration": time.time() - start_time,
            "avg_tiger_move_time": sum(tiger_times) / len(tiger_times) if tiger_times else 0,
            "avg_goat_move_time": sum(goat_times) / len(goat_times) if goat_times else 0,
            "first_capture_move": next((i for i, m in enumerate(self.move_history) if "c" in m), None),
            "goats_captured": board.goats_captured,
            "move_history": ",".join(self.move_history),
        }
