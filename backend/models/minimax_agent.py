from typing import Optional, Tuple
import logging
import random
import time

from models.board import Board
from models.evaluator import evaluate
from models.game_state import GameState

logger = logging.getLogger(__name__)


class MinimaxAgent:
    """
    Depth-limited minimax agent for Bagh Chal, optionally with alpha-beta pruning.

    Tigers maximise and goats minimise the evaluator's score. Successor boards
    are shuffled before they are searched so that equally scored moves are
    picked at random instead of by generation order.
    """

    INF = float('inf')

    def __init__(self, max_depth: int = 4, use_alpha_beta: bool = True):
        self.max_depth = max_depth
        self.use_alpha_beta = use_alpha_beta

        # Diagnostics for the last search
        self.nodes_visited = 0
        self.best_score = None
        self.elapsed_time = 0.0

    def get_move(self, board: Board) -> Optional[Board]:
        """
        Get the board reached by the best move for the side to move. The
        returned board already has its turn switched; None if there are no moves.
        """
        score, best_board = self.search(board)
        return best_board

    def search(self, board: Board) -> Tuple[float, Optional[Board]]:
        """Run a full search from `board` and return (score, best successor board)."""
        self.nodes_visited = 0
        start_time = time.time()

        root = board.clone()
        score, best_board = self.minimax(root, self.max_depth, -MinimaxAgent.INF, MinimaxAgent.INF)

        self.elapsed_time = time.time() - start_time
        self.best_score = score
        logger.debug(
            f"{'Alpha-beta' if self.use_alpha_beta else 'Minimax'} depth {self.max_depth}: "
            f"score={score}, nodes={self.nodes_visited}, time={self.elapsed_time:.2f}s"
        )
        # A leaf result is the searched board itself, which is not a move
        if best_board is root:
            return score, None
        return score, best_board

    def minimax(self, board: Board, depth: int, alpha: float, beta: float) -> Tuple[float, Optional[Board]]:
        """
        Recursive minimax returning (score, best successor board). At a leaf
        the board itself is returned alongside its evaluation.
        """
        self.nodes_visited += 1

        state = board.game_state()
        if depth < 1 or state is not GameState.IN_PROGRESS:
            return evaluate(state, board, depth), board

        boards = board.legal_successors()
        if not boards:
            return evaluate(state, board, depth), board
        random.shuffle(boards)

        best_board = None
        if not board.goats_move:
            best_value = -MinimaxAgent.INF
            for child in boards:
                child.switch_turn()
                value = self.minimax(child, depth - 1, alpha, beta)[0]

                if value > best_value:
                    best_value = value
                    best_board = child

                if self.use_alpha_beta:
                    if best_value >= beta:
                        break
                    alpha = max(alpha, best_value)
        else:
            best_value = MinimaxAgent.INF
            for child in boards:
                child.switch_turn()
                value = self.minimax(child, depth - 1, alpha, beta)[0]

                if value < best_value:
                    best_value = value
                    best_board = child

                if self.use_alpha_beta:
                    if best_value <= alpha:
                        break
                    beta = min(beta, best_value)

        return best_value, best_board


def search_alpha_beta(board: Board, use_alpha_beta: bool = True, depth: int = 4) -> Tuple[float, Optional[Board]]:
    """
    Search `board` to `depth` plies and return (score, best successor board).

    The board is None whenever the search yields no move: the side to move has
    no legal move, the game on `board` is already over, or `depth` is 0. The
    score is then the evaluation of `board` itself.
    """
    return MinimaxAgent(max_depth=depth, use_alpha_beta=use_alpha_beta).search(board)
