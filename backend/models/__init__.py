"""
Bagh Chal rules engine and game-playing agents.

The Board enforces placement, movement and capture rules; the agents pick
moves for computer players by minimax (with optional alpha-beta pruning),
Monte Carlo Tree Search or at random.
"""

from .game_state import GameState
from .piece import Piece, PieceKind
from .board import Board
from .evaluator import evaluate
from .minimax_agent import MinimaxAgent, search_alpha_beta
from .mcts_agent import MCTSAgent, MCTSNode, MCTSTree, search_mcts
from .random_agent import RandomAgent

__all__ = [
    "GameState",
    "Piece",
    "PieceKind",
    "Board",
    "evaluate",
    "MinimaxAgent",
    "search_alpha_beta",
    "MCTSAgent",
    "MCTSNode",
    "MCTSTree",
    "search_mcts",
    "RandomAgent",
]
