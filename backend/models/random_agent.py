from typing import Optional
import random

from models.board import Board


class RandomAgent:
    def get_move(self, board: Board) -> Optional[Board]:
        """
        Get a random legal successor of the board with its turn switched,
        or None if the side to move has no legal move.
        """
        boards = board.legal_successors()
        if not boards:
            return None

        chosen = random.choice(boards)
        chosen.switch_turn()
        return chosen
