from typing import List, Optional
import logging
import math
import random
import time

from models.board import Board
from models.game_state import GameState

logger = logging.getLogger(__name__)


class MCTSNode:
    """
    Node in the MCTS tree. Nodes live in an MCTSTree and refer to their
    parent and children by index into the tree's node list.
    """

    __slots__ = ("index", "board", "parent", "children", "boards", "visits", "wins")

    def __init__(self, index: int, board: Board, parent: Optional[int] = None):
        self.index = index
        self.board = board
        self.parent = parent
        self.children: List[int] = []
        # Successor boards not yet turned into children; none once the game is over
        self.boards: List[Board] = [] if board.game_state().is_terminal() else board.legal_successors()
        self.visits = 0
        self.wins = 0.0

    def has_unexamined_boards(self) -> bool:
        return len(self.boards) > 0

    def pop_random_unexamined_board(self) -> Board:
        return self.boards.pop(random.randrange(len(self.boards)))

    def is_leaf(self) -> bool:
        return not self.children

    @property
    def win_ratio(self) -> float:
        return self.wins / self.visits if self.visits > 0 else 0.0

    def update(self, result: GameState) -> None:
        """
        Record one simulation result. Wins are counted for the side that made
        the move leading to this node, i.e. the side not to move on its board.
        This deliberately differs from crediting the side to move on the
        node's board, which would rank the root's children by how well the
        opponent does after them.
        """
        self.visits += 1
        if result is GameState.DRAW:
            self.wins += 0.5
        elif ((self.board.goats_move and result is GameState.TIGER_WIN) or
              (not self.board.goats_move and result is GameState.GOAT_WIN)):
            self.wins += 1


class MCTSTree:
    """Arena owning every node of one search; node 0 is the root."""

    def __init__(self, board: Board):
        self.nodes: List[MCTSNode] = [MCTSNode(0, board)]

    def __len__(self):
        return len(self.nodes)

    @property
    def root(self) -> MCTSNode:
        return self.nodes[0]

    def add_child(self, parent: MCTSNode, board: Board) -> MCTSNode:
        child = MCTSNode(len(self.nodes), board, parent=parent.index)
        self.nodes.append(child)
        parent.children.append(child.index)
        return child

    def parent_of(self, node: MCTSNode) -> Optional[MCTSNode]:
        return None if node.parent is None else self.nodes[node.parent]

    def children_of(self, node: MCTSNode) -> List[MCTSNode]:
        return [self.nodes[index] for index in node.children]

    @staticmethod
    def ucb_score(parent: MCTSNode, child: MCTSNode, bias: float = 2) -> float:
        """Upper confidence bound of a child, weighting exploration by `bias`."""
        return (child.wins / child.visits) * math.sqrt(bias * math.log(parent.visits) / child.visits)

    def ucb_child(self, node: MCTSNode, bias: float = 2) -> MCTSNode:
        return max(self.children_of(node), key=lambda child: self.ucb_score(node, child, bias))

    def highest_score_child(self, node: MCTSNode) -> Optional[MCTSNode]:
        children = self.children_of(node)
        if not children:
            return None
        return max(children, key=lambda child: child.win_ratio)

    def highest_visited_child(self, node: MCTSNode) -> Optional[MCTSNode]:
        children = self.children_of(node)
        if not children:
            return None
        return max(children, key=lambda child: child.visits)


class MCTSAgent:
    """
    Monte Carlo Tree Search agent for Bagh Chal.

    Each iteration runs the four standard phases:
    1. Selection: descend by UCB until a node still has unexamined boards or is a leaf
    2. Expansion: turn one random unexamined board into a child node
    3. Simulation: play random moves until the game ends
    4. Backpropagation: update visits and wins from the new node up to the root

    The search runs until the time budget (or the optional iteration cap) is
    used up and plays the root child with the highest win ratio, or the most
    visited one when `choose_by_visits` is set.
    """

    def __init__(self, max_time_seconds: float = 2, bias: float = 2, max_iterations: Optional[int] = None,
                 choose_by_visits: bool = False):
        self.max_time_seconds = max_time_seconds
        self.bias = bias
        self.max_iterations = max_iterations
        # Play the most visited root child instead of the best win ratio
        self.choose_by_visits = choose_by_visits

        # Diagnostics for the last search
        self.tree: Optional[MCTSTree] = None
        self.iterations = 0
        self.root_wins = 0.0
        self.win_ratio = None
        self.elapsed_time = 0.0

    def get_move(self, board: Board) -> Optional[Board]:
        """
        Get the board reached by the best move found. The returned board
        already has its turn switched; None if there are no moves.
        """
        best_child = self.search(board)
        return best_child.board if best_child is not None else None

    def search(self, board: Board) -> Optional[MCTSNode]:
        """Build a fresh tree from `board` and return the best root child."""
        start_time = time.time()
        deadline = start_time + self.max_time_seconds
        tree = MCTSTree(board.clone())

        iterations = 0
        while time.time() < deadline:
            if self.max_iterations is not None and iterations >= self.max_iterations:
                break
            node = self.selection(tree)
            node = self.expansion(tree, node)
            result = self.simulation(node)
            self.backpropagation(tree, node, result)
            iterations += 1

        if self.choose_by_visits:
            best_child = tree.highest_visited_child(tree.root)
        else:
            best_child = tree.highest_score_child(tree.root)

        self.tree = tree
        self.iterations = tree.root.visits
        self.root_wins = tree.root.wins
        self.win_ratio = best_child.win_ratio if best_child is not None else None
        self.elapsed_time = time.time() - start_time
        logger.debug(
            f"MCTS: {iterations} iterations, {len(tree)} nodes, "
            f"win ratio={self.win_ratio}, time={self.elapsed_time:.2f}s"
        )
        return best_child

    def selection(self, tree: MCTSTree) -> MCTSNode:
        node = tree.root
        while not node.has_unexamined_boards() and not node.is_leaf():
            node = tree.ucb_child(node, self.bias)
        return node

    def expansion(self, tree: MCTSTree, node: MCTSNode) -> MCTSNode:
        if node.has_unexamined_boards():
            board = node.pop_random_unexamined_board()
            board.switch_turn()
            node = tree.add_child(node, board)
        return node

    def simulation(self, node: MCTSNode) -> GameState:
        """Play random moves from the node's successors until the game ends."""
        boards = node.boards
        board = node.board
        if not boards:
            state = board.game_state()
            return state if state.is_terminal() else board.blocked_outcome()

        while boards:
            board = random.choice(boards)
            state = board.game_state()
            if state.is_terminal():
                return state

            board = board.clone()
            board.switch_turn()
            boards = board.legal_successors()

        return board.blocked_outcome()

    def backpropagation(self, tree: MCTSTree, node: MCTSNode, result: GameState) -> None:
        while node is not None:
            node.update(result)
            node = tree.parent_of(node)


def search_mcts(board: Board, time_budget_seconds: float = 2) -> Optional[Board]:
    """Run MCTS from `board` for the given number of seconds and return the chosen board."""
    return MCTSAgent(max_time_seconds=time_budget_seconds).get_move(board)
