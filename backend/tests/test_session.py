import sys
import os
import unittest

# Add parent directory to path to make imports work in test
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.game_state import GameState
from models.mcts_agent import MCTSAgent
from models.minimax_agent import MinimaxAgent
from models.random_agent import RandomAgent
from session import Algorithm, GameMode, GameSession, PlayerSettings, create_agent
from board_helpers import string_board_to_board, BLOCKED_GOATS_BOARD

FORCED_CAPTURE_BOARD = [
    "T___T",
    "G____",
    "_____",
    "_____",
    "T___T",
]


class TestCreateAgent(unittest.TestCase):
    def test_agents_for_each_algorithm(self):
        plain = create_agent(PlayerSettings(Algorithm.MINIMAX, depth=3))
        self.assertIsInstance(plain, MinimaxAgent)
        self.assertFalse(plain.use_alpha_beta)
        self.assertEqual(plain.max_depth, 3)

        pruned = create_agent(PlayerSettings(Algorithm.MINIMAX_AB))
        self.assertTrue(pruned.use_alpha_beta)

        mcts = create_agent(PlayerSettings(Algorithm.MCTS, time_seconds=5))
        self.assertIsInstance(mcts, MCTSAgent)
        self.assertEqual(mcts.max_time_seconds, 5)

        self.assertIsInstance(create_agent(PlayerSettings(Algorithm.RANDOM)), RandomAgent)

    def test_unknown_algorithm(self):
        with self.assertRaises(ValueError):
            create_agent(PlayerSettings(algorithm="bogus"))


class TestHumanInput(unittest.TestCase):
    def test_click_places_goat_and_passes_turn(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        self.assertTrue(session.click((2, 2)))
        self.assertTrue(session.board.is_goat_at((2, 2)))
        self.assertEqual(session.board.goats_in_hand, 19)
        self.assertFalse(session.board.goats_move)

    def test_click_select_then_move(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        session.click((2, 2))

        self.assertTrue(session.click((0, 0)))
        self.assertTrue(session.board.is_piece_selected())

        self.assertTrue(session.click((1, 0)))
        self.assertTrue(session.board.is_tiger_at((1, 0)))
        self.assertFalse(session.board.is_piece_selected())
        self.assertTrue(session.board.goats_move)

    def test_click_illegal_destination_keeps_turn(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        session.click((2, 2))
        session.click((0, 0))

        self.assertFalse(session.click((3, 3)))
        self.assertFalse(session.board.goats_move)
        self.assertTrue(session.board.is_tiger_at((0, 0)))
        self.assertFalse(session.board.is_piece_selected())

    def test_cannot_select_opponent_piece(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        session.click((2, 2))
        self.assertFalse(session.click((2, 2)))
        self.assertFalse(session.board.is_piece_selected())

    def test_move_rejects_wrong_side(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        session.board = string_board_to_board(FORCED_CAPTURE_BOARD, goats_in_hand=0)
        self.assertFalse(session.move((0, 0), (1, 0)))
        self.assertTrue(session.move((0, 1), (1, 1)))
        self.assertFalse(session.board.goats_move)

    def test_human_capture(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        session.board = string_board_to_board(FORCED_CAPTURE_BOARD, goats_move=False)
        self.assertTrue(session.move((0, 0), (0, 2)))
        self.assertEqual(session.board.goats_captured, 1)
        self.assertTrue(session.board.goats_move)

    def test_place_on_tiger_turn_fails(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        session.board.switch_turn()
        self.assertFalse(session.place((2, 2)))

    def test_input_ignored_on_ai_turn(self):
        # Human plays tiger, so the AI opens as goat
        session = GameSession(mode=GameMode.PLAYER_VS_AI, play_as_tiger=True)
        self.assertTrue(session.is_ai_turn())
        self.assertFalse(session.click((2, 2)))
        self.assertEqual(session.board.goats_in_hand, 20)

    def test_input_ignored_while_paused(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        session.toggle_pause()
        self.assertEqual(session.status, "Paused")
        self.assertFalse(session.click((2, 2)))
        session.toggle_pause()
        self.assertEqual(session.status, "Running")
        self.assertTrue(session.click((2, 2)))


class TestAITurn(unittest.TestCase):
    def test_ai_turn_depends_on_mode(self):
        self.assertFalse(GameSession(mode=GameMode.PLAYER_VS_PLAYER).is_ai_turn())
        self.assertTrue(GameSession(mode=GameMode.AI_VS_AI).is_ai_turn())
        self.assertFalse(GameSession(mode=GameMode.PLAYER_VS_AI, play_as_tiger=False).is_ai_turn())

    def test_ai_plays_and_records_diagnostics(self):
        session = GameSession(
            mode=GameMode.AI_VS_AI,
            goat=PlayerSettings(Algorithm.MINIMAX_AB, depth=1),
        )
        self.assertTrue(session.play_ai_turn())
        self.assertFalse(session.board.goats_move)
        self.assertEqual(session.board.goats_in_hand, 19)
        self.assertEqual(session.diagnostics.iterations, 22)
        self.assertIsNotNone(session.diagnostics.elapsed_ms)
        self.assertIsNotNone(session.diagnostics.score)

    def test_ai_not_played_on_human_turn(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        self.assertFalse(session.play_ai_turn())
        self.assertEqual(session.board.goats_in_hand, 20)

    def test_ai_winning_move_ends_game(self):
        session = GameSession(
            mode=GameMode.AI_VS_AI,
            tiger=PlayerSettings(Algorithm.MINIMAX_AB, depth=1),
        )
        session.board = string_board_to_board(FORCED_CAPTURE_BOARD, goats_move=False, goats_captured=4)
        self.assertTrue(session.play_ai_turn())
        self.assertTrue(session.game_over)
        self.assertEqual(session.state, GameState.TIGER_WIN)
        self.assertEqual(session.status, "Tigers Win!")
        self.assertFalse(session.play_ai_turn())

    def test_blocked_ai_side_loses(self):
        session = GameSession(mode=GameMode.AI_VS_AI)
        session.board = string_board_to_board(BLOCKED_GOATS_BOARD)

        self.assertFalse(session.play_ai_turn())
        self.assertTrue(session.game_over)
        self.assertEqual(session.state, GameState.TIGER_WIN)
        self.assertEqual(session.status, "Tigers Win!")
        self.assertFalse(session.play_ai_turn())

    def test_human_move_that_blocks_opponent_ends_game(self):
        session = GameSession(mode=GameMode.PLAYER_VS_PLAYER)
        # Tigers slide into the last free square and leave the goats stuck
        session.board = string_board_to_board([
            "TTGGG",
            "_TGGG",
            "GGGGG",
            "GGGGG",
            "GGGGT",
        ], goats_move=False)
        self.assertTrue(session.move((0, 0), (0, 1)))
        self.assertTrue(session.game_over)
        self.assertEqual(session.state, GameState.TIGER_WIN)
        self.assertFalse(session.click((2, 2)))

    def test_reset_clears_game(self):
        session = GameSession(mode=GameMode.AI_VS_AI, goat=PlayerSettings(Algorithm.RANDOM))
        session.play_ai_turn()
        session.reset()
        self.assertEqual(session.board.goats_in_hand, 20)
        self.assertTrue(session.board.goats_move)
        self.assertFalse(session.game_over)
        self.assertIsNone(session.diagnostics.iterations)


if __name__ == '__main__':
    unittest.main()
