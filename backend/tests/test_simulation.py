import sys
import os
import json
import tempfile
import unittest

import pandas as pd

# Add parent directory to path to make imports work in test
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from game_logic import Move, Position
from models.board import Board
from simulation.analysis import results_to_dataframe, summarize_matchups, wilson_interval
from simulation.config import AgentConfig, SimulationConfig, load_config, save_config, config_from_dict
from simulation.game_runner import GameRunner
from simulation.run_simulation import run_simulation
from board_helpers import string_board_to_board


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        config = SimulationConfig()
        self.assertEqual(config.tiger.algorithm, "mcts")
        self.assertEqual(config.goat.algorithm, "alphabeta")
        self.assertEqual(config.games, 10)

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            AgentConfig(algorithm="genetic")
        with self.assertRaises(ValueError):
            AgentConfig(depth=0)
        with self.assertRaises(ValueError):
            AgentConfig(algorithm="mcts", time_seconds=0)
        with self.assertRaises(ValueError):
            SimulationConfig(games=0)

    def test_labels(self):
        self.assertEqual(AgentConfig(algorithm="minimax", depth=2).label(), "minimax-d2")
        self.assertEqual(AgentConfig(algorithm="mcts", time_seconds=1).label(), "mcts-1s")
        self.assertEqual(AgentConfig(algorithm="random").label(), "random")

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "config.json")
            config = SimulationConfig(
                tiger=AgentConfig(algorithm="mcts", time_seconds=3, iterations=500),
                goat=AgentConfig(algorithm="minimax", depth=2),
                games=4,
            )
            save_config(config, path)

            with open(path) as f:
                saved = json.load(f)
            self.assertNotIn("iterations", saved["goat"])

            loaded = load_config(path)
            self.assertEqual(loaded, config)

    def test_missing_file_writes_defaults(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "new_config.json")
            config = load_config(path)
            self.assertEqual(config, SimulationConfig())
            self.assertTrue(os.path.exists(path))

    def test_config_from_dict(self):
        config = config_from_dict({"goat": {"algorithm": "random"}, "max_moves": 50})
        self.assertEqual(config.goat.algorithm, "random")
        self.assertEqual(config.max_moves, 50)
        self.assertEqual(config.tiger.algorithm, "mcts")


class TestGameRunner(unittest.TestCase):
    def test_infer_placement(self):
        before = Board()
        after = before.clone()
        after.place_piece((2, 3))
        self.assertEqual(GameRunner.infer_move(before, after), Move(None, Position(2, 3)))

    def test_infer_slide_and_capture(self):
        before = string_board_to_board(["T____", "_G___", "_____", "_____", "____T"], goats_move=False)

        slide = before.clone()
        slide.move((4, 4), (3, 4))
        self.assertEqual(GameRunner.infer_move(before, slide), Move(Position(4, 4), Position(3, 4)))

        capture = before.clone()
        capture.move((0, 0), (2, 2))
        self.assertEqual(
            GameRunner.infer_move(before, capture),
            Move(Position(0, 0), Position(2, 2), Position(1, 1))
        )

    def test_mcts_agent_from_config(self):
        runner = GameRunner(
            AgentConfig(algorithm="mcts", time_seconds=1, iterations=10, choose_by_visits=True),
            AgentConfig(algorithm="random"),
        )
        agent = runner._create_agent(runner.tiger_config)
        self.assertEqual(agent.max_iterations, 10)
        self.assertTrue(agent.choose_by_visits)

    def test_random_game_result(self):
        runner = GameRunner(AgentConfig(algorithm="random"), AgentConfig(algorithm="random"), max_moves=30)
        result = runner.run_game()

        self.assertIn(result["winner"], ("TIGER", "GOAT", "DRAW"))
        self.assertIn(result["reason"], ("STANDARD", "MOVE_LIMIT", "NO_MOVES"))
        self.assertLessEqual(result["moves"], 30)
        self.assertEqual(result["tiger_config"], "random")
        self.assertEqual(len(result["move_history"].split(",")), result["moves"])
        # Goats always open with placements
        self.assertTrue(result["move_history"].startswith("p"))

    def test_move_limit_is_a_draw(self):
        runner = GameRunner(AgentConfig(algorithm="random"), AgentConfig(algorithm="random"), max_moves=2)
        result = runner.run_game()
        self.assertEqual(result["winner"], "DRAW")
        self.assertEqual(result["reason"], "MOVE_LIMIT")
        self.assertEqual(result["moves"], 2)


class TestAnalysis(unittest.TestCase):
    def _results(self):
        return [
            {"tiger_config": "mcts-1s", "goat_config": "alphabeta-d3", "winner": "TIGER", "moves": 40, "goats_captured": 5},
            {"tiger_config": "mcts-1s", "goat_config": "alphabeta-d3", "winner": "GOAT", "moves": 60, "goats_captured": 2},
            {"tiger_config": "mcts-1s", "goat_config": "alphabeta-d3", "winner": "TIGER", "moves": 50, "goats_captured": 5},
            {"tiger_config": "random", "goat_config": "random", "winner": "DRAW", "moves": 200, "goats_captured": 3},
        ]

    def test_empty_results(self):
        with self.assertRaises(ValueError):
            results_to_dataframe([])

    def test_summarize_matchups(self):
        summary = summarize_matchups(results_to_dataframe(self._results()))
        self.assertEqual(len(summary), 2)

        row = summary[summary['tiger_config'] == 'mcts-1s'].iloc[0]
        self.assertEqual(row['games'], 3)
        self.assertAlmostEqual(row['tiger_win_rate'], 2 / 3)
        self.assertAlmostEqual(row['goat_win_rate'], 1 / 3)
        self.assertEqual(row['draw_rate'], 0)
        self.assertAlmostEqual(row['avg_moves'], 50)
        self.assertLessEqual(row['tiger_win_ci_low'], 2 / 3)
        self.assertGreaterEqual(row['tiger_win_ci_high'], 2 / 3)

    def test_wilson_interval(self):
        low, high = wilson_interval(50, 100)
        self.assertAlmostEqual(low, 0.4038, places=3)
        self.assertAlmostEqual(high, 0.5962, places=3)
        self.assertEqual(wilson_interval(0, 0), (0.0, 0.0))


class TestRunSimulation(unittest.TestCase):
    def test_writes_csv(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            config = SimulationConfig(
                tiger=AgentConfig(algorithm="random"),
                goat=AgentConfig(algorithm="random"),
                games=2,
                max_moves=20,
                output_dir=tmp_dir,
            )
            path = run_simulation(config)
            self.assertTrue(os.path.exists(path))
            df = pd.read_csv(path)
            self.assertEqual(len(df), 2)
            self.assertTrue(set(df["winner"]) <= {"TIGER", "GOAT", "DRAW"})


if __name__ == '__main__':
    unittest.main()
