#!/usr/bin/env python3
"""
Run a batch of AI vs AI Bagh Chal games from a JSON configuration file,
write the results to CSV and log a per-matchup summary.
"""

import argparse
import logging
import os
import sys
from datetime import datetime

# Add the parent directory to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from simulation.analysis import results_to_dataframe, summarize_matchups
from simulation.config import DEFAULT_CONFIG_FILE, load_config, SimulationConfig
from simulation.game_runner import GameRunner

logger = logging.getLogger(__name__)


def run_simulation(config: SimulationConfig) -> str:
    """
    Play `config.games` games and save the results.

    Returns:
        Path of the CSV file written
    """
    results = []
    for game_number in range(config.games):
        runner = GameRunner(config.tiger, config.goat, max_moves=config.max_moves)
        result = runner.run_game()
        results.append(result)
        logger.info(f"Game {game_number + 1}/{config.games}: winner={result['winner']} moves={result['moves']}")

    df = results_to_dataframe(results)
    os.makedirs(config.output_dir, exist_ok=True)
    output_path = os.path.join(
        config.output_dir,
        f"games_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
    )
    df.to_csv(output_path, index=False)

    summary = summarize_matchups(df)
    logger.info(f"Summary:\n{summary.to_string(index=False)}")
    logger.info(f"Results written to {output_path}")
    return output_path


def main():
    parser = argparse.ArgumentParser(description="Run AI vs AI Bagh Chal games")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="Path to the JSON configuration file")
    parser.add_argument("--games", type=int, help="Override the number of games to play")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = load_config(args.config)
    if args.games is not None:
        config.games = args.games

    run_simulation(config)


if __name__ == "__main__":
    main()
