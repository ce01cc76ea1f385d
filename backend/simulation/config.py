"""
Settings for batches of AI vs AI games, stored as JSON.
"""

import os
import json
import logging
from typing import Dict, Optional
from dataclasses import dataclass, field, asdict

from session import Algorithm

logger = logging.getLogger(__name__)


@dataclass
class AgentConfig:
    """Configuration for one AI player."""
    algorithm: str = "alphabeta"   # 'minimax', 'alphabeta', 'mcts' or 'random'
    depth: int = 3                 # Minimax search depth
    time_seconds: float = 2        # MCTS time budget
    iterations: Optional[int] = None  # Optional MCTS iteration cap
    choose_by_visits: bool = False    # MCTS plays the most visited move

    def __post_init__(self):
        valid = [algorithm.value for algorithm in Algorithm]
        if self.algorithm not in valid:
            raise ValueError(f"Unknown algorithm: {self.algorithm} (expected one of {valid})")
        if self.depth < 1:
            raise ValueError("depth must be at least 1")
        if self.time_seconds <= 0:
            raise ValueError("time_seconds must be positive")

    def label(self) -> str:
        """Short name used to group results."""
        if self.algorithm in ("minimax", "alphabeta"):
            return f"{self.algorithm}-d{self.depth}"
        if self.algorithm == "mcts":
            return f"mcts-{self.time_seconds}s"
        return self.algorithm


@dataclass
class SimulationConfig:
    """Main configuration for a batch of AI vs AI games."""
    tiger: AgentConfig = field(default_factory=lambda: AgentConfig(algorithm="mcts", time_seconds=1))
    goat: AgentConfig = field(default_factory=AgentConfig)
    games: int = 10
    max_moves: int = 200  # Games still running after this many moves are drawn
    output_dir: str = "simulation_results"

    def __post_init__(self):
        if self.games < 1:
            raise ValueError("games must be at least 1")
        if self.max_moves < 1:
            raise ValueError("max_moves must be at least 1")


DEFAULT_CONFIG_FILE = "simulation_config.json"


def resolve_config_path(config_path: str = DEFAULT_CONFIG_FILE) -> str:
    """
    Resolve a configuration file name. Absolute paths and files found from
    the working directory are used as given; anything else is looked up
    next to this module.
    """
    if os.path.isabs(config_path) or os.path.exists(config_path):
        return os.path.abspath(config_path)
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), config_path)


def config_from_dict(config_dict: Dict) -> SimulationConfig:
    """Build a SimulationConfig from parsed JSON, nesting the per-side agent settings."""
    values = dict(config_dict)
    for side in ('tiger', 'goat'):
        if side in values:
            values[side] = AgentConfig(**values[side])
    return SimulationConfig(**values)


def load_config(config_path: str = DEFAULT_CONFIG_FILE) -> SimulationConfig:
    """
    Read a SimulationConfig from JSON. A missing file is created with the
    default settings, which are then returned.
    """
    path = resolve_config_path(config_path)

    if not os.path.exists(path):
        logger.info(f"No simulation config at {path}, writing defaults")
        config = SimulationConfig()
        save_config(config, path)
        return config

    with open(path) as f:
        return config_from_dict(json.load(f))


def save_config(config: SimulationConfig, config_path: str = DEFAULT_CONFIG_FILE) -> str:
    """
    Write a SimulationConfig as JSON, leaving out unset optional values.

    Returns:
        Path of the file written
    """
    path = resolve_config_path(config_path)
    data = asdict(config)
    for side in ('tiger', 'goat'):
        data[side] = {key: value for key, value in data[side].items() if value is not None}

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w') as f:
        json.dump(data, f, indent=4)
    return path
