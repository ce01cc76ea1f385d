"""
Bagh Chal AI Simulation Package

This package runs games between AI agent configurations and summarizes
their results.
"""

from .config import AgentConfig, SimulationConfig, load_config, save_config
from .game_runner import GameRunner

__all__ = ["AgentConfig", "SimulationConfig", "load_config", "save_config", "GameRunner"]
