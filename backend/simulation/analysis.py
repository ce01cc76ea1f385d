"""
Analysis tools for AI vs AI game results.
"""

import pandas as pd
import numpy as np
from typing import Dict, List, Tuple
from scipy import stats


def results_to_dataframe(results: List[Dict]) -> pd.DataFrame:
    """Convert game result dicts (as returned by GameRunner.run_game) to a DataFrame."""
    df = pd.DataFrame(results)
    if df.empty:
        raise ValueError("No game results to analyse")
    return df


def wilson_interval(wins: int, total: int, confidence: float = 0.95) -> Tuple[float, float]:
    """
    Calculate Wilson score interval for binomial proportion.

    Args:
        wins: Number of wins
        total: Total number of games
        confidence: Confidence level (default: 0.95)

    Returns:
        Tuple of (lower_bound, upper_bound)
    """
    if total == 0:
        return (0.0, 0.0)

    p = wins / total
    z = stats.norm.ppf(1 - (1 - confidence) / 2)

    denominator = 1 + z**2 / total
    center = (p + z**2 / (2 * total)) / denominator
    spread = z * np.sqrt(p * (1 - p) / total + z**2 / (4 * total**2)) / denominator

    return (float(center - spread), float(center + spread))


def summarize_matchups(df: pd.DataFrame) -> pd.DataFrame:
    """
    Win, loss and draw rates for every (tiger_config, goat_config) matchup.

    Returns:
        One row per matchup with game counts, rates and a Wilson interval
        around the tiger win rate.
    """
    rows = []
    for (tiger_config, goat_config), games in df.groupby(['tiger_config', 'goat_config']):
        total = len(games)
        tiger_wins = int((games['winner'] == 'TIGER').sum())
        goat_wins = int((games['winner'] == 'GOAT').sum())
        draws = int((games['winner'] == 'DRAW').sum())
        low, high = wilson_interval(tiger_wins, total)
        rows.append({
            'tiger_config': tiger_config,
            'goat_config': goat_config,
            'games': total,
            'tiger_win_rate': tiger_wins / total,
            'goat_win_rate': goat_wins / total,
            'draw_rate': draws / total,
            'tiger_win_ci_low': low,
            'tiger_win_ci_high': high,
            'avg_moves': float(games['moves'].mean()),
            'avg_goats_captured': float(games['goats_captured'].mean()),
        })
    return pd.DataFrame(rows)
