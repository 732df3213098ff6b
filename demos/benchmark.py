"""
Benchmark an agent over many games
Runs the games on worker threads, prints a summary and optionally plots the turns per game
"""

from __future__ import annotations
import logging
import time
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # no window needed, the plot is written to a file
import matplotlib.pyplot as plt
import numpy as np

from agents import make_agent
from game.grid import CoordRange
from game.simulation import Stats, play_multiple

logger = logging.getLogger(__name__)


def benchmark(agent_name: str = "cell-tree", width: int = 10, height: int = 10, num_games: int = 100,
              seed=None, workers: Optional[int] = None, plot_path: Optional[str] = None) -> Stats:
    """
    Play many games with one agent and report how it did

    Args:
        agent_name: key of agents.AGENTS
        width: width of the board
        height: height of the board
        num_games: number of games to play
        seed: seed for the parent generator
        workers: worker threads (None = let the executor decide)
        plot_path: if given, save a histogram of turns per game there

    Returns:
        Stats of the run
    """
    dims = CoordRange(width, height)

    print("\n" + "=" * 60)
    print(f"Benchmark: agent '{agent_name}' on a {width}x{height} board")
    print("=" * 60)
    print(f"Games: {num_games}")

    def progress(done: int, total: int) -> None:
        if done % max(1, total // 10) == 0 or done == total:
            print(f"  {done:4d}/{total} games done")

    start_time = time.time()
    stats = play_multiple(lambda d, rng: make_agent(agent_name, d, rng), dims, num_games,
                          seed=seed, workers=workers, progress=progress)
    elapsed = time.time() - start_time

    print("\n" + "=" * 60)
    print("Benchmark Complete!")
    print("=" * 60)
    print(stats.summary())
    print(f"Turns per cell: {stats.mean_turns / dims.size:.2f}")
    print(f"Total Time: {elapsed:.1f} seconds")
    print("=" * 60 + "\n")

    if plot_path:
        plot_results(stats, agent_name, dims, plot_path)
    return stats


def plot_results(stats: Stats, agent_name: str, dims: CoordRange, path: str) -> None:
    """Histogram of turns per game, with the mean marked"""
    plt.figure(figsize=(8, 5))
    plt.hist(stats.turns, bins=min(30, max(1, stats.n)), alpha=0.7, label='Turns per Game')
    plt.axvline(stats.mean_turns, color='red', linewidth=2, label=f'Mean ({stats.mean_turns:.0f})')
    if stats.n > 1:
        median = float(np.median(stats.turns))
        plt.axvline(median, color='black', linestyle='--', label=f'Median ({median:.0f})')
    plt.xlabel('Turns')
    plt.ylabel('Games')
    plt.title(f'{agent_name} on {dims.w}x{dims.h}: {stats.wins}/{stats.n} wins')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Benchmark plot saved to: {path}")
