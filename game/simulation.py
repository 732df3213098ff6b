"""
Playing full games
- play(): one round, agent against game, until it is won or lost
- Stats: turns and outcomes over many rounds
- play_multiple(): many independent rounds on worker threads
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
import logging
import threading
from typing import Callable, List, Optional, Sequence

import numpy as np

from .game import Game
from .grid import CoordRange, RangeLike, as_range
from .rng import RNG, SeedLike, as_rng

logger = logging.getLogger(__name__)

QUANTILES = (0.0, 0.25, 0.5, 0.75, 1.0)


def play(game: Game, agent, log=None, on_turn: Optional[Callable[[Game], None]] = None) -> Game:
    """
    Let an agent play a game until it is over.

    Args:
        game: a fresh Game, played in place
        agent: callable agent(game, log) -> Dir
        log: optional AgentLog handed to the agent every turn
        on_turn: called with the game before the first move and after every move

    Returns:
        the same game, now finished
    """
    if on_turn is not None:
        on_turn(game)
    while not game.done:
        game.move(agent(game, log))
        if on_turn is not None:
            on_turn(game)
    return game


class Stats:
    """Outcome of a batch of rounds"""

    def __init__(self):
        self.turns: List[int] = []
        self.wins = 0
        self.losses = 0
        self.timeouts = 0

    def add(self, game: Game) -> None:
        self.turns.append(game.turn)
        if game.win:
            self.wins += 1
        else:
            self.losses += 1
            if game.turn > game.max_turns:
                self.timeouts += 1

    @property
    def n(self) -> int:
        return len(self.turns)

    @property
    def collisions(self) -> int:
        """Losses caused by the snake running into a wall or itself"""
        return self.losses - self.timeouts

    @property
    def mean_turns(self) -> float:
        return float(np.mean(self.turns)) if self.turns else 0.0

    @property
    def stddev_turns(self) -> float:
        return float(np.std(self.turns)) if self.turns else 0.0

    @property
    def loss_rate(self) -> float:
        return self.losses / self.n if self.n else 0.0

    def quantiles(self, qs: Sequence[float] = QUANTILES) -> List[float]:
        """Turn count quantiles, linear interpolation between samples"""
        if not self.turns:
            return [0.0 for _ in qs]
        return [float(q) for q in np.quantile(self.turns, qs)]

    def summary(self) -> str:
        quantiles = ", ".join(f"{q:.0f}" for q in self.quantiles())
        return (f"games: {self.n} | wins: {self.wins} | losses: {self.losses} "
                f"(timeouts: {self.timeouts}) | loss rate: {self.loss_rate:.1%}\n"
                f"turns: {self.mean_turns:.1f} ± {self.stddev_turns:.1f} | quantiles: [{quantiles}]")


AgentMaker = Callable[[CoordRange, RNG], object]


def play_multiple(make_agent: AgentMaker, dims: RangeLike, n: int = 100, seed: SeedLike = None,
                  workers: Optional[int] = None,
                  progress: Optional[Callable[[int, int], None]] = None) -> Stats:
    """
    Play n independent rounds.

    Every round owns its Game, its agent and its RNG stream; the streams are drawn
    from one generator before any work starts, so results don't depend on scheduling.

    Args:
        make_agent: make_agent(dims, rng) -> a fresh agent
        dims: board size
        n: number of rounds
        seed: seed for the parent generator
        workers: worker threads (None lets the executor decide)
        progress: progress(done, total) called after every finished round

    Returns:
        Stats over all rounds
    """
    dims = as_range(dims)
    parent = as_rng(seed)
    round_rngs = [parent.next_rng() for _ in range(n)]
    stats = Stats()
    lock = threading.Lock()
    remaining = n

    def run_round(rng: RNG) -> None:
        nonlocal remaining
        agent = make_agent(dims, rng.next_rng())
        game = play(Game(dims, rng), agent)
        with lock:
            stats.add(game)
            remaining -= 1
            done = n - remaining
        if progress is not None:
            progress(done, n)

    logger.info("Playing %d rounds on %dx%d", n, dims.w, dims.h)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(run_round, rng) for rng in round_rngs]
        for future in futures:
            future.result()
    return stats
