"""
Agent: follow a fixed Hamiltonian cycle, but take shortcuts

The snake may jump ahead to a neighbor further along the cycle, as long as it
stays before the apple and well before its own tail.
"""

from __future__ import annotations
from typing import Optional

from algorithms.hamilton_cycle import CycleOrder, GridPath, cycle_to_path, random_hamiltonian_cycle
from algorithms.shortest_path import INFINITY, astar_shortest_path, first_step
from game.game import Game
from game.grid import DIRS, Coord, Dir, RangeLike
from game.rng import RNG
from .base import Agent, AgentLog, LogKey


class PerturbedHamiltonianCycleAgent(Agent):
    name = "perturbed"

    def __init__(self, cycle: GridPath, use_shortest_path: bool = False):
        self.cycle = cycle
        self.order = CycleOrder(cycle)
        self.use_shortest_path = use_shortest_path

    @classmethod
    def random(cls, dims: RangeLike, rng: RNG, **kwargs) -> PerturbedHamiltonianCycleAgent:
        return cls(random_hamiltonian_cycle(dims, rng), **kwargs)

    def max_shortcut(self, game: Game) -> int:
        """How far along the cycle the snake may jump this turn"""
        pos = game.snake_pos
        cells = game.grid.size
        dist_goal = self.order.distance(pos, game.apple)
        dist_tail = self.order.distance(pos, game.tail)
        max_shortcut = min(dist_goal, dist_tail - 3)
        if len(game.snake) > cells * 50 // 100:
            max_shortcut = 0
        if dist_goal < dist_tail:
            max_shortcut -= 1  # account for growth
            # we might find more apples along the way
            if (dist_tail - dist_goal) * 4 > cells - len(game.snake):
                max_shortcut -= 10
        return max_shortcut

    def __call__(self, game: Game, log: Optional[AgentLog] = None) -> Dir:
        if log is not None and game.turn == 0:
            log.add(game.turn, LogKey.CYCLE, cycle_to_path(self.cycle))
        pos = game.snake_pos
        nxt = self.cycle[pos]
        # A shortcut to neighbor b is possible when pos < b <= goal < tail in cycle order.
        # goal < tail might not hold if we took shortcuts before.
        if self.max_shortcut(game) > 0:
            if self.use_shortest_path:
                better = self._shortest_path_step(game)
                if better is not None and game.grid.is_clear(better):
                    nxt = better
            else:
                nxt = self._best_neighbor(game, nxt)
        return nxt - pos

    def _best_neighbor(self, game: Game, nxt: Coord) -> Coord:
        pos = game.snake_pos
        max_shortcut = self.max_shortcut(game)
        dist_next = 1
        for d in DIRS:
            b = pos + d
            if game.grid.is_clear(b):
                dist_b = self.order.distance(pos, b)
                if dist_next < dist_b <= max_shortcut:
                    nxt = b
                    dist_next = dist_b
        return nxt

    def _shortest_path_step(self, game: Game) -> Optional[Coord]:
        """First step of the shortest route that only moves forward along the cycle"""
        pos = game.snake_pos
        dist_goal = self.order.distance(pos, game.apple)
        dist_tail = self.order.distance(pos, game.tail)

        def edge(a: Coord, b: Coord, d: Dir) -> float:
            dist_a = self.order.distance_round_down(pos, a)
            dist_b = self.order.distance(pos, b)
            if dist_a < dist_b < dist_tail and not game.grid[b]:
                return 1
            if dist_b == dist_a + 1:
                # can always move to the next cell in the cycle
                return 1
            return INFINITY

        target = game.apple if dist_goal < dist_tail else game.tail
        dists = astar_shortest_path(game.dimensions, edge, pos, target)
        return first_step(dists, pos, target)
