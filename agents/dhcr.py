"""
Agent: Dynamic Hamiltonian Cycle Repair

Maintain a Hamiltonian cycle and keep rewriting it so that it follows
a shortest path to the apple.
- every turn: A* to the apple, preferring paths that stay close to the current cycle order
- repair the cycle so that the cell after the head is the first step of that path
- if the repair fails, or leaves the apple no closer along the cycle,
  keep following the old cycle for this turn
- optional wall-follow mode: when the path would cut off free cells,
  hug the snake's right hand side for a while
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import List, Optional

from algorithms.hamilton_cycle import CycleOrder, GridPath, cycle_to_path, random_hamiltonian_cycle, repair_cycle
from algorithms.lookahead import Lookahead, after_moves, find_unreachables
from algorithms.shortest_path import INFINITY, astar_shortest_path, read_path
from game.game import Game
from game.grid import Coord, Dir, RangeLike
from game.rng import RNG
from .base import Agent, AgentLog, LogKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepairConfig:
    """Knobs of the cycle repair agent"""

    recalculate_path: bool = True
    # turns of wall-follow mode after the plan would cut off free cells, 0 to disable
    wall_follow_overshoot: int = 0

    def __post_init__(self) -> None:
        if self.wall_follow_overshoot < 0:
            raise ValueError(f"wall_follow_overshoot must be >= 0, got {self.wall_follow_overshoot}")


class DynamicHamiltonianCycleRepairAgent(Agent):
    name = "dhcr"

    def __init__(self, cycle: GridPath, config: Optional[RepairConfig] = None):
        self.cycle = cycle.copy()
        self.config = config or RepairConfig()
        self.wall_follow_mode = 0
        self.cached_path: List[Coord] = []

    @classmethod
    def random(cls, dims: RangeLike, rng: RNG,
               config: Optional[RepairConfig] = None) -> DynamicHamiltonianCycleRepairAgent:
        return cls(random_hamiltonian_cycle(dims, rng), config)

    def __call__(self, game: Game, log: Optional[AgentLog] = None) -> Dir:
        pos = game.snake_pos
        if self.cached_path and not self.config.recalculate_path:
            step = self.cached_path.pop()
        else:
            step = self._plan(game, log)

        if step != self.cycle[pos] and game.grid.is_clear(step):
            before = CycleOrder(self.cycle).distance_round_down(pos, game.apple)
            saved = self.cycle.copy()
            # splice only through free cells, the body must stay in cycle order behind the head
            if not repair_cycle(self.cycle, pos, step, can_use=lambda c: not game.grid[c]):
                logger.debug("repair failed at turn %d: %s -> %s", game.turn, pos, step)
                self.cached_path = []
            elif CycleOrder(self.cycle).distance_round_down(step, game.apple) >= before:
                # the apple must get closer along the cycle every turn
                logger.debug("repair at turn %d moves the apple further away, undone", game.turn)
                self.cycle = saved
                self.cached_path = []

        if log is not None:
            log.add(game.turn, LogKey.CYCLE, cycle_to_path(self.cycle))
        return self.cycle[pos] - pos

    def _plan(self, game: Game, log: Optional[AgentLog]) -> Coord:
        """Next cell the snake would like to move to"""
        pos = game.snake_pos
        goal = game.apple
        order = CycleOrder(self.cycle)
        # real path length first, closeness to the cycle order only breaks ties
        step_cost = game.grid.size ** 2 + 1

        def edge(a: Coord, b: Coord, d: Dir) -> float:
            if game.grid[b]:
                return INFINITY
            return step_cost + order.distance_round_down(b, goal)

        dists = astar_shortest_path(game.dimensions, edge, pos, goal, step_cost)
        path = read_path(dists, pos, goal)
        if log is not None:
            log.add(game.turn, LogKey.PLAN, path + [pos])
        self.cached_path = path[:-1]
        step = path[-1] if path else self.cycle[pos]

        if self.config.wall_follow_overshoot > 0:
            # would this path make cells unreachable?
            after = after_moves(game, path, Lookahead.MANY_KEEP_TAIL)
            unreachable = find_unreachables(lambda a, b, d: not after.grid[b], after)
            if unreachable.any:
                self.wall_follow_mode = self.config.wall_follow_overshoot
                if log is not None:
                    log.add(game.turn, LogKey.UNREACHABLE, unreachable.unreachable_grid())
            elif self.wall_follow_mode:
                self.wall_follow_mode -= 1
            if self.wall_follow_mode > 0:
                step = self._wall_follow_step(game, step)
                self.cached_path = []
        return step

    def _wall_follow_step(self, game: Game, default: Coord) -> Coord:
        """First free neighbor turning right, going straight, then turning left"""
        pos = game.snake_pos
        if len(game.snake) > 1:
            heading = pos - game.snake[1]
        else:
            heading = self.cycle[pos] - pos
        for d in (heading.rotate_clockwise(), heading, heading.rotate_counter_clockwise()):
            b = pos + d
            if game.grid.is_clear(b):
                return b
        return default
