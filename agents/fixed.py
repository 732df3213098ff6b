"""
Agents that walk a fixed route.
- ZigZagAgent, FixedCycleAgent: follow a Hamiltonian cycle forever. Slow, but the snake never dies.
- CutAgent: zig-zag sweeps that cut columns short on the way to the apple
"""

from __future__ import annotations
from typing import Optional

from algorithms.hamilton_cycle import GridPath, cycle_to_path, make_zig_zag_cycle, zig_zag_direction
from game.game import Game
from game.grid import Dir
from .base import Agent, AgentLog, LogKey


class ZigZagAgent(Agent):
    """Follow the zig-zag cycle, computed cell by cell"""

    name = "zig-zag"

    def __call__(self, game: Game, log: Optional[AgentLog] = None) -> Dir:
        if log is not None and game.turn == 0:
            log.add(game.turn, LogKey.CYCLE, cycle_to_path(make_zig_zag_cycle(game.dimensions)))
        return zig_zag_direction(game.dimensions, game.snake_pos)


class FixedCycleAgent(Agent):
    """Follow a given cycle"""

    name = "fixed"

    def __init__(self, cycle: GridPath):
        self.cycle = cycle

    def __call__(self, game: Game, log: Optional[AgentLog] = None) -> Dir:
        if log is not None and game.turn == 0:
            log.add(game.turn, LogKey.CYCLE, cycle_to_path(self.cycle))
        c = game.snake_pos
        return self.cycle[c] - c


def _any_set(grid, x0: int, x1: int, y0: int, y1: int) -> bool:
    """Is any cell with x0 <= x < x1 and y0 <= y < y1 set?"""
    return bool(grid.data[max(y0, 0):max(y1, 0), max(x0, 0):max(x1, 0)].any())


class CutAgent(Agent):
    """
    Sweep the board column by column, cutting columns short when the apple is ahead.

    - even columns are walked down, odd columns up
    - sweeping right, row 0 is kept free for the way back;
      sweeping left, the bottom row is
    - a cut skips the far end of a pair of columns, but only when the skipped
      part holds no body, so no gap is left behind
    - while the snake is short, it may turn around early when the apple is behind it

    Not collision free: the two sweeps do not form one cycle, so a long snake can
    still run into itself.
    """

    name = "cut"

    def __init__(self, quick_dir_change: bool = True):
        self.move_right = True
        self.quick_dir_change = quick_dir_change

    def __call__(self, game: Game, log: Optional[AgentLog] = None) -> Dir:
        c = game.snake_pos
        target = game.apple
        grid = game.grid
        w, h = grid.w, grid.h
        short = len(game.snake) < grid.size // 4
        if c.x == 0:
            self.move_right = True
        if c.x == w - 1 or (c.y == 0 and c.x > 0):
            self.move_right = False

        if self.move_right:
            if c.x % 2 == 0:
                if (self.quick_dir_change and target.x < c.x and short and c.y > 0
                        and not _any_set(grid, c.x + 1, w, 0, h) and not grid[c.x, c.y - 1]):
                    self.move_right = False
                    return Dir.UP
                return Dir.RIGHT if c.y == h - 1 else Dir.DOWN
            if c.y <= 1 or grid[c.x, c.y - 1]:
                return Dir.RIGHT  # forced
            if _any_set(grid, c.x, c.x + 2, 0, c.y - 1):
                return Dir.UP  # a cut would leave a gap
            if target.x > c.x + 1 or (target.x == c.x + 1 and target.y >= c.y):
                return Dir.RIGHT  # cut
            if self.quick_dir_change and target.x < c.x:
                self.move_right = False
            return Dir.UP

        if c.x % 2 == 1:
            if (self.quick_dir_change and target.x > c.x and short and c.y + 1 < h
                    and not _any_set(grid, 0, c.x, 0, h) and not grid[c.x, c.y + 1]):
                self.move_right = True
                return Dir.DOWN
            return Dir.LEFT if c.y == 0 else Dir.UP
        if c.y >= h - 2 or grid[c.x, c.y + 1]:
            return Dir.LEFT  # forced
        if _any_set(grid, c.x - 1, c.x + 1, c.y + 1, h):
            return Dir.DOWN  # a cut would leave a gap
        if target.x < c.x - 1 or (target.x == c.x - 1 and target.y <= c.y):
            return Dir.LEFT  # cut
        if self.quick_dir_change and target.x > c.x:
            self.move_right = True
        return Dir.DOWN
