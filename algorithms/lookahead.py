"""
Looking ahead: what would the board look like after following a path,
and which free cells could the snake no longer reach from there?
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from game.errors import NotAdjacentError
from game.game import GameBase
from game.grid import INVALID, Coord, Grid, is_neighbor
from .shortest_path import INFINITY, CanMove, flood_fill


class Lookahead(Enum):
    ONE = "one"                         # only the move about to be made
    MANY_KEEP_TAIL = "many_keep_tail"   # extend the snake along the whole path, tail stays put
    MANY_MOVE_TAIL = "many_move_tail"   # move along the whole path, the tail follows


def after_moves(game: GameBase, path: List[Coord], lookahead: Lookahead) -> GameBase:
    """
    Hypothetical board after following a path.

    Args:
        game: current board (not modified)
        path: nearest-target-first, so path[-1] is the next head position
        lookahead: how much of the path to simulate

    Returns:
        a new GameBase
    """
    after = game.copy()
    if not path:
        return after
    if not is_neighbor(path[-1], game.snake_pos):
        raise NotAdjacentError(game.snake_pos, path[-1])
    if lookahead == Lookahead.ONE:
        after.grid[path[-1]] = True
        after.snake.push_front(path[-1])
        return after
    for p in reversed(path):
        after.grid[p] = True
        after.snake.push_front(p)
        if lookahead == Lookahead.MANY_MOVE_TAIL and p != game.apple:
            after.grid[after.snake.pop_back()] = False
    return after


@dataclass
class Unreachables:
    reachable: Grid
    any: bool = False
    nearest: Coord = INVALID
    dist_to_nearest: float = INFINITY

    def unreachable_grid(self) -> Grid:
        """Bitmap of the unreachable cells"""
        return self.reachable.inverted()

    def with_nearest(self, dists: Grid) -> Unreachables:
        """Same unreachable set, nearest cell ranked by another distance grid"""
        out = Unreachables(self.reachable, self.any)
        for c in self.unreachable_grid().true_coords():
            d = dists[c].dist
            if d < out.dist_to_nearest:
                out.nearest = c
                out.dist_to_nearest = d
        return out


def find_unreachables(can_move: CanMove, game: GameBase, dists: Optional[Grid] = None) -> Unreachables:
    """
    Free cells that can't be reached from the snake's head.

    Usually called on a board from after_moves(). This is not exactly the same as
    the snake splitting the board in two: can_move may be directed.

    Args:
        can_move: movement predicate used for the flood fill
        game: board to examine
        dists: Step grid used to pick the nearest unreachable cell

    Returns:
        Unreachables; cells containing the snake count as reachable
    """
    out = Unreachables(flood_fill(game.dimensions, can_move, game.snake_pos))
    for a, occupied in game.grid.items():
        if occupied:
            out.reachable[a] = True
        elif not out.reachable[a]:
            out.any = True
            if dists is not None and dists[a].dist < out.dist_to_nearest:
                out.nearest = a
                out.dist_to_nearest = dists[a].dist
    return out
