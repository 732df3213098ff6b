"""
Shortest paths and reachability on the board
- BFS with a caller supplied can_move(a, b, dir) predicate
- A* with a caller supplied integer edge_cost(a, b, dir), INFINITY forbids an edge
- scanline flood fill
"""

from __future__ import annotations
from heapq import heappop, heappush
import math
from typing import Callable, List, NamedTuple, Optional

from game.grid import DIRS, INVALID, Coord, Dir, Grid, RangeLike, as_range, manhattan_distance

INFINITY = math.inf

CanMove = Callable[[Coord, Coord, Dir], bool]
EdgeCost = Callable[[Coord, Coord, Dir], float]


class Step(NamedTuple):
    """Per-cell result of a path query: distance from the source and the previous cell"""
    dist: float
    from_: Coord

    @property
    def reachable(self) -> bool:
        return self.dist < INFINITY


UNREACHED = Step(INFINITY, INVALID)


def bfs_shortest_path(dims: RangeLike, can_move: CanMove, source: Coord, target: Optional[Coord] = None) -> Grid:
    """
    Breadth first search from source.

    Args:
        dims: board size
        can_move: can_move(a, b, dir) is True if the edge a -> b may be used
        source: start cell
        target: stop as soon as this cell is reached (None = explore everything)

    Returns:
        Grid of Step; follow from_ back to source to read a shortest path
    """
    dims = as_range(dims)
    steps = Grid(dims, UNREACHED, dtype=object)
    steps[source] = Step(0, INVALID)
    frontier = [source]
    dist = 0
    while frontier:
        dist += 1
        next_frontier = []
        for a in frontier:
            for d in DIRS:
                b = a + d
                if dims.valid(b) and steps[b].dist > dist and can_move(a, b, d):
                    steps[b] = Step(dist, a)
                    if b == target:
                        return steps
                    next_frontier.append(b)
        frontier = next_frontier
    return steps


def shortest_path(grid: Grid, source: Coord, target: Optional[Coord] = None) -> Grid:
    """BFS through the free (unset) cells of an occupancy grid"""
    return bfs_shortest_path(grid.coords(), lambda a, b, d: not grid[b], source, target)


def astar_shortest_path(dims: RangeLike, edge_cost: EdgeCost, source: Coord,
                        target: Optional[Coord] = None, min_cost: float = 1) -> Grid:
    """
    A* search with integer edge costs.

    The heuristic is the Manhattan distance times min_cost, so it stays admissible
    as long as no edge is cheaper than min_cost. Without a target this is Dijkstra
    and every reachable cell gets its final distance.

    Args:
        dims: board size
        edge_cost: edge_cost(a, b, dir), INFINITY if the edge can't be used
        source: start cell
        target: goal cell, or None to explore everything
        min_cost: lower bound on the cost of a single edge

    Returns:
        Grid of Step, dist is the accumulated cost
    """
    dims = as_range(dims)
    steps = Grid(dims, UNREACHED, dtype=object)
    steps[source] = Step(0, INVALID)

    def heuristic(c: Coord) -> float:
        return 0 if target is None else min_cost * manhattan_distance(c, target)

    queue = [(heuristic(source), 0, source)]
    while queue:
        _, cost, a = heappop(queue)
        if a == target:
            break
        if cost > steps[a].dist:
            continue  # stale entry
        for d in DIRS:
            b = a + d
            if not dims.valid(b):
                continue
            c = edge_cost(a, b, d)
            if c == INFINITY:
                continue
            new_cost = cost + c
            if new_cost < steps[b].dist:
                steps[b] = Step(new_cost, a)
                heappush(queue, (new_cost + heuristic(b), new_cost, b))
    return steps


def read_path(steps: Grid, source: Coord, target: Coord) -> List[Coord]:
    """
    Walk predecessor pointers back from target.

    Returns:
        [target, ..., first step], nearest-target-first and without source;
        empty if target is unreachable or is the source
    """
    path = []
    if target == source or not steps[target].reachable:
        return path
    c = target
    while c != source:
        path.append(c)
        c = steps[c].from_
        if c == INVALID:
            return []
    return path


def first_step(steps: Grid, source: Coord, target: Coord) -> Optional[Coord]:
    """First cell after source on the path to target, None if there is no path"""
    path = read_path(steps, source, target)
    return path[-1] if path else None


def flood_fill(dims: RangeLike, can_move: CanMove, seed: Coord) -> Grid:
    """
    Scanline flood fill.

    From each seed, extend left and right along the row while can_move allows,
    mark the run, then queue the cells above and below every marked column.

    Returns:
        boolean Grid of the cells reachable from seed (seed included)
    """
    dims = as_range(dims)
    reachable = Grid(dims, False)
    stack = [seed]
    while stack:
        c = stack.pop()
        if reachable[c]:
            continue
        y = c.y
        x0 = x1 = c.x
        while x0 > 0 and not reachable[(x0 - 1, y)] and can_move(Coord(x0, y), Coord(x0 - 1, y), Dir.LEFT):
            x0 -= 1
        while x1 < dims.w - 1 and not reachable[(x1 + 1, y)] and can_move(Coord(x1, y), Coord(x1 + 1, y), Dir.RIGHT):
            x1 += 1
        for x in range(x0, x1 + 1):
            reachable[(x, y)] = True
        for x in range(x0, x1 + 1):
            a = Coord(x, y)
            for d in (Dir.UP, Dir.DOWN):
                b = a + d
                if dims.valid(b) and not reachable[b] and can_move(a, b, d):
                    stack.append(b)
    return reachable
