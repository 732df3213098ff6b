"""
Agent: shortest paths constrained by a tree of 2x2 cells

We use a shortest-path algorithm on the snake-level grid that maintains the cell and tree constraints
1. Cell constraint: only the two right-hand-drive moves are possible in each position
2. Tree constraint: we can't move into a visited cell except towards its parent.
   Taking the snake's tail as the root of the tree:
    * moving to the parent means retracing our steps, this is always possible
    * moving to unvisited cells is always possible
    * moving from a parent into an existing child never happens
3. All free cells must stay coverable by the tree.
   Combined with 1 and 2 this is (probably) NP-hard, so we use heuristics:
    * ANY: if the planned move would make parts of the grid unreachable, make the other move instead
    * NEAREST_UNREACHABLE: move towards the nearest cell that would become unreachable first
Bonus: penalties on the edge costs can make the snake prefer hugging walls.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import List, Optional

from algorithms.cell_tree import (can_move_in_cell_tree, cell, cell_tree_parents, cell_tree_unreachables,
                                  move_to_parent)
from algorithms.lookahead import Lookahead, Unreachables, after_moves
from algorithms.shortest_path import INFINITY, astar_shortest_path, first_step, read_path
from game.game import Game, GameBase
from game.grid import DIRS, Coord, Dir, Grid, is_neighbor
from .base import Agent, AgentLog, LogKey

logger = logging.getLogger(__name__)

# Cost of a single step; the penalties are small adjustments on top of it
STEP_COST = 1000


class DetourStrategy(Enum):
    NONE = "none"
    ANY = "any"
    NEAREST_UNREACHABLE = "nearest_unreachable"


@dataclass(frozen=True)
class CellTreeConfig:
    """Knobs of the cell tree agent"""

    recalculate_path: bool = True
    lookahead: Lookahead = Lookahead.MANY_MOVE_TAIL
    detour: DetourStrategy = DetourStrategy.NEAREST_UNREACHABLE
    # penalties for where a step goes
    same_cell_penalty: int = 0
    new_cell_penalty: int = 0
    parent_cell_penalty: int = 0
    # penalties for what is on the right hand side of a step: the board edge, the snake, or nothing
    edge_penalty_in: int = 0
    edge_penalty_out: int = 0
    wall_penalty_in: int = 0
    wall_penalty_out: int = 0
    open_penalty_in: int = 0
    open_penalty_out: int = 0

    def __post_init__(self) -> None:
        if self.min_step_cost <= 0:
            raise ValueError("penalties must leave every step with a positive cost")

    @property
    def min_step_cost(self) -> int:
        """Lower bound on the cost of one step, used to scale the A* heuristic"""
        move = min(self.same_cell_penalty, self.new_cell_penalty, self.parent_cell_penalty)
        hug = min(self.edge_penalty_in, self.edge_penalty_out, self.wall_penalty_in,
                  self.wall_penalty_out, self.open_penalty_in, self.open_penalty_out)
        return STEP_COST + min(0, move) + min(0, hug)


class CellTreeAgent(Agent):
    name = "cell-tree"

    def __init__(self, config: Optional[CellTreeConfig] = None):
        self.config = config or CellTreeConfig()
        # remaining steps of the previous plan, nearest-target-first
        self.cached_path: List[Coord] = []

    def edge_cost(self, game: GameBase, parents: Grid):
        """Edge cost function for A*: INFINITY for moves that break the cell tree or hit the snake"""
        cfg = self.config
        grid = game.grid

        def edge(a: Coord, b: Coord, d: Dir) -> float:
            if not can_move_in_cell_tree(parents, a, b, d) or grid[b]:
                return INFINITY
            cell_a = cell(a)
            cell_b = cell(b)
            to_parent = cell_b == parents[cell_a]
            to_same = cell_b == cell_a
            right = b + d.rotate_clockwise()
            hugs_edge = not grid.valid(right)
            hugs_wall = not hugs_edge and grid[right]
            cost = STEP_COST
            if to_parent:
                cost += cfg.parent_cell_penalty
            elif to_same:
                cost += cfg.same_cell_penalty
            else:
                cost += cfg.new_cell_penalty
            if to_same:
                cost += cfg.edge_penalty_in if hugs_edge else cfg.wall_penalty_in if hugs_wall else cfg.open_penalty_in
            else:
                cost += cfg.edge_penalty_out if hugs_edge else cfg.wall_penalty_out if hugs_wall else cfg.open_penalty_out
            return cost

        return edge

    def __call__(self, game: Game, log: Optional[AgentLog] = None) -> Dir:
        pos = game.snake_pos
        cfg = self.config
        if self.cached_path and not cfg.recalculate_path:
            return self.cached_path.pop() - pos

        # shortest path satisfying 1 and 2
        parents = cell_tree_parents(game.dimensions, game.snake)
        edge = self.edge_cost(game, parents)
        dists = astar_shortest_path(game.dimensions, edge, pos, game.apple, cfg.min_step_cost)
        path = read_path(dists, pos, game.apple)

        if log is not None:
            log.add(game.turn, LogKey.PLAN, path + [pos])

        if not path and self.cached_path and is_neighbor(self.cached_path[-1], pos):
            # apple out of reach for now, keep following the previous plan
            path = list(self.cached_path)

        # heuristic 3: don't make parts of the grid unreachable
        if cfg.detour != DetourStrategy.NONE:
            after = after_moves(game, path, cfg.lookahead) if path else game
            unreachable = cell_tree_unreachables(after, dists)
            if unreachable.any:
                if log is not None:
                    log.add(game.turn, LogKey.UNREACHABLE, unreachable.unreachable_grid())
                planned = path[-1] if path else None
                move = self.detour_move(game, parents, planned, unreachable)
                if move is not None:
                    self.cached_path = []
                    return move
                # This can happen because it previously looked like everything would be reachable
                # upon reaching the apple, but moving the tail opened up a shorter path.
                # Just continue along the previous path.
                if self.cached_path and is_neighbor(self.cached_path[-1], pos):
                    return self.cached_path.pop() - pos
                logger.debug("Unreachable cells at turn %d, but no alternative move or cached path", game.turn)

        if not path:
            self.cached_path = []
            return self.last_resort_move(game, parents)

        self.cached_path = path[:-1]
        return path[-1] - pos

    def detour_move(self, game: GameBase, parents: Grid, planned: Optional[Coord],
                    unreachable: Unreachables) -> Optional[Dir]:
        """
        Pick a move that avoids leaving `unreachable` cells behind.

        Args:
            game: current board
            parents: current cell tree
            planned: the next position of the plan (None without a plan)
            unreachable: cells that the plan would cut off

        Returns:
            the detour direction, or None if the strategy finds nothing
        """
        pos = game.snake_pos
        edge = self.edge_cost(game, parents)
        if self.config.detour == DetourStrategy.ANY:
            # move in any other legal direction
            for d in DIRS:
                b = pos + d
                if game.grid.valid(b) and b != planned and edge(pos, b, d) != INFINITY:
                    return d
            return None
        if self.config.detour == DetourStrategy.NEAREST_UNREACHABLE:
            # go to the nearest unreachable cell first, measured over the whole board
            dists = astar_shortest_path(game.dimensions, edge, pos, None)
            ranked = unreachable.with_nearest(dists)
            if ranked.dist_to_nearest < INFINITY:
                nxt = first_step(dists, pos, ranked.nearest)
                if nxt is not None:
                    return nxt - pos
        return None

    def last_resort_move(self, game: GameBase, parents: Grid) -> Dir:
        """
        No plan, no detour and no cached path.

        Take a legal cell-tree move if there is one, otherwise any free neighbor.
        If the snake is boxed in, head for the parent cell and let the game record the loss.
        """
        pos = game.snake_pos
        logger.warning("No plan for the cell tree agent at %s, taking a last resort move", pos)
        edge = self.edge_cost(game, parents)
        for d in DIRS:
            b = pos + d
            if game.grid.valid(b) and edge(pos, b, d) != INFINITY:
                return d
        for d in DIRS:
            if game.grid.is_clear(pos + d):
                return d
        d = move_to_parent(parents, pos)
        return Dir.UP if d is None else d
