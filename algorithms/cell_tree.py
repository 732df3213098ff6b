"""
The board as a grid of 2x2 cells, like a bunch of two lane streets.

We follow right-hand drive. Inside each 2x2 cell every position has exactly two
legal exits: one that stays in the cell and one that leaves it. For example the cell

    #<-#<-
    v
    #  #->
    v  ^

is connected to the cell below and the cell on the right.
When the connections between cells form a spanning tree, the path they describe
is a single Hamiltonian cycle.
"""

from __future__ import annotations
from typing import Optional

from game.game import GameBase
from game.grid import NOT_VISITED, ROOT, Coord, CoordRange, Dir, Grid
from .lookahead import Unreachables, find_unreachables

CellCoord = Coord


def cell(c: Coord) -> CellCoord:
    """The 2x2 cell containing c"""
    return Coord(c[0] // 2, c[1] // 2)


def cell_move_inside(c: Coord) -> Dir:
    """Direction that stays inside the cell"""
    if c[1] % 2 == 0:
        return Dir.DOWN if c[0] % 2 == 0 else Dir.LEFT
    return Dir.RIGHT if c[0] % 2 == 0 else Dir.UP


def cell_move_outside(c: Coord) -> Dir:
    """Direction that leaves the cell"""
    if c[1] % 2 == 0:
        return Dir.LEFT if c[0] % 2 == 0 else Dir.UP
    return Dir.DOWN if c[0] % 2 == 0 else Dir.RIGHT


def is_cell_move(c: Coord, d: Dir) -> bool:
    return d == cell_move_inside(c) or d == cell_move_outside(c)


def cell_tree_parents(dims: CoordRange, snake) -> Grid:
    """
    Spanning tree of the cells visited by the snake, as parent pointers.

    Walk the body from tail to head; the first time a cell is entered its parent
    is the cell we came from. The tail's cell is the root.

    Args:
        dims: full board size
        snake: SnakeBuffer (head first)

    Returns:
        (w/2) x (h/2) Grid of CellCoord; NOT_VISITED for cells without snake, ROOT for the root
    """
    parents = Grid(CoordRange(dims.w // 2, dims.h // 2), NOT_VISITED, dtype=object)
    parent = ROOT
    for c in reversed(snake):
        cell_coord = cell(c)
        if parents[cell_coord] == NOT_VISITED:
            parents[cell_coord] = parent
        parent = cell_coord
    return parents


def can_move_in_cell_tree(parents: Grid, a: Coord, b: Coord, d: Dir) -> bool:
    """
    Can the snake move from a to b without breaking the tree?

    1. only the two right-hand-drive moves are allowed in each position
    2. moving to another cell is only allowed towards the parent (retracing our steps)
       or into an unvisited cell (growing the tree)
    """
    if not is_cell_move(a, d):
        return False
    cell_a = cell(a)
    cell_b = cell(b)
    return cell_a == cell_b or parents[cell_b] == NOT_VISITED or parents[cell_a] == cell_b


def move_to_parent(parents: Grid, a: Coord) -> Optional[Dir]:
    """Direction that moves from a towards its cell's parent (None for the root cell)"""
    cell_a = cell(a)
    parent = parents[cell_a]
    if parent == ROOT or parent == NOT_VISITED:
        return None
    x, y = a[0] % 2, a[1] % 2
    if x == 1 and y == 0:
        return Dir.UP if parent.y < cell_a.y else Dir.LEFT
    if x == 0 and y == 1:
        return Dir.DOWN if parent.y > cell_a.y else Dir.RIGHT
    if x == 0 and y == 0:
        return Dir.LEFT if parent.x < cell_a.x else Dir.DOWN
    return Dir.RIGHT if parent.x > cell_a.x else Dir.UP


def cell_tree_can_move(game: GameBase, parents: Optional[Grid] = None):
    """Movement predicate: a legal cell-tree move into a free cell"""
    if parents is None:
        parents = cell_tree_parents(game.dimensions, game.snake)
    grid = game.grid

    def can_move(a: Coord, b: Coord, d: Dir) -> bool:
        return can_move_in_cell_tree(parents, a, b, d) and not grid[b]

    return can_move


def cell_tree_unreachables(game: GameBase, dists: Optional[Grid] = None) -> Unreachables:
    """Free cells the snake can't reach while respecting the cell tree of `game`"""
    return find_unreachables(cell_tree_can_move(game), game, dists)
