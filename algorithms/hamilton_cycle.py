"""
Hamiltonian cycles for Snake
- A cycle visits every cell exactly once and returns to its start
- Represented as a GridPath: at each cell, the coordinate of the next cell
- Random cycles come from a random spanning tree over the half-resolution grid of 2x2 cells
  (randomized Prim's algorithm), walked around with right-hand drive
- repair_cycle() rewrites a cycle locally so the snake can take a shortcut
"""

from __future__ import annotations
from typing import Callable, List, Optional

from game.errors import InvariantError
from game.grid import DIRS, INVALID, ROOT, Coord, CoordRange, Dir, Grid, RangeLike, as_range, is_neighbor
from game.rng import RNG
from .cell_tree import cell, cell_move_inside, cell_move_outside

# A Hamiltonian cycle: at each grid point the coordinate of the next point
GridPath = Grid

ORIGIN = Coord(0, 0)


def is_hamiltonian_cycle(path: GridPath) -> bool:
    """
    Check that
    - each step points to a neighbor
    - after w*h steps we are back at the beginning (we have a cycle)
    - and no sooner (the cycle has length w*h, so it is the only one)
    """
    pos = ORIGIN
    n = path.size
    for i in range(n):
        nxt = path[pos]
        if not isinstance(nxt, tuple) or not path.valid(nxt) or not is_neighbor(pos, nxt):
            return False
        pos = Coord(*nxt)
        if pos == ORIGIN:
            return i == n - 1
    return False


def tree_to_hamiltonian_cycle(parents: Grid) -> GridPath:
    """
    Make a Hamiltonian cycle from a spanning tree over the (w/2) x (h/2) cells.

    Every position leaves its 2x2 cell when the cell across that edge is its parent
    or its child, and otherwise turns inside the cell.

    Args:
        parents: parent pointers of the tree (ROOT at the root)

    Returns:
        GridPath of size (2*w) x (2*h)
    """
    path = Grid(CoordRange(parents.w * 2, parents.h * 2), INVALID, dtype=object)
    for c in path.coords():
        out = c + cell_move_outside(c)
        if path.valid(out):
            c_cell = cell(c)
            o_cell = cell(out)
            if parents[o_cell] == c_cell or parents[c_cell] == o_cell:
                path[c] = out
                continue
        path[c] = c + cell_move_inside(c)
    if not is_hamiltonian_cycle(path):
        raise InvariantError("parent grid is not a spanning tree; the cycle falls apart")
    return path


def random_spanning_tree(dims: RangeLike, rng: RNG) -> Grid:
    """
    Random spanning tree by randomized Prim's algorithm.

    Start from a random node and keep adding a uniformly random frontier edge
    that reaches a node not yet in the tree.

    Returns:
        Grid of parent pointers, ROOT at the start node
    """
    dims = as_range(dims)
    tree = Grid(dims, INVALID, dtype=object)
    node = dims.random(rng)
    tree[node] = ROOT
    frontier = [(node, node + d) for d in DIRS if dims.valid(node + d)]
    while frontier:
        i = rng.random(len(frontier))
        parent, node = frontier[i]
        # swap-remove
        frontier[i] = frontier[-1]
        frontier.pop()
        if tree[node] == INVALID:
            tree[node] = parent
            frontier.extend((node, node + d) for d in DIRS if dims.valid(node + d))
    return tree


def random_hamiltonian_cycle(dims: RangeLike, rng: RNG) -> GridPath:
    """Random Hamiltonian cycle; the board must have even width and height"""
    dims = as_range(dims)
    if dims.w % 2 or dims.h % 2 or dims.w < 2 or dims.h < 2:
        raise ValueError(f"random cycles need even board dimensions, got {dims.w}x{dims.h}")
    return tree_to_hamiltonian_cycle(random_spanning_tree(CoordRange(dims.w // 2, dims.h // 2), rng))


def zig_zag_direction(dims: CoordRange, c: Coord) -> Dir:
    """
    The zig-zag cycle: go right along the top row, then down and up the columns
    while moving back left, and finally up column 0 to the start.
    """
    if c.y == 0:
        return Dir.RIGHT if c.x < dims.w - 1 else Dir.DOWN
    if c.x % 2 == 1:
        return Dir.DOWN if c.y < dims.h - 1 else Dir.LEFT
    if c.x == 0 or c.y > 1:
        return Dir.UP
    return Dir.LEFT


def make_zig_zag_cycle(dims: RangeLike) -> GridPath:
    """Fallback cycle that is guaranteed to work on any board with even width"""
    dims = as_range(dims)
    if dims.w % 2 or dims.w < 2 or dims.h < 2:
        raise ValueError(f"the zig-zag cycle needs an even width, got {dims.w}x{dims.h}")
    path = Grid(dims, INVALID, dtype=object)
    for c in dims:
        path[c] = c + zig_zag_direction(dims, c)
    return path


class CycleOrder:
    """Position of every cell along a cycle, counted from (0,0)"""

    def __init__(self, cycle: GridPath):
        self.cycle = cycle
        self.size = cycle.size
        self.order = Grid(cycle.coords(), -1)
        c = ORIGIN
        for i in range(self.size):
            self.order[c] = i
            c = cycle[c]

    def __getitem__(self, c: Coord) -> int:
        return self.order[c]

    def distance(self, a: Coord, b: Coord) -> int:
        """Steps along the cycle from a to b; a full lap when a == b"""
        order_a = self.order[a]
        order_b = self.order[b]
        if order_a < order_b:
            return order_b - order_a
        return order_b - order_a + self.size

    def distance_round_down(self, a: Coord, b: Coord) -> int:
        """Steps along the cycle from a to b; 0 when a == b"""
        order_a = self.order[a]
        order_b = self.order[b]
        if order_a <= order_b:
            return order_b - order_a
        return order_b - order_a + self.size


def path_distance(path: GridPath, a: Coord, b: Coord) -> int:
    """Distance between two points along the cycle, by walking it"""
    dist = 0
    while a != b:
        a = path[a]
        dist += 1
    return dist


def reverse(path: GridPath) -> GridPath:
    """The same cycle traversed the other way"""
    out = Grid(path.coords(), INVALID, dtype=object)
    for pos, nxt in path.items():
        out[nxt] = pos
    return out


def path_from(path: GridPath, to: Coord) -> Coord:
    """Predecessor of `to` in the cycle"""
    for d in DIRS:
        c = to + d
        if path.valid(c) and path[c] == to:
            return c
    raise InvariantError(f"no neighbor of {to} leads to it")


def mark_path(path: GridPath, a: Coord, b: Coord, mark: Grid, value) -> None:
    """Set mark[c] = value for all c on the path from a to b (inclusive)"""
    mark[a] = value
    while a != b:
        a = path[a]
        mark[a] = value


def cycle_to_path(cycle: GridPath, start: Coord = ORIGIN) -> List[Coord]:
    """The cycle as a list of coordinates, beginning at start"""
    out = []
    c = start
    while True:
        out.append(c)
        c = cycle[c]
        if c == start or len(out) > cycle.size:
            break
    return out


def repair_cycle(cycle: GridPath, a: Coord, b: Coord,
                 can_use: Optional[Callable[[Coord], bool]] = None) -> bool:
    """
    Change a Hamiltonian cycle so that cycle[a] == b, patching it so it stays one cycle.

    The cycle is [..., a, c, ..., d, b, ...]. Setting a -> b cuts out the segment
    c -> ... -> d. The segment is spliced back in at an edge u -> v of the rest
    of the cycle, by exchanging edges on a unit square:

        u -> v            u   v
                  into    |   ^
        x <- y            v   |
                          y   x   (u -> y ... x -> v)

    where x -> y is an edge of the segment closed into a loop. Any rotation of the
    loop works when c and d are neighbors, otherwise only the open ends (y=c, x=d).

    Args:
        cycle: GridPath, modified in place on success
        a, b: neighboring coordinates
        can_use: optional filter for the splice cells u and v

    Returns:
        True on success. On failure the cycle is left untouched.
    """
    if cycle[a] == b:
        return True
    if not is_neighbor(a, b):
        return False
    c = cycle[a]
    d = path_from(cycle, b)

    segment = [c]
    while segment[-1] != d:
        segment.append(cycle[segment[-1]])
    in_segment = set(segment)

    if len(segment) == 1 or is_neighbor(c, d):
        loop_edges = list(zip(segment, segment[1:])) + [(d, c)]
    else:
        loop_edges = [(d, c)]

    for x, y in loop_edges:
        for direction in DIRS:
            u = y + direction
            if not cycle.valid(u) or u == a or u in in_segment:
                continue
            v = cycle[u]
            if not is_neighbor(x, v):
                continue
            if can_use is not None and not (can_use(u) and can_use(v)):
                continue
            cycle[a] = b
            cycle[d] = c  # close the loop
            cycle[u] = y
            cycle[x] = v
            return True
    return False


def visualize_cycle(cycle: GridPath) -> None:
    """Display a Hamiltonian cycle in the console."""
    order = CycleOrder(cycle)
    total_cells = cycle.size
    pos_last = None
    for c, i in order.order.items():
        if i == total_cells - 1:
            pos_last = c
    valid = is_hamiltonian_cycle(cycle)

    print("\n" + "=" * 60)
    print(f"Hamiltonian Cycle for {cycle.w}x{cycle.h} Grid")
    print("=" * 60)
    print("Numbers show the order in which cells are visited:")
    print()

    max_num = total_cells - 1
    cell_width = len(str(max_num)) + 1

    print("    ", end="")
    for x in range(cycle.w):
        print(f"x{x}".ljust(cell_width), end=" ")
    print()

    for y in range(cycle.h):
        print(f"y{y}  ", end="")
        for x in range(cycle.w):
            print(str(order[Coord(x, y)]).ljust(cell_width), end=" ")
        print()

    print(f"\nPosition 0 at {ORIGIN}, Position {max_num} at {pos_last}")
    print(f"Valid cycle: {valid} {'✓' if valid else '✗ NOT A VALID CYCLE!'}")
    print(f"\nPath: The snake moves 0→1→2→...→{max_num}→0 (loops back)")
    print("=" * 60)
