"""
Grid primitives shared by the game and the algorithms
- Dir: the four moves, with negation and 90 degree rotations
- Coord: an (x, y) cell; Coord + Dir is the neighbor, Coord - Coord is the direction between neighbors
- CoordRange: the board bounds, iterates row-major
- Grid: a dense numpy-backed array indexed by Coord
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterator, NamedTuple, Tuple, Union
import numpy as np

from .errors import NotAdjacentError


class Dir(IntEnum):
    # Same codes as the viewer: 0=UP, 1=DOWN, 2=LEFT, 3=RIGHT
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    def __neg__(self) -> Dir:
        return _OPPOSITE[self]

    def rotate_clockwise(self) -> Dir:
        return _CLOCKWISE[self]

    def rotate_counter_clockwise(self) -> Dir:
        return _COUNTER_CLOCKWISE[self]

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    def __str__(self) -> str:
        return "udlr"[self.value]


DIRS = (Dir.UP, Dir.DOWN, Dir.LEFT, Dir.RIGHT)

# y grows downward, so "up" is -1
_DELTAS = {
    Dir.UP: (0, -1),
    Dir.DOWN: (0, 1),
    Dir.LEFT: (-1, 0),
    Dir.RIGHT: (1, 0),
}
_OPPOSITE = {Dir.UP: Dir.DOWN, Dir.DOWN: Dir.UP, Dir.LEFT: Dir.RIGHT, Dir.RIGHT: Dir.LEFT}
_CLOCKWISE = {Dir.UP: Dir.RIGHT, Dir.RIGHT: Dir.DOWN, Dir.DOWN: Dir.LEFT, Dir.LEFT: Dir.UP}
_COUNTER_CLOCKWISE = {v: k for k, v in _CLOCKWISE.items()}


class Coord(NamedTuple):
    x: int
    y: int

    def __add__(self, d: Dir) -> Coord:
        dx, dy = _DELTAS[d]
        return Coord(self.x + dx, self.y + dy)

    def __sub__(self, other: Coord) -> Dir:
        """Direction that leads from `other` to `self`"""
        dx = self.x - other[0]
        dy = self.y - other[1]
        for d, delta in _DELTAS.items():
            if delta == (dx, dy):
                return d
        raise NotAdjacentError(other, self)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


def manhattan_distance(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_neighbor(a: Coord, b: Coord) -> bool:
    return manhattan_distance(a, b) == 1


INVALID = Coord(-1, -1)
NOT_VISITED = INVALID
ROOT = Coord(-2, -2)


@dataclass(frozen=True)
class CoordRange:
    """Board bounds: all coordinates with 0 <= x < w and 0 <= y < h"""

    w: int
    h: int

    def __iter__(self) -> Iterator[Coord]:
        for y in range(self.h):
            for x in range(self.w):
                yield Coord(x, y)

    def __len__(self) -> int:
        return self.w * self.h

    def __contains__(self, c) -> bool:
        return self.valid(c)

    @property
    def size(self) -> int:
        return self.w * self.h

    def valid(self, c) -> bool:
        return 0 <= c[0] < self.w and 0 <= c[1] < self.h

    def random(self, rng) -> Coord:
        return Coord(rng.random(self.w), rng.random(self.h))


RangeLike = Union[CoordRange, Tuple[int, int]]


def as_range(dims: RangeLike) -> CoordRange:
    if isinstance(dims, CoordRange):
        return dims
    w, h = dims
    return CoordRange(int(w), int(h))


def _infer_dtype(init: Any):
    if isinstance(init, (bool, np.bool_)):
        return np.bool_
    if isinstance(init, (int, np.integer)):
        return np.int64
    return object


class Grid:
    """
    Dense w*h array indexed by Coord.

    Backed by a numpy array of shape (h, w), the same [y, x] layout as a path_map.
    Booleans and ints get a native dtype, anything else (Coord, Step) is stored as objects.
    Indexing outside the board raises IndexError instead of wrapping around.
    """

    def __init__(self, dims: RangeLike, init: Any = False, dtype=None):
        self.dims = as_range(dims)
        if dtype is None:
            dtype = _infer_dtype(init)
        shape = (self.dims.h, self.dims.w)
        if dtype is object:
            self.data = np.empty(shape, dtype=object)
            for idx in np.ndindex(shape):
                self.data[idx] = init
        else:
            self.data = np.full(shape, init, dtype=dtype)

    @classmethod
    def from_array(cls, data: np.ndarray) -> Grid:
        grid = cls.__new__(cls)
        grid.dims = CoordRange(data.shape[1], data.shape[0])
        grid.data = data
        return grid

    @property
    def w(self) -> int:
        return self.dims.w

    @property
    def h(self) -> int:
        return self.dims.h

    @property
    def size(self) -> int:
        return self.dims.size

    def coords(self) -> CoordRange:
        return self.dims

    def valid(self, c) -> bool:
        return self.dims.valid(c)

    def _check(self, c) -> None:
        if not (0 <= c[0] < self.dims.w and 0 <= c[1] < self.dims.h):
            raise IndexError(f"{tuple(c)} is outside the {self.dims.w}x{self.dims.h} grid")

    def __getitem__(self, c):
        self._check(c)
        return self.data.item(c[1], c[0])

    def __setitem__(self, c, value) -> None:
        self._check(c)
        self.data[c[1], c[0]] = value

    def is_clear(self, c) -> bool:
        """Inside the grid and not set"""
        return self.valid(c) and not self.data.item(c[1], c[0])

    def __iter__(self):
        """Values in row-major order"""
        for c in self.dims:
            yield self.data.item(c.y, c.x)

    def items(self):
        for c in self.dims:
            yield c, self.data.item(c.y, c.x)

    def __len__(self) -> int:
        return self.dims.size

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.dims == other.dims and bool(np.array_equal(self.data, other.data))

    __hash__ = None

    def copy(self) -> Grid:
        # elements of object grids are immutable tuples, so copying the array is a deep copy
        return Grid.from_array(self.data.copy())

    __copy__ = copy

    def __deepcopy__(self, memo) -> Grid:
        return self.copy()

    def count(self) -> int:
        """Number of set cells"""
        return int(np.count_nonzero(self.data))

    def inverted(self) -> Grid:
        """Boolean complement of a boolean grid"""
        return Grid.from_array(~self.data.astype(bool))

    def true_coords(self):
        """Coordinates of the set cells, row-major"""
        return [Coord(int(x), int(y)) for y, x in np.argwhere(self.data)]

    def __repr__(self) -> str:
        return f"Grid({self.dims.w}x{self.dims.h}, dtype={self.data.dtype})"
