"""Tests for the grid primitives: Dir, Coord, CoordRange and Grid."""

from __future__ import annotations

import copy

import numpy as np
import pytest

from game.errors import InvariantError, NotAdjacentError
from game.grid import (DIRS, INVALID, Coord, CoordRange, Dir, Grid, as_range, is_neighbor,
                       manhattan_distance)
from game.rng import RNG


class TestDir:
    def test_opposites(self) -> None:
        assert -Dir.UP == Dir.DOWN
        assert -Dir.LEFT == Dir.RIGHT
        for d in DIRS:
            assert -(-d) == d

    def test_rotation(self) -> None:
        assert Dir.UP.rotate_clockwise() == Dir.RIGHT
        assert Dir.RIGHT.rotate_clockwise() == Dir.DOWN
        for d in DIRS:
            assert d.rotate_clockwise().rotate_counter_clockwise() == d
            assert d.rotate_clockwise().rotate_clockwise() == -d

    def test_codes_match_viewer_actions(self) -> None:
        assert [int(d) for d in DIRS] == [0, 1, 2, 3]
        assert "".join(str(d) for d in DIRS) == "udlr"


class TestCoord:
    def test_add_direction(self) -> None:
        c = Coord(2, 2)
        assert c + Dir.UP == Coord(2, 1)
        assert c + Dir.DOWN == Coord(2, 3)
        assert c + Dir.LEFT == Coord(1, 2)
        assert c + Dir.RIGHT == Coord(3, 2)

    def test_difference_is_direction_from_other(self) -> None:
        a = Coord(1, 1)
        for d in DIRS:
            assert (a + d) - a == d

    def test_difference_of_non_neighbors_is_fatal(self) -> None:
        with pytest.raises(NotAdjacentError):
            Coord(0, 0) - Coord(2, 0)
        with pytest.raises(InvariantError):
            Coord(0, 0) - Coord(0, 0)
        # also usable as a plain ValueError
        with pytest.raises(ValueError):
            Coord(0, 0) - Coord(1, 1)

    def test_distances(self) -> None:
        assert manhattan_distance(Coord(0, 0), Coord(3, 4)) == 7
        assert is_neighbor(Coord(0, 0), Coord(0, 1))
        assert not is_neighbor(Coord(0, 0), Coord(1, 1))
        assert not is_neighbor(Coord(0, 0), Coord(0, 0))


class TestCoordRange:
    def test_row_major_iteration(self) -> None:
        assert list(CoordRange(2, 2)) == [Coord(0, 0), Coord(1, 0), Coord(0, 1), Coord(1, 1)]

    def test_valid(self) -> None:
        dims = CoordRange(3, 2)
        assert dims.size == 6
        assert Coord(2, 1) in dims
        assert Coord(3, 1) not in dims
        assert Coord(-1, 0) not in dims

    def test_random_stays_inside(self) -> None:
        dims = CoordRange(5, 3)
        rng = RNG(4)
        assert all(dims.valid(dims.random(rng)) for _ in range(100))

    def test_as_range_accepts_tuples(self) -> None:
        assert as_range((4, 6)) == CoordRange(4, 6)


class TestGrid:
    def test_bool_grid(self) -> None:
        g = Grid(CoordRange(3, 2), False)
        assert g.data.dtype == np.bool_
        g[Coord(1, 1)] = True
        assert g[Coord(1, 1)] is True
        assert g.count() == 1
        assert g.true_coords() == [Coord(1, 1)]
        assert g.inverted().count() == 5

    def test_indexing_outside_raises(self) -> None:
        g = Grid(CoordRange(3, 2), 0)
        for c in [Coord(-1, 0), Coord(0, -1), Coord(3, 0), Coord(0, 2)]:
            with pytest.raises(IndexError):
                g[c]
            with pytest.raises(IndexError):
                g[c] = 1

    def test_is_clear(self) -> None:
        g = Grid(CoordRange(2, 2), False)
        g[Coord(0, 0)] = True
        assert not g.is_clear(Coord(0, 0))
        assert g.is_clear(Coord(1, 0))
        assert not g.is_clear(Coord(2, 0))

    def test_object_grid_stores_coords(self) -> None:
        g = Grid(CoordRange(2, 2), INVALID, dtype=object)
        assert g[Coord(1, 1)] == INVALID
        g[Coord(0, 0)] = Coord(1, 0)
        assert g[Coord(0, 0)] == Coord(1, 0)
        assert isinstance(g[Coord(0, 0)], Coord)

    def test_copy_does_not_alias(self) -> None:
        g = Grid(CoordRange(3, 3), False)
        h = g.copy()
        h[Coord(1, 1)] = True
        assert not g[Coord(1, 1)]
        d = copy.deepcopy(g)
        d[Coord(0, 0)] = True
        assert not g[Coord(0, 0)]

    def test_equality_compares_contents(self) -> None:
        a = Grid(CoordRange(2, 2), 0)
        b = Grid(CoordRange(2, 2), 0)
        assert a == b
        b[Coord(0, 1)] = 7
        assert a != b
        assert a != Grid(CoordRange(4, 1), 0)

    def test_items_row_major(self) -> None:
        g = Grid(CoordRange(2, 2), 0)
        g[Coord(1, 0)] = 5
        assert list(g.items())[1] == (Coord(1, 0), 5)
        assert list(g) == [0, 5, 0, 0]
