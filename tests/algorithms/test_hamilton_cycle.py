"""Tests for Hamiltonian cycle construction, ordering and repair."""

from __future__ import annotations

import pytest

from algorithms.hamilton_cycle import (CycleOrder, cycle_to_path, is_hamiltonian_cycle, make_zig_zag_cycle, mark_path,
                                       path_distance, path_from, random_hamiltonian_cycle, repair_cycle, reverse,
                                       tree_to_hamiltonian_cycle, visualize_cycle)
from game.errors import InvariantError
from game.grid import DIRS, INVALID, ROOT, Coord, CoordRange, Grid
from game.rng import RNG

ZIG_ZAG_4x4 = [(0, 0), (1, 0), (2, 0), (3, 0), (3, 1), (3, 2), (3, 3), (2, 3),
               (2, 2), (2, 1), (1, 1), (1, 2), (1, 3), (0, 3), (0, 2), (0, 1)]


class TestConstruction:
    @pytest.mark.parametrize("dims", [(2, 2), (4, 4), (6, 4), (10, 8)])
    def test_random_cycles_are_hamiltonian(self, dims) -> None:
        rng = RNG(1)
        for _ in range(5):
            assert is_hamiltonian_cycle(random_hamiltonian_cycle(dims, rng))

    def test_random_cycles_differ(self) -> None:
        rng = RNG(2)
        paths = {tuple(cycle_to_path(random_hamiltonian_cycle((8, 8), rng))) for _ in range(5)}
        assert len(paths) > 1

    def test_random_cycle_needs_even_dimensions(self) -> None:
        with pytest.raises(ValueError):
            random_hamiltonian_cycle((5, 4), RNG(0))

    def test_zig_zag_order(self) -> None:
        cycle = make_zig_zag_cycle((4, 4))
        assert cycle_to_path(cycle) == [Coord(*c) for c in ZIG_ZAG_4x4]

    @pytest.mark.parametrize("dims", [(2, 2), (4, 2), (6, 3), (8, 5)])
    def test_zig_zag_any_height(self, dims) -> None:
        assert is_hamiltonian_cycle(make_zig_zag_cycle(dims))

    def test_zig_zag_needs_even_width(self) -> None:
        with pytest.raises(ValueError):
            make_zig_zag_cycle((5, 4))

    def test_disconnected_tree_is_rejected(self) -> None:
        with pytest.raises(InvariantError):
            tree_to_hamiltonian_cycle(Grid(CoordRange(2, 1), ROOT, dtype=object))

    def test_broken_paths_are_not_cycles(self) -> None:
        cycle = make_zig_zag_cycle((4, 4))
        cycle[Coord(3, 3)] = Coord(3, 2)  # short loop
        assert not is_hamiltonian_cycle(cycle)
        cycle[Coord(3, 3)] = INVALID
        assert not is_hamiltonian_cycle(cycle)


class TestOrder:
    def test_distances(self) -> None:
        order = CycleOrder(make_zig_zag_cycle((4, 4)))
        assert order[Coord(3, 3)] == 6
        assert order.distance(Coord(0, 0), Coord(3, 3)) == 6
        assert order.distance(Coord(3, 3), Coord(0, 0)) == 10
        assert order.distance(Coord(2, 2), Coord(2, 2)) == 16
        assert order.distance_round_down(Coord(2, 2), Coord(2, 2)) == 0

    def test_walking_agrees_with_order(self) -> None:
        cycle = random_hamiltonian_cycle((6, 6), RNG(3))
        order = CycleOrder(cycle)
        a = Coord(4, 1)
        for b in cycle.coords():
            if b != a:
                assert path_distance(cycle, a, b) == order.distance(a, b)

    def test_reverse(self) -> None:
        cycle = random_hamiltonian_cycle((6, 4), RNG(5))
        back = reverse(cycle)
        assert is_hamiltonian_cycle(back)
        for c, nxt in cycle.items():
            assert back[nxt] == c
            assert path_from(cycle, nxt) == c
        assert reverse(back) == cycle


class TestRepair:
    def test_already_connected(self) -> None:
        cycle = make_zig_zag_cycle((4, 4))
        assert repair_cycle(cycle, Coord(0, 0), Coord(1, 0))
        assert cycle == make_zig_zag_cycle((4, 4))

    def test_non_neighbors(self) -> None:
        cycle = make_zig_zag_cycle((4, 4))
        assert not repair_cycle(cycle, Coord(0, 0), Coord(2, 0))

    def test_impossible_repair_leaves_cycle_alone(self) -> None:
        cycle = make_zig_zag_cycle((4, 4))
        assert not repair_cycle(cycle, Coord(0, 0), Coord(0, 1))
        assert cycle == make_zig_zag_cycle((4, 4))

    def test_shortcut(self) -> None:
        cycle = make_zig_zag_cycle((4, 4))
        assert repair_cycle(cycle, Coord(1, 1), Coord(2, 1))
        assert cycle[Coord(1, 1)] == Coord(2, 1)
        assert is_hamiltonian_cycle(cycle)

    def test_can_use_restricts_the_splice(self) -> None:
        cycle = make_zig_zag_cycle((4, 4))
        assert not repair_cycle(cycle, Coord(1, 1), Coord(2, 1), can_use=lambda c: c != Coord(2, 1))
        assert cycle == make_zig_zag_cycle((4, 4))

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_repair_keeps_a_cycle(self, seed: int) -> None:
        original = random_hamiltonian_cycle((6, 6), RNG(seed))
        repaired = 0
        for a in original.coords():
            for d in DIRS:
                b = a + d
                if not original.valid(b) or original[a] == b:
                    continue
                cycle = original.copy()
                if repair_cycle(cycle, a, b):
                    repaired += 1
                    assert cycle[a] == b
                    assert is_hamiltonian_cycle(cycle)
                else:
                    assert cycle == original
        assert repaired > 0


def test_visualize(capsys) -> None:
    visualize_cycle(make_zig_zag_cycle((4, 4)))
    out = capsys.readouterr().out
    assert "Hamiltonian Cycle for 4x4 Grid" in out
    assert "Valid cycle: True" in out


def test_mark_path() -> None:
    mark = Grid(CoordRange(4, 4), False)
    mark_path(make_zig_zag_cycle((4, 4)), Coord(0, 0), Coord(3, 3), mark, True)
    assert mark.true_coords() == [Coord(0, 0), Coord(1, 0), Coord(2, 0), Coord(3, 0),
                                  Coord(3, 1), Coord(3, 2), Coord(3, 3)]
