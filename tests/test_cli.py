"""Tests for the command line entry point and the demo helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pygame

from demos.benchmark import benchmark
from demos.watch import cell_center, draw_snake_with_filled_corners, lerp
from main import main


class TestMain:
    def test_cycle(self, capsys) -> None:
        assert main(["cycle", "--zig-zag", "--width", "4", "--height", "4"]) == 0
        assert "Valid cycle: True" in capsys.readouterr().out

    def test_random_cycle_on_odd_board_is_an_error(self, capsys) -> None:
        assert main(["cycle", "--width", "5", "--height", "4", "--seed", "1"]) == 2
        assert "even" in capsys.readouterr().out

    def test_play(self, capsys) -> None:
        assert main(["play", "--agent", "zig-zag", "--width", "4", "--height", "4", "--seed", "3"]) == 0
        assert "Result: WIN" in capsys.readouterr().out

    def test_export(self, tmp_path: Path) -> None:
        out = tmp_path / "trace.json"
        args = ["export", "--agent", "fixed", "--width", "4", "--height", "4", "--seed", "5", "--output", str(out)]
        assert main(args) == 0
        trace = json.loads(out.read_text())
        assert trace["agent"] == "fixed"
        assert trace["snake_size"][-1] == 16
        assert "cycles" in trace

    def test_stats(self, tmp_path: Path) -> None:
        plot = tmp_path / "turns.png"
        args = ["stats", "--agent", "zig-zag", "--width", "4", "--height", "4", "--games", "3",
                "--seed", "2", "--plot", str(plot)]
        assert main(args) == 0
        assert plot.exists()


def test_benchmark_returns_stats(capsys) -> None:
    stats = benchmark("fixed", 4, 4, num_games=2, seed=0, workers=1)
    assert stats.n == 2
    assert stats.wins == 2
    assert "Benchmark Complete!" in capsys.readouterr().out


class TestViewerHelpers:
    def test_geometry(self) -> None:
        assert cell_center((2, 1), 10) == (25.0, 15.0)
        assert lerp((0.0, 0.0), (10.0, 20.0), 0.5) == (5.0, 10.0)

    def test_snake_is_drawn(self) -> None:
        surface = pygame.Surface((40, 40))
        green = pygame.Color(0, 255, 0)
        draw_snake_with_filled_corners(surface, [(10.0, 10.0), (30.0, 10.0), (30.0, 30.0)], 4, green)
        assert surface.get_at((20, 10)) == green
        assert surface.get_at((30, 20)) == green
        assert surface.get_at((10, 30)) != green
