"""Tests for playing rounds and aggregating statistics."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from agents import make_agent
from agents.fixed import ZigZagAgent
from game.game import Game
from game.simulation import Stats, play, play_multiple


def _finished(turn: int, win: bool, max_turns: int = 1000) -> SimpleNamespace:
    return SimpleNamespace(turn=turn, win=win, max_turns=max_turns)


class TestPlay:
    def test_plays_until_done(self) -> None:
        seen = []
        game = play(Game((4, 4), rng=2), ZigZagAgent(), on_turn=lambda g: seen.append(g.turn))
        assert game.done and game.win
        assert seen == list(range(game.turn + 1))


class TestStats:
    def test_empty(self) -> None:
        stats = Stats()
        assert stats.n == 0
        assert stats.mean_turns == 0.0
        assert stats.loss_rate == 0.0
        assert stats.quantiles() == [0.0] * 5

    def test_aggregates(self) -> None:
        stats = Stats()
        for turns in (10, 20, 30):
            stats.add(_finished(turns, win=True))
        stats.add(_finished(40, win=False))
        stats.add(_finished(1001, win=False))
        assert stats.n == 5
        assert stats.wins == 3
        assert stats.losses == 2
        assert stats.timeouts == 1
        assert stats.collisions == 1
        assert stats.loss_rate == pytest.approx(0.4)
        assert stats.mean_turns == pytest.approx(220.2)

    def test_quantiles_interpolate(self) -> None:
        stats = Stats()
        for turns in (10, 20, 30, 40):
            stats.add(_finished(turns, win=True))
        assert stats.quantiles() == pytest.approx([10.0, 17.5, 25.0, 32.5, 40.0])
        assert stats.stddev_turns == pytest.approx(11.18034, rel=1e-4)

    def test_summary_mentions_counts(self) -> None:
        stats = Stats()
        stats.add(_finished(12, win=True))
        summary = stats.summary()
        assert "games: 1" in summary
        assert "wins: 1" in summary


class TestPlayMultiple:
    def test_all_rounds_played(self) -> None:
        progress = []
        stats = play_multiple(lambda dims, rng: make_agent("zig-zag", dims, rng), (4, 4), n=6, seed=11,
                              workers=3, progress=lambda done, total: progress.append((done, total)))
        assert stats.n == 6
        assert stats.wins == 6
        assert sorted(progress) == [(i, 6) for i in range(1, 7)]

    def test_reproducible_with_seed(self) -> None:
        def run():
            return play_multiple(lambda dims, rng: make_agent("fixed", dims, rng), (4, 4), n=5, seed=3, workers=2)

        assert sorted(run().turns) == sorted(run().turns)
