"""Tests for the agents that never leave their cycle."""

from __future__ import annotations

from agents.base import NO_ENTRY, AgentLog, LogKey
from agents.fixed import FixedCycleAgent, ZigZagAgent
from algorithms.hamilton_cycle import cycle_to_path, random_hamiltonian_cycle
from game.game import Event, Game
from game.grid import Coord
from game.rng import RNG
from game.simulation import play


def test_zig_zag_reaches_far_corner() -> None:
    game = Game((4, 4), rng=0, start=Coord(0, 0))
    game.apple = Coord(3, 3)
    agent = ZigZagAgent()
    events = [game.move(agent(game)) for _ in range(6)]
    assert events[:5] == [Event.MOVE] * 5
    assert events[5] == Event.EAT
    assert len(game.snake) == 2
    assert game.snake_pos == Coord(3, 3)


def test_zig_zag_wins() -> None:
    for seed in range(3):
        game = play(Game((6, 4), rng=seed), ZigZagAgent())
        assert game.win
        assert game.turn <= game.max_turns


def test_fixed_cycle_follows_cycle() -> None:
    rng = RNG(8)
    cycle = random_hamiltonian_cycle((6, 6), rng)
    agent = FixedCycleAgent(cycle)
    game = Game((6, 6), rng=rng)
    for _ in range(50):
        pos = game.snake_pos
        game.move(agent(game))
        assert game.snake_pos == cycle[pos]


def test_fixed_cycle_wins_and_logs_once() -> None:
    rng = RNG(9)
    cycle = random_hamiltonian_cycle((4, 4), rng)
    log = AgentLog()
    game = play(Game((4, 4), rng=rng), FixedCycleAgent(cycle), log)
    assert game.win
    entries = log.entries(LogKey.CYCLE, game.turn)
    assert entries[0] == cycle_to_path(cycle)
    assert all(e is NO_ENTRY for e in entries[1:])
