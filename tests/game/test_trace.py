"""Tests for the JSON trace export."""

from __future__ import annotations

import json
from pathlib import Path

from agents.base import AgentLog, LogKey
from agents.fixed import ZigZagAgent
from game.game import Event, Game
from game.grid import Coord, CoordRange, Grid
from game.trace import NO_ENTRY, SAME_ENTRY, Trace, encode_runs, encode_value


class TestEncoding:
    def test_paths_and_bitmaps(self) -> None:
        assert encode_value([Coord(1, 2), Coord(1, 3)]) == [[1, 2], [1, 3]]
        bitmap = Grid(CoordRange(3, 2), False)
        bitmap[Coord(2, 0)] = True
        bitmap[Coord(0, 1)] = True
        assert encode_value(bitmap) == [[2, 0], [0, 1]]
        assert encode_value(None) is None

    def test_runs(self) -> None:
        a = [Coord(0, 0)]
        b = [Coord(1, 0)]
        entries = [a, SAME_ENTRY, NO_ENTRY, b, NO_ENTRY, NO_ENTRY, SAME_ENTRY]
        assert encode_runs(entries) == [
            [0, 2, [[0, 0]]],
            [2, 1, None],
            [3, 1, [[1, 0]]],
            [4, 2, None],
            [6, 1, [[1, 0]]],
        ]

    def test_runs_from_agent_log(self) -> None:
        log = AgentLog()
        log.add(0, LogKey.PLAN, [Coord(0, 0)])
        log.add(1, LogKey.PLAN, [Coord(0, 0)])
        log.add(3, LogKey.PLAN, [Coord(1, 0)])
        assert encode_runs(log.entries(LogKey.PLAN, 5)) == [
            [0, 2, [[0, 0]]],
            [2, 1, None],
            [3, 1, [[1, 0]]],
            [4, 1, None],
        ]


class TestTrace:
    def _played(self):
        game = Game((4, 4), rng=9, start=Coord(0, 0))
        agent = ZigZagAgent()
        log = AgentLog()
        trace = Trace()
        trace.record(game)
        eat_turns = []
        while not game.done:
            if game.move(agent(game, log)) == Event.EAT:
                eat_turns.append(game.turn)
            trace.record(game)
        return game, log, trace, eat_turns

    def test_per_turn_channels(self) -> None:
        game, log, trace, eat_turns = self._played()
        out = trace.to_json("zig-zag", log)
        assert out["agent"] == "zig-zag"
        assert out["size"] == [4, 4]
        assert len(out["snake_pos"]) == game.turn + 1
        assert out["snake_pos"][0] == [0, 0]
        assert out["snake_size"][0] == 1
        assert out["snake_size"][-1] == 16
        assert out["eat_turns"] == eat_turns
        assert len(out["apple_pos"]) == len(out["snake_pos"])

    def test_cycle_channel(self) -> None:
        _, log, trace, _ = self._played()
        out = trace.to_json("zig-zag", log)
        runs = out["cycles"]
        assert runs[0][:2] == [0, 1]
        assert runs[0][2][:4] == [[0, 0], [1, 0], [2, 0], [3, 0]]
        assert runs[1] == [1, len(trace) - 1, None]
        # nothing was logged on the other channels
        assert "plans" not in out
        assert "unreachables" not in out

    def test_without_log(self) -> None:
        _, _, trace, _ = self._played()
        assert "cycles" not in trace.to_json("zig-zag")

    def test_save(self, tmp_path: Path) -> None:
        _, log, trace, _ = self._played()
        path = tmp_path / "game.json"
        trace.save(path, "zig-zag", log)
        loaded = json.loads(path.read_text())
        assert loaded == trace.to_json("zig-zag", log)


def test_agent_log_uses_the_trace_markers() -> None:
    log = AgentLog()
    log.add(1, LogKey.CYCLE, [Coord(0, 0)])
    log.add(2, LogKey.CYCLE, [Coord(0, 0)])
    assert log.entries(LogKey.CYCLE, 4) == [NO_ENTRY, [Coord(0, 0)], SAME_ENTRY, NO_ENTRY]
    assert encode_runs(log.entries(LogKey.CYCLE, 4)) == [[0, 1, None], [1, 2, [[0, 0]]], [3, 1, None]]
