"""
JSON export of a played game, for replaying it in a visualizer

Per turn we store the head position, the snake length and the apple position.
The agent's log channels (cycle, plan, unreachable cells) are stored as runs
[first_turn, run_length, value] so that an unchanged cycle costs one entry.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .game import GameBase
from .grid import Coord, Grid

logger = logging.getLogger(__name__)


class _Marker:
    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name


NO_ENTRY = _Marker("NO_ENTRY")      # nothing logged this turn
SAME_ENTRY = _Marker("SAME_ENTRY")  # same value as the previous logged value


def _encode_coord(c: Coord) -> List[int]:
    return [int(c[0]), int(c[1])]


def encode_value(value) -> Any:
    """Paths become [[x,y],...], boolean grids the list of set cells"""
    if value is None:
        return None
    if isinstance(value, Grid):
        return [_encode_coord(c) for c in value.true_coords()]
    return [_encode_coord(c) for c in value]


def encode_runs(entries: List[Any]) -> List[list]:
    """
    Run-length encode log entries.

    NO_ENTRY turns become runs with a null value, SAME_ENTRY repeats the last logged value.

    Returns:
        list of [first_turn, run_length, encoded value]
    """
    runs: List[list] = []
    last = None
    prev: Any = NO_ENTRY
    for turn, entry in enumerate(entries):
        if entry is NO_ENTRY:
            value = None
        elif entry is SAME_ENTRY:
            value = last
        else:
            value = last = entry
        if runs and (value is prev or value == prev):
            runs[-1][1] += 1
        else:
            runs.append([turn, 1, value])
        prev = value
    return [[first, length, encode_value(value)] for first, length, value in runs]


class Trace:
    """What happened in a game, turn by turn"""

    def __init__(self):
        self.size: Optional[List[int]] = None
        self.snake_pos: List[List[int]] = []
        self.snake_size: List[int] = []
        self.apple_pos: List[List[int]] = []
        self.eat_turns: List[int] = []

    def __len__(self) -> int:
        return len(self.snake_pos)

    def record(self, game: GameBase) -> None:
        """Add the current state; call once before the first move and after every move"""
        if self.size is None:
            self.size = [game.grid.w, game.grid.h]
        size = len(game.snake)
        if self.snake_size and size > self.snake_size[-1]:
            self.eat_turns.append(len(self.snake_size))
        self.snake_pos.append(_encode_coord(game.snake_pos))
        self.snake_size.append(size)
        self.apple_pos.append(_encode_coord(game.apple))

    def to_json(self, agent_name: str, log=None) -> Dict[str, Any]:
        """
        Args:
            agent_name: stored as "agent"
            log: optional AgentLog whose non-empty channels are added

        Returns:
            dict ready for json.dump
        """
        out: Dict[str, Any] = {
            "agent": agent_name,
            "size": self.size,
            "snake_pos": self.snake_pos,
            "snake_size": self.snake_size,
            "apple_pos": self.apple_pos,
            "eat_turns": self.eat_turns,
        }
        if log is not None:
            for key, entries in log.logs.items():
                if entries:
                    out[key.value] = encode_runs(log.entries(key, len(self)))
        return out

    def save(self, path: Union[str, Path], agent_name: str, log=None) -> None:
        path = Path(path)
        with path.open("w") as f:
            json.dump(self.to_json(agent_name, log), f)
        logger.info("Saved trace of %d turns to %s", len(self), path)
