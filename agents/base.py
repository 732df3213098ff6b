"""
What every agent looks like, and the optional log of what it was thinking.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

from game.game import Game
from game.grid import Dir
from game.trace import NO_ENTRY, SAME_ENTRY


class LogKey(Enum):
    CYCLE = "cycles"
    PLAN = "plans"
    UNREACHABLE = "unreachables"


class AgentLog:
    """
    Per turn, per key history of an agent's cycle, plan and unreachable cells.

    Only used for trace export; agents write to it when one is given and never read it back.
    """

    def __init__(self):
        self.logs: Dict[LogKey, List[Any]] = {key: [] for key in LogKey}
        self._last: Dict[LogKey, Any] = {}

    def add(self, turn: int, key: LogKey, value) -> None:
        entries = self.logs[key]
        while len(entries) < turn:
            entries.append(NO_ENTRY)
        if len(entries) > turn:
            # logged twice in one turn, the latest replaces the first
            del entries[turn:]
            self._last.pop(key, None)
            for entry in reversed(entries):
                if entry is not NO_ENTRY and entry is not SAME_ENTRY:
                    self._last[key] = entry
                    break
        if key in self._last and self._last[key] == value:
            entries.append(SAME_ENTRY)
        else:
            entries.append(value)
            self._last[key] = value

    def entries(self, key: LogKey, turns: Optional[int] = None) -> List[Any]:
        """Entries for turns 0..turns-1, padded with NO_ENTRY"""
        entries = list(self.logs[key])
        if turns is not None:
            entries = entries[:turns] + [NO_ENTRY] * (turns - len(entries))
        return entries

    def latest(self, key: LogKey):
        """Most recent value logged under key, None if there is none"""
        return self._last.get(key)


class Agent(ABC):
    """
    A policy: given the current game, produce the next direction.

    Called once per turn. Must not modify the game.
    """

    name = "agent"

    @abstractmethod
    def __call__(self, game: Game, log: Optional[AgentLog] = None) -> Dir:
        ...
