"""
The snake's body: a bounded double-ended queue of coordinates.
front = head (most recently added), back = tail.
"""

from __future__ import annotations
from collections import deque
from typing import Iterable, Iterator, Optional

from .errors import InvariantError
from .grid import Coord


class SnakeBuffer:
    def __init__(self, capacity: int, cells: Optional[Iterable[Coord]] = None):
        """
        Args:
            capacity: maximum length, the board's cell count + 1 so it never needs to grow
            cells: initial body, head first
        """
        self.capacity = capacity
        self._body = deque()
        if cells is not None:
            for c in cells:
                self.push_back(c)

    def push_front(self, c: Coord) -> None:
        """Add a new head"""
        if len(self._body) >= self.capacity:
            raise InvariantError(f"snake longer than its capacity {self.capacity}")
        self._body.appendleft(c)

    def push_back(self, c: Coord) -> None:
        if len(self._body) >= self.capacity:
            raise InvariantError(f"snake longer than its capacity {self.capacity}")
        self._body.append(c)

    def pop_back(self) -> Coord:
        """Remove the tail"""
        return self._body.pop()

    @property
    def head(self) -> Coord:
        return self._body[0]

    @property
    def tail(self) -> Coord:
        return self._body[-1]

    def __len__(self) -> int:
        return len(self._body)

    def __bool__(self) -> bool:
        return bool(self._body)

    def __iter__(self) -> Iterator[Coord]:
        """Head to tail"""
        return iter(self._body)

    def __reversed__(self) -> Iterator[Coord]:
        """Tail to head"""
        return reversed(self._body)

    def __getitem__(self, i: int) -> Coord:
        """i-th segment counted from the head"""
        return self._body[i]

    def __contains__(self, c) -> bool:
        return c in self._body

    def copy(self) -> SnakeBuffer:
        return SnakeBuffer(self.capacity, self._body)

    def __copy__(self) -> SnakeBuffer:
        return self.copy()

    def __repr__(self) -> str:
        return f"SnakeBuffer({list(self._body)!r})"
