"""
Snake game state machine
- GameBase: what the board looks like (occupancy grid, snake, apple); copyable for lookahead
- Game: GameBase plus its own RNG, a turn counter and a win/loss state
- Game.move(dir) is the only transition
"""

from __future__ import annotations
from enum import Enum
import logging
from typing import Optional

from .errors import InvariantError, NoFreeCellError
from .grid import Coord, CoordRange, Dir, Grid, RangeLike, as_range
from .rng import RNG, SeedLike, as_rng
from .snake import SnakeBuffer

logger = logging.getLogger(__name__)


class Event(Enum):
    NONE = "none"
    MOVE = "move"
    EAT = "eat"
    LOSE = "lose"


class GameState(Enum):
    PLAYING = "playing"
    LOSS = "loss"
    WIN = "win"


class GameBase:
    """
    The minimal board state needed by the algorithms.

    Invariant: grid[c] is True exactly for the coordinates in snake.
    """

    def __init__(self, grid: Grid, snake: SnakeBuffer, apple: Coord):
        self.grid = grid
        self.snake = snake
        self.apple = apple

    @classmethod
    def from_snake(cls, dims: RangeLike, body, apple: Coord) -> GameBase:
        """
        Build a board from a snake body listed head first.

        Args:
            dims: board size
            body: snake coordinates, head first
            apple: apple coordinate
        """
        dims = as_range(dims)
        grid = Grid(dims, False)
        snake = SnakeBuffer(dims.size + 1)
        for c in body:
            c = Coord(*c)
            if grid[c]:
                raise ValueError(f"snake overlaps itself at {c}")
            grid[c] = True
            snake.push_back(c)
        return cls(grid, snake, Coord(*apple))

    @property
    def dimensions(self) -> CoordRange:
        return self.grid.coords()

    @property
    def snake_pos(self) -> Coord:
        """Head of the snake"""
        return self.snake.head

    @property
    def tail(self) -> Coord:
        return self.snake.tail

    @property
    def free_cells(self) -> int:
        return self.grid.size - len(self.snake)

    def copy(self) -> GameBase:
        """Board-only snapshot, independent of this object"""
        return GameBase(self.grid.copy(), self.snake.copy(), self.apple)

    def __str__(self) -> str:
        rows = []
        head = self.snake_pos
        for y in range(self.grid.h):
            row = []
            for x in range(self.grid.w):
                c = Coord(x, y)
                if self.grid[c]:
                    row.append("@" if c == head else "#")
                elif c == self.apple:
                    row.append("a")
                else:
                    row.append(".")
            rows.append("".join(row))
        return "\n".join(rows)


class Game(GameBase):
    def __init__(self, dims: RangeLike, rng: SeedLike = None, start: Optional[Coord] = None):
        """
        Start a new round: a snake of length 1 and an apple on a free cell.

        Args:
            dims: board size, CoordRange or (width, height)
            rng: int seed, RNG, or None to draw a fresh stream
            start: initial head position (random if None)
        """
        dims = as_range(dims)
        if dims.size < 2:
            raise ValueError(f"board {dims.w}x{dims.h} is too small to play on")
        self._rng = as_rng(rng)
        grid = Grid(dims, False)
        snake = SnakeBuffer(dims.size + 1)
        start = dims.random(self._rng) if start is None else Coord(*start)
        if not dims.valid(start):
            raise ValueError(f"start {start} is outside the board")
        snake.push_front(start)
        grid[start] = True
        super().__init__(grid, snake, start)
        self.apple = self._random_free_coord()
        self.turn = 0
        self.state = GameState.PLAYING

    def __copy__(self):
        raise TypeError("Game owns its RNG and cannot be copied; use GameBase.copy() for a board snapshot")

    def __deepcopy__(self, memo):
        raise TypeError("Game owns its RNG and cannot be copied; use GameBase.copy() for a board snapshot")

    @property
    def win(self) -> bool:
        return self.state == GameState.WIN

    @property
    def loss(self) -> bool:
        return self.state == GameState.LOSS

    @property
    def done(self) -> bool:
        return self.state != GameState.PLAYING

    @property
    def max_turns(self) -> int:
        """Turn ceiling; a round still running after this many turns is lost"""
        return self.grid.size ** 2

    def _random_free_coord(self) -> Coord:
        # pick the index-th free cell in row-major order
        n = self.free_cells
        if n <= 0:
            raise NoFreeCellError("no free cell to place the apple on")
        pos = self._rng.random(n)
        for c, occupied in self.grid.items():
            if not occupied:
                if pos == 0:
                    return c
                pos -= 1
        raise NoFreeCellError("free cell count does not match the grid")

    def move(self, direction: Dir) -> Event:
        """
        Advance one turn.

        Args:
            direction: where the head moves

        Returns:
            Event.NONE if the game was already over, otherwise what happened this turn
        """
        if self.done:
            return Event.NONE
        self.turn += 1
        nxt = self.snake.head + Dir(direction)
        if not self.grid.valid(nxt) or self.grid[nxt]:
            self.state = GameState.LOSS
            logger.debug("Snake hit %s at turn %d with length %d", nxt, self.turn, len(self.snake))
            return Event.LOSE
        if self.turn > self.max_turns:
            self.state = GameState.LOSS
            logger.warning("Game exceeded %d turns, counting it as a loss", self.max_turns)
            return Event.LOSE
        self.snake.push_front(nxt)
        self.grid[nxt] = True
        if nxt == self.apple:
            if len(self.snake) == self.grid.size:
                self.state = GameState.WIN
                logger.debug("Board filled at turn %d", self.turn)
            else:
                self.apple = self._random_free_coord()
            return Event.EAT
        tail = self.snake.pop_back()
        self.grid[tail] = False
        return Event.MOVE

    def check_invariants(self) -> None:
        """Raise InvariantError unless the occupancy grid matches the snake exactly"""
        body = set(self.snake)
        if len(body) != len(self.snake):
            raise InvariantError("snake overlaps itself")
        for c, occupied in self.grid.items():
            if occupied != (c in body):
                raise InvariantError(f"occupancy of {c} does not match the snake")
