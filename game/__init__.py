"""Game module - Contains the Snake board, the game state machine and its building blocks"""
from .errors import InvariantError, NoFreeCellError, NotAdjacentError, SnakeError
from .game import Event, Game, GameBase, GameState
from .grid import DIRS, INVALID, ROOT, Coord, CoordRange, Dir, Grid
from .rng import RNG

__all__ = [
    'DIRS', 'INVALID', 'ROOT', 'Coord', 'CoordRange', 'Dir', 'Event', 'Game', 'GameBase', 'GameState',
    'Grid', 'InvariantError', 'NoFreeCellError', 'NotAdjacentError', 'RNG', 'SnakeError',
]
