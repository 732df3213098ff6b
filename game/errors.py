"""
Errors raised by the game core.

InvariantError and its subclasses mean the board or a cycle is already broken.
They are not meant to be caught; recoverable heuristic failures are reported as
plain return values instead (False, None, an empty path).
"""


class SnakeError(Exception):
    """Base class for all snake core errors"""


class InvariantError(SnakeError, RuntimeError):
    """A state machine or cycle invariant does not hold"""


class NotAdjacentError(InvariantError, ValueError):
    """Asked for the direction between two coordinates that are not neighbors"""

    def __init__(self, a, b):
        super().__init__(f"Not neighbors: {a} and {b}")
        self.a = a
        self.b = b


class NoFreeCellError(InvariantError):
    """Tried to place an apple on a board without free cells"""
