"""
Exceptions raised by the board engine, the strategy, and participant setup.

All of them are precondition faults: they are raised at the offending call
and never retried internally.
"""


class TTTError(Exception):
    """Base class for tttmatch errors."""


class InvalidPositionError(TTTError, ValueError):
    """A marker was placed outside 1-9, on an occupied cell, or was None."""


class EmptyPoolError(TTTError, RuntimeError):
    """The strategy was asked for a move on a board with no empty cells."""


class IdentityConflictError(TTTError, ValueError):
    """No marker or name is left that differs from the other participant's."""
