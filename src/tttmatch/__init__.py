"""tttmatch package.

Board rules, the automated opponent, and a console match around them.

Convenience imports are exposed for common workflows.
"""

from .board import WIN_LINES, Board, WinningMove, parse_board, serialize_board
from .errors import EmptyPoolError, IdentityConflictError, InvalidPositionError
from .strategy import MoveStrategy, choose_move, move_tier

__all__ = [
    "Board",
    "WinningMove",
    "WIN_LINES",
    "parse_board",
    "serialize_board",
    "choose_move",
    "move_tier",
    "MoveStrategy",
    "InvalidPositionError",
    "EmptyPoolError",
    "IdentityConflictError",
]
