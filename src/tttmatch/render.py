"""
Text rendering for the console match: the grid, choice lists, results.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from .board import Board
from .players import Player

_SPACER = "     |     |"
_DIVIDER = "-----+-----+-----"


def _cell(board: Board, pos: int) -> str:
    m = board[pos]
    return " " if m is None else str(m)


def draw_board(board: Board) -> str:
    lines: List[str] = []
    for row, start in enumerate((1, 4, 7)):
        if row:
            lines.append(_DIVIDER)
        cells = "  |  ".join(_cell(board, p) for p in range(start, start + 3))
        lines.extend([_SPACER, f"  {cells}", _SPACER])
    return "\n".join(lines)


def joinor(items: Sequence[object], sep: str = ", ", word: str = "or") -> str:
    """'1', '1 or 2', '1, 2, or 3'."""
    words = [str(i) for i in items]
    if len(words) <= 1:
        return "".join(words)
    if len(words) == 2:
        return f"{words[0]} {word} {words[1]}"
    return f"{sep.join(words[:-1])}{sep}{word} {words[-1]}"


def round_result_message(winner: Optional[Player]) -> str:
    if winner is None:
        return "It's a tie!"
    return f"{winner.name} won!"


def score_lines(players: Sequence[Player]) -> List[str]:
    lines = ["Here is the current match score:"]
    lines.extend(f"{p.name} has {p.points}." for p in players)
    return lines
