"""
Board state and rules: squares, winning lines, win and near-win queries.
Notes:
- Positions are 1..9, read left-to-right, top-to-bottom.
- A square holds None (empty) or an opaque marker; the board only compares
  markers for equality.
- WIN_LINES order (rows, columns, diagonals) fixes every first-match result.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Tuple

from .errors import InvalidPositionError

POSITIONS = tuple(range(1, 10))

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (1, 2, 3), (4, 5, 6), (7, 8, 9),  # rows
    (1, 4, 7), (2, 5, 8), (3, 6, 9),  # columns
    (1, 5, 9), (3, 5, 7),              # diagonals
)

EMPTY_CHARS = (".", "-")

Marker = Hashable


@dataclass
class Square:
    marker: Optional[Marker] = None

    def unmarked(self) -> bool:
        return self.marker is None

    def marked(self) -> bool:
        return self.marker is not None


@dataclass(frozen=True)
class WinningMove:
    """`marker` completes a line by taking `empty_square`."""
    marker: Marker
    empty_square: int


class Board:
    def __init__(self) -> None:
        self._squares: Dict[int, Square] = {}
        self.reset()

    def reset(self) -> None:
        for pos in POSITIONS:
            self._squares[pos] = Square()

    def __len__(self) -> int:
        return len(self._squares)

    def __getitem__(self, position: int) -> Optional[Marker]:
        return self._squares[position].marker

    def __setitem__(self, position: int, marker: Marker) -> None:
        self.set_marker(position, marker)

    def set_marker(self, position: int, marker: Marker) -> None:
        """Claim an empty square.

        Raises InvalidPositionError for positions outside 1..9, occupied
        squares, or a None marker. The board is unchanged on failure.
        """
        if not isinstance(position, int) or isinstance(position, bool) or position not in self._squares:
            raise InvalidPositionError(f"Position must be one of 1-9, got {position!r}")
        if marker is None:
            raise InvalidPositionError("Cannot place an empty marker")
        square = self._squares[position]
        if square.marked():
            raise InvalidPositionError(
                f"Position {position} is already occupied by {square.marker!r}"
            )
        square.marker = marker

    def markers(self) -> List[Optional[Marker]]:
        return [self._squares[pos].marker for pos in POSITIONS]

    def available_positions(self) -> List[int]:
        return [pos for pos in POSITIONS if self._squares[pos].unmarked()]

    def is_full(self) -> bool:
        return not self.available_positions()

    def _line_markers(self, line: Tuple[int, int, int]) -> List[Marker]:
        return [self._squares[i].marker for i in line if self._squares[i].marked()]

    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        for line in WIN_LINES:
            if _identical(self._line_markers(line), 3):
                return line
        return None

    def winning_marker(self) -> Optional[Marker]:
        """Marker owning the first fully-claimed line, or None."""
        line = self.winning_line()
        if line is None:
            return None
        return self._squares[line[0]].marker

    def has_winner(self) -> bool:
        return self.winning_marker() is not None

    def current_winning_moves(self) -> List[WinningMove]:
        """Lines holding two identical markers and one empty square, in line order."""
        moves: List[WinningMove] = []
        for line in WIN_LINES:
            markers = self._line_markers(line)
            if not _identical(markers, 2):
                continue
            empty = [i for i in line if self._squares[i].unmarked()]
            moves.append(WinningMove(marker=markers[0], empty_square=empty[0]))
        return moves

    def copy(self) -> "Board":
        other = Board()
        for pos in POSITIONS:
            other._squares[pos].marker = self._squares[pos].marker
        return other

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.markers() == other.markers()

    def __repr__(self) -> str:
        return f"Board({serialize_board(self)!r})"


def _identical(markers: List[Marker], count: int) -> bool:
    return len(markers) == count and all(m == markers[0] for m in markers)


def parse_board(text: str, empty: str = ".") -> Board:
    """Build a board from 9 characters; `empty` (or '-') marks empty squares.

    Spaces are ignored, so "XO. .X. ..O" is accepted.
    """
    raw = text.replace(" ", "")
    if len(raw) != 9:
        raise ValueError(f"Board string must have 9 squares, got {len(raw)}: {text!r}")
    board = Board()
    for pos, ch in zip(POSITIONS, raw):
        if ch == empty or ch in EMPTY_CHARS:
            continue
        board.set_marker(pos, ch)
    return board


def serialize_board(board: Board, empty: str = ".") -> str:
    return "".join(empty if m is None else str(m) for m in board.markers())
