"""
Automated opponent: a three-tier greedy policy over near-win threats.
Tiers, in order:
- offense: complete our own two-in-a-row.
- defense: block the opponent's two-in-a-row.
- random: uniform choice among empty squares.
Ties inside a tier go to the first line in WIN_LINES order.
"""
from __future__ import annotations

import logging
from typing import Literal, Optional

import numpy as np

from .board import Board, Marker
from .errors import EmptyPoolError

Tier = Literal["offense", "defense", "random"]

logger = logging.getLogger(__name__)


def _first_completion(board: Board, marker: Marker) -> Optional[int]:
    for move in board.current_winning_moves():
        if move.marker == marker:
            return move.empty_square
    return None


def move_tier(board: Board, own_marker: Marker, opponent_marker: Marker) -> Tier:
    markers = [m.marker for m in board.current_winning_moves()]
    if own_marker in markers:
        return "offense"
    if opponent_marker in markers:
        return "defense"
    return "random"


def choose_move(
    board: Board,
    own_marker: Marker,
    opponent_marker: Marker,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """Pick a position for `own_marker` without touching the board.

    Raises EmptyPoolError if the random tier is reached on a full board.
    """
    pos = _first_completion(board, own_marker)
    if pos is not None:
        logger.debug("tier=offense position=%d", pos)
        return pos
    pos = _first_completion(board, opponent_marker)
    if pos is not None:
        logger.debug("tier=defense position=%d", pos)
        return pos
    moves = board.available_positions()
    if not moves:
        raise EmptyPoolError("No empty squares left to choose from")
    if rng is None:
        rng = np.random.default_rng()
    pos = int(rng.choice(moves))
    logger.debug("tier=random position=%d of %s", pos, moves)
    return pos


class MoveStrategy:
    """choose_move bound to one automated player's markers and generator."""

    def __init__(
        self,
        own_marker: Marker,
        opponent_marker: Marker,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.own_marker = own_marker
        self.opponent_marker = opponent_marker
        self.rng = rng if rng is not None else np.random.default_rng()

    def tier(self, board: Board) -> Tier:
        return move_tier(board, self.own_marker, self.opponent_marker)

    def choose_move(self, board: Board) -> int:
        return choose_move(board, self.own_marker, self.opponent_marker, self.rng)
