"""
Match participants and their identity rules.

The automated player's marker and name are drawn once from the candidates
that differ from the human's, instead of re-rolling until they do.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .errors import IdentityConflictError

COMPUTER_MARKERS = ("X", "O", "*", "@")
COMPUTER_NAMES = ("Stanley", "Guy Bro", "Mr. Robot")


@dataclass
class Player:
    name: str
    marker: str
    is_human: bool = False
    points: int = 0

    def reset(self) -> None:
        self.points = 0


def valid_marker(text: str) -> bool:
    return len(text) == 1 and not text.isspace()


def valid_name(text: str) -> bool:
    return bool(text.strip())


def make_human_player(name: str, marker: str) -> Player:
    if not valid_name(name):
        raise ValueError("Name must not be blank")
    if not valid_marker(marker):
        raise ValueError(f"Marker must be a single non-space character, got {marker!r}")
    return Player(name=name.strip(), marker=marker, is_human=True)


def make_computer_player(
    human: Player,
    rng: Optional[np.random.Generator] = None,
    markers: Sequence[str] = COMPUTER_MARKERS,
    names: Sequence[str] = COMPUTER_NAMES,
) -> Player:
    if rng is None:
        rng = np.random.default_rng()
    marker_pool = [m for m in markers if m != human.marker]
    name_pool = [n for n in names if n != human.name]
    if not marker_pool:
        raise IdentityConflictError(f"No computer marker differs from {human.marker!r}")
    if not name_pool:
        raise IdentityConflictError(f"No computer name differs from {human.name!r}")
    marker = marker_pool[int(rng.integers(len(marker_pool)))]
    name = name_pool[int(rng.integers(len(name_pool)))]
    return Player(name=name, marker=marker, is_human=False)
