"""Match settings.

Environment-first: TTT_* variables override the defaults, and explicit
keyword overrides (CLI flags) override the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

FIRST_PLAYERS = ("human", "computer")

_FALSEY = {"0", "false", "no", "off"}


@dataclass
class MatchConfig:
    winning_score: int = 5
    first_player: str = "human"
    pause_seconds: float = 1.5
    clear_screen: bool = True

    @classmethod
    def from_env(cls, **overrides: object) -> "MatchConfig":
        cfg = cls()
        env = os.getenv("TTT_WINNING_SCORE")
        if env:
            cfg.winning_score = int(env)
        env = os.getenv("TTT_FIRST_PLAYER")
        if env:
            cfg.first_player = env.strip().lower()
        env = os.getenv("TTT_PAUSE_SECONDS")
        if env:
            cfg.pause_seconds = float(env)
        env = os.getenv("TTT_CLEAR_SCREEN")
        if env:
            cfg.clear_screen = env.strip().lower() not in _FALSEY
        known = {f.name for f in fields(cls)}
        for key, value in overrides.items():
            if key not in known:
                raise TypeError(f"Unknown setting: {key}")
            if value is not None:
                setattr(cfg, key, value)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.winning_score < 1:
            raise ValueError(f"winning_score must be positive, got {self.winning_score}")
        if self.first_player not in FIRST_PLAYERS:
            raise ValueError(
                f"first_player must be one of {', '.join(FIRST_PLAYERS)}, got {self.first_player!r}"
            )
        if self.pause_seconds < 0:
            raise ValueError(f"pause_seconds must not be negative, got {self.pause_seconds}")
