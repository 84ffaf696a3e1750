from __future__ import annotations

import argparse
import logging
from typing import Optional

import numpy as np

from .board import Board, parse_board
from .config import FIRST_PLAYERS, MatchConfig
from .errors import EmptyPoolError, IdentityConflictError
from .match import ConsoleIO, Match
from .strategy import choose_move, move_tier


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tttmatch", description="Tic-tac-toe match against the computer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for the computer's random choices")
    p.add_argument(
        "--deterministic",
        action="store_true",
        help="Reproducible computer moves: seed the move generator with --seed, or 0 when no seed is given",
    )

    p_play = sub.add_parser("play", help="Play a match in the terminal")
    p_play.add_argument(
        "--winning-score", type=int, default=None, help="Rounds needed to win the match (default: 5)"
    )
    p_play.add_argument(
        "--first-player", choices=list(FIRST_PLAYERS), default=None, help="Who opens each round"
    )
    p_play.add_argument("--no-clear", action="store_true", help="Do not clear the screen between turns")
    p_play.add_argument("--no-pause", action="store_true", help="Do not pause between turns")

    board_help = "Board string, 9 squares left-to-right, top-to-bottom, '.' for empty, e.g. XX.O.O..."

    p_sug = sub.add_parser("suggest", help="Show the computer's move for a board")
    p_sug.add_argument("--board", required=True, help=board_help)
    p_sug.add_argument("--me", default="X", help="Computer's marker (default: X)")
    p_sug.add_argument("--opponent", default="O", help="Opponent's marker (default: O)")

    p_thr = sub.add_parser("threats", help="List squares that complete a line")
    p_thr.add_argument("--board", required=True, help=board_help)

    p_win = sub.add_parser("winner", help="Report the winner of a board")
    p_win.add_argument("--board", required=True, help=board_help)

    return p


def _load_board(raw: str) -> Optional[Board]:
    try:
        return parse_board(raw)
    except ValueError as exc:
        logging.error("Invalid board string: %s", exc)
        return None


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tttmatch"))
        except Exception:
            print("unknown")
        return 0

    seed = ns.seed
    if ns.deterministic:
        seed = 0 if seed is None else seed
    rng = np.random.default_rng(seed)

    if ns.cmd == "play":
        try:
            cfg = MatchConfig.from_env(
                winning_score=ns.winning_score,
                first_player=ns.first_player,
                clear_screen=False if ns.no_clear else None,
                pause_seconds=0.0 if ns.no_pause else None,
            )
        except ValueError as exc:
            logging.error("Invalid match settings: %s", exc)
            return 2
        io = ConsoleIO(clear_screen=cfg.clear_screen)
        try:
            Match.from_prompts(config=cfg, io=io, rng=rng).play()
        except IdentityConflictError as exc:
            logging.error("%s", exc)
            return 2
        except (KeyboardInterrupt, EOFError):
            io.say()
            io.say("Thanks for playing Tic Tac Toe! Goodbye!")
            return 130
        return 0

    if ns.cmd == "suggest":
        b = _load_board(ns.board)
        if b is None:
            return 2
        if ns.me == ns.opponent:
            logging.error("--me and --opponent must differ")
            return 2
        if b.has_winner():
            logging.error("Board already has a winner: %s", b.winning_marker())
            return 2
        try:
            pos = choose_move(b, ns.me, ns.opponent, rng)
        except EmptyPoolError as exc:
            logging.error("%s", exc)
            return 2
        logging.info("tier=%s move=%d", move_tier(b, ns.me, ns.opponent), pos)
        return 0

    if ns.cmd == "threats":
        b = _load_board(ns.board)
        if b is None:
            return 2
        moves = b.current_winning_moves()
        logging.info(
            "threats=%s",
            [f"{m.marker}@{m.empty_square}" for m in moves],
        )
        return 0

    if ns.cmd == "winner":
        b = _load_board(ns.board)
        if b is None:
            return 2
        if b.has_winner():
            logging.info("winner=%s line=%s", b.winning_marker(), list(b.winning_line()))
        elif b.is_full():
            logging.info("winner=tie")
        else:
            logging.info("winner=none")
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
