"""
Console match controller: turns, rounds, scoring, and the replay prompt.

The board and strategy are services; all terminal I/O goes through a
ConsoleIO so a whole match can be driven with scripted answers.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Callable, Optional

import numpy as np

from .board import Board
from .config import MatchConfig
from .players import Player, make_computer_player, make_human_player, valid_marker, valid_name
from .render import draw_board, joinor, round_result_message, score_lines
from .strategy import MoveStrategy

logger = logging.getLogger(__name__)


class ConsoleIO:
    """Terminal I/O. Subclass or pass callables to redirect it."""

    def __init__(
        self,
        ask: Optional[Callable[[str], str]] = None,
        say: Optional[Callable[[str], None]] = None,
        clear_screen: bool = True,
        pause_enabled: bool = True,
    ) -> None:
        self._ask = ask if ask is not None else input
        self._say = say if say is not None else print
        self.clear_screen = clear_screen
        self.pause_enabled = pause_enabled

    def ask(self, prompt: str) -> str:
        return self._ask(prompt)

    def say(self, text: str = "") -> None:
        self._say(text)

    def clear(self) -> None:
        if self.clear_screen:
            os.system("cls" if os.name == "nt" else "clear")

    def pause(self, seconds: float) -> None:
        if self.pause_enabled and seconds > 0:
            time.sleep(seconds)


def prompt_human(io: ConsoleIO) -> Player:
    while True:
        marker = io.ask("Please enter your marker. ")
        if valid_marker(marker):
            break
        io.say("Sorry, invalid choice.")
    while True:
        name = io.ask("Please enter your name. ")
        if valid_name(name):
            break
        io.say("Sorry, invalid choice.")
    return make_human_player(name, marker)


class Match:
    def __init__(
        self,
        human: Player,
        computer: Player,
        config: Optional[MatchConfig] = None,
        io: Optional[ConsoleIO] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if human.marker == computer.marker:
            raise ValueError("Participants must use different markers")
        self.human = human
        self.computer = computer
        self.config = config if config is not None else MatchConfig()
        self.config.validate()
        self.io = io if io is not None else ConsoleIO(clear_screen=self.config.clear_screen)
        self.board = Board()
        self.strategy = MoveStrategy(computer.marker, human.marker, rng)
        self.rounds_played = 0
        self._current = self.first_player()

    @classmethod
    def from_prompts(
        cls,
        config: Optional[MatchConfig] = None,
        io: Optional[ConsoleIO] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "Match":
        config = config if config is not None else MatchConfig()
        io = io if io is not None else ConsoleIO(clear_screen=config.clear_screen)
        rng = rng if rng is not None else np.random.default_rng()
        human = prompt_human(io)
        computer = make_computer_player(human, rng)
        return cls(human, computer, config=config, io=io, rng=rng)

    def first_player(self) -> Player:
        return self.human if self.config.first_player == "human" else self.computer

    def owner_of(self, marker: object) -> Optional[Player]:
        for p in (self.human, self.computer):
            if p.marker == marker:
                return p
        return None

    # -- match flow -------------------------------------------------------

    def play(self) -> Optional[Player]:
        """Run matches until the human declines a replay; return the last match winner."""
        self.io.clear()
        self.io.say("Welcome to Tic Tac Toe!")
        self.io.say()
        winner: Optional[Player] = None
        while True:
            self.display_board()
            while True:
                self.play_round()
                winner = self.match_winner()
                if winner is not None:
                    break
            self.io.say(f"{winner.name} won the match!")
            logger.debug("match winner=%s rounds=%d", winner.name, self.rounds_played)
            if not self.play_again():
                break
            self.reset_match()
            self.io.say("Let's play again!")
            self.io.say()
        self.io.say("Thanks for playing Tic Tac Toe! Goodbye!")
        return winner

    def play_round(self) -> Optional[Player]:
        """Play one round to a win or a full board; return the round winner."""
        while True:
            self.current_player_moves()
            if self.board.has_winner() or self.board.is_full():
                break
            self.clear_screen_and_display_board()
        winner = self.update_score()
        self.rounds_played += 1
        logger.debug(
            "round=%d winner=%s", self.rounds_played, winner.name if winner else "tie"
        )
        self.clear_screen_and_display_board()
        self.io.say(round_result_message(winner))
        self.io.pause(self.config.pause_seconds)
        self.reset_round()
        for line in score_lines([self.human, self.computer]):
            self.io.say(line)
        return winner

    def current_player_moves(self) -> None:
        if self._current is self.human:
            self.human_moves()
            self._current = self.computer
        else:
            self.computer_moves()
            self._current = self.human

    def human_moves(self) -> int:
        choices = self.board.available_positions()
        self.io.say(f"{self.human.name} please choose a square ({joinor(choices)}): ")
        while True:
            try:
                square = int(self.io.ask("> "))
            except ValueError:
                square = None
            if square in self.board.available_positions():
                break
            self.io.say("Sorry, that's not a valid choice.")
        self.board.set_marker(square, self.human.marker)
        return square

    def computer_moves(self) -> int:
        self.io.say(f"Now it's {self.computer.name}'s turn.")
        self.io.pause(self.config.pause_seconds)
        logger.debug("computer tier=%s", self.strategy.tier(self.board))
        square = self.strategy.choose_move(self.board)
        self.board.set_marker(square, self.computer.marker)
        return square

    def update_score(self) -> Optional[Player]:
        winner = self.owner_of(self.board.winning_marker())
        if winner is not None:
            winner.points += 1
        return winner

    def match_winner(self) -> Optional[Player]:
        for p in (self.human, self.computer):
            if p.points >= self.config.winning_score:
                return p
        return None

    def play_again(self) -> bool:
        while True:
            answer = self.io.ask("Would you like to play again? (y/n) ").strip().lower()
            if answer in ("y", "n"):
                return answer == "y"
            self.io.say("Sorry, must be y or n")

    # -- resets and display ----------------------------------------------

    def reset_round(self) -> None:
        self.board.reset()
        self._current = self.first_player()
        self.clear_screen_and_display_board()

    def reset_match(self) -> None:
        self.board.reset()
        self.human.reset()
        self.computer.reset()
        self.rounds_played = 0
        self._current = self.first_player()

    def display_board(self) -> None:
        self.io.say(f"You're a {self.human.marker}. {self.computer.name} is a {self.computer.marker}.")
        self.io.say()
        self.io.say(draw_board(self.board))
        self.io.say()

    def clear_screen_and_display_board(self) -> None:
        self.io.clear()
        self.display_board()
