import itertools

import numpy as np
import pytest

from tttmatch.board import parse_board
from tttmatch.config import MatchConfig
from tttmatch.match import ConsoleIO, Match, prompt_human
from tttmatch.players import Player
from tttmatch.render import draw_board, joinor, round_result_message, score_lines


class ScriptedIO(ConsoleIO):
    """Answers prompts from a fixed sequence and records everything said."""

    def __init__(self, answers) -> None:
        super().__init__(clear_screen=False, pause_enabled=False)
        self._answers = iter(answers)
        self.output = []

    def ask(self, prompt: str) -> str:
        self.output.append(prompt)
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError(f"No scripted answer left for prompt: {prompt!r}") from None

    def say(self, text: str = "") -> None:
        self.output.append(text)

    @property
    def transcript(self) -> str:
        return "\n".join(self.output)


class CyclingIO(ScriptedIO):
    """Tries squares 1..9 in a loop and declines replays after `replays`."""

    def __init__(self, replays: int = 0) -> None:
        super().__init__([])
        self._squares = itertools.cycle("123456789")
        self._replays = replays

    def ask(self, prompt: str) -> str:
        self.output.append(prompt)
        if "play again" in prompt:
            if self._replays:
                self._replays -= 1
                return "y"
            return "n"
        return next(self._squares)


def make_match(io, first="human", score=1, seed=0):
    human = Player(name="Ada", marker="X", is_human=True)
    cpu = Player(name="Stanley", marker="O")
    cfg = MatchConfig(winning_score=score, first_player=first, pause_seconds=0.0, clear_screen=False)
    return Match(human, cpu, config=cfg, io=io, rng=np.random.default_rng(seed))


def test_human_completes_line_and_scores():
    m = make_match(ScriptedIO(["3"]))
    for pos, mark in ((1, "X"), (2, "X"), (4, "O"), (5, "O")):
        m.board[pos] = mark
    winner = m.play_round()
    assert winner is m.human
    assert m.human.points == 1
    assert m.computer.points == 0
    assert m.board.available_positions() == list(range(1, 10))
    assert "Ada won!" in m.io.transcript


def test_computer_takes_win_before_block():
    m = make_match(ScriptedIO([]), first="computer")
    for pos, mark in ((1, "X"), (2, "X"), (4, "O"), (5, "O")):
        m.board[pos] = mark
    winner = m.play_round()
    assert winner is m.computer
    assert m.computer.points == 1
    assert "Stanley won!" in m.io.transcript


def test_computer_blocks():
    m = make_match(ScriptedIO([]), first="computer")
    m.board[1] = "X"
    m.board[2] = "X"
    assert m.computer_moves() == 3
    assert m.board[3] == "O"


def test_human_reprompted_until_valid():
    io = ScriptedIO(["abc", "0", "5", "", "4"])
    m = make_match(io)
    m.board[5] = "O"
    assert m.human_moves() == 4
    assert m.board[4] == "X"
    assert io.transcript.count("Sorry, that's not a valid choice.") == 4


def test_tie_scores_nobody():
    m = make_match(ScriptedIO([]))
    for pos, mark in zip(range(1, 10), "XOXXOOOXX"):
        m.board[pos] = mark
    assert m.update_score() is None
    assert (m.human.points, m.computer.points) == (0, 0)


def test_match_winner_threshold():
    m = make_match(ScriptedIO([]), score=3)
    m.computer.points = 2
    assert m.match_winner() is None
    m.computer.points = 3
    assert m.match_winner() is m.computer


def test_play_again_reprompts():
    io = ScriptedIO(["maybe", "Y"])
    m = make_match(io)
    assert m.play_again() is True
    assert "Sorry, must be y or n" in io.transcript


def test_full_match_runs_to_completion():
    io = CyclingIO()
    m = make_match(io, score=2, seed=11)
    winner = m.play()
    assert winner is not None
    assert winner.points >= 2
    assert m.rounds_played >= 2
    assert f"{winner.name} won the match!" in io.transcript
    assert io.output[-1] == "Thanks for playing Tic Tac Toe! Goodbye!"


def test_replay_resets_scores():
    io = CyclingIO(replays=1)
    m = make_match(io, score=1, seed=5)
    m.play()
    assert io.transcript.count("won the match!") == 2
    assert "Let's play again!" in io.transcript
    assert m.human.points + m.computer.points == 1


def test_same_markers_rejected():
    with pytest.raises(ValueError):
        Match(Player("Ada", "X", True), Player("Stanley", "X"), io=ScriptedIO([]))


def test_prompt_human_and_from_prompts():
    io = ScriptedIO(["XX", "X", "   ", "Ada"])
    human = prompt_human(io)
    assert (human.name, human.marker) == ("Ada", "X")
    assert io.transcript.count("Sorry, invalid choice.") == 2
    m = Match.from_prompts(
        config=MatchConfig(pause_seconds=0.0, clear_screen=False),
        io=ScriptedIO(["@", "Bob"]),
        rng=np.random.default_rng(0),
    )
    assert m.computer.marker != "@"
    assert m.computer.name != "Bob"


def test_scripted_io_runs_dry():
    with pytest.raises(EOFError):
        ScriptedIO([]).ask("> ")


def test_draw_board_layout():
    text = draw_board(parse_board("X.O...O.X"))
    lines = text.splitlines()
    assert len(lines) == 11
    assert lines[1] == "  X  |     |  O"
    assert lines[3] == "-----+-----+-----"
    assert lines[9] == "  O  |     |  X"


@pytest.mark.parametrize("items,expected", [
    ([], ""),
    ([1], "1"),
    ([1, 2], "1 or 2"),
    ([1, 2, 3], "1, 2, or 3"),
])
def test_joinor(items, expected):
    assert joinor(items) == expected


def test_result_and_score_text():
    ada = Player("Ada", "X", True, points=2)
    bot = Player("Stanley", "O", points=1)
    assert round_result_message(None) == "It's a tie!"
    assert round_result_message(ada) == "Ada won!"
    assert score_lines([ada, bot]) == [
        "Here is the current match score:",
        "Ada has 2.",
        "Stanley has 1.",
    ]


def test_default_io_follows_clear_screen_setting():
    human = Player("Ada", "X", True)
    cpu = Player("Stanley", "O")
    m = Match(human, cpu, config=MatchConfig(clear_screen=False, pause_seconds=0.0))
    assert m.io.clear_screen is False
    m = Match(human, cpu, config=MatchConfig(clear_screen=True, pause_seconds=0.0))
    assert m.io.clear_screen is True


def test_default_io_follows_clear_screen_env(monkeypatch):
    monkeypatch.setenv("TTT_CLEAR_SCREEN", "0")
    m = Match(Player("Ada", "X", True), Player("Stanley", "O"), config=MatchConfig.from_env())
    assert m.io.clear_screen is False


def test_from_prompts_default_io_follows_config(monkeypatch):
    answers = iter(["X", "Ada"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    m = Match.from_prompts(
        config=MatchConfig(clear_screen=False, pause_seconds=0.0),
        rng=np.random.default_rng(0),
    )
    assert m.io.clear_screen is False
    assert m.human.name == "Ada"
