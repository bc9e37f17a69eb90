import io
import logging
from typing import Iterable

import pytest

from tictactoe.board import Board
from tictactoe.config import GameConfig
from tictactoe.game import Game, Outcome, outcome_of, toggle_debug
from tictactoe.render import HELP_TEXT, render_board


def _feeder(lines: Iterable[str]):
    it = iter(lines)

    def _input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input


def _game(lines, token='O', err=None):
    out = io.StringIO()
    g = Game(GameConfig(user_token=token), input_fn=_feeder(lines), out=out, err=err)
    return g, out


def test_render_prompt_shows_open_indices():
    text = render_board(Board.from_string("O...X...."), for_prompt=True)
    assert "  O  | [1] | [2] " in text
    assert " [3] |  X  | [5] " in text
    assert text.count("=====+=====+=====") == 2


def test_render_without_prompt_hides_indices():
    text = render_board(Board.from_string("O...X...."))
    assert "[" not in text
    assert "  O  |     |     " in text


def test_render_hides_indices_after_win():
    text = render_board(Board.from_string("OOOXX...."), for_prompt=True)
    assert "[" not in text


def test_outcome_of():
    assert outcome_of(Board(), 'O', 'X') is None
    assert outcome_of(Board.from_string("OOOXX...."), 'O', 'X') is Outcome.USER_WIN
    assert outcome_of(Board.from_string("OOOXX...."), 'X', 'O') is Outcome.COMPUTER_WIN
    assert outcome_of(Board.from_string("OXOOXXXOO"), 'O', 'X') is Outcome.DRAW


def test_quit_command():
    g, out = _game(["q"])
    assert g.run() is Outcome.QUIT
    assert "move? >" in out.getvalue()


def test_end_of_input_quits():
    g, _ = _game([])
    assert g.run() is Outcome.QUIT


def test_computer_moves_first_with_o():
    g, _ = _game(["q"], token='X')
    assert g.run() is Outcome.QUIT
    assert str(g.board) == "....O...."


def test_human_moves_first_with_o():
    g, _ = _game(["0", "q"])
    g.run()
    # computer contests the top row
    assert str(g.board) == "OX......."


def test_invalid_moves_are_reprompted(caplog):
    g, _ = _game(["9", "0", "0", "zz", "q"])
    with caplog.at_level(logging.WARNING):
        assert g.run() is Outcome.QUIT
    assert str(g.board) == "OX......."
    assert "out of bounds" in caplog.text
    assert "not open" in caplog.text
    assert "Invalid input" in caplog.text


@pytest.mark.parametrize("raw", ["\u00b2", "\u0663", "\uff15"])
def test_non_ascii_digits_are_reprompted(caplog, raw):
    g, _ = _game([raw, "q"])
    with caplog.at_level(logging.WARNING):
        assert g.run() is Outcome.QUIT
    assert str(g.board) == "........."
    assert "Invalid input" in caplog.text


def test_help_and_print_commands():
    err = io.StringIO()
    g, out = _game(["h", "p", "q"], err=err)
    g.run()
    text = out.getvalue()
    assert HELP_TEXT in err.getvalue()
    assert HELP_TEXT not in text
    assert text.count("[4]") >= 2


def test_user_can_beat_the_fork_weakness():
    # the heuristic answers 0 with 1, blocks 8, then can only block one of
    # the two threats created by 6
    g, out = _game(["0", "4", "6", "2"])
    assert g.run() is Outcome.USER_WIN
    assert "You win! hooray!" in out.getvalue()


def test_computer_wins_when_user_ignores_threats():
    # user X; computer O opens at 4
    g, out = _game(["1", "2", "3", "5", "6", "7", "8"], token='X')
    result = g.run()
    assert result is Outcome.COMPUTER_WIN
    assert "I win! Yay me!" in out.getvalue()


def test_draw_is_announced():
    g, out = _game(["4", "5", "6", "1", "8"])
    assert g.run() is Outcome.DRAW
    assert str(g.board) == "XOXXOOOXO"
    assert "Ugh! Stalemate." in out.getvalue()


def test_toggle_debug_flips_root_level():
    root = logging.getLogger()
    old = root.level
    try:
        root.setLevel(logging.INFO)
        assert toggle_debug() is True
        assert root.level == logging.DEBUG
        assert toggle_debug() is False
        assert root.level == logging.INFO
    finally:
        root.setLevel(old)


def test_debug_command_toggles_and_traces(caplog):
    root = logging.getLogger()
    old = root.level
    try:
        root.setLevel(logging.INFO)
        g, _ = _game(["d", "0", "q"])
        with caplog.at_level(logging.DEBUG, logger="tictactoe"):
            g.run()
        assert "rule=contest" in caplog.text
    finally:
        root.setLevel(old)
