"""
Interactive game session: alternates the human and the computer on one board.
Teaching notes:
- The board and the move selector never print or log; everything user-facing
  happens here.
- Bad input and illegal moves are reported and re-prompted. A move selector
  failure (FatalLogicError) is a bug and propagates.
"""
from __future__ import annotations

import enum
import logging
import sys
from typing import Callable, Optional, TextIO

from .board import FIRST_TOKEN, Board
from .config import GameConfig
from .errors import InvalidMove
from .player import ComputerPlayer
from .render import HELP_TEXT, render_board

log = logging.getLogger(__name__)

PROMPT = "move? >"


class Outcome(enum.Enum):
    USER_WIN = "user_win"
    COMPUTER_WIN = "computer_win"
    DRAW = "draw"
    QUIT = "quit"


OUTCOME_MESSAGES = {
    Outcome.USER_WIN: "You win! hooray!",
    Outcome.COMPUTER_WIN: "I win! Yay me!",
    Outcome.DRAW: "Ugh! Stalemate.",
}


def outcome_of(board: Board, user_token: str, computer_token: str) -> Optional[Outcome]:
    """Terminal outcome of ``board``, or None while the game is still open."""
    if board.find_win(user_token) is not None:
        return Outcome.USER_WIN
    if board.find_win(computer_token) is not None:
        return Outcome.COMPUTER_WIN
    if board.first_open() is None:
        return Outcome.DRAW
    return None


def toggle_debug() -> bool:
    """Flip the root logger between DEBUG and INFO; return True when now DEBUG."""
    root = logging.getLogger()
    if root.getEffectiveLevel() <= logging.DEBUG:
        log.debug("Disabling trace")
        root.setLevel(logging.INFO)
        return False
    root.setLevel(logging.DEBUG)
    log.debug("Enabled trace")
    return True


class Game:
    def __init__(
        self,
        config: GameConfig,
        input_fn: Callable[[str], str] = input,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.config = config
        self.board = Board()
        self.computer = ComputerPlayer(config.computer_token, config.user_token)
        self._input = input_fn
        self._out = out
        self._err = err

    def _say(self, text: str) -> None:
        print(text, file=self._out if self._out is not None else sys.stdout)

    def _note(self, text: str) -> None:
        print(text, file=self._err if self._err is not None else sys.stderr)

    def outcome(self) -> Optional[Outcome]:
        return outcome_of(self.board, self.config.user_token, self.config.computer_token)

    def show(self, for_prompt: bool) -> Optional[Outcome]:
        """Print the board; announce and return the outcome if the game is over."""
        self._say(render_board(self.board, for_prompt))
        result = self.outcome()
        if result is not None:
            line = self.board.find_win(self.config.user_token) or self.board.find_win(self.config.computer_token)
            if line is not None:
                log.debug("found a win: %s", " ".join(map(str, line)))
            self._say(OUTCOME_MESSAGES[result])
        elif not for_prompt:
            self._say("")
        return result

    def computer_turn(self) -> int:
        decision = self.computer.choose(self.board)
        log.debug(
            "computer %s plays %d (rule=%s line=%s)",
            self.computer.token, decision.index, decision.rule.value, decision.line,
        )
        self.board.play(self.computer.token, decision.index)
        return decision.index

    def read_move(self) -> Optional[int]:
        """Prompt until the user names a cell; None when they quit."""
        while True:
            self._say(PROMPT)
            try:
                raw = self._input("")
            except EOFError:
                log.debug("end of input")
                return None
            cmd = raw.strip().lower()
            log.debug('User input: "%s"', cmd)
            if not cmd:
                continue
            if cmd.isascii() and cmd.isdigit():
                return int(cmd)
            if cmd[0] == 'p':
                self._say(render_board(self.board, for_prompt=True))
            elif cmd[0] == 'h':
                self._note(HELP_TEXT)
            elif cmd[0] == 'd':
                toggle_debug()
            elif cmd[0] == 'q':
                return None
            else:
                log.warning("Invalid input %r; type h for help", raw.strip())

    def run(self) -> Outcome:
        log.debug(
            "Starting game: user token %s, computer token %s",
            self.config.user_token, self.config.computer_token,
        )
        if self.computer.token == FIRST_TOKEN:
            self.computer_turn()
        while True:
            result = self.show(for_prompt=True)
            if result is not None:
                return result
            move = self.read_move()
            if move is None:
                return Outcome.QUIT
            try:
                self.board.play(self.config.user_token, move)
            except InvalidMove as e:
                log.warning("%s", e)
                continue
            result = self.show(for_prompt=False)
            if result is not None:
                return result
            self.computer_turn()
