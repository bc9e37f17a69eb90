"""tictactoe package.

Board model, the computer's heuristic move selector, and a simple
interactive CLI.

Convenience imports are exposed for common workflows.
"""

from .board import WIN_LINES, Board
from .errors import FatalLogicError, InvalidMove, TicTacToeError
from .game import Game, Outcome
from .player import ComputerPlayer, Decision, Rule

__all__ = [
    "WIN_LINES",
    "Board",
    "ComputerPlayer",
    "Decision",
    "Rule",
    "Game",
    "Outcome",
    "TicTacToeError",
    "InvalidMove",
    "FatalLogicError",
]
