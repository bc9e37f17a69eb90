"""Exceptions raised by the tic-tac-toe engine."""


class TicTacToeError(Exception):
    """Base class for engine errors."""


class InvalidMove(TicTacToeError, ValueError):
    """A move outside the board or onto an occupied cell.

    Recoverable: the board is left unchanged and the caller may re-prompt.
    """


class FatalLogicError(TicTacToeError, RuntimeError):
    """The move selector was asked to play on a board with no open cell.

    Callers must detect the end of the game before asking for a move.
    """
