"""Text rendering of the board and the interactive help."""
from typing import List

from .board import Board

ROW_FRAME = "     |     |"
ROW_SEPARATOR = "=====+=====+====="

HELP_TEXT = (
    "0 - 8: to select a square\n"
    "p:     to draw the current board\n"
    "d:     to toggle debug trace\n"
    "h:     to display help\n"
    "q:     to end game"
)


def _cell_text(board: Board, index: int, for_prompt: bool) -> str:
    v = board[index]
    if v is not None:
        return f"  {v}  "
    if for_prompt:
        return f" [{index}] "
    return "     "


def render_board(board: Board, for_prompt: bool = False) -> str:
    """Draw the 3x3 grid.

    With ``for_prompt`` the open cells show their index, unless the board
    already holds a win.
    """
    if board.winner() is not None:
        for_prompt = False
    lines: List[str] = []
    for row in range(3):
        lines.append(ROW_FRAME)
        lines.append("|".join(_cell_text(board, row * 3 + col, for_prompt) for col in range(3)))
        lines.append(ROW_FRAME)
        if row < 2:
            lines.append(ROW_SEPARATOR)
    return "\n".join(lines)
