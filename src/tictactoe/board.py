"""
Board model: nine cells, the eight winning lines, occupancy and near-win queries.
Teaching notes:
- Cells are indexed 0..8 row-major: 0,1,2 top row; 3,4,5 middle; 6,7,8 bottom.
- An empty cell is None; an occupied cell holds its token, "O" or "X".
- Winning lines are index triples evaluated against the board at query time,
  always in the fixed order of WIN_LINES. The first matching line wins ties.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidMove

O_TOKEN = 'O'
X_TOKEN = 'X'
TOKENS = (O_TOKEN, X_TOKEN)
FIRST_TOKEN = O_TOKEN

EMPTY_CHAR = '.'

WinLine = Tuple[int, int, int]

WIN_LINES: Tuple[WinLine, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def other_token(token: str) -> str:
    if token == O_TOKEN:
        return X_TOKEN
    if token == X_TOKEN:
        return O_TOKEN
    raise ValueError(f"Unknown token: {token!r}")


class Board:
    """A 3x3 tic-tac-toe board.

    The board owns its cells; ``cells`` hands out an immutable snapshot.
    """

    def __init__(self) -> None:
        self._cells: List[Optional[str]] = [None] * 9

    @classmethod
    def from_string(cls, text: str) -> Board:
        """Parse the 9-character notation, e.g. ``"OO.X.X..."``."""
        raw = text.strip().upper()
        if len(raw) != 9 or any(c not in (EMPTY_CHAR, O_TOKEN, X_TOKEN) for c in raw):
            raise ValueError(f"Invalid board string {text!r}. Must be 9 chars of '.', 'O' or 'X'.")
        board = cls()
        board._cells = [None if c == EMPTY_CHAR else c for c in raw]
        return board

    @classmethod
    def from_cells(cls, cells: Sequence[Optional[str]]) -> Board:
        if len(cells) != 9:
            raise ValueError(f"A board has 9 cells, got {len(cells)}")
        board = cls()
        for i, v in enumerate(cells):
            if v is not None and v not in TOKENS:
                raise ValueError(f"Unknown token at cell {i}: {v!r}")
            board._cells[i] = v
        return board

    def __str__(self) -> str:
        return ''.join(EMPTY_CHAR if v is None else v for v in self._cells)

    def __repr__(self) -> str:
        return f"Board({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __getitem__(self, index: int) -> Optional[str]:
        return self._cells[index]

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def cells(self) -> Tuple[Optional[str], ...]:
        return tuple(self._cells)

    def copy(self) -> Board:
        return Board.from_cells(self._cells)

    def is_open(self, index: int) -> bool:
        return self._cells[index] is None

    def open_cells(self) -> List[int]:
        return [i for i, v in enumerate(self._cells) if v is None]

    def is_full(self) -> bool:
        return None not in self._cells

    def play(self, token: str, index: int) -> None:
        """Occupy cell ``index`` with ``token``.

        Raises InvalidMove when the index is off the board or the cell is taken;
        the board is unchanged in that case.
        """
        if token not in TOKENS:
            raise InvalidMove(f"Unknown token: {token!r}")
        if isinstance(index, bool) or not isinstance(index, int) or index < 0 or index > 8:
            raise InvalidMove(f"Move out of bounds: {index!r}")
        if self._cells[index] is not None:
            raise InvalidMove(f"Cell {index} is not open")
        self._cells[index] = token

    def _is_win(self, line: WinLine, token: str) -> bool:
        return all(self._cells[i] == token for i in line)

    def _is_potential_win(self, line: WinLine, token: str, count: int) -> bool:
        owned = 0
        for i in line:
            v = self._cells[i]
            if v == token:
                owned += 1
            elif v is not None:
                return False
        return owned == count

    def find_win(self, token: str) -> Optional[WinLine]:
        for line in WIN_LINES:
            if self._is_win(line, token):
                return line
        return None

    def find_potential(self, token: str, count: int) -> Optional[WinLine]:
        """First line holding exactly ``count`` of ``token`` and no opposing token."""
        for line in WIN_LINES:
            if self._is_potential_win(line, token, count):
                return line
        return None

    def first_open(self, within: Optional[WinLine] = None) -> Optional[int]:
        indices = range(9) if within is None else sorted(within)
        for i in indices:
            if self._cells[i] is None:
                return i
        return None

    def winner(self) -> Optional[str]:
        for token in TOKENS:
            if self.find_win(token) is not None:
                return token
        return None

    def is_draw(self) -> bool:
        return self.winner() is None and self.first_open() is None
