"""
Computer move selection: a fixed priority cascade over the board's lines.
Teaching notes:
- One ply of lookahead only. An opponent who sets up two threats at once
  (a fork) beats it; that is accepted behaviour.
- Deterministic: the same board always yields the same move.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .board import Board, WinLine
from .errors import FatalLogicError

# center, corners, edges
FALLBACK_ORDER = (4, 0, 2, 6, 8, 1, 3, 5, 7)


class Rule(enum.Enum):
    WIN = "win"
    BLOCK = "block"
    BUILD = "build"
    CONTEST = "contest"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Decision:
    index: int
    rule: Rule
    line: Optional[WinLine] = None


class ComputerPlayer:
    def __init__(self, token: str, opponent: str) -> None:
        if token == opponent:
            raise ValueError(f"Computer and opponent share token {token!r}")
        self.token = token
        self.opponent = opponent

    def choose(self, board: Board) -> Decision:
        """Pick the computer's next cell and report which rule selected it."""
        cascade = (
            (self.token, 2, Rule.WIN),
            (self.opponent, 2, Rule.BLOCK),
            (self.token, 1, Rule.BUILD),
            (self.opponent, 1, Rule.CONTEST),
        )
        for token, count, rule in cascade:
            line = board.find_potential(token, count)
            if line is not None:
                # a potential line always has an open cell
                return Decision(board.first_open(line), rule, line)  # type: ignore[arg-type]
        for i in FALLBACK_ORDER:
            if board.is_open(i):
                return Decision(i, Rule.FALLBACK)
        raise FatalLogicError("Unexpected: could not find an open cell")

    def take_move(self, board: Board) -> int:
        return self.choose(board).index
