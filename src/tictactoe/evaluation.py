"""
Evaluation of the heuristic player.
Teaching notes:
- Random matches measure how the heuristic fares against a uniform opponent.
- The exhaustive search walks every human line of play against the
  deterministic heuristic; any line it returns is a forced win for the human.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .board import O_TOKEN, X_TOKEN, Board
from .game import Outcome, outcome_of
from .player import ComputerPlayer


def _tokens(computer_first: bool) -> Tuple[str, str]:
    """(computer, opponent); O moves first."""
    return (O_TOKEN, X_TOKEN) if computer_first else (X_TOKEN, O_TOKEN)


def random_opponent_match(rng: np.random.Generator, computer_first: bool) -> Outcome:
    """Play one game against an opponent choosing uniformly among open cells.

    USER_WIN means the random opponent won.
    """
    computer_token, opponent_token = _tokens(computer_first)
    computer = ComputerPlayer(computer_token, opponent_token)
    board = Board()
    to_move = O_TOKEN
    while True:
        if to_move == computer_token:
            board.play(computer_token, computer.take_move(board))
        else:
            board.play(opponent_token, int(rng.choice(board.open_cells())))
        result = outcome_of(board, opponent_token, computer_token)
        if result is not None:
            return result
        to_move = opponent_token if to_move == computer_token else computer_token


@dataclass
class MatchSummary:
    games: int
    computer_wins: int
    computer_losses: int
    draws: int
    mean_score: float
    ci95_half: float


def run_random_matches(games: int, seed: Optional[int] = None) -> MatchSummary:
    """Play ``games`` seeded matches, alternating who moves first."""
    if games <= 0:
        raise ValueError(f"games must be positive, got {games}")
    rng = np.random.default_rng(seed)
    scores = np.zeros(games, dtype=float)
    for g in range(games):
        result = random_opponent_match(rng, computer_first=(g % 2 == 0))
        if result is Outcome.COMPUTER_WIN:
            scores[g] = 1.0
        elif result is Outcome.USER_WIN:
            scores[g] = -1.0
    std = float(np.std(scores)) if games > 1 else 0.0
    return MatchSummary(
        games=games,
        computer_wins=int(np.sum(scores > 0)),
        computer_losses=int(np.sum(scores < 0)),
        draws=int(np.sum(scores == 0)),
        mean_score=float(np.mean(scores)),
        ci95_half=1.96 * std / math.sqrt(games),
    )


def exhaustive_losses(computer_first: bool) -> List[Tuple[int, ...]]:
    """Every human move sequence that beats the heuristic, sorted."""
    computer_token, user_token = _tokens(computer_first)
    computer = ComputerPlayer(computer_token, user_token)
    board = Board()
    if computer_first:
        board.play(computer_token, computer.take_move(board))
    losses: List[Tuple[int, ...]] = []

    def _walk(b: Board, seq: Tuple[int, ...]) -> None:
        for mv in b.open_cells():
            child = b.copy()
            child.play(user_token, mv)
            line = seq + (mv,)
            result = outcome_of(child, user_token, computer_token)
            if result is Outcome.USER_WIN:
                losses.append(line)
                continue
            if result is not None:
                continue
            child.play(computer_token, computer.take_move(child))
            if outcome_of(child, user_token, computer_token) is None:
                _walk(child, line)

    _walk(board, ())
    return sorted(losses)
