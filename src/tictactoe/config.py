"""Startup settings for a game.

Environment-first: TTT_TOKEN and TTT_DEBUG supply defaults, command-line
flags override them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .board import O_TOKEN, X_TOKEN, other_token

_TRUTHY = {"1", "true", "yes", "on"}


def parse_token(value: str) -> str:
    """Map user input such as ``x``, ``O`` or ``xray`` to a token.

    Only the first character counts.
    """
    raw = (value or "").strip()
    first = raw[:1].upper()
    if first == X_TOKEN:
        return X_TOKEN
    if first == O_TOKEN:
        return O_TOKEN
    raise ValueError(f"Invalid token specified: {value!r}")


def env_token() -> str:
    v = os.getenv("TTT_TOKEN")
    return parse_token(v) if v else O_TOKEN


def env_debug() -> bool:
    v = os.getenv("TTT_DEBUG")
    return v is not None and v.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class GameConfig:
    user_token: str = O_TOKEN
    debug: bool = False

    def __post_init__(self) -> None:
        if self.user_token not in (O_TOKEN, X_TOKEN):
            raise ValueError(f"Invalid token specified: {self.user_token!r}")

    @property
    def computer_token(self) -> str:
        return other_token(self.user_token)

    @classmethod
    def resolve(cls, token: str | None = None, debug: bool | None = None) -> GameConfig:
        """Build a config from explicit values, falling back to the environment."""
        return cls(
            user_token=parse_token(token) if token is not None else env_token(),
            debug=debug if debug is not None else env_debug(),
        )
