from __future__ import annotations

import argparse
import logging
from importlib.metadata import PackageNotFoundError, version

from .board import O_TOKEN, X_TOKEN, Board
from .config import GameConfig, parse_token
from .errors import FatalLogicError
from .evaluation import exhaustive_losses, run_random_matches
from .game import Game, outcome_of
from .player import ComputerPlayer

LOG_FORMAT = "[%(levelname)s] %(message)s"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ttt",
        description="Tic-tac-toe: play the computer. O goes first.",
    )
    sub = p.add_subparsers(dest="cmd")
    p.add_argument(
        "--token", "-t",
        help="Token you will use when playing, x or o (default: $TTT_TOKEN or o)",
    )
    p.add_argument(
        "--debug", "-d", "--verbose", "-v",
        dest="debug",
        action="store_true",
        default=None,
        help="Output detailed trace to stderr",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")

    sub.add_parser("play", help="Play an interactive game (default)")

    p_move = sub.add_parser("move", help="Show the computer's move for a board")
    p_move.add_argument("--board", required=True, help="Board string, e.g. OO.X.X... ('.'=empty)")
    p_move.add_argument(
        "--as",
        dest="as_token",
        help="Computer token, x or o (default: side to move)",
    )

    p_eval = sub.add_parser("evaluate", help="Evaluate the heuristic player")
    p_eval.add_argument("--games", type=int, default=1000, help="Random-opponent games (default: 1000)")
    p_eval.add_argument("--seed", type=int, default=None, help="Seed for the random opponent")
    p_eval.add_argument(
        "--exhaustive",
        action="store_true",
        help="Also enumerate every human line of play that beats the heuristic",
    )

    return p


def _side_to_move(board: Board) -> str:
    return O_TOKEN if board.cells.count(O_TOKEN) == board.cells.count(X_TOKEN) else X_TOKEN


def _cmd_move(ns: argparse.Namespace) -> int:
    try:
        board = Board.from_string(ns.board)
    except ValueError as e:
        logging.error("%s", e)
        return 2
    o, x = board.cells.count(O_TOKEN), board.cells.count(X_TOKEN)
    if not (o == x or o == x + 1):
        logging.error("Board is not a reachable state (O=%d X=%d).", o, x)
        return 2
    if ns.as_token is not None:
        try:
            token = parse_token(ns.as_token)
        except ValueError as e:
            logging.error("%s", e)
            return 2
    else:
        token = _side_to_move(board)
    opponent = X_TOKEN if token == O_TOKEN else O_TOKEN
    if outcome_of(board, opponent, token) is not None:
        logging.error("Game is already over for board %s.", board)
        return 2
    decision = ComputerPlayer(token, opponent).choose(board)
    logging.info(
        "token=%s move=%d rule=%s line=%s",
        token, decision.index, decision.rule.value, decision.line,
    )
    return 0


def _cmd_evaluate(ns: argparse.Namespace) -> int:
    if ns.games <= 0:
        logging.error("--games must be positive: %s", ns.games)
        return 2
    s = run_random_matches(ns.games, seed=ns.seed)
    logging.info(
        "games=%d wins=%d losses=%d draws=%d score=%.3f±%.3f (95%% CI)",
        s.games, s.computer_wins, s.computer_losses, s.draws, s.mean_score, s.ci95_half,
    )
    if ns.exhaustive:
        for computer_first in (True, False):
            losses = exhaustive_losses(computer_first)
            logging.info(
                "computer_first=%s losing_lines=%d first=%s",
                computer_first, len(losses), list(losses[0]) if losses else None,
            )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if ns.version:
        try:
            print(version("tictactoe"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    if ns.token is not None and ns.cmd in ("move", "evaluate"):
        parser.error(f"-t/--token only applies to play, not {ns.cmd}")
    try:
        config = GameConfig.resolve(ns.token, ns.debug)
    except ValueError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logging.error("%s", e)
        return 2
    logging.basicConfig(level=logging.DEBUG if config.debug else logging.INFO, format=LOG_FORMAT)

    try:
        if ns.cmd == "move":
            return _cmd_move(ns)
        if ns.cmd == "evaluate":
            return _cmd_evaluate(ns)
        outcome = Game(config).run()
        logging.debug("game over: %s", outcome.value)
        return 0
    except FatalLogicError as e:
        logging.error("Failure: %s", e)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
