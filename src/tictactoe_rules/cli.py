from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional

from .board import Board, Position, deserialize_board, empty_board
from .config import log_level, start_policy
from .game import Game, Turn
from .rules import get_winner, is_full, player_to_move
from .state import Player


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe rules engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_show = sub.add_parser("show", help="Render a board (9 digits, 0=empty,1=X,2=O)")
    p_show.add_argument("--board", required=True, help="Board string, e.g., 100020000")

    p_replay = sub.add_parser("replay", help="Play a fixed sequence of moves and report the result")
    p_replay.add_argument(
        "--moves", required=True, help='Comma-separated 0-based "rc" pairs, e.g. "00,11,01,12,02"'
    )
    p_replay.add_argument("--board", default=None, help="Starting board string (default: empty)")
    p_replay.add_argument(
        "--start-policy",
        choices=["counts", "fixed"],
        default=None,
        help="Who starts: side with fewer marks (counts) or always O (fixed); env TTT_START_POLICY",
    )

    p_play = sub.add_parser("play", help='Interactive game reading "row col" lines from stdin')
    p_play.add_argument("--board", default=None, help="Starting board string (default: empty)")
    p_play.add_argument(
        "--start-policy",
        choices=["counts", "fixed"],
        default=None,
        help="Who starts: side with fewer marks (counts) or always O (fixed); env TTT_START_POLICY",
    )

    return p


def parse_move(raw: str) -> Position:
    """Parse "rc", "r c" or "r,c" (0-based) into a Position."""
    digits = [ch for ch in raw if not ch.isspace() and ch != ","]
    if len(digits) != 2 or not all(ch.isdigit() for ch in digits):
        raise ValueError(f"Invalid move {raw!r}. Expected two digits, row then column.")
    return Position.from_indices(int(digits[0]), int(digits[1]))


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _load_board(raw: Optional[str]) -> Board:
    if raw is None:
        return empty_board()
    return deserialize_board(raw)


def _print_board(board: Board) -> None:
    print(board)
    print()


def _report_result(turn: Optional[Turn], winners: List[Player]) -> None:
    if winners:
        print(f"winner={winners[0].value}")
    elif turn is not None and is_full(turn.board):
        print("result=draw")
    elif turn is not None:
        print(f"to_move={turn.player.value}")


def _replay(board: Board, moves: Iterable[str], policy: str | None) -> int:
    winners: List[Player] = []
    game = Game(
        on_board_changed=_print_board,
        on_game_ended=winners.append,
        start_policy=start_policy(policy),
    )
    turn = game.start(board)
    for raw in moves:
        if turn is None:
            logging.error("Move %s given after the game ended", raw)
            return 2
        pos = parse_move(raw)
        nxt = turn.mark(pos)
        if nxt is not None and nxt.board == turn.board:
            logging.info("Cell %s is taken; %s to retry", pos, nxt.player.value)
        turn = nxt
    _report_result(turn, winners)
    return 0


def _play(board: Board, lines: Iterable[str], policy: str | None) -> int:
    winners: List[Player] = []
    game = Game(
        on_board_changed=_print_board,
        on_game_ended=winners.append,
        start_policy=start_policy(policy),
    )
    turn = game.start(board)
    if turn is not None and not is_full(turn.board):
        print(f"{turn.player.value} to move (row col)> ", flush=True)
    for line in lines:
        if turn is None or is_full(turn.board):
            break
        raw = line.strip()
        if not raw:
            continue
        try:
            pos = parse_move(raw)
        except ValueError as exc:
            logging.error("%s", exc)
            continue
        nxt = turn.mark(pos)
        if nxt is not None and nxt.board == turn.board:
            logging.info("Cell %s is taken; try again", pos)
        turn = nxt
        if turn is not None and not is_full(turn.board):
            print(f"{turn.player.value} to move (row col)> ", flush=True)
    _report_result(turn, winners)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    try:
        level = log_level(getattr(ns, "verbose", False))
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictactoe-rules"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "show":
        try:
            b = deserialize_board(ns.board)
        except ValueError as exc:
            logging.error("%s", exc)
            return 2
        _print_board(b)
        winner = get_winner(b)
        print(
            f"to_move={player_to_move(b).value} "
            f"winner={winner.value if winner is not None else '-'} "
            f"full={is_full(b)}"
        )
        return 0

    if ns.cmd == "replay":
        try:
            b = _load_board(ns.board)
            moves = [m for m in ns.moves.split(",") if m.strip()]
            for m in moves:
                parse_move(m)
            return _replay(b, moves, ns.start_policy)
        except ValueError as exc:
            logging.error("%s", exc)
            return 2

    if ns.cmd == "play":
        try:
            b = _load_board(ns.board)
            return _play(b, sys.stdin, ns.start_policy)
        except ValueError as exc:
            logging.error("%s", exc)
            return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
