"""tictactoe_rules package.

Rules engine for two-player Tic-Tac-Toe: immutable boards, turn sequencing,
move validation and win detection, plus a small CLI front end.

Convenience imports are exposed for common workflows.
"""

from .board import Board, Col, Mark, Position, Row, deserialize_board, empty_board, serialize_board
from .config import StartPolicy
from .game import Game, GameObserver, Turn
from .rules import WINNING_LINES, get_winner, is_full, player_to_move, winning_line
from .state import AwaitingMove, Ended, GameOverError, Player, apply_move, initial_state

__all__ = [
    "Board",
    "Col",
    "Mark",
    "Position",
    "Row",
    "empty_board",
    "serialize_board",
    "deserialize_board",
    "StartPolicy",
    "Game",
    "GameObserver",
    "Turn",
    "WINNING_LINES",
    "get_winner",
    "is_full",
    "player_to_move",
    "winning_line",
    "AwaitingMove",
    "Ended",
    "GameOverError",
    "Player",
    "apply_move",
    "initial_state",
]
