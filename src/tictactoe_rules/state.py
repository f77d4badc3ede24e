"""
Turn sequencing as an explicit state machine.

States are plain values: ``AwaitingMove(player, board)`` is the only live state,
``Ended(winner, board)`` is terminal. ``apply_move`` is a pure transition that
returns the next state plus the events a front end should be told about, in
order. The callback-driven ``Game`` in ``game.py`` is a thin layer over this.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

from .board import Board, Mark, Position
from .config import DEFAULT_START_POLICY, StartPolicy
from .rules import get_winner, player_to_move

logger = logging.getLogger(__name__)


class Player(Enum):
    O = "O"
    X = "X"

    @property
    def mark(self) -> Mark:
        return Mark.O if self is Player.O else Mark.X

    @property
    def opponent(self) -> "Player":
        return Player.X if self is Player.O else Player.O

    @classmethod
    def for_mark(cls, mark: Mark) -> "Player":
        return cls.O if mark is Mark.O else cls.X


class GameOverError(RuntimeError):
    """Raised when a move is applied to a game that has already ended."""


@dataclass(frozen=True)
class AwaitingMove:
    player: Player
    board: Board


@dataclass(frozen=True)
class Ended:
    winner: Player
    board: Board


GameState = Union[AwaitingMove, Ended]


@dataclass(frozen=True)
class BoardChanged:
    board: Board


@dataclass(frozen=True)
class NextTurn:
    player: Player
    board: Board


@dataclass(frozen=True)
class GameEnded:
    winner: Player


Event = Union[BoardChanged, NextTurn, GameEnded]
Transition = Tuple[GameState, List[Event]]


def starting_player(board: Board, policy: StartPolicy = DEFAULT_START_POLICY) -> Player:
    if policy is StartPolicy.FIXED:
        return Player.O
    return Player.for_mark(player_to_move(board))


def _settle(player: Player, board: Board) -> Transition:
    # `player` moves next unless `board` is already won.
    winner = get_winner(board)
    if winner is not None:
        ended = Ended(Player.for_mark(winner), board)
        logger.info("Game ended: %s wins", ended.winner.value)
        return ended, [GameEnded(ended.winner)]
    return AwaitingMove(player, board), [NextTurn(player, board)]


def initial_state(board: Board, policy: StartPolicy = DEFAULT_START_POLICY) -> Transition:
    """Start a game on `board`: announce the board, then the first turn.

    A board that already holds a winning line ends the game immediately.
    """
    state, events = _settle(starting_player(board, policy), board)
    return state, [BoardChanged(board), *events]


def apply_move(state: GameState, position: Position) -> Transition:
    if isinstance(state, Ended):
        raise GameOverError(f"Game already won by {state.winner.value}")
    player, board = state.player, state.board
    if board.is_marked(position):
        logger.debug("Rejected %s at %s: cell occupied", player.value, position)
        return state, [NextTurn(player, board)]
    after = board.mark(position, player.mark)
    logger.debug("Accepted %s at %s", player.value, position)
    nxt, events = _settle(player.opponent, after)
    return nxt, [BoardChanged(after), *events]
