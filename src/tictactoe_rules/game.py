"""
Callback-driven game: the face most front ends use.

A ``Game`` only holds the notification handlers. All game state travels in the
``Turn`` values it hands out: each Turn is bound to the player on move and the
board at the time it was issued, and may be used once.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from .board import Board, Position
from .config import DEFAULT_START_POLICY, StartPolicy
from .state import (
    AwaitingMove,
    BoardChanged,
    Event,
    GameEnded,
    NextTurn,
    Player,
    apply_move,
    initial_state,
)

logger = logging.getLogger(__name__)


class GameObserver(Protocol):
    def on_board_changed(self, board: Board) -> None: ...

    def on_next_turn(self, turn: "Turn") -> None: ...

    def on_game_ended(self, winner: Player) -> None: ...


def _ignore(_: object) -> None:
    return None


class Turn:
    """One-shot capability for `player` to attempt a move on `board`."""

    __slots__ = ("_game", "_state", "_used")

    def __init__(self, game: "Game", state: AwaitingMove):
        self._game = game
        self._state = state
        self._used = False

    @property
    def player(self) -> Player:
        return self._state.player

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def used(self) -> bool:
        return self._used

    def mark(self, position: Position) -> Optional["Turn"]:
        """Attempt to mark `position`.

        Returns the next Turn (the same player again if the cell was taken),
        or None once the game has been won.
        """
        if self._used:
            logger.warning("Ignoring reuse of a spent turn for %s", self.player.value)
            return None
        self._used = True
        _, events = apply_move(self._state, position)
        return self._game._dispatch(events)

    def __repr__(self) -> str:
        return f"Turn(player={self.player.value}, board={self.board!r})"


class Game:
    def __init__(
        self,
        observer: Optional[GameObserver] = None,
        *,
        on_board_changed: Optional[Callable[[Board], None]] = None,
        on_next_turn: Optional[Callable[[Turn], None]] = None,
        on_game_ended: Optional[Callable[[Player], None]] = None,
        start_policy: StartPolicy = DEFAULT_START_POLICY,
    ):
        if observer is not None:
            on_board_changed = on_board_changed or observer.on_board_changed
            on_next_turn = on_next_turn or observer.on_next_turn
            on_game_ended = on_game_ended or observer.on_game_ended
        self._on_board_changed = on_board_changed or _ignore
        self._on_next_turn = on_next_turn or _ignore
        self._on_game_ended = on_game_ended or _ignore
        self.start_policy = start_policy

    def start(self, board: Optional[Board] = None) -> Optional[Turn]:
        """Announce `board` (empty by default) and issue the first Turn."""
        if board is None:
            board = Board.empty()
        _, events = initial_state(board, self.start_policy)
        return self._dispatch(events)

    def _dispatch(self, events: list[Event]) -> Optional[Turn]:
        turn: Optional[Turn] = None
        for ev in events:
            if isinstance(ev, BoardChanged):
                self._on_board_changed(ev.board)
            elif isinstance(ev, NextTurn):
                turn = Turn(self, AwaitingMove(ev.player, ev.board))
                self._on_next_turn(turn)
            elif isinstance(ev, GameEnded):
                self._on_game_ended(ev.winner)
        return turn
