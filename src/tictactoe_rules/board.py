"""
Board representation for Tic-Tac-Toe.
Notes:
- A board is an immutable 3x3 grid; each cell is empty (None) or holds a Mark.
- Positions are built from Row/Col enums, so an out-of-range cell cannot be named.
- Marking a cell returns a new Board; the receiver is never touched.
- String codec matches the classic 9-digit form: 0=empty, 1=X, 2=O, row-major.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np


class Mark(Enum):
    O = "O"
    X = "X"


class Row(Enum):
    ONE = 0
    TWO = 1
    THREE = 2


class Col(Enum):
    ONE = 0
    TWO = 1
    THREE = 2


@dataclass(frozen=True)
class Position:
    row: Row
    col: Col

    def __post_init__(self) -> None:
        if not isinstance(self.row, Row):
            raise TypeError(f"row must be a Row, got {type(self.row).__name__}")
        if not isinstance(self.col, Col):
            raise TypeError(f"col must be a Col, got {type(self.col).__name__}")

    @classmethod
    def from_indices(cls, row: int, col: int) -> "Position":
        """Build a position from 0-based indices; raises ValueError when out of range."""
        try:
            return cls(Row(row), Col(col))
        except ValueError:
            raise ValueError(f"Position indices must be in 0..2, got ({row}, {col})") from None

    @classmethod
    def all(cls) -> Iterator["Position"]:
        for r in Row:
            for c in Col:
                yield cls(r, c)

    @property
    def index(self) -> int:
        return self.row.value * 3 + self.col.value

    def __str__(self) -> str:
        return f"({self.row.value}, {self.col.value})"


Cell = Optional[Mark]
Rows = Tuple[Tuple[Cell, Cell, Cell], Tuple[Cell, Cell, Cell], Tuple[Cell, Cell, Cell]]

CELL_CODES = {None: 0, Mark.X: 1, Mark.O: 2}
CODE_CELLS = {v: k for k, v in CELL_CODES.items()}
CELL_GLYPHS = {None: ".", Mark.X: "X", Mark.O: "O"}


class Board:
    """Immutable 3x3 grid of optional marks."""

    __slots__ = ("_rows",)

    def __init__(self, rows: Sequence[Sequence[Cell]]):
        if len(rows) != 3 or any(len(r) != 3 for r in rows):
            raise ValueError("Board must have exactly 3 rows of 3 cells")
        for r in rows:
            for cell in r:
                if cell is not None and not isinstance(cell, Mark):
                    raise ValueError(f"Cell must be None or a Mark, got {cell!r}")
        self._rows: Rows = tuple(tuple(r) for r in rows)  # type: ignore[assignment]

    @classmethod
    def _from_trusted(cls, rows: Rows) -> "Board":
        # rows already validated tuples
        board = cls.__new__(cls)
        board._rows = rows
        return board

    @classmethod
    def empty(cls) -> "Board":
        return cls._from_trusted(((None, None, None), (None, None, None), (None, None, None)))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Board":
        """Create a board from an arbitrary 3x3 state, e.g. to resume a game."""
        return cls(rows)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Board":
        a = np.asarray(arr)
        if a.shape != (3, 3):
            raise ValueError(f"Board array must have shape (3, 3), got {a.shape}")
        rows = []
        for r in a.tolist():
            row = []
            for v in r:
                if v not in CODE_CELLS:
                    raise ValueError(f"Board array codes must be 0, 1 or 2, got {v!r}")
                row.append(CODE_CELLS[int(v)])
            rows.append(row)
        return cls(rows)

    @property
    def rows(self) -> Rows:
        return self._rows

    def __getitem__(self, position: Position) -> Cell:
        return self._rows[position.row.value][position.col.value]

    def is_marked(self, position: Position) -> bool:
        return self[position] is not None

    def mark(self, position: Position, mark: Mark) -> "Board":
        """Return a copy with `mark` at `position`. Occupancy is not checked here."""
        r, c = position.row.value, position.col.value
        row = self._rows[r]
        new_row = row[:c] + (mark,) + row[c + 1:]
        return Board._from_trusted(self._rows[:r] + (new_row,) + self._rows[r + 1:])  # type: ignore[arg-type]

    def cells(self) -> Iterator[Tuple[Position, Cell]]:
        for p in Position.all():
            yield p, self[p]

    def to_array(self) -> np.ndarray:
        return np.array([[CELL_CODES[c] for c in r] for r in self._rows], dtype=np.int8)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"Board({serialize_board(self)!r})"

    def __str__(self) -> str:
        return "\n".join("".join(CELL_GLYPHS[c] for c in r) for r in self._rows)


def empty_board() -> Board:
    return Board.empty()


def serialize_board(board: Board) -> str:
    return "".join(str(CELL_CODES[c]) for r in board.rows for c in r)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != 9 or any(ch not in "012" for ch in raw):
        raise ValueError(f"Invalid board string {board_str!r}. Must be 9 chars of 0/1/2.")
    cells = [CODE_CELLS[int(ch)] for ch in raw]
    return Board.from_rows([cells[0:3], cells[3:6], cells[6:9]])
