"""
Rules over a Board: winning lines, winner detection, mark counts, side to move.
Notes:
- There are 8 winning lines: 3 rows, 3 columns, 2 diagonals.
- O moves first; when resuming, the side with fewer marks moves (O on ties).
- Draws are left to the embedding application; `is_full` is provided for that.
"""
from typing import Dict, Optional, Tuple

from .board import Board, Mark, Position

Line = Tuple[Position, Position, Position]


def _line(*indices: int) -> Line:
    a, b, c = (Position.from_indices(i // 3, i % 3) for i in indices)
    return a, b, c


WINNING_LINES: Tuple[Line, ...] = (
    _line(0, 1, 2), _line(3, 4, 5), _line(6, 7, 8),
    _line(0, 3, 6), _line(1, 4, 7), _line(2, 5, 8),
    _line(0, 4, 8), _line(2, 4, 6),
)


def winning_line(board: Board) -> Optional[Line]:
    for line in WINNING_LINES:
        a, b, c = line
        v = board[a]
        if v is not None and v == board[b] and v == board[c]:
            return line
    return None


def get_winner(board: Board) -> Optional[Mark]:
    line = winning_line(board)
    if line is None:
        return None
    return board[line[0]]


def count_marks(board: Board) -> Dict[Mark, int]:
    counts = {Mark.O: 0, Mark.X: 0}
    for _, cell in board.cells():
        if cell is not None:
            counts[cell] += 1
    return counts


def player_to_move(board: Board) -> Mark:
    counts = count_marks(board)
    return Mark.O if counts[Mark.O] <= counts[Mark.X] else Mark.X


def is_full(board: Board) -> bool:
    return all(cell is not None for _, cell in board.cells())
