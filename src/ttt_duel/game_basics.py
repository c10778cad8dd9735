"""
Game basics: board representation, serialization, rules, winner/draw checks, validity.
Notes:
- State is a list of 9 cells: 0=empty, 1=X, 2=O. X always starts.
- Cells are indexed 0-8 in row-major order.
- Moves never mutate the board passed in; apply_move returns a new list.
- Terminal state is derived from the board each time (round_outcome), never stored.
"""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import IllegalMove

EMPTY = 0
X = 1
O = 2

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

IN_PROGRESS = "in_progress"
WIN = "win"
DRAW = "draw"

_SYMBOLS = {EMPTY: ".", X: "X", O: "O"}
_EMPTY_CHARS = set(".-_0 ")


@dataclass(frozen=True)
class Outcome:
    status: str
    winner: Optional[int] = None
    line: Optional[Tuple[int, int, int]] = None

    @property
    def finished(self) -> bool:
        return self.status != IN_PROGRESS


def new_board() -> List[int]:
    return [EMPTY] * 9


def other_mark(mark: int) -> int:
    if mark == X:
        return O
    if mark == O:
        return X
    raise ValueError(f"Not a player mark: {mark!r}")


def mark_symbol(mark: int) -> str:
    return _SYMBOLS[mark]


def parse_mark(text: str) -> int:
    t = text.strip().upper()
    if t in ("X", "1"):
        return X
    if t in ("O", "2"):
        return O
    raise ValueError(f"Unknown mark: {text!r}")


def serialize_board(board: List[int]) -> str:
    return ''.join(str(cell) for cell in board)


def parse_board(text: str) -> List[int]:
    """Parse a 9-cell board from '0/1/2' digits or 'X/O' letters.

    '.', '-', '_', '0' and spaces inside the 9 characters mean empty.
    Separators such as '|', ',' and '/' are ignored.
    """
    raw = [c for c in text.strip() if c not in "|,/\n\t"]
    if len(raw) != 9:
        raise ValueError(f"Board must have 9 cells, got {len(raw)}: {text!r}")
    board: List[int] = []
    for c in raw:
        u = c.upper()
        if c in _EMPTY_CHARS:
            board.append(EMPTY)
        elif u in ("X", "1"):
            board.append(X)
        elif u in ("O", "2"):
            board.append(O)
        else:
            raise ValueError(f"Invalid cell {c!r} in board {text!r}")
    return board


def format_board(board: List[int]) -> str:
    rows = []
    for r in range(3):
        rows.append(' '.join(mark_symbol(board[3 * r + c]) for c in range(3)))
    return '\n'.join(rows)


def apply_move(board: List[int], index: int, mark: int) -> List[int]:
    if mark not in (X, O):
        raise IllegalMove(f"Not a player mark: {mark!r}")
    if isinstance(index, bool):
        raise IllegalMove(f"Cell index must be an integer: {index!r}")
    try:
        idx = operator.index(index)
    except TypeError:
        raise IllegalMove(f"Cell index must be an integer: {index!r}") from None
    if not 0 <= idx <= 8:
        raise IllegalMove(f"Cell index out of range [0, 8]: {index!r}")
    index = idx
    if board[index] != EMPTY:
        raise IllegalMove(
            f"Cell {index} is already occupied by {mark_symbol(board[index])}"
        )
    b = list(board)
    b[index] = mark
    return b


def find_winner(board: List[int]) -> Optional[Tuple[int, Tuple[int, int, int]]]:
    for line in WIN_LINES:
        a, b, c = line
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v, line
    return None


def get_winner(board: List[int]) -> int:
    found = find_winner(board)
    return found[0] if found else 0


def winning_line(board: List[int]) -> Optional[Tuple[int, int, int]]:
    found = find_winner(board)
    return found[1] if found else None


def empty_cells(board: List[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def is_draw(board: List[int]) -> bool:
    return EMPTY not in board and find_winner(board) is None


def round_outcome(board: List[int]) -> Outcome:
    found = find_winner(board)
    if found is not None:
        return Outcome(WIN, found[0], found[1])
    if EMPTY not in board:
        return Outcome(DRAW)
    return Outcome(IN_PROGRESS)


def get_piece_counts(board: List[int]) -> Tuple[int, int]:
    return board.count(X), board.count(O)


def is_valid_state(board: List[int]) -> bool:
    if len(board) != 9 or any(v not in (EMPTY, X, O) for v in board):
        return False
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == X and x_count != o_count + 1:
        return False
    if w == O and x_count != o_count:
        return False

    # no double winners
    def count_wins(p: int) -> int:
        return sum(1 for line in WIN_LINES if all(board[i] == p for i in line))
    if count_wins(X) > 0 and count_wins(O) > 0:
        return False
    return True


def current_player(board: List[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O
