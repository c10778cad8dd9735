"""
Line scans shared by the policy: the move that completes a line (win now / block).
Notes:
- completing_move scans WIN_LINES in their fixed order and takes the first empty
  index of the first line holding two of the given mark and one empty cell.
"""
from typing import List, Optional

from .game_basics import EMPTY, WIN_LINES


def completing_move(board: List[int], mark: int) -> Optional[int]:
    for line in WIN_LINES:
        cells = [board[i] for i in line]
        if cells.count(mark) == 2 and cells.count(EMPTY) == 1:
            for i in line:
                if board[i] == EMPTY:
                    return i
    return None
