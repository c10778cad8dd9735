"""
Computer opponent: tiered move selection over a board.
Notes:
- Stateless: every function takes the board and an injected random source.
- The random source follows numpy.random.Generator: random() and choice(seq).
- Hard tier is a fixed priority chain, not a search:
  win now -> block -> center -> random corner -> random side -> random cell.
- Medium tier draws once per call: heuristic with probability 1 - randomness.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import Tier, tier_config
from .errors import NoLegalMove
from .game_basics import EMPTY, O, empty_cells, other_mark, serialize_board
from .tactics import completing_move

logger = logging.getLogger(__name__)

CENTER = 4
CORNERS = (0, 2, 6, 8)
SIDES = (1, 3, 5, 7)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def _pick(rng, cells: Sequence[int]) -> int:
    return int(rng.choice(list(cells)))


def random_move(board: List[int], rng) -> int:
    moves = empty_cells(board)
    if not moves:
        raise NoLegalMove(f"No empty cells on board {serialize_board(board)}")
    return _pick(rng, moves)


def explain_move(board: List[int], mark: int = O, rng=None) -> Tuple[int, str]:
    """Run the heuristic chain and report which rule produced the move."""
    if EMPTY not in board:
        raise NoLegalMove(f"No empty cells on board {serialize_board(board)}")
    if rng is None:
        rng = make_rng()

    mv = completing_move(board, mark)
    if mv is not None:
        return mv, "win"
    mv = completing_move(board, other_mark(mark))
    if mv is not None:
        return mv, "block"
    if board[CENTER] == EMPTY:
        return CENTER, "center"
    corners = [i for i in CORNERS if board[i] == EMPTY]
    if corners:
        return _pick(rng, corners), "corner"
    sides = [i for i in SIDES if board[i] == EMPTY]
    if sides:
        return _pick(rng, sides), "side"
    return random_move(board, rng), "fallback"


def heuristic_move(board: List[int], mark: int = O, rng=None) -> int:
    return explain_move(board, mark, rng)[0]


def select_move(board: List[int], tier: Tier, mark: int = O, rng=None) -> int:
    """Pick the computer's cell for ``mark`` on ``board`` at the given tier.

    Raises NoLegalMove when the board is full.
    """
    if EMPTY not in board:
        raise NoLegalMove(f"No empty cells on board {serialize_board(board)}")
    if rng is None:
        rng = make_rng()
    tier = Tier.parse(tier)
    randomness = tier_config(tier).randomness

    if randomness >= 1.0:
        use_heuristic = False
    elif randomness <= 0.0:
        use_heuristic = True
    else:
        use_heuristic = rng.random() < 1.0 - randomness

    if use_heuristic:
        mv, rule = explain_move(board, mark, rng)
    else:
        mv, rule = random_move(board, rng), "random"
    logger.debug("tier=%s mark=%d board=%s move=%d rule=%s",
                 tier.value, mark, serialize_board(board), mv, rule)
    return mv
