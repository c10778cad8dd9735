"""ttt_duel package.

Rules engine, heuristic computer opponent, session state with a cancellable
delayed computer move, a tier-vs-tier arena, and a console CLI.

Convenience imports are exposed for common workflows.
"""

from .config import Tier, TierConfig, TIER_CONFIGS
from .errors import IllegalMove, NoLegalMove
from .game_basics import (
    EMPTY,
    O,
    WIN_LINES,
    X,
    Outcome,
    apply_move,
    empty_cells,
    find_winner,
    is_draw,
    round_outcome,
)
from .policy import select_move
from .session import MoveResult, Session

__all__ = [
    "EMPTY",
    "X",
    "O",
    "WIN_LINES",
    "Outcome",
    "apply_move",
    "find_winner",
    "is_draw",
    "empty_cells",
    "round_outcome",
    "select_move",
    "Tier",
    "TierConfig",
    "TIER_CONFIGS",
    "IllegalMove",
    "NoLegalMove",
    "Session",
    "MoveResult",
]
