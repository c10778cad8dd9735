"""
Computer-vs-computer series between two tiers.

Each game is played from the empty board with X moving first; the seed makes a
series reproducible.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Tuple

import numpy as np

from .config import Tier
from .game_basics import O, X, Outcome, apply_move, new_board, other_mark, round_outcome
from .policy import make_rng, select_move
from .scheduler import ImmediateScheduler
from .session import PVC, Session


@dataclass
class SeriesResult:
    x_tier: str
    o_tier: str
    games: int
    x_wins: int
    o_wins: int
    draws: int
    mean_length: float

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def play_game(x_tier: Tier, o_tier: Tier, rng) -> Tuple[Outcome, List[int]]:
    board = new_board()
    moves: List[int] = []
    tiers = {X: Tier.parse(x_tier), O: Tier.parse(o_tier)}
    mark = X
    outcome = round_outcome(board)
    while not outcome.finished:
        mv = select_move(board, tiers[mark], mark, rng)
        board = apply_move(board, mv, mark)
        moves.append(mv)
        outcome = round_outcome(board)
        mark = other_mark(mark)
    return outcome, moves


def run_series(x_tier: Tier, o_tier: Tier, games: int = 100, seed: int = 42) -> SeriesResult:
    """Play ``games`` rounds; X is driven by the x_tier policy, O by a session computer."""
    if games < 1:
        raise ValueError(f"games must be >= 1, got {games}")
    x_tier = Tier.parse(x_tier)
    o_tier = Tier.parse(o_tier)
    rng = make_rng(seed)
    session = Session(mode=PVC, tier=o_tier, computer_mark=O, rng=rng,
                      scheduler=ImmediateScheduler())
    lengths: List[int] = []
    for _ in range(games):
        session.start_round()
        while session.active:
            if session.computer_turn():
                session.request_computer_move()
            else:
                session.play(select_move(session.board, x_tier, X, rng))
        lengths.append(len(session.history))
    return SeriesResult(
        x_tier=x_tier.value,
        o_tier=o_tier.value,
        games=games,
        x_wins=session.scores[X],
        o_wins=session.scores[O],
        draws=session.draws,
        mean_length=float(np.mean(lengths)),
    )
