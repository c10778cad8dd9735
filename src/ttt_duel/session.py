"""
Session state owned by the controller: board, turn, scores, and the active round.

The rules engine and the policy stay pure; this object is the only place that
holds mutable state. The computer's move is deferred through a scheduler and
checked against the round it was requested for before it touches the board,
so a move scheduled in an abandoned or restarted round is discarded.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .config import Tier, delay_seconds
from .errors import IllegalMove
from .game_basics import (
    O,
    WIN,
    X,
    Outcome,
    apply_move,
    mark_symbol,
    new_board,
    other_mark,
    round_outcome,
    serialize_board,
)
from .policy import make_rng, select_move
from .scheduler import ScheduledTask, ThreadScheduler

logger = logging.getLogger(__name__)

PVC = "pvc"
PVP = "pvp"


@dataclass(frozen=True)
class MoveResult:
    mark: int
    index: int
    board: Tuple[int, ...]
    outcome: Outcome


class Session:
    def __init__(
        self,
        mode: str = PVC,
        tier: Tier = Tier.MEDIUM,
        computer_mark: int = O,
        rng=None,
        scheduler=None,
    ):
        if mode not in (PVC, PVP):
            raise ValueError(f"Unknown mode {mode!r}; expected {PVC!r} or {PVP!r}")
        if computer_mark not in (X, O):
            raise ValueError(f"Not a player mark: {computer_mark!r}")
        self.mode = mode
        self.tier = Tier.parse(tier)
        self.computer_mark = computer_mark
        self.rng = rng if rng is not None else make_rng()
        self.scheduler = scheduler if scheduler is not None else ThreadScheduler()

        self.board: List[int] = new_board()
        self.to_move = X
        self.scores: Dict[int, int] = {X: 0, O: 0}
        self.draws = 0
        self.round_id = 0
        self.active = False
        self.history: List[Tuple[int, int]] = []

        self._lock = threading.RLock()
        self._pending_round: Optional[int] = None
        self._task: Optional[ScheduledTask] = None

    # -- round lifecycle -------------------------------------------------

    def start_round(self) -> None:
        with self._lock:
            self._cancel_locked()
            self.board = new_board()
            self.to_move = X
            self.history = []
            self.round_id += 1
            self.active = True
            logger.info("round %d started (mode=%s tier=%s)",
                        self.round_id, self.mode, self.tier.value)

    def abandon_round(self) -> None:
        with self._lock:
            self._cancel_locked()
            if self.active:
                logger.info("round %d abandoned", self.round_id)
            self.active = False

    def reset_scores(self) -> None:
        with self._lock:
            self.scores = {X: 0, O: 0}
            self.draws = 0
            logger.info("scores reset")

    @property
    def outcome(self) -> Outcome:
        return round_outcome(self.board)

    @property
    def pending(self) -> bool:
        return self._pending_round is not None

    def computer_turn(self) -> bool:
        return self.mode == PVC and self.active and self.to_move == self.computer_mark

    # -- moves -----------------------------------------------------------

    def play(self, index: int) -> MoveResult:
        """Apply a human move for the side to move."""
        with self._lock:
            if not self.active:
                raise IllegalMove("No active round")
            if self.pending:
                raise IllegalMove("Computer move is pending")
            if self.computer_turn():
                raise IllegalMove(f"It is the computer's turn ({mark_symbol(self.computer_mark)})")
            return self._apply_locked(index)

    def request_computer_move(
        self, on_done: Optional[Callable[[MoveResult], None]] = None
    ) -> ScheduledTask:
        """Schedule the computer's move after the tier's thinking delay."""
        with self._lock:
            if not self.computer_turn():
                raise IllegalMove("Not the computer's turn")
            if self.pending:
                raise IllegalMove("Computer move is already pending")
            delay = delay_seconds(self.tier)
            token = self.round_id
            self._pending_round = token

            def _fire() -> None:
                with self._lock:
                    if (self._pending_round != token or self.round_id != token
                            or not self.computer_turn()):
                        logger.debug("discarding stale computer move for round %d", token)
                        return
                    self._pending_round = None
                    mv = select_move(self.board, self.tier, self.computer_mark, self.rng)
                    result = self._apply_locked(mv)
                if on_done is not None:
                    on_done(result)

            try:
                self._task = self.scheduler.schedule(delay, _fire)
            except Exception:
                self._pending_round = None
                raise
            return self._task

    def cancel_pending(self) -> bool:
        with self._lock:
            return self._cancel_locked()

    def _cancel_locked(self) -> bool:
        had_pending = self._pending_round is not None
        self._pending_round = None
        if self._task is not None:
            self._task.cancel()
            self._task = None
        if had_pending:
            logger.debug("cancelled pending computer move for round %d", self.round_id)
        return had_pending

    def _apply_locked(self, index: int) -> MoveResult:
        mark = self.to_move
        self.board = apply_move(self.board, index, mark)
        self.history.append((mark, index))
        outcome = round_outcome(self.board)
        logger.debug("round %d: %s -> %d board=%s",
                     self.round_id, mark_symbol(mark), index, serialize_board(self.board))
        if outcome.finished:
            self.active = False
            if outcome.status == WIN:
                self.scores[outcome.winner] += 1
                logger.info("round %d won by %s on line %s",
                            self.round_id, mark_symbol(outcome.winner), outcome.line)
            else:
                self.draws += 1
                logger.info("round %d drawn", self.round_id)
        else:
            self.to_move = other_mark(mark)
        return MoveResult(mark, index, tuple(self.board), outcome)
