"""Skill tiers and their timing/randomness records.

Environment-first: values are read with os.getenv at call time.

- TTT_DUEL_TIER: default tier name (easy, medium, hard). Default: medium.
- TTT_DUEL_DELAY_SCALE: multiplier for the computer's thinking delay.
  Default 1.0; 0 disables the delay.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Tier(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, name: "str | Tier") -> "Tier":
        if isinstance(name, Tier):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown tier {name!r}; expected one of: {choices}") from None


@dataclass(frozen=True)
class TierConfig:
    delay_ms: int
    randomness: float  # probability of a uniform random move instead of the heuristic


TIER_CONFIGS: Dict[Tier, TierConfig] = {
    Tier.EASY: TierConfig(delay_ms=800, randomness=1.0),
    Tier.MEDIUM: TierConfig(delay_ms=1000, randomness=0.3),
    Tier.HARD: TierConfig(delay_ms=1200, randomness=0.0),
}


def tier_config(tier: Tier) -> TierConfig:
    return TIER_CONFIGS[Tier.parse(tier)]


def delay_scale() -> float:
    raw = os.getenv("TTT_DUEL_DELAY_SCALE")
    if raw is None or raw.strip() == "":
        return 1.0
    try:
        scale = float(raw)
    except ValueError:
        raise ValueError(f"TTT_DUEL_DELAY_SCALE must be a number, got {raw!r}") from None
    if scale < 0:
        raise ValueError(f"TTT_DUEL_DELAY_SCALE must be >= 0, got {scale}")
    return scale


def delay_seconds(tier: Tier) -> float:
    """Thinking delay for a tier, in seconds, after applying TTT_DUEL_DELAY_SCALE."""
    return tier_config(tier).delay_ms / 1000.0 * delay_scale()


def default_tier() -> Tier:
    raw = os.getenv("TTT_DUEL_TIER")
    if not raw:
        return Tier.MEDIUM
    return Tier.parse(raw)
