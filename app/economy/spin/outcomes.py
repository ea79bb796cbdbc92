from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from functools import lru_cache

from app.economy.spin.errors import SpinPrizeTableError
from app.economy.spin.types import DrawnOutcome, PrizeTier

WEIGHT_SUM_TOLERANCE = 1e-6

DEFAULT_PRIZE_TIERS: tuple[PrizeTier, ...] = (
    PrizeTier(label="$100", weight=0.05, payout_cents=10_000),
    PrizeTier(label="$75", weight=0.10, payout_cents=7_500),
    PrizeTier(label="$50", weight=0.15, payout_cents=5_000),
    PrizeTier(label="$25", weight=0.20, payout_cents=2_500),
    PrizeTier(label="$10", weight=0.20, payout_cents=1_000),
    PrizeTier(label="$5", weight=0.20, payout_cents=500),
    PrizeTier(label="Try Again", weight=0.10, payout_cents=0),
)

RandomSource = Callable[[], float]


def validate_prize_tiers(tiers: Sequence[PrizeTier]) -> tuple[PrizeTier, ...]:
    if not tiers:
        raise SpinPrizeTableError("prize table must contain at least one tier")

    seen_labels: set[str] = set()
    for tier in tiers:
        if not tier.label:
            raise SpinPrizeTableError("tier label must be non-empty")
        if tier.label in seen_labels:
            raise SpinPrizeTableError(f"duplicate tier label: {tier.label}")
        seen_labels.add(tier.label)
        if not math.isfinite(tier.weight) or tier.weight < 0:
            raise SpinPrizeTableError(f"tier {tier.label} has invalid weight {tier.weight!r}")
        if tier.payout_cents < 0:
            raise SpinPrizeTableError(f"tier {tier.label} has negative payout")

    total = math.fsum(tier.weight for tier in tiers)
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        raise SpinPrizeTableError(f"tier weights must sum to 1.0, got {total!r}")
    return tuple(tiers)


class OutcomeSelector:
    """Draws one prize tier per call according to the configured weights.

    Tiers are walked in configured order and the first one whose cumulative
    weight reaches the sampled value wins. Zero-weight tiers are never drawn.
    When accumulated float error leaves the sampled value above the running
    total, the last tier with a positive weight is returned, so ``draw`` always
    produces an outcome.

    This differs from a plain cumulative walk only at exact boundaries: a
    zero-weight tier never wins a tie and is never used as the fallback.
    """

    def __init__(
        self,
        tiers: Sequence[PrizeTier] = DEFAULT_PRIZE_TIERS,
        *,
        random_source: RandomSource | None = None,
    ) -> None:
        self._tiers = validate_prize_tiers(tiers)
        self._fallback = next(tier for tier in reversed(self._tiers) if tier.weight > 0)
        self._random_source = random_source or random.SystemRandom().random

    @property
    def tiers(self) -> tuple[PrizeTier, ...]:
        return self._tiers

    def draw(self) -> DrawnOutcome:
        sample = self._random_source()
        cumulative = 0.0
        for tier in self._tiers:
            if tier.weight <= 0:
                continue
            cumulative += tier.weight
            if cumulative >= sample:
                return _as_outcome(tier)
        return _as_outcome(self._fallback)


def _as_outcome(tier: PrizeTier) -> DrawnOutcome:
    return DrawnOutcome(label=tier.label, payout_cents=tier.payout_cents, weight=tier.weight)


@lru_cache(maxsize=1)
def get_outcome_selector() -> OutcomeSelector:
    return OutcomeSelector(DEFAULT_PRIZE_TIERS)
