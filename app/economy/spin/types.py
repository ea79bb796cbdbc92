from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class PrizeTier:
    label: str
    weight: float
    payout_cents: int


@dataclass(frozen=True, slots=True)
class DrawnOutcome:
    label: str
    payout_cents: int
    weight: float


@dataclass(slots=True)
class IssuedSpinCode:
    id: int
    code: str
    status: str
    created_at: datetime


@dataclass(slots=True)
class SpinCodeStatus:
    code: str
    status: str
    valid: bool


@dataclass(slots=True)
class SpinRedemption:
    spin_id: UUID
    code_id: int
    code: str
    outcome_label: str
    prize_cents: int
    drawn_probability: float
    recorded_at: datetime
