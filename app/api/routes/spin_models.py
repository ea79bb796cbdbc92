from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class SpinCodeRequest(BaseModel):
    # any JSON value is accepted here; validate_spin_code maps bad ones to E_SPIN_CODE_INVALID_FORMAT
    code: Any = None


class SpinVerifyResponse(BaseModel):
    valid: bool
    code: str
    status: str


class SpinPlayResponse(BaseModel):
    spin_id: UUID
    code: str
    outcome: str
    prize_cents: int = Field(ge=0)
    odds: float = Field(ge=0.0, le=1.0)
    timestamp: datetime


class SpinIssueRequest(BaseModel):
    count: int = Field(default=1, ge=1)


class SpinIssuedCodeResponse(BaseModel):
    id: int
    code: str
    status: str
    created_at: datetime


class SpinIssueResponse(BaseModel):
    codes: list[SpinIssuedCodeResponse]
    generated: int = Field(ge=0)


class SpinCodeOverviewResponse(BaseModel):
    id: int
    code: str
    status: str
    created_at: datetime
    used_at: datetime | None = None
    outcome: str | None = None
    prize_cents: int | None = None
    odds: float | None = None


class SpinCodeListResponse(BaseModel):
    codes: list[SpinCodeOverviewResponse]
    counts_by_status: dict[str, int]


class SpinResultResponse(BaseModel):
    id: UUID
    code: str
    outcome: str
    prize_cents: int = Field(ge=0)
    odds: float
    recorded_at: datetime


class SpinResultListResponse(BaseModel):
    results: list[SpinResultResponse]
    total: int = Field(ge=0)
    limit: int
    offset: int
