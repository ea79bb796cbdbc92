from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, HTTPException

from app.economy.spin.codes import validate_spin_code
from app.economy.spin.errors import (
    SpinCodeAlreadyUsedError,
    SpinCodeNotFoundError,
    SpinError,
    SpinInvalidFormatError,
    SpinStorageUnavailableError,
)
from app.economy.spin.service import SpinLedger
from app.economy.spin.transactions import run_spin_transaction
from app.economy.spin.types import SpinRedemption

from .spin_models import SpinCodeRequest, SpinPlayResponse, SpinVerifyResponse

router = APIRouter(tags=["spin"])


def _raise_http_error(exc: SpinError) -> NoReturn:
    if isinstance(exc, SpinInvalidFormatError):
        raise HTTPException(status_code=400, detail={"code": "E_SPIN_CODE_INVALID_FORMAT"}) from exc
    if isinstance(exc, SpinCodeNotFoundError):
        raise HTTPException(status_code=404, detail={"code": "E_SPIN_CODE_NOT_FOUND"}) from exc
    if isinstance(exc, SpinCodeAlreadyUsedError):
        raise HTTPException(status_code=400, detail={"code": "E_SPIN_CODE_ALREADY_USED"}) from exc
    if isinstance(exc, SpinStorageUnavailableError):
        raise HTTPException(
            status_code=503,
            detail={"code": "E_SPIN_STORAGE_UNAVAILABLE"},
            headers={"Retry-After": "1"},
        ) from exc
    raise exc


def _as_play_response(result: SpinRedemption) -> SpinPlayResponse:
    return SpinPlayResponse(
        spin_id=result.spin_id,
        code=result.code,
        outcome=result.outcome_label,
        prize_cents=result.prize_cents,
        odds=result.drawn_probability,
        timestamp=result.recorded_at,
    )


@router.post("/spin/verify", response_model=SpinVerifyResponse)
async def verify_spin_code(payload: SpinCodeRequest) -> SpinVerifyResponse:
    try:
        code = validate_spin_code(payload.code)
        status = await run_spin_transaction(
            lambda session: SpinLedger.verify(session, code=code),
            op_name="verify",
        )
    except SpinError as exc:
        _raise_http_error(exc)

    return SpinVerifyResponse(valid=status.valid, code=status.code, status=status.status)


@router.post("/spin/play", response_model=SpinPlayResponse)
async def play_spin(payload: SpinCodeRequest) -> SpinPlayResponse:
    try:
        code = validate_spin_code(payload.code)
        result = await run_spin_transaction(
            lambda session: SpinLedger.redeem(session, code=code),
            op_name="redeem",
        )
    except SpinError as exc:
        _raise_http_error(exc)

    return _as_play_response(result)
