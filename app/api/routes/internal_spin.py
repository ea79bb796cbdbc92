from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Query, Request

from app.core.config import get_settings
from app.db.repo.spin_codes_repo import SpinCodesRepo
from app.db.repo.spin_results_repo import SpinResultsRepo
from app.economy.spin.errors import SpinCodeGenerationError, SpinStorageUnavailableError
from app.economy.spin.service import SpinLedger
from app.economy.spin.transactions import run_spin_transaction
from app.services.internal_auth import extract_client_ip, is_client_ip_allowed, is_internal_request_authenticated

from .spin_models import (
    SpinCodeListResponse,
    SpinCodeOverviewResponse,
    SpinIssuedCodeResponse,
    SpinIssueRequest,
    SpinIssueResponse,
    SpinResultListResponse,
    SpinResultResponse,
)

router = APIRouter(tags=["internal", "spin"])
logger = structlog.get_logger(__name__)


def _assert_internal_access(request: Request) -> None:
    settings = get_settings()
    client_ip = extract_client_ip(
        request,
        trusted_proxies=getattr(settings, "internal_api_trusted_proxies", ""),
    )

    if not is_client_ip_allowed(client_ip=client_ip, allowlist=settings.internal_api_allowlist):
        logger.warning("internal_spin_auth_failed", reason="ip_not_allowed", client_ip=client_ip)
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})

    if not is_internal_request_authenticated(request, expected_token=settings.internal_api_token):
        logger.warning(
            "internal_spin_auth_failed",
            reason="invalid_credentials",
            client_ip=client_ip,
        )
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})


def _storage_unavailable() -> HTTPException:
    return HTTPException(
        status_code=503,
        detail={"code": "E_SPIN_STORAGE_UNAVAILABLE"},
        headers={"Retry-After": "1"},
    )


@router.post("/internal/spin/codes", response_model=SpinIssueResponse)
async def issue_spin_codes(payload: SpinIssueRequest, request: Request) -> SpinIssueResponse:
    _assert_internal_access(request)

    try:
        issued = await run_spin_transaction(
            lambda session: SpinLedger.issue(session, count=payload.count),
            op_name="issue",
        )
    except SpinCodeGenerationError as exc:
        raise HTTPException(status_code=503, detail={"code": "E_SPIN_CODE_GENERATION_FAILED"}) from exc
    except SpinStorageUnavailableError as exc:
        raise _storage_unavailable() from exc

    return SpinIssueResponse(
        codes=[
            SpinIssuedCodeResponse(
                id=item.id,
                code=item.code,
                status=item.status,
                created_at=item.created_at,
            )
            for item in issued
        ],
        generated=len(issued),
    )


@router.get("/internal/spin/codes", response_model=SpinCodeListResponse)
async def list_spin_codes(
    request: Request,
    limit: int = Query(default=100, ge=1, le=200),
) -> SpinCodeListResponse:
    _assert_internal_access(request)

    async def _load(session):
        rows = await SpinCodesRepo.list_recent_with_results(session, limit=limit)
        counts = await SpinCodesRepo.count_by_status(session)
        return rows, counts

    try:
        rows, counts = await run_spin_transaction(_load, op_name="list_codes")
    except SpinStorageUnavailableError as exc:
        raise _storage_unavailable() from exc

    return SpinCodeListResponse(
        codes=[
            SpinCodeOverviewResponse(
                id=spin_code.id,
                code=spin_code.code,
                status=spin_code.status,
                created_at=spin_code.created_at,
                used_at=spin_code.used_at,
                outcome=None if spin_result is None else spin_result.outcome_label,
                prize_cents=None if spin_result is None else spin_result.prize_cents,
                odds=None if spin_result is None else spin_result.drawn_probability,
            )
            for spin_code, spin_result in rows
        ],
        counts_by_status=counts,
    )


@router.get("/internal/spin/results", response_model=SpinResultListResponse)
async def list_spin_results(
    request: Request,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> SpinResultListResponse:
    _assert_internal_access(request)

    async def _load(session):
        rows = await SpinResultsRepo.list_recent(session, limit=limit, offset=offset)
        total = await SpinResultsRepo.count_all(session)
        return rows, total

    try:
        rows, total = await run_spin_transaction(_load, op_name="list_results")
    except SpinStorageUnavailableError as exc:
        raise _storage_unavailable() from exc

    return SpinResultListResponse(
        results=[
            SpinResultResponse(
                id=spin_result.id,
                code=code,
                outcome=spin_result.outcome_label,
                prize_cents=spin_result.prize_cents,
                odds=spin_result.drawn_probability,
                recorded_at=spin_result.recorded_at,
            )
            for spin_result, code in rows
        ],
        total=total,
        limit=limit,
        offset=offset,
    )
