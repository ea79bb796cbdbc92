from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from app.api.routes import spin as spin_routes
from app.economy.spin.errors import (
    SpinCodeAlreadyUsedError,
    SpinCodeNotFoundError,
    SpinStorageUnavailableError,
)
from app.economy.spin.types import SpinCodeStatus, SpinRedemption
from app.main import app

SPIN_ID = UUID("6f1c2f0e-6a55-4d0e-9a1f-3f1d5c1e2b70")
RECORDED_AT = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _patch_transaction(monkeypatch, *, result=None, error: Exception | None = None) -> list[str]:
    calls: list[str] = []

    async def _fake_run(operation, *, op_name: str = "spin", timeout_seconds=None):
        calls.append(op_name)
        if error is not None:
            raise error
        return result

    monkeypatch.setattr(spin_routes, "run_spin_transaction", _fake_run)
    return calls


def test_play_returns_recorded_outcome(monkeypatch) -> None:
    _patch_transaction(
        monkeypatch,
        result=SpinRedemption(
            spin_id=SPIN_ID,
            code_id=7,
            code="12345",
            outcome_label="$25",
            prize_cents=2500,
            drawn_probability=0.2,
            recorded_at=RECORDED_AT,
        ),
    )

    response = TestClient(app).post("/spin/play", json={"code": "12345"})

    assert response.status_code == 200
    assert response.json() == {
        "spin_id": str(SPIN_ID),
        "code": "12345",
        "outcome": "$25",
        "prize_cents": 2500,
        "odds": 0.2,
        "timestamp": "2026-10-19T12:00:00Z",
    }


def test_verify_returns_valid_status(monkeypatch) -> None:
    _patch_transaction(
        monkeypatch,
        result=SpinCodeStatus(code="12345", status="UNUSED", valid=True),
    )

    response = TestClient(app).post("/spin/verify", json={"code": "12345"})

    assert response.status_code == 200
    assert response.json() == {"valid": True, "code": "12345", "status": "UNUSED"}


@pytest.mark.parametrize("path", ["/spin/play", "/spin/verify"])
@pytest.mark.parametrize("raw_code", ["1234", "12a45", "123456", "1" * 33, 12345, None])
def test_malformed_code_is_rejected_without_transaction(monkeypatch, path: str, raw_code: str) -> None:
    calls = _patch_transaction(monkeypatch)

    response = TestClient(app).post(path, json={"code": raw_code})

    assert response.status_code == 400
    assert response.json() == {"detail": {"code": "E_SPIN_CODE_INVALID_FORMAT"}}
    assert calls == []


@pytest.mark.parametrize(
    ("error", "status_code", "error_code"),
    [
        (SpinCodeNotFoundError(), 404, "E_SPIN_CODE_NOT_FOUND"),
        (SpinCodeAlreadyUsedError(), 400, "E_SPIN_CODE_ALREADY_USED"),
        (SpinStorageUnavailableError("timeout"), 503, "E_SPIN_STORAGE_UNAVAILABLE"),
    ],
)
@pytest.mark.parametrize("path", ["/spin/play", "/spin/verify"])
def test_ledger_failures_map_to_http_errors(
    monkeypatch,
    path: str,
    error: Exception,
    status_code: int,
    error_code: str,
) -> None:
    _patch_transaction(monkeypatch, error=error)

    response = TestClient(app).post(path, json={"code": "12345"})

    assert response.status_code == status_code
    assert response.json() == {"detail": {"code": error_code}}


@pytest.mark.parametrize("path", ["/spin/play", "/spin/verify"])
def test_missing_code_field_is_invalid_format(monkeypatch, path: str) -> None:
    calls = _patch_transaction(monkeypatch)

    response = TestClient(app).post(path, json={})

    assert response.status_code == 400
    assert response.json() == {"detail": {"code": "E_SPIN_CODE_INVALID_FORMAT"}}
    assert calls == []
