from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app import main as app_main


def _settings(*, enable_openapi_docs: bool) -> SimpleNamespace:
    return SimpleNamespace(
        app_env="test",
        log_level="INFO",
        enable_openapi_docs=enable_openapi_docs,
    )


def test_openapi_schema_lists_spin_routes(monkeypatch) -> None:
    monkeypatch.setattr(app_main, "get_settings", lambda: _settings(enable_openapi_docs=True))
    client = TestClient(app_main.create_app())

    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200

    openapi_response = client.get("/openapi.json")
    assert openapi_response.status_code == 200
    paths = openapi_response.json()["paths"]
    assert {"/spin/verify", "/spin/play", "/internal/spin/codes", "/internal/spin/results"} <= set(paths)


@pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json"])
def test_openapi_docs_disabled(monkeypatch, path: str) -> None:
    monkeypatch.setattr(app_main, "get_settings", lambda: _settings(enable_openapi_docs=False))
    client = TestClient(app_main.create_app())

    assert client.get(path).status_code == 404
