from __future__ import annotations

from fastapi.testclient import TestClient

from copa_litoral import main as app_main
from copa_litoral.core.config import get_settings


def _settings(*, enable_openapi_docs: bool):
    return get_settings().model_copy(update={"enable_openapi_docs": enable_openapi_docs})


def test_openapi_docs_enabled(monkeypatch) -> None:
    monkeypatch.setattr(app_main, "get_settings", lambda: _settings(enable_openapi_docs=True))
    client = TestClient(app_main.create_app())

    docs_response = client.get("/docs")
    redoc_response = client.get("/redoc")
    openapi_response = client.get("/openapi.json")

    assert docs_response.status_code == 200
    assert redoc_response.status_code == 200
    assert openapi_response.status_code == 200
    assert "/api/v1/player/partidos/{partido_id}/report-result" in openapi_response.json()["paths"]


def test_openapi_docs_disabled(monkeypatch) -> None:
    monkeypatch.setattr(app_main, "get_settings", lambda: _settings(enable_openapi_docs=False))
    client = TestClient(app_main.create_app())

    docs_response = client.get("/docs")
    redoc_response = client.get("/redoc")
    openapi_response = client.get("/openapi.json")

    assert docs_response.status_code == 404
    assert redoc_response.status_code == 404
    assert openapi_response.status_code == 404
    assert openapi_response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
