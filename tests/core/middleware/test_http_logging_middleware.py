"""Unit tests for the HTTP logging middleware.

Structured log fields are asserted via `caplog` (not message strings).
"""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.middleware.http_logging import HttpLoggingMiddleware


def _make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(HttpLoggingMiddleware)

    @app.get("/lawns/{lawn_id}")
    async def lawn(lawn_id: str) -> dict[str, str]:
        return {"id": lawn_id}

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("boom")

    return app


def _http_records(caplog: pytest.LogCaptureFixture, level: int) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "app.http" and r.levelno == level]


def test_successful_request_logs_route_template_and_sets_request_id(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="app.http")

    with TestClient(_make_app()) as client:
        res = client.get("/lawns/backyard?location=12345")

    assert res.status_code == 200
    assert res.headers["x-request-id"]

    records = _http_records(caplog, logging.INFO)
    assert len(records) == 1
    record = records[0]
    assert record.__dict__["request_id"] == res.headers["x-request-id"]
    assert record.__dict__["http_method"] == "GET"
    # Route template only: no identifiers from the path, no query string.
    assert record.__dict__["request_path"] == "/lawns/{lawn_id}"
    assert record.__dict__["status_code"] == 200
    assert record.__dict__["duration_ms"] >= 0


@pytest.mark.parametrize(
    ("header", "propagated"),
    [("req_abc-123", True), ("bad id", False), ("x" * 200, False)],
)
def test_request_id_propagation(
    caplog: pytest.LogCaptureFixture, header: str, propagated: bool
) -> None:
    caplog.set_level(logging.INFO, logger="app.http")

    with TestClient(_make_app()) as client:
        res = client.get("/lawns/front", headers={"X-Request-ID": header})

    request_id = res.headers["x-request-id"]
    assert (request_id == header) is propagated
    assert _http_records(caplog, logging.INFO)[0].__dict__["request_id"] == request_id


def test_unhandled_exception_returns_500_and_logs_error(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="app.http")

    with TestClient(_make_app(), raise_server_exceptions=False) as client:
        res = client.get("/boom", headers={"X-Request-ID": "req_err_001"})

    assert res.status_code == 500

    records = _http_records(caplog, logging.ERROR)
    assert len(records) == 1
    record = records[0]
    assert record.__dict__["request_id"] == "req_err_001"
    assert record.__dict__["request_path"] == "/boom"
    assert record.__dict__["status_code"] == 500
    assert record.exc_info


class _StubRecommendationService:
    def __init__(self, *, result: str = "", error: BaseException | None = None):
        self._result = result
        self._error = error

    async def generate_recommendation(self, profile, conditions) -> str:
        if self._error is not None:
            raise self._error
        return self._result


def _recommendation_access_log(
    caplog: pytest.LogCaptureFixture, service: _StubRecommendationService
) -> tuple[int, logging.LogRecord]:
    from app.core.llm.deps import get_recommendation_service
    from app.main import create_app
    from tests.recommendations._helpers import valid_conditions, valid_profile

    app = create_app()
    app.dependency_overrides[get_recommendation_service] = lambda: service
    caplog.set_level(logging.INFO, logger="app.http")

    with TestClient(app) as client:
        res = client.post(
            "/api/recommendations",
            json={"profile": valid_profile(), "conditions": valid_conditions()},
        )

    records = [r for r in caplog.records if r.name == "app.http"]
    assert len(records) == 1
    return res.status_code, records[0]


def test_access_log_includes_recommendation_outcome(caplog: pytest.LogCaptureFixture) -> None:
    status_code, record = _recommendation_access_log(
        caplog, _StubRecommendationService(result="Mow high.")
    )

    assert status_code == 200
    assert record.levelno == logging.INFO
    assert record.__dict__["request_path"] == "/api/recommendations"
    assert record.__dict__["outcome"] == "success"
    assert "error_kind" not in record.__dict__


def test_access_log_includes_error_kind_at_warning(caplog: pytest.LogCaptureFixture) -> None:
    status_code, record = _recommendation_access_log(
        caplog, _StubRecommendationService(error=RuntimeError("boom"))
    )

    assert status_code == 500
    assert record.levelno == logging.WARNING
    assert record.__dict__["outcome"] == "UnknownError"
    assert record.__dict__["error_kind"] == "UnknownError"


def test_access_log_for_unavailable_service(caplog: pytest.LogCaptureFixture) -> None:
    status_code, record = _recommendation_access_log(caplog, _StubRecommendationService())

    assert status_code == 503
    assert record.levelno == logging.WARNING
    assert record.__dict__["outcome"] == "unavailable"
