from __future__ import annotations

from collections.abc import Iterator

import pytest

_LLM_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "CLAUDE_API_KEY",
    "ANTHROPIC_MODEL",
    "ANTHROPIC_BASE_URL",
    "ANTHROPIC_MAX_RETRIES",
)


@pytest.fixture(autouse=True)
def _isolate_llm_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    # Never pick up a developer's real key or .env file during tests.
    for name in _LLM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from app.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
