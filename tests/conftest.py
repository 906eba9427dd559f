"""Shared test fixtures for githubcron."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from githubcron import ServerlessCron

SECRET = "test-secret"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep GITHUBCRON_* variables from the host out of settings resolution."""
    for key in list(os.environ):
        if key.startswith("GITHUBCRON_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def secret() -> str:
    return SECRET


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-Cron-Secret": SECRET}


@pytest.fixture
def cron() -> ServerlessCron:
    return ServerlessCron(secret=SECRET, base_url="https://example.com")
