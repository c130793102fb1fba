"""Pytest configuration for test isolation.

The database client keeps one engine per process, and the import pipeline
reads a few ``BACHATBOX_*`` environment variables. Each test starts with no
engine bound and with those variables cleared, so a developer's local
``.env`` or an earlier test cannot leak into later ones.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime

import pytest
from db.client import dispose_engine

_ENV_VARS = (
    "BACHATBOX_DATABASE_URL",
    "DATABASE_URL",
    "BACHATBOX_IMPORT_BATCH_SIZE",
    "BACHATBOX_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    dispose_engine()
    yield
    dispose_engine()


@pytest.fixture
def fixed_now() -> datetime:
    """Import instant used as the date fallback in tests."""

    return datetime(2024, 7, 1, 9, 30, tzinfo=UTC)
