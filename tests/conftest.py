"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Store Configuration:
    Tests use an in-memory SQLite store (sqlite:// with StaticPool) so that
    every test starts from an empty store and nothing touches data/.
"""

from collections.abc import Generator
from datetime import datetime
from typing import Any

import pytest

from scribe.backend.core.config_schema import EditorSchema
from scribe.editor.events import ChangeNotifier
from scribe.editor.store import SqlStore


# =============================================================================
# Clock
# =============================================================================


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: Any) -> None:
        self.now = start

    def __call__(self) -> Any:
        return self.now

    def advance(self, delta: Any) -> None:
        self.now = self.now + delta


@pytest.fixture
def clock() -> FakeClock:
    """Wall clock (naive UTC datetimes) frozen at 2024-03-20 12:00."""
    return FakeClock(datetime(2024, 3, 20, 12, 0, 0))


@pytest.fixture
def ticker() -> FakeClock:
    """Monotonic clock (float seconds)."""
    return FakeClock(1000.0)


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store() -> Generator[SqlStore, None, None]:
    """Empty in-memory store, disposed after the test."""
    sql_store = SqlStore.in_memory()
    yield sql_store
    sql_store.close()


@pytest.fixture
def notifier() -> ChangeNotifier:
    return ChangeNotifier()


@pytest.fixture
def recorded_events(notifier: ChangeNotifier) -> list[tuple[str, dict[str, Any]]]:
    """Every event emitted on the notifier fixture, in order."""
    events: list[tuple[str, dict[str, Any]]] = []
    notifier.subscribe(lambda event, payload: events.append((event, payload)))
    return events


# =============================================================================
# Test Settings Fixtures
# =============================================================================


@pytest.fixture
def editor_settings() -> EditorSchema:
    """Editor settings matching config/settings/editor.yaml defaults."""
    return EditorSchema.model_validate(
        {
            "store": {"path": "data/test-editor.db"},
            "trash": {"retention_days": 3, "purge_interval_seconds": 3600},
            "session": {"save_ack_seconds": 2},
            "export": {
                "directory": "exports",
                "summary_timeout_seconds": 20,
                "fallback_summary": "Error generating summary",
            },
            "summary_service": {
                "base_url": "http://summary.test",
                "path": "/api/v1/generate-summary",
            },
        }
    )


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
