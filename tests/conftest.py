# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from deadline_flow.cli.bootstrap import create_initial_state
from deadline_flow.core.state import AppState


@pytest.fixture()
def now() -> datetime:
    return datetime(2025, 3, 14, 9, 0, 0, tzinfo=UTC)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the provider.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="deadline-flow-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        shared_defaults_path=tmp_path / "data" / "shared_defaults.sqlite3",
        suite_name="group.test.suite",
        tasks_key="tasks",
        default_horizon_seconds=3600,
        minimum_gap_seconds=60,
        widget_family="medium",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired through the real bootstrap.

    NOTE: We keep the real SQLite store here because reading the snapshot
    back out of shared defaults is part of what we want to test.
    """
    return create_initial_state(settings=settings)
