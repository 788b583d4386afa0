# src/deadline_flow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the shared-defaults store and the timeline provider into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import AppUpdateManager
from ..core.state import AppState
from ..storage.shared_defaults import SharedDefaultsStore
from ..updates.update_bridge import UpdateBridge
from ..widget.provider import TimelineProvider

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.shared_defaults_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, update_manager: AppUpdateManager | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    The update bridge is only wired when the host hands in a vendor update manager.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    shared = SharedDefaultsStore(settings.shared_defaults_path, settings.suite_name)
    provider = TimelineProvider.from_settings(shared, settings)

    logger.debug(
        "State ready suite=%s key=%s horizon=%ss gap=%ss",
        settings.suite_name,
        settings.tasks_key,
        settings.default_horizon_seconds,
        settings.minimum_gap_seconds,
    )
    return AppState(
        settings=settings,
        shared_defaults=shared,
        provider=provider,
        widget_family=getattr(settings, "widget_family", "medium"),
        update_bridge=UpdateBridge(update_manager) if update_manager is not None else None,
    )
