# src/deadline_flow/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..storage.shared_defaults import SharedDefaultsStore
from ..updates.update_bridge import UpdateBridge
from ..widget.provider import TimelineProvider


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: object

    shared_defaults: SharedDefaultsStore
    provider: TimelineProvider

    widget_family: str = "medium"

    # Attached by a host that has a vendor update SDK; the CLI alone has none.
    update_bridge: UpdateBridge | None = None
