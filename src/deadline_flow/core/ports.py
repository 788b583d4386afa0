# src/deadline_flow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the widget provider and the update bridge.

Both depend on Protocols instead of concrete host APIs.
This keeps storage and the vendor update SDK swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Any, Protocol

InstallStateListener = Callable[[int], None]
# Receives the vendor's raw install-status code.


class SharedDefaults(Protocol):
    """Read side of the app-group storage the main app writes its task snapshot to."""

    def string_for_key(self, key: str) -> str | None: ...


class AppUpdateManager(Protocol):
    """
    Vendor in-app-update SDK, as seen by the bridge.

    The info object is vendor-defined; the bridge only reads it through
    the accessors used in updates.update_models.AppUpdateInfo.from_vendor.
    """

    async def get_app_update_info(self) -> Any: ...

    def start_update_flow_for_result(self, info: Any, update_type: int, request_code: int) -> bool: ...

    async def complete_update(self) -> None: ...

    def register_listener(self, listener: InstallStateListener) -> None: ...

    def unregister_listener(self, listener: InstallStateListener) -> None: ...


class EventSink(Protocol):
    """App-layer end of the install-status event stream."""

    def success(self, event: Any) -> None: ...
