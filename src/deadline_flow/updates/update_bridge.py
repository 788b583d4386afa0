# src/deadline_flow/updates/update_bridge.py

from __future__ import annotations

"""
In-app update bridge.

A thin adapter between the app layer and the vendor update SDK:
- four request/response methods (check, immediate, flexible, complete),
- one install-status event stream with at most one live subscription.

The bridge does not decide when to update; it only relays requests and maps
vendor outcomes onto UpdateError kinds. The native flow's outcome arrives
later through on_activity_result(), which resolves the awaiting call.
"""

import asyncio
import logging
from typing import Any

from ..core.ports import AppUpdateManager, EventSink
from .update_models import (
    REQUEST_CODE_UPDATE,
    RESULT_CANCELED,
    RESULT_OK,
    AppUpdateInfo,
    AppUpdateType,
    MethodNotImplemented,
    UpdateError,
    UpdateErrorKind,
)

logger = logging.getLogger(__name__)


class InstallStateSubscription:
    """
    Owned handle for the install-status stream.

    Created by UpdateBridge.listen(); cancel() unregisters the vendor listener
    and may be called any number of times.
    """

    def __init__(self, manager: AppUpdateManager, sink: EventSink) -> None:
        self._manager = manager
        self._sink: EventSink | None = sink
        self._manager.register_listener(self._on_state)

    @property
    def active(self) -> bool:
        return self._sink is not None

    def _on_state(self, install_status: int) -> None:
        sink = self._sink
        if sink is None:
            return
        sink.success(int(install_status))

    def cancel(self) -> None:
        if self._sink is None:
            return
        self._sink = None
        self._manager.unregister_listener(self._on_state)


class UpdateBridge:
    METHODS = (
        "checkForUpdate",
        "performImmediateUpdate",
        "startFlexibleUpdate",
        "completeFlexibleUpdate",
    )

    def __init__(self, manager: AppUpdateManager, *, request_code: int = REQUEST_CODE_UPDATE) -> None:
        self._manager = manager
        self._request_code = request_code
        self._pending: asyncio.Future[None] | None = None
        self._subscription: InstallStateSubscription | None = None

    # ---- request/response ----

    async def handle(self, method: str, arguments: Any = None) -> Any:
        """Dispatch a method-channel style call by name."""
        if method == "checkForUpdate":
            return await self.check_for_update()
        if method == "performImmediateUpdate":
            return await self.perform_immediate_update()
        if method == "startFlexibleUpdate":
            return await self.start_flexible_update()
        if method == "completeFlexibleUpdate":
            return await self.complete_flexible_update()
        raise MethodNotImplemented(method)

    async def _fetch_info(self) -> AppUpdateInfo:
        try:
            raw = await self._manager.get_app_update_info()
            return AppUpdateInfo.from_vendor(raw)
        except Exception as exc:
            logger.warning("Update info request failed: %s", exc)
            raise UpdateError(UpdateErrorKind.CHECK_FAILED, str(exc)) from exc

    async def check_for_update(self) -> dict[str, Any]:
        info = await self._fetch_info()
        logger.info(
            "Update check: availability=%s version=%s priority=%s",
            info.update_availability,
            info.available_version_code,
            info.update_priority,
        )
        return info.to_wire()

    async def perform_immediate_update(self) -> None:
        await self._run_update_flow(AppUpdateType.IMMEDIATE, "Immediate")

    async def start_flexible_update(self) -> None:
        await self._run_update_flow(AppUpdateType.FLEXIBLE, "Flexible")

    async def _run_update_flow(self, update_type: AppUpdateType, label: str) -> None:
        info = await self._fetch_info()
        if not (info.is_available() and info.allows(update_type)):
            raise UpdateError(
                UpdateErrorKind.UPDATE_NOT_ALLOWED,
                f"{label} update not allowed or unavailable",
            )

        if self._pending is not None and not self._pending.done():
            self._pending.set_exception(
                UpdateError(UpdateErrorKind.IN_APP_UPDATE_FAILED, "Superseded by a newer update request")
            )

        pending: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._pending = pending

        try:
            started = self._manager.start_update_flow_for_result(info, int(update_type), self._request_code)
        except Exception as exc:
            self._pending = None
            raise UpdateError(UpdateErrorKind.IN_APP_UPDATE_FAILED, str(exc)) from exc
        if not started:
            self._pending = None
            raise UpdateError(UpdateErrorKind.IN_APP_UPDATE_FAILED, "Update flow could not be started")

        logger.info("%s update flow started", label)
        await pending

    def on_activity_result(self, request_code: int, result_code: int) -> bool:
        """Resolve the awaiting update call. Returns False for unrelated requests."""
        if request_code != self._request_code:
            return False

        pending, self._pending = self._pending, None
        if pending is None or pending.done():
            logger.debug("Activity result %s with no pending update call", result_code)
            return True

        if result_code == RESULT_OK:
            pending.set_result(None)
        elif result_code == RESULT_CANCELED:
            pending.set_exception(UpdateError(UpdateErrorKind.USER_DENIED_UPDATE, "User denied update"))
        else:
            pending.set_exception(
                UpdateError(
                    UpdateErrorKind.IN_APP_UPDATE_FAILED,
                    f"Update failed with result code: {result_code}",
                )
            )
        logger.info("Update flow finished result_code=%s", result_code)
        return True

    async def complete_flexible_update(self) -> None:
        try:
            await self._manager.complete_update()
        except Exception as exc:
            logger.warning("Completing flexible update failed: %s", exc)
            raise UpdateError(UpdateErrorKind.COMPLETE_FAILED, str(exc)) from exc

    # ---- event stream ----

    def listen(self, sink: EventSink) -> InstallStateSubscription:
        """Start forwarding install-status codes to `sink`, replacing any previous listener."""
        if self._subscription is not None:
            self._subscription.cancel()
        self._subscription = InstallStateSubscription(self._manager, sink)
        return self._subscription

    def cancel_listening(self) -> None:
        if self._subscription is None:
            return
        self._subscription.cancel()
        self._subscription = None
