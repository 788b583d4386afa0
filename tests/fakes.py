# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from deadline_flow.core.ports import InstallStateListener
from deadline_flow.tasks.task_models import WidgetTask
from deadline_flow.updates.update_models import AppUpdateType, InstallStatus, UpdateAvailability


def iso(moment: datetime) -> str:
    """Deadline text the way the main app writes it: UTC, milliseconds, 'Z'."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_task(
    task_id: str,
    deadline: datetime | str,
    *,
    name: str | None = None,
    completed: bool = False,
) -> WidgetTask:
    return WidgetTask(
        id=task_id,
        name=name or f"Task {task_id}",
        deadline=deadline if isinstance(deadline, str) else iso(deadline),
        is_completed=completed,
    )


class FakeSharedDefaults:
    """In-memory SharedDefaults; records which keys were read."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values = dict(values or {})
        self.reads: list[str] = []

    def string_for_key(self, key: str) -> str | None:
        self.reads.append(key)
        return self.values.get(key)


@dataclass(slots=True)
class FakeVendorInfo:
    """Mimics the vendor info object: every field is read through an accessor."""

    availability: int = UpdateAvailability.UPDATE_AVAILABLE
    allowed: tuple[int, ...] = (AppUpdateType.IMMEDIATE, AppUpdateType.FLEXIBLE)
    version_code: int = 42
    status: int = InstallStatus.UNKNOWN
    package: str = "com.sun2.chessclock"
    staleness_days: int | None = 3
    priority: int = 2

    def update_availability(self) -> int:
        return self.availability

    def is_update_type_allowed(self, update_type: int) -> bool:
        return update_type in self.allowed

    def available_version_code(self) -> int:
        return self.version_code

    def install_status(self) -> int:
        return self.status

    def package_name(self) -> str:
        return self.package

    def client_version_staleness_days(self) -> int | None:
        return self.staleness_days

    def update_priority(self) -> int:
        return self.priority


@dataclass(slots=True)
class FakeUpdateManager:
    """
    Fake AppUpdateManager used by bridge tests.

    Set info_error / complete_error to make the corresponding call fail.
    """

    info: FakeVendorInfo = field(default_factory=FakeVendorInfo)
    info_error: Exception | None = None
    complete_error: Exception | None = None
    start_result: bool = True
    started: list[tuple[int, int]] = field(default_factory=list)
    completed: int = 0
    listeners: list[InstallStateListener] = field(default_factory=list)

    async def get_app_update_info(self) -> Any:
        if self.info_error is not None:
            raise self.info_error
        return self.info

    def start_update_flow_for_result(self, info: Any, update_type: int, request_code: int) -> bool:
        self.started.append((update_type, request_code))
        return self.start_result

    async def complete_update(self) -> None:
        if self.complete_error is not None:
            raise self.complete_error
        self.completed += 1

    def register_listener(self, listener: InstallStateListener) -> None:
        self.listeners.append(listener)

    def unregister_listener(self, listener: InstallStateListener) -> None:
        self.listeners.remove(listener)

    def emit(self, status: int) -> None:
        for listener in list(self.listeners):
            listener(status)


@dataclass(slots=True)
class RecordingSink:
    events: list[Any] = field(default_factory=list)

    def success(self, event: Any) -> None:
        self.events.append(event)
