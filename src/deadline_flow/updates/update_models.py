# src/deadline_flow/updates/update_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any

REQUEST_CODE_UPDATE = 1234

# Host activity result codes.
RESULT_OK = -1
RESULT_CANCELED = 0


class UpdateAvailability(IntEnum):
    UNKNOWN = 0
    UPDATE_NOT_AVAILABLE = 1
    UPDATE_AVAILABLE = 2
    DEVELOPER_TRIGGERED_UPDATE_IN_PROGRESS = 3


class AppUpdateType(IntEnum):
    FLEXIBLE = 0
    IMMEDIATE = 1


class InstallStatus(IntEnum):
    UNKNOWN = 0
    PENDING = 1
    DOWNLOADING = 2
    INSTALLING = 3
    INSTALLED = 4
    FAILED = 5
    CANCELED = 6
    DOWNLOADED = 11


class UpdateErrorKind(StrEnum):
    CHECK_FAILED = "CHECK_FAILED"
    UPDATE_NOT_ALLOWED = "UPDATE_NOT_ALLOWED"
    USER_DENIED_UPDATE = "USER_DENIED_UPDATE"
    IN_APP_UPDATE_FAILED = "IN_APP_UPDATE_FAILED"
    COMPLETE_FAILED = "COMPLETE_FAILED"


class UpdateError(Exception):
    """Bridge-level failure, reported to the app layer as (kind, message)."""

    def __init__(self, kind: UpdateErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or ""
        super().__init__(f"{kind.value}: {self.message}" if self.message else kind.value)


class MethodNotImplemented(Exception):
    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not implemented: {method}")


@dataclass(slots=True, frozen=True)
class AppUpdateInfo:
    update_availability: int
    immediate_allowed: bool
    flexible_allowed: bool
    available_version_code: int
    install_status: int
    package_name: str
    client_version_staleness_days: int | None
    update_priority: int

    @classmethod
    def from_vendor(cls, info: Any) -> "AppUpdateInfo":
        return cls(
            update_availability=int(info.update_availability()),
            immediate_allowed=bool(info.is_update_type_allowed(AppUpdateType.IMMEDIATE)),
            flexible_allowed=bool(info.is_update_type_allowed(AppUpdateType.FLEXIBLE)),
            available_version_code=int(info.available_version_code()),
            install_status=int(info.install_status()),
            package_name=str(info.package_name()),
            client_version_staleness_days=info.client_version_staleness_days(),
            update_priority=int(info.update_priority()),
        )

    def is_available(self) -> bool:
        return self.update_availability == UpdateAvailability.UPDATE_AVAILABLE

    def allows(self, update_type: AppUpdateType) -> bool:
        if update_type == AppUpdateType.IMMEDIATE:
            return self.immediate_allowed
        return self.flexible_allowed

    def to_wire(self) -> dict[str, Any]:
        return {
            "updateAvailability": self.update_availability,
            "immediateAllowed": self.immediate_allowed,
            "flexibleAllowed": self.flexible_allowed,
            "availableVersionCode": self.available_version_code,
            "installStatus": self.install_status,
            "packageName": self.package_name,
            "clientVersionStalenessDays": self.client_version_staleness_days,
            "updatePriority": self.update_priority,
        }
