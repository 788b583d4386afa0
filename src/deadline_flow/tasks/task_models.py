# src/deadline_flow/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


# Extended RFC 3339 form only: "YYYY-MM-DDTHH:MM:SS[.f]" plus "Z" or "+HH:MM".
_DEADLINE_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?(?:Z|[+-]\d{2}:\d{2})"
)


def parse_deadline(raw: Any) -> datetime | None:
    """
    Parse an ISO-8601 deadline into an aware UTC datetime.

    Only the "T"-separated extended form is accepted, with "Z" or a numeric
    offset; fractional seconds are optional. Returns None for anything that
    is not such an instant: non-strings, basic or space-separated forms,
    garbage, or a wall-clock time without a timezone designator.
    """
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not _DEADLINE_RE.fullmatch(text):
        return None
    try:
        return datetime.fromisoformat(text).astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def as_utc(moment: datetime) -> datetime:
    """Normalize a reference instant; naive values are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


@dataclass(slots=True, frozen=True)
class WidgetTask:
    """One record of the snapshot the main app writes to shared storage."""

    id: str
    name: str
    deadline: str
    is_completed: bool

    def deadline_at(self) -> datetime | None:
        return parse_deadline(self.deadline)

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "deadline": self.deadline,
            "isCompleted": self.is_completed,
        }


@dataclass(slots=True, frozen=True)
class TimelineEntry:
    """What the widget shows from effective_instant until the next entry takes over."""

    effective_instant: datetime
    active_tasks: tuple[WidgetTask, ...]


@dataclass(slots=True, frozen=True)
class RefreshPolicy:
    next_refresh_instant: datetime


@dataclass(slots=True, frozen=True)
class Timeline:
    entries: tuple[TimelineEntry, ...]
    refresh_policy: RefreshPolicy
