# src/deadline_flow/tasks/remaining_time.py

from __future__ import annotations

"""
Remaining-time decomposition for task rows.

Days and hours are a static prefix, recomputed only when the timeline is.
Minutes and seconds are a live countdown the host renders against
`countdown_anchor`, so nothing here has to run every second.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .task_models import WidgetTask, as_utc

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
ONE_SECOND = timedelta(seconds=1)

EXPIRED_LABEL = "Expired"


@dataclass(slots=True, frozen=True)
class Decomposed:
    days: int
    hours: int
    countdown_anchor: datetime


@dataclass(slots=True, frozen=True)
class Expired:
    pass


EXPIRED = Expired()


def decompose(deadline: datetime, reference: datetime) -> Decomposed | Expired:
    deadline = as_utc(deadline)
    reference = as_utc(reference)
    if deadline <= reference:
        return EXPIRED

    # Whole seconds, floored exactly; no float round-trip.
    total_seconds = (deadline - reference) // ONE_SECOND
    days = total_seconds // SECONDS_PER_DAY
    hours = (total_seconds % SECONDS_PER_DAY) // SECONDS_PER_HOUR
    seconds_in_hour = total_seconds % SECONDS_PER_HOUR

    return Decomposed(
        days=days,
        hours=hours,
        countdown_anchor=reference + timedelta(seconds=seconds_in_hour),
    )


def remaining_for(task: WidgetTask, reference: datetime) -> Decomposed | Expired:
    """Unparseable deadlines render as expired."""
    deadline = task.deadline_at()
    if deadline is None:
        return EXPIRED
    return decompose(deadline, reference)


def format_prefix(decomposed: Decomposed) -> str:
    """'1d:05h:' or '05h:'. Hours are always shown, days only when non-zero."""
    days = f"{decomposed.days}d:" if decomposed.days > 0 else ""
    return f"{days}{decomposed.hours:02d}h:"


def format_countdown(anchor: datetime, now: datetime) -> str:
    """Text of the host's live timer at `now`: 'M:SS', clamped at '0:00'."""
    left = max(0, (as_utc(anchor) - as_utc(now)) // ONE_SECOND)
    minutes, seconds = divmod(left, 60)
    return f"{minutes}:{seconds:02d}"


def format_remaining(task: WidgetTask, reference: datetime) -> str:
    result = remaining_for(task, reference)
    if isinstance(result, Expired):
        return EXPIRED_LABEL
    return format_prefix(result) + format_countdown(result.countdown_anchor, reference)
