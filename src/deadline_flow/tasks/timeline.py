# src/deadline_flow/tasks/timeline.py

from __future__ import annotations

"""
Widget timeline scheduler.

Given a task snapshot and a reference instant, decide:
- which tasks are active right now,
- the next instant at which that set changes (the earliest active deadline),
- when the host should call us again.

The scheduler never sets timers of its own. It is a pure function of
(tasks, reference); the host owns the clock and the refresh loop.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime, timedelta

from .task_models import RefreshPolicy, Timeline, TimelineEntry, WidgetTask, as_utc

logger = logging.getLogger(__name__)

DEFAULT_HORIZON = timedelta(hours=1)
MINIMUM_GAP = timedelta(seconds=60)
LATEST_INSTANT = datetime.max.replace(tzinfo=UTC)


def is_active(task: WidgetTask, at: datetime) -> bool:
    """Not completed and due strictly after `at`. Unparseable deadlines are never active."""
    if task.is_completed:
        return False
    deadline = task.deadline_at()
    if deadline is None:
        return False
    return deadline > as_utc(at)


def active_tasks(tasks: Iterable[WidgetTask], at: datetime) -> tuple[WidgetTask, ...]:
    """Filter in snapshot order; duplicates are kept as-is."""
    return tuple(t for t in tasks if is_active(t, at))


def earliest_deadline(tasks: Iterable[WidgetTask]) -> datetime | None:
    deadlines = [d for d in (t.deadline_at() for t in tasks) if d is not None]
    return min(deadlines) if deadlines else None


def next_refresh_instant(
        reference: datetime,
        earliest: datetime | None,
        *,
        default_horizon: timedelta = DEFAULT_HORIZON,
        minimum_gap: timedelta = MINIMUM_GAP,
) -> datetime:
    """
    Refresh at the earliest expiry, or after default_horizon when nothing expires,
    but never sooner than minimum_gap after the reference.
    """
    reference = as_utc(reference)
    candidate = earliest if earliest is not None else _shift(reference, default_horizon)
    return max(candidate, _shift(reference, minimum_gap))


def _shift(moment: datetime, delta: timedelta) -> datetime:
    """moment + delta, saturating at the end of the representable range."""
    try:
        return moment + delta
    except OverflowError:
        return LATEST_INSTANT


def compute_timeline(
        tasks: Sequence[WidgetTask],
        reference: datetime,
        *,
        default_horizon: timedelta = DEFAULT_HORIZON,
        minimum_gap: timedelta = MINIMUM_GAP,
) -> Timeline:
    """
    Build the entries for `reference` plus the refresh policy.

    One entry when nothing is active. Two entries otherwise: the current view,
    and the view from the earliest deadline on. Tasks sharing that deadline
    drop out together in the second entry.
    """
    reference = as_utc(reference)

    active_now = active_tasks(tasks, reference)
    entries = [TimelineEntry(effective_instant=reference, active_tasks=active_now)]

    earliest = earliest_deadline(active_now)
    if earliest is not None:
        entries.append(
            TimelineEntry(effective_instant=earliest, active_tasks=active_tasks(tasks, earliest))
        )

    refresh_at = next_refresh_instant(
        reference,
        earliest,
        default_horizon=default_horizon,
        minimum_gap=minimum_gap,
    )

    logger.debug(
        "Timeline at %s: active=%d next_expiry=%s refresh_at=%s",
        reference.isoformat(),
        len(active_now),
        earliest.isoformat() if earliest is not None else None,
        refresh_at.isoformat(),
    )
    return Timeline(entries=tuple(entries), refresh_policy=RefreshPolicy(refresh_at))
