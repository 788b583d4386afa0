# src/deadline_flow/widget/provider.py

from __future__ import annotations

"""
Widget timeline provider.

The host asks for three things:
- placeholder: an empty entry while real data loads,
- snapshot: a single entry for previews / the gallery,
- timeline: entries plus a refresh policy.

Each call reads the snapshot from shared defaults afresh; nothing is cached
between calls.
"""

import logging
from datetime import UTC, datetime, timedelta

from ..core.ports import SharedDefaults
from ..tasks.snapshot_decoder import EMPTY_SNAPSHOT, decode_tasks
from ..tasks.task_models import Timeline, TimelineEntry, WidgetTask, as_utc
from ..tasks.timeline import DEFAULT_HORIZON, MINIMUM_GAP, active_tasks, compute_timeline

logger = logging.getLogger(__name__)


class TimelineProvider:
    def __init__(
            self,
            defaults: SharedDefaults | None,
            *,
            tasks_key: str = "tasks",
            default_horizon: timedelta = DEFAULT_HORIZON,
            minimum_gap: timedelta = MINIMUM_GAP,
    ) -> None:
        self._defaults = defaults
        self._tasks_key = tasks_key
        self._default_horizon = default_horizon
        self._minimum_gap = minimum_gap

    @classmethod
    def from_settings(cls, defaults: SharedDefaults | None, settings) -> "TimelineProvider":
        return cls(
            defaults,
            tasks_key=settings.tasks_key,
            default_horizon=timedelta(seconds=settings.default_horizon_seconds),
            minimum_gap=timedelta(seconds=settings.minimum_gap_seconds),
        )

    @staticmethod
    def _now(now: datetime | None) -> datetime:
        return datetime.now(UTC) if now is None else as_utc(now)

    def read_blob(self) -> str:
        """Raw snapshot text; a missing suite or key reads as an empty array."""
        if self._defaults is None:
            return EMPTY_SNAPSHOT
        blob = self._defaults.string_for_key(self._tasks_key)
        return EMPTY_SNAPSHOT if blob is None else blob

    def load_tasks(self) -> list[WidgetTask]:
        return decode_tasks(self.read_blob())

    def placeholder(self, now: datetime | None = None) -> TimelineEntry:
        return TimelineEntry(effective_instant=self._now(now), active_tasks=())

    def snapshot(self, now: datetime | None = None) -> TimelineEntry:
        now = self._now(now)
        return TimelineEntry(effective_instant=now, active_tasks=active_tasks(self.load_tasks(), now))

    def timeline(self, now: datetime | None = None) -> Timeline:
        now = self._now(now)
        timeline = compute_timeline(
            self.load_tasks(),
            now,
            default_horizon=self._default_horizon,
            minimum_gap=self._minimum_gap,
        )
        logger.info(
            "Timeline built entries=%d refresh_at=%s",
            len(timeline.entries),
            timeline.refresh_policy.next_refresh_instant.isoformat(),
        )
        return timeline
