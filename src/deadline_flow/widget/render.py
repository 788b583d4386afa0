# src/deadline_flow/widget/render.py

from __future__ import annotations

from datetime import datetime

from ..tasks.remaining_time import format_remaining
from ..tasks.task_models import TimelineEntry

ROW_LIMITS = {"small": 2, "medium": 4, "large": 4}


def row_limit(family: str) -> int:
    return ROW_LIMITS.get(family, ROW_LIMITS["medium"])


def render_entry(entry: TimelineEntry, *, family: str = "medium", now: datetime | None = None) -> list[str]:
    """
    Plain-text rendering of one timeline entry, as the widget would lay it out.

    `now` is the instant the countdown is read at; defaults to the entry's own instant.
    """
    at = entry.effective_instant if now is None else now
    tasks = entry.active_tasks

    header = "DEADLINES"
    if tasks:
        header += f"  ({len(tasks)})"
    lines = [header]

    if not tasks:
        lines.append("All clear!")
        lines.append("No active tasks")
        return lines

    limit = row_limit(family)
    for task in tasks[:limit]:
        lines.append(f"{task.name}  {format_remaining(task, at)}")
    if len(tasks) > limit:
        lines.append(f"+ {len(tasks) - limit} more")
    return lines
