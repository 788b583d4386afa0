# src/deadline_flow/tasks/snapshot_decoder.py

from __future__ import annotations

"""
Snapshot decoder.

Turns the JSON blob persisted by the main app into WidgetTask records.

Failure policy is all-or-nothing: a single malformed record empties the whole
snapshot. The reason is returned in DecodeResult.error and logged, never raised,
so the widget always has something to render.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from .task_models import WidgetTask

logger = logging.getLogger(__name__)

EMPTY_SNAPSHOT = "[]"

# wire name -> (attribute name, expected JSON type)
_FIELDS: dict[str, tuple[str, type]] = {
    "id": ("id", str),
    "name": ("name", str),
    "deadline": ("deadline", str),
    "isCompleted": ("is_completed", bool),
}


class SnapshotDecodeError(ValueError):
    """Internal signal; decode_snapshot() converts it into DecodeResult.error."""


@dataclass(slots=True, frozen=True)
class DecodeResult:
    tasks: tuple[WidgetTask, ...]
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _parse_record(item: Any, index: int) -> WidgetTask:
    if not isinstance(item, dict):
        raise SnapshotDecodeError(f"Record {index}: expected an object, got {type(item).__name__}")

    values: dict[str, Any] = {}
    for wire_name, (attr, expected) in _FIELDS.items():
        if wire_name not in item:
            raise SnapshotDecodeError(f"Record {index}: missing required field '{wire_name}'")
        value = item[wire_name]
        # bool is a subclass of int, but not the other way round; str is unambiguous.
        if not isinstance(value, expected):
            raise SnapshotDecodeError(
                f"Record {index}: field '{wire_name}' must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        values[attr] = value

    return WidgetTask(**values)


def _parse_payload(blob: str | bytes) -> list[WidgetTask]:
    if isinstance(blob, bytes):
        try:
            blob = blob.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SnapshotDecodeError("Snapshot is not valid UTF-8") from exc

    try:
        payload = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise SnapshotDecodeError(f"Malformed JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise SnapshotDecodeError("Snapshot nesting too deep") from exc

    if not isinstance(payload, list):
        raise SnapshotDecodeError("Snapshot must be a JSON array of task objects")

    return [_parse_record(item, i) for i, item in enumerate(payload, start=1)]


def decode_snapshot(blob: str | bytes | None) -> DecodeResult:
    """Decode a snapshot blob; None is treated as an empty array."""
    if blob is None:
        blob = EMPTY_SNAPSHOT

    try:
        tasks = _parse_payload(blob)
    except SnapshotDecodeError as exc:
        logger.warning("Task snapshot rejected, rendering empty: %s", exc)
        return DecodeResult(tasks=(), error=str(exc))

    logger.debug("Decoded task snapshot: %d records", len(tasks))
    return DecodeResult(tasks=tuple(tasks))


def decode_tasks(blob: str | bytes | None) -> list[WidgetTask]:
    return list(decode_snapshot(blob).tasks)
