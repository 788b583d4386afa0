# tests/test_timeline.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from deadline_flow.tasks.task_models import parse_deadline
from deadline_flow.tasks.timeline import (
    active_tasks,
    compute_timeline,
    earliest_deadline,
    next_refresh_instant,
)

from .fakes import make_task


def test_first_entry_is_active_tasks_in_snapshot_order(now) -> None:
    tasks = [
        make_task("late", now + timedelta(hours=5)),
        make_task("done", now + timedelta(hours=1), completed=True),
        make_task("past", now - timedelta(minutes=1)),
        make_task("soon", now + timedelta(minutes=30)),
        make_task("garbage", "not-a-date"),
    ]

    timeline = compute_timeline(tasks, now)

    first = timeline.entries[0]
    assert first.effective_instant == now
    assert [t.id for t in first.active_tasks] == ["late", "soon"]


def test_empty_snapshot_refreshes_at_default_horizon(now) -> None:
    timeline = compute_timeline([], now)

    assert len(timeline.entries) == 1
    assert timeline.entries[0].active_tasks == ()
    assert timeline.refresh_policy.next_refresh_instant == now + timedelta(hours=1)


def test_all_completed_or_expired_matches_empty_case(now) -> None:
    tasks = [
        make_task("1", now + timedelta(hours=1), completed=True),
        make_task("2", now),
        make_task("3", now - timedelta(days=1)),
    ]
    timeline = compute_timeline(tasks, now)

    assert len(timeline.entries) == 1
    assert timeline.refresh_policy.next_refresh_instant == now + timedelta(hours=1)


def test_single_expiry_emits_second_entry_and_gap_floor(now) -> None:
    deadline = now + timedelta(seconds=10)
    timeline = compute_timeline([make_task("1", deadline)], now)

    assert len(timeline.entries) == 2
    assert timeline.entries[1].effective_instant == deadline
    assert timeline.entries[1].active_tasks == ()
    assert timeline.refresh_policy.next_refresh_instant == now + timedelta(seconds=60)


def test_refresh_at_earliest_expiry_beyond_gap(now) -> None:
    tasks = [
        make_task("a", now + timedelta(hours=3)),
        make_task("b", now + timedelta(minutes=20)),
    ]
    timeline = compute_timeline(tasks, now)

    assert timeline.entries[1].effective_instant == now + timedelta(minutes=20)
    assert [t.id for t in timeline.entries[1].active_tasks] == ["a"]
    assert timeline.refresh_policy.next_refresh_instant == now + timedelta(minutes=20)


def test_tied_deadlines_vanish_together(now) -> None:
    tie = now + timedelta(minutes=5)
    tasks = [
        make_task("x", tie),
        make_task("keep", now + timedelta(hours=2)),
        make_task("y", tie),
    ]
    timeline = compute_timeline(tasks, now)

    assert len(timeline.entries) == 2
    assert [t.id for t in timeline.entries[0].active_tasks] == ["x", "keep", "y"]
    assert [t.id for t in timeline.entries[1].active_tasks] == ["keep"]


def test_duplicate_ids_are_kept(now) -> None:
    tasks = [make_task("dup", now + timedelta(hours=1)), make_task("dup", now + timedelta(hours=2))]
    assert len(active_tasks(tasks, now)) == 2


def test_same_input_gives_same_output(now) -> None:
    tasks = [make_task("a", now + timedelta(minutes=3)), make_task("b", now + timedelta(days=2))]
    assert compute_timeline(tasks, now) == compute_timeline(tasks, now)


def test_custom_horizon_and_gap(now) -> None:
    timeline = compute_timeline(
        [], now, default_horizon=timedelta(seconds=30), minimum_gap=timedelta(minutes=5)
    )
    assert timeline.refresh_policy.next_refresh_instant == now + timedelta(minutes=5)


def test_naive_reference_is_treated_as_utc(now) -> None:
    naive = now.replace(tzinfo=None)
    timeline = compute_timeline([make_task("1", now + timedelta(hours=1))], naive)
    assert timeline.entries[0].effective_instant == now
    assert len(timeline.entries) == 2


def test_offset_deadlines_compare_as_instants(now) -> None:
    plus_two = timezone(timedelta(hours=2))
    # 10:30 at +02:00 is 08:30 UTC, already past at 09:00 UTC.
    past = now.astimezone(plus_two).replace(hour=10, minute=30).isoformat()
    assert active_tasks([make_task("1", past)], now) == ()


def test_earliest_deadline_and_refresh_helpers(now) -> None:
    assert earliest_deadline([]) is None
    tasks = [make_task("a", now + timedelta(hours=2)), make_task("b", now + timedelta(hours=1))]
    assert earliest_deadline(tasks) == now + timedelta(hours=1)
    assert next_refresh_instant(now, None) == now + timedelta(hours=1)
    assert next_refresh_instant(now, now + timedelta(seconds=1)) == now + timedelta(seconds=60)


def test_parse_deadline_variants() -> None:
    expected = datetime(2025, 1, 1, 10, 0, 0, 500000, tzinfo=UTC)
    assert parse_deadline("2025-01-01T10:00:00.500Z") == expected
    assert parse_deadline("2025-01-01T12:00:00.500+02:00") == expected
    assert parse_deadline("2025-01-01T10:00:00Z") == expected.replace(microsecond=0)
    assert parse_deadline("2025-01-01T10:00:00.500") is None
    assert parse_deadline("") is None
    assert parse_deadline(None) is None
    assert parse_deadline("yesterday") is None


def test_parse_deadline_rejects_non_extended_forms() -> None:
    assert parse_deadline("2025-01-01 10:00:00Z") is None
    assert parse_deadline("20250101T100000Z") is None
    assert parse_deadline("2025-01-01T10:00Z") is None
    assert parse_deadline("2025-01-01T10:00:00+0200") is None
    assert parse_deadline(" 2025-01-01T10:00:00.000Z ") == datetime(2025, 1, 1, 10, tzinfo=UTC)


def test_refresh_saturates_near_end_of_calendar() -> None:
    reference = datetime(9999, 12, 31, 23, 59, 30, tzinfo=UTC)
    timeline = compute_timeline([], reference)

    assert len(timeline.entries) == 1
    assert timeline.refresh_policy.next_refresh_instant == datetime.max.replace(tzinfo=UTC)
