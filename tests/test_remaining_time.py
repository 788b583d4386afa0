# tests/test_remaining_time.py

from __future__ import annotations

from datetime import timedelta

from deadline_flow.tasks.remaining_time import (
    EXPIRED,
    Decomposed,
    decompose,
    format_countdown,
    format_prefix,
    format_remaining,
    remaining_for,
)

from .fakes import make_task


def test_decompose_day_hour_second(now) -> None:
    # 86400 + 3600 + 1
    result = decompose(now + timedelta(seconds=90001), now)
    assert result == Decomposed(days=1, hours=1, countdown_anchor=now + timedelta(seconds=1))


def test_decompose_anchor_keeps_whole_sub_hour_remainder(now) -> None:
    # 90061s is 1d 1h 1m 1s; the anchor covers the minute as well.
    result = decompose(now + timedelta(seconds=90061), now)
    assert result == Decomposed(days=1, hours=1, countdown_anchor=now + timedelta(seconds=61))


def test_decompose_floors_long_spans_exactly(now) -> None:
    result = decompose(now + timedelta(days=500000, microseconds=999999), now)
    assert result == Decomposed(days=500000, hours=0, countdown_anchor=now)
    assert format_countdown(now + timedelta(days=500000, microseconds=999999), now).endswith(":00")


def test_decompose_truncates_fractional_seconds(now) -> None:
    result = decompose(now + timedelta(minutes=59, seconds=59, milliseconds=900), now)
    assert isinstance(result, Decomposed)
    assert (result.days, result.hours) == (0, 0)
    assert result.countdown_anchor == now + timedelta(seconds=3599)


def test_decompose_expired_at_or_before_reference(now) -> None:
    assert decompose(now, now) is EXPIRED
    assert decompose(now - timedelta(seconds=1), now) is EXPIRED


def test_remaining_for_unparseable_deadline_is_expired(now) -> None:
    assert remaining_for(make_task("1", "soon"), now) is EXPIRED


def test_prefix_shows_days_only_when_present(now) -> None:
    assert format_prefix(Decomposed(days=0, hours=3, countdown_anchor=now)) == "03h:"
    assert format_prefix(Decomposed(days=2, hours=0, countdown_anchor=now)) == "2d:00h:"


def test_countdown_text(now) -> None:
    assert format_countdown(now + timedelta(minutes=4, seconds=5), now) == "4:05"
    assert format_countdown(now - timedelta(seconds=5), now) == "0:00"


def test_format_remaining(now) -> None:
    task = make_task("1", now + timedelta(days=1, hours=2, minutes=3, seconds=4))
    assert format_remaining(task, now) == "1d:02h:3:04"
    assert format_remaining(make_task("2", now - timedelta(hours=1)), now) == "Expired"
