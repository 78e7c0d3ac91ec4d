"""Unit tests for appointment window arithmetic."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from dental_admin.domain.scheduling import (
    appointment_window,
    find_conflict,
    local_now,
    parse_timestamp,
    windows_overlap,
)


@dataclass
class Slot:
    id: str
    start: Optional[datetime]


@pytest.mark.unit
@pytest.mark.appointment
class TestParseTimestamp:
    def test_local_now_is_naive_wall_clock_of_timezone(self):
        tz = timezone(timedelta(hours=5, minutes=30))

        now = local_now(tz)

        assert now.tzinfo is None
        assert abs(now - datetime.now(tz).replace(tzinfo=None)) < timedelta(seconds=5)

    def test_parses_local_timestamp(self):
        assert parse_timestamp("2025-06-03T09:15") == datetime(2025, 6, 3, 9, 15)

    def test_parses_date_only(self):
        assert parse_timestamp("2025-06-03") == datetime(2025, 6, 3)

    def test_converts_utc_suffix_to_given_timezone(self):
        parsed = parse_timestamp("2025-06-03T09:00:00Z", tz=timezone.utc)
        assert parsed == datetime(2025, 6, 3, 9, 0)
        assert parsed.tzinfo is None

    @pytest.mark.parametrize("value", [None, "", "   ", "next tuesday", "2025-13-40"])
    def test_rejects_unusable_values(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


@pytest.mark.unit
@pytest.mark.appointment
class TestWindows:
    def test_window_is_start_plus_minutes(self):
        start = datetime(2025, 6, 3, 9, 0)
        assert appointment_window(start, 30) == (start, datetime(2025, 6, 3, 9, 30))

    def test_back_to_back_windows_do_not_overlap(self):
        assert not windows_overlap(
            datetime(2025, 6, 3, 9, 0), datetime(2025, 6, 3, 9, 30), 30
        )

    def test_partial_overlap_in_either_direction(self):
        a = datetime(2025, 6, 3, 9, 0)
        b = datetime(2025, 6, 3, 9, 29)
        assert windows_overlap(a, b, 30)
        assert windows_overlap(b, a, 30)

    def test_identical_starts_overlap(self):
        start = datetime(2025, 6, 3, 9, 0)
        assert windows_overlap(start, start, 30)


@pytest.mark.unit
@pytest.mark.appointment
class TestFindConflict:
    def test_returns_first_overlapping_slot(self):
        existing = [
            Slot("a", datetime(2025, 6, 3, 8, 0)),
            Slot("b", datetime(2025, 6, 3, 9, 0)),
            Slot("c", datetime(2025, 6, 3, 9, 15)),
        ]
        clash = find_conflict(datetime(2025, 6, 3, 9, 20), existing, window_minutes=30)
        assert clash.id == "b"

    def test_excluded_id_never_conflicts(self):
        existing = [Slot("a", datetime(2025, 6, 3, 9, 0))]
        assert (
            find_conflict(
                datetime(2025, 6, 3, 9, 10), existing, exclude_id="a", window_minutes=30
            )
            is None
        )

    def test_slots_without_start_are_skipped(self):
        existing = [Slot("broken", None)]
        assert find_conflict(datetime(2025, 6, 3, 9, 0), existing) is None
