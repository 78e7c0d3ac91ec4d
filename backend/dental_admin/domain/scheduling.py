"""
Appointment window arithmetic.

An appointment occupies the half-open window [start, start + window) on the
clinic schedule. Two appointments conflict when their windows overlap:

    a.start < b.start + window and b.start < a.start + window

Timestamps are compared as naive local times. Aware timestamps (e.g. a
trailing "Z") are converted to the application timezone first.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Iterable, Optional, Tuple

DEFAULT_WINDOW_MINUTES = 30


def parse_timestamp(value: Optional[str], tz: Optional[tzinfo] = None) -> datetime:
    """Parse an ISO-8601 timestamp or date into a naive local datetime.

    Raises:
        ValueError: if value is empty or not a recognizable timestamp
    """
    if value is None or not str(value).strip():
        raise ValueError("Timestamp is required")

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        if tz is None:
            from dental_admin.core.config import APP_TZ

            tz = APP_TZ
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed


def local_now(tz: Optional[tzinfo] = None) -> datetime:
    """Current wall-clock time in the application timezone, as a naive datetime."""
    if tz is None:
        from dental_admin.core.config import APP_TZ

        tz = APP_TZ
    return datetime.now(tz).replace(tzinfo=None)


def appointment_window(
    start: datetime, window_minutes: int = DEFAULT_WINDOW_MINUTES
) -> Tuple[datetime, datetime]:
    return start, start + timedelta(minutes=window_minutes)


def windows_overlap(
    first_start: datetime,
    second_start: datetime,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> bool:
    first_begin, first_end = appointment_window(first_start, window_minutes)
    second_begin, second_end = appointment_window(second_start, window_minutes)
    return first_begin < second_end and second_begin < first_end


def find_conflict(
    candidate_start: datetime,
    existing: Iterable,
    exclude_id: Optional[str] = None,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
):
    """Return the first appointment whose window overlaps the candidate's.

    existing is any iterable of objects with `id` and `start` attributes.
    Records with no usable start and the record named by exclude_id are
    skipped.
    """
    for appointment in existing:
        if exclude_id is not None and appointment.id == exclude_id:
            continue
        start = appointment.start
        if start is None:
            continue
        if windows_overlap(candidate_start, start, window_minutes):
            return appointment
    return None
