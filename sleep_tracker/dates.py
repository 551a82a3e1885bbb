"""
Calendar-day helpers.

Every date that is stored, displayed or range-filtered travels as a
``YYYY-MM-DD`` text key. When an actual point in time is needed the key is
turned into a naive ``datetime`` at local midnight. Timezone-aware datetimes
are treated as instants and are read in UTC, since date-only ISO strings are
conventionally anchored there.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Union

DATE_KEY_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
MONTH_KEY_RE = re.compile(r"^[0-9]{4}-[0-9]{2}$")

DayLike = Union[str, date, datetime]


def _key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def is_valid_date_key(text) -> bool:
    """
    True for ``YYYY-MM-DD`` text naming a real calendar day.
    Overflowing values such as ``2024-02-30`` are rejected.
    """
    if not isinstance(text, str) or not DATE_KEY_RE.fullmatch(text):
        return False
    try:
        date.fromisoformat(text)
    except ValueError:
        return False
    return True


def parse_date_key(key: str) -> datetime:
    """Local midnight of the day named by ``key``."""
    if not is_valid_date_key(key):
        raise ValueError(f"Invalid date key: {key!r}. Use YYYY-MM-DD")
    year, month, day = (int(part) for part in key.split("-"))
    return datetime(year, month, day)


def _parse_iso(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text.strip())
    except ValueError:
        raise ValueError(f"Unparseable date value: {text!r}") from None


def to_date_key(value: DayLike) -> str:
    """
    Canonical key for a key, an ISO timestamp string, a date or a datetime.
    Datetimes keep their own calendar components; nothing is shifted
    across timezones here.
    """
    if isinstance(value, str):
        if DATE_KEY_RE.fullmatch(value):
            parse_date_key(value)
            return value
        value = _parse_iso(value)
    if isinstance(value, (date, datetime)):
        return _key(value.year, value.month, value.day)
    raise TypeError(f"Unsupported date value: {type(value).__name__}")


def normalize_to_local_day(value: DayLike) -> datetime:
    """
    Local midnight of the calendar day ``value`` is meant to name.

    Keys go straight through ``parse_date_key``. Aware datetimes are read
    in UTC, so a date-only string parsed as UTC midnight keeps its day on
    hosts west of Greenwich. Naive datetimes and dates are already local
    and keep their own day, which makes the function idempotent.
    """
    if isinstance(value, str):
        if DATE_KEY_RE.fullmatch(value):
            return parse_date_key(value)
        value = _parse_iso(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(timezone.utc)
        return datetime(value.year, value.month, value.day)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"Unsupported date value: {type(value).__name__}")


def is_within_range(day: DayLike, start: DayLike, end: DayLike) -> bool:
    """Inclusive ``start <= day <= end`` on normalized days."""
    return (
        normalize_to_local_day(start)
        <= normalize_to_local_day(day)
        <= normalize_to_local_day(end)
    )


def date_range_back(days: int, today: date | None = None) -> dict[str, str]:
    if days < 0:
        raise ValueError("days must be >= 0")
    to_day = today or date.today()
    from_day = to_day - timedelta(days=days)
    return {"from": to_date_key(from_day), "to": to_date_key(to_day)}


# ---------- months ----------


def month_of(value: DayLike) -> date:
    day = normalize_to_local_day(value)
    return date(day.year, day.month, 1)


def add_months(month: date, count: int) -> date:
    index = month.year * 12 + (month.month - 1) + count
    return date(index // 12, index % 12 + 1, 1)


def last_day_of_month(month: date) -> date:
    return add_months(month, 1) - timedelta(days=1)


def month_key(month: date) -> str:
    return f"{month.year:04d}-{month.month:02d}"


def parse_month_key(text: str) -> date:
    if not isinstance(text, str) or not MONTH_KEY_RE.fullmatch(text):
        raise ValueError(f"Invalid month key: {text!r}. Use YYYY-MM")
    year, month = (int(part) for part in text.split("-"))
    return date(year, month, 1)
