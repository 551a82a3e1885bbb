"""
Month-at-a-time calendar bounded by an inclusive ``[start, end]`` day range.

The grid only knows calendar days; all range checks go through
``sleep_tracker.dates`` so the grid and the API agree on what "in range"
means.
"""
from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional

from ..dates import (
    DayLike,
    add_months,
    is_within_range,
    last_day_of_month,
    month_key,
    month_of,
    normalize_to_local_day,
    parse_month_key,
    to_date_key,
)
from .store import REMEMBERED_MONTH_KEY, InMemoryMonthStore, MonthStore

logger = logging.getLogger("sleep_tracker.calendar")

_WEEKS = calendar.Calendar(firstweekday=calendar.SUNDAY)


@dataclass
class DayCell:
    date: str
    day: int
    selectable: bool
    is_today: bool
    is_selected: bool
    location_name: Optional[str] = None
    location_color: Optional[str] = None
    can_delete: bool = False


def _entry_label(entry: Any) -> tuple[Optional[str], Optional[str]]:
    location = getattr(entry, "location", None)
    if location is None:
        return None, None
    return location.name, getattr(location, "color", None)


class CalendarGrid:
    def __init__(
        self,
        entries: Iterable[Any] = (),
        *,
        start: DayLike | None = None,
        end: DayLike | None = None,
        selected: str | None = None,
        store: MonthStore | None = None,
        today: date | None = None,
        on_select: Callable[[str], None] | None = None,
        on_delete: Callable[[str], None] | None = None,
    ):
        self.today = today or date.today()
        this_month = date(self.today.year, self.today.month, 1)

        self.start = (
            normalize_to_local_day(start)
            if start is not None
            else datetime.combine(add_months(this_month, -2), datetime.min.time())
        )
        self.end = (
            normalize_to_local_day(end)
            if end is not None
            else datetime.combine(
                last_day_of_month(add_months(this_month, 1)), datetime.min.time()
            )
        )
        self.min_month = month_of(self.start)
        self.max_month = month_of(self.end)

        self.selected = selected
        self.store = store if store is not None else InMemoryMonthStore()
        self.on_select = on_select
        self.on_delete = on_delete
        self.entries = {entry.date: entry for entry in entries}

        # only an unbounded view reads or writes the remembered month
        self.remembers = start is None
        if self.remembers:
            initial = self._remembered_month() or self._clamp(this_month)
        else:
            initial = self.min_month
        self.current_month = initial
        self._remember()

    def _remembered_month(self) -> date | None:
        raw = self.store.get(REMEMBERED_MONTH_KEY)
        if not raw:
            return None
        try:
            month = parse_month_key(raw)
        except ValueError:
            logger.warning("remembered month ignored | value=%s | reason=malformed", raw)
            return None
        if not self.min_month <= month <= self.max_month:
            return None
        return month

    def _clamp(self, month: date) -> date:
        return min(max(month, self.min_month), self.max_month)

    # ---------- navigation ----------

    @property
    def can_prev(self) -> bool:
        return self.current_month > self.min_month

    @property
    def can_next(self) -> bool:
        return self.current_month < self.max_month

    def show(self, month: DayLike) -> date:
        """Jump to the month containing ``month``, clamped into the bound."""
        if isinstance(month, str) and len(month) == 7:
            target = parse_month_key(month)
        else:
            target = month_of(month)
        self._set_month(self._clamp(target))
        return self.current_month

    def prev(self) -> bool:
        if not self.can_prev:
            return False
        self._set_month(add_months(self.current_month, -1))
        return True

    def next(self) -> bool:
        if not self.can_next:
            return False
        self._set_month(add_months(self.current_month, 1))
        return True

    def _set_month(self, month: date) -> None:
        if month != self.current_month:
            self.current_month = month
            self._remember()

    def _remember(self) -> None:
        if self.remembers:
            self.store.set(REMEMBERED_MONTH_KEY, month_key(self.current_month))

    @property
    def label(self) -> str:
        return f"{calendar.month_name[self.current_month.month]} {self.current_month.year}"

    # ---------- days ----------

    def is_selectable(self, day: DayLike) -> bool:
        return is_within_range(day, self.start, self.end)

    def cell(self, day: date) -> DayCell:
        key = to_date_key(day)
        entry = self.entries.get(key)
        name, color = _entry_label(entry) if entry is not None else (None, None)
        is_selected = self.selected == key
        return DayCell(
            date=key,
            day=day.day,
            selectable=self.is_selectable(day),
            is_today=day == self.today,
            is_selected=is_selected,
            location_name=name,
            location_color=color,
            can_delete=entry is not None and is_selected,
        )

    def weeks(self) -> list[list[Optional[DayCell]]]:
        """Sunday-first weeks of the current month; padding days are ``None``."""
        year, month = self.current_month.year, self.current_month.month
        return [
            [self.cell(date(year, month, day)) if day else None for day in week]
            for week in _WEEKS.monthdayscalendar(year, month)
        ]

    def click(self, day: DayLike) -> str | None:
        """Select ``day`` if it is in range and emit its key."""
        if not self.is_selectable(day):
            return None
        key = to_date_key(normalize_to_local_day(day))
        self.selected = key
        if self.on_select is not None:
            self.on_select(key)
        return key

    def delete(self, day: DayLike) -> str | None:
        """
        Emit the key of the selected day's entry for deletion.
        Selection is left untouched and ``on_select`` is never called.
        """
        key = to_date_key(normalize_to_local_day(day))
        if key != self.selected or key not in self.entries:
            return None
        if self.on_delete is not None:
            self.on_delete(key)
        return key
