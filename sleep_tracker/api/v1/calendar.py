import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sleep_tracker.calendar_view import CalendarGrid
from sleep_tracker.dates import is_valid_date_key, month_key, to_date_key
from sleep_tracker.db import get_db
from sleep_tracker.deps import get_current_user
from sleep_tracker.exceptions import InvalidInput
from sleep_tracker.models import User
from sleep_tracker.schemas import CalendarOut, DayCellOut
from sleep_tracker.services import query_range

logger = logging.getLogger("sleep_tracker.api.calendar")

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _optional_day(value: str | None, name: str) -> str | None:
    if value is None:
        return None
    if not is_valid_date_key(value):
        raise InvalidInput(f"Invalid '{name}' date format. Use YYYY-MM-DD")
    return value


@router.get("", response_model=CalendarOut)
def month_view(
    start: str | None = None,
    end: str | None = None,
    month: str | None = Query(default=None, description="YYYY-MM to display"),
    selected: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    One month of the calendar. ``month`` is the client's remembered month;
    it is clamped into ``[start, end]``.
    """
    start = _optional_day(start, "start")
    end = _optional_day(end, "end")
    selected = _optional_day(selected, "selected")

    grid = CalendarGrid(start=start, end=end, selected=selected)
    if month is not None:
        try:
            grid.show(month)
        except ValueError:
            raise InvalidInput("Invalid 'month' format. Use YYYY-MM")

    start_key, end_key = to_date_key(grid.start), to_date_key(grid.end)
    grid.entries = {
        entry.date: entry for entry in query_range(db, user.id, start_key, end_key)
    }
    logger.info(
        "calendar requested | user_id=%s | month=%s | entries=%s",
        user.id,
        grid.current_month,
        len(grid.entries),
    )
    return CalendarOut(
        month=month_key(grid.current_month),
        label=grid.label,
        start=start_key,
        end=end_key,
        can_prev=grid.can_prev,
        can_next=grid.can_next,
        weeks=[
            [DayCellOut(**asdict(cell)) if cell else None for cell in week]
            for week in grid.weeks()
        ],
    )
