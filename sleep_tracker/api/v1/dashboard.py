import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sleep_tracker.config import settings
from sleep_tracker.dates import date_range_back
from sleep_tracker.db import get_db
from sleep_tracker.deps import get_current_user
from sleep_tracker.models import User
from sleep_tracker.schemas import DashboardOut, LocationOut, LocationStats, SleepEntryOut
from sleep_tracker.services import count_by_location, query_range

logger = logging.getLogger("sleep_tracker.api.dashboard")

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
def dashboard(
    days: int | None = Query(default=None, ge=0, le=3660),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    span = settings.dashboard_default_days if days is None else days
    window = date_range_back(span)
    logger.info(
        "dashboard requested | user_id=%s | from=%s | to=%s",
        user.id,
        window["from"],
        window["to"],
    )
    entries = query_range(db, user.id, window["from"], window["to"])
    stats = [
        LocationStats(location=LocationOut.model_validate(location), nights=nights)
        for location, nights in count_by_location(
            db, user.id, window["from"], window["to"]
        )
    ]
    return DashboardOut(
        date_from=window["from"],
        date_to=window["to"],
        entries=[SleepEntryOut.model_validate(entry) for entry in entries],
        stats=stats,
    )
