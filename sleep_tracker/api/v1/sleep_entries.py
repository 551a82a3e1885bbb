import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sleep_tracker.db import get_db
from sleep_tracker.deps import get_current_user
from sleep_tracker.models import User
from sleep_tracker.schemas import (
    LocationOut,
    LocationStats,
    SleepEntryDeleted,
    SleepEntryOut,
    SleepEntryUpsert,
)
from sleep_tracker.services import (
    count_by_location,
    delete_entry,
    query_range,
    upsert_entry,
)

logger = logging.getLogger("sleep_tracker.api.sleep_entries")

router = APIRouter(prefix="/sleep-entries", tags=["sleep_entries"])


@router.get("", response_model=list[SleepEntryOut])
def list_entries(
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    logger.info(
        "list sleep entries requested | user_id=%s | from=%s | to=%s",
        user.id,
        date_from,
        date_to,
    )
    entries = query_range(db, user.id, date_from, date_to)
    logger.info(
        "list sleep entries success | user_id=%s | count=%s", user.id, len(entries)
    )
    return entries


@router.post("", response_model=SleepEntryOut, status_code=201)
def save_entry(
    req: SleepEntryUpsert,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    logger.info(
        "save sleep entry requested | user_id=%s | date=%s | location_id=%s",
        user.id,
        req.date,
        req.location_id,
    )
    return upsert_entry(db, user.id, req.date, req.location_id)


@router.delete("", response_model=SleepEntryDeleted)
def remove_entry(
    day: str | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    logger.info(
        "delete sleep entry requested | user_id=%s | date=%s", user.id, day
    )
    return SleepEntryDeleted(date=delete_entry(db, user.id, day))


@router.get("/stats", response_model=list[LocationStats])
def entry_stats(
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    logger.info(
        "sleep stats requested | user_id=%s | from=%s | to=%s",
        user.id,
        date_from,
        date_to,
    )
    return [
        LocationStats(location=LocationOut.model_validate(location), nights=nights)
        for location, nights in count_by_location(db, user.id, date_from, date_to)
    ]
