import logging
from typing import Any

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..dates import is_valid_date_key
from ..exceptions import InvalidInput, NotFound
from ..models import Location, SleepEntry
from .location_service import get_location

logger = logging.getLogger("sleep_tracker.services.sleep_entries")

# dialects with INSERT ... ON CONFLICT DO UPDATE
_ON_CONFLICT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _require_date_key(value: Any, label: str = "Date") -> str:
    if not value or not isinstance(value, str):
        raise InvalidInput(f"{label} is required")
    if not is_valid_date_key(value):
        raise InvalidInput(f"Invalid {label.lower()} format. Use YYYY-MM-DD")
    return value


def _entry_for_day(db: Session, owner_id: int, date_key: str) -> SleepEntry | None:
    stmt = (
        select(SleepEntry)
        .options(joinedload(SleepEntry.location))
        .where(SleepEntry.owner_id == owner_id, SleepEntry.date == date_key)
        .execution_options(populate_existing=True)
    )
    return db.scalars(stmt).one_or_none()


def _write_entry(db: Session, owner_id: int, date_key: str, location_id: int) -> None:
    """
    Create-or-replace the (owner, day) row without a separate existence read.
    """
    dialect = db.get_bind().dialect.name
    insert = _ON_CONFLICT_INSERTS.get(dialect)

    if insert is not None:
        stmt = insert(SleepEntry).values(
            owner_id=owner_id, date=date_key, location_id=location_id
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["owner_id", "date"],
            set_={"location_id": stmt.excluded.location_id, "updated_at": func.now()},
        )
        db.execute(stmt)
        return

    # no native upsert: unique-constrained insert, update on violation
    try:
        with db.begin_nested():
            db.add(
                SleepEntry(owner_id=owner_id, date=date_key, location_id=location_id)
            )
    except IntegrityError:
        db.execute(
            update(SleepEntry)
            .where(SleepEntry.owner_id == owner_id, SleepEntry.date == date_key)
            .values(location_id=location_id, updated_at=func.now())
        )


def upsert_entry(
    db: Session, owner_id: int, date_key: Any, location_id: Any
) -> SleepEntry:
    date_key = _require_date_key(date_key)
    if location_id is None:
        raise InvalidInput("Location ID is required")

    location = get_location(db, owner_id, location_id)

    _write_entry(db, owner_id, date_key, location.id)
    db.commit()

    entry = _entry_for_day(db, owner_id, date_key)
    logger.info(
        "sleep entry saved | owner_id=%s | date=%s | location_id=%s",
        owner_id,
        date_key,
        location.id,
    )
    return entry


def _require_range(from_key: Any, to_key: Any) -> tuple[str, str]:
    if not from_key or not to_key:
        raise InvalidInput("from and to query parameters are required")
    if not isinstance(from_key, str) or not is_valid_date_key(from_key):
        raise InvalidInput("Invalid 'from' date format. Use YYYY-MM-DD")
    if not isinstance(to_key, str) or not is_valid_date_key(to_key):
        raise InvalidInput("Invalid 'to' date format. Use YYYY-MM-DD")
    return from_key, to_key


def query_range(
    db: Session, owner_id: int, from_key: Any, to_key: Any
) -> list[SleepEntry]:
    """
    Entries of ``owner_id`` with ``from_key <= date <= to_key``, newest first.
    Zero-padded keys sort chronologically, so plain text comparison is used.
    """
    from_key, to_key = _require_range(from_key, to_key)

    stmt = (
        select(SleepEntry)
        .options(joinedload(SleepEntry.location))
        .where(
            SleepEntry.owner_id == owner_id,
            SleepEntry.date >= from_key,
            SleepEntry.date <= to_key,
        )
        .order_by(SleepEntry.date.desc())
    )
    return list(db.scalars(stmt))


def delete_entry(db: Session, owner_id: int, date_key: Any) -> str:
    date_key = _require_date_key(date_key)

    result = db.execute(
        delete(SleepEntry).where(
            SleepEntry.owner_id == owner_id, SleepEntry.date == date_key
        )
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("Entry not found")

    db.commit()
    logger.info("sleep entry deleted | owner_id=%s | date=%s", owner_id, date_key)
    return date_key


def count_by_location(
    db: Session, owner_id: int, from_key: Any, to_key: Any
) -> list[tuple[Location, int]]:
    """Nights per owned location within the range; unused locations count 0."""
    from_key, to_key = _require_range(from_key, to_key)

    stmt = (
        select(Location, func.count(SleepEntry.id))
        .outerjoin(
            SleepEntry,
            and_(
                SleepEntry.location_id == Location.id,
                SleepEntry.owner_id == owner_id,
                SleepEntry.date >= from_key,
                SleepEntry.date <= to_key,
            ),
        )
        .where(Location.owner_id == owner_id)
        .group_by(Location.id)
        .order_by(Location.created_at, Location.id)
    )
    return [(location, count) for location, count in db.execute(stmt).all()]
