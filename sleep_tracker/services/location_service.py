import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import Conflict, InvalidInput, NotFound
from ..models import Location, SleepEntry

logger = logging.getLogger("sleep_tracker.services.locations")


def _clean_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput("Name is required")
    return name.strip()


def _clean_color(color: Any) -> str | None:
    if color is None:
        return None
    if not isinstance(color, str):
        raise InvalidInput("Color must be a string")
    return color.strip() or None


def list_locations(db: Session, owner_id: int) -> list[Location]:
    stmt = (
        select(Location)
        .where(Location.owner_id == owner_id)
        .order_by(Location.created_at, Location.id)
    )
    return list(db.scalars(stmt))


def get_location(db: Session, owner_id: int, location_id: int) -> Location:
    location = db.scalars(
        select(Location).where(
            Location.id == location_id, Location.owner_id == owner_id
        )
    ).one_or_none()
    if not location:
        # same answer for "absent" and "someone else's"
        raise NotFound("Location not found")
    return location


def create_location(
    db: Session, owner_id: int, name: Any, color: Any = None
) -> Location:
    location = Location(
        owner_id=owner_id, name=_clean_name(name), color=_clean_color(color)
    )
    db.add(location)
    db.commit()
    db.refresh(location)
    logger.info(
        "location created | owner_id=%s | location_id=%s | name=%s",
        owner_id,
        location.id,
        location.name,
    )
    return location


def update_location(
    db: Session, owner_id: int, location_id: int, changes: dict[str, Any]
) -> Location:
    """
    Partial update. Only keys present in ``changes`` are applied; an explicit
    ``color: None`` clears the color, an explicit ``name`` must be non-empty.
    """
    location = get_location(db, owner_id, location_id)

    if "name" in changes:
        location.name = _clean_name(changes["name"])
    if "color" in changes:
        location.color = _clean_color(changes["color"])

    db.add(location)
    db.commit()
    db.refresh(location)
    logger.info(
        "location updated | owner_id=%s | location_id=%s | fields=%s",
        owner_id,
        location_id,
        sorted(changes),
    )
    return location


def delete_location(db: Session, owner_id: int, location_id: int) -> None:
    location = get_location(db, owner_id, location_id)

    in_use = db.scalars(
        select(SleepEntry.id).where(SleepEntry.location_id == location.id).limit(1)
    ).first()
    if in_use is not None:
        _blocked(owner_id, location_id)

    db.delete(location)
    try:
        db.commit()
    except IntegrityError:
        # an entry referencing the location was written after the check
        db.rollback()
        _blocked(owner_id, location_id)
    logger.info(
        "location deleted | owner_id=%s | location_id=%s", owner_id, location_id
    )


def _blocked(owner_id: int, location_id: int) -> None:
    logger.warning(
        "location delete blocked | owner_id=%s | location_id=%s | reason=has_entries",
        owner_id,
        location_id,
    )
    raise Conflict("Cannot delete location that has sleep entries")
