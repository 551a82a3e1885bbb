import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from sleep_tracker.db import get_db
from sleep_tracker.deps import get_current_user
from sleep_tracker.models import User
from sleep_tracker.schemas import LocationCreate, LocationOut, LocationUpdate
from sleep_tracker.services import (
    create_location,
    delete_location,
    get_location,
    list_locations,
    update_location,
)

logger = logging.getLogger("sleep_tracker.api.locations")

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=list[LocationOut])
def list_user_locations(
    db: Session = Depends(get_db), user: User = Depends(get_current_user)
):
    logger.info("list locations | user_id=%s", user.id)
    return list_locations(db, user.id)


@router.post("", response_model=LocationOut, status_code=201)
def create_user_location(
    req: LocationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    logger.info(
        "create location requested | user_id=%s | name=%s | color=%s",
        user.id,
        req.name,
        req.color,
    )
    return create_location(db, user.id, req.name, req.color)


@router.get("/{location_id}", response_model=LocationOut)
def get_user_location(
    location_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    logger.info(
        "get location requested | user_id=%s | location_id=%s",
        user.id,
        location_id,
    )
    return get_location(db, user.id, location_id)


@router.patch("/{location_id}", response_model=LocationOut)
def update_user_location(
    location_id: int,
    req: LocationUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    changes = req.model_dump(exclude_unset=True)
    logger.info(
        "update location requested | user_id=%s | location_id=%s | fields=%s",
        user.id,
        location_id,
        sorted(changes),
    )
    return update_location(db, user.id, location_id, changes)


@router.delete("/{location_id}", status_code=204)
def delete_user_location(
    location_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    logger.info(
        "delete location requested | user_id=%s | location_id=%s",
        user.id,
        location_id,
    )
    delete_location(db, user.id, location_id)
    return Response(status_code=204)
