from datetime import datetime

from pydantic import BaseModel

from .location import LocationOut


class SleepEntryUpsert(BaseModel):
    date: str | None = None
    location_id: int | None = None


class SleepEntryOut(BaseModel):
    id: int
    date: str
    location_id: int
    location: LocationOut
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SleepEntryDeleted(BaseModel):
    success: bool = True
    date: str


class LocationStats(BaseModel):
    location: LocationOut
    nights: int


class DashboardOut(BaseModel):
    date_from: str
    date_to: str
    entries: list[SleepEntryOut]
    stats: list[LocationStats]
