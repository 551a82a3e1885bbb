from .auth import RegisterRequest, TokenResponse, UserOut
from .location import LocationCreate, LocationUpdate, LocationOut
from .sleep_entry import (
    SleepEntryUpsert,
    SleepEntryOut,
    SleepEntryDeleted,
    LocationStats,
    DashboardOut,
)
from .calendar import DayCellOut, CalendarOut

__all__ = [
    "RegisterRequest",
    "TokenResponse",
    "UserOut",
    "LocationCreate",
    "LocationUpdate",
    "LocationOut",
    "SleepEntryUpsert",
    "SleepEntryOut",
    "SleepEntryDeleted",
    "LocationStats",
    "DashboardOut",
    "DayCellOut",
    "CalendarOut",
]
