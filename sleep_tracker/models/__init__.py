from .user import User
from .location import Location
from .sleep_entry import SleepEntry

__all__ = ["User", "Location", "SleepEntry"]
