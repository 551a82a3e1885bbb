from .grid import CalendarGrid, DayCell
from .store import REMEMBERED_MONTH_KEY, InMemoryMonthStore, MonthStore

__all__ = [
    "CalendarGrid",
    "DayCell",
    "REMEMBERED_MONTH_KEY",
    "InMemoryMonthStore",
    "MonthStore",
]
