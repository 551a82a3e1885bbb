from pydantic import BaseModel


class DayCellOut(BaseModel):
    date: str
    day: int
    selectable: bool
    is_today: bool
    is_selected: bool
    location_name: str | None = None
    location_color: str | None = None
    can_delete: bool = False


class CalendarOut(BaseModel):
    month: str
    label: str
    start: str
    end: str
    can_prev: bool
    can_next: bool
    weeks: list[list[DayCellOut | None]]
