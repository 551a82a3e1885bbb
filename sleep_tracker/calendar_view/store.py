from typing import Protocol

REMEMBERED_MONTH_KEY = "sleep_tracker.calendar.month"


class MonthStore(Protocol):
    """Key-value side store for client-local calendar state."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryMonthStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
