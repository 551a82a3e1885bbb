from .location_service import (
    list_locations,
    get_location,
    create_location,
    update_location,
    delete_location,
)
from .sleep_entry_service import (
    upsert_entry,
    query_range,
    delete_entry,
    count_by_location,
)

__all__ = [
    "list_locations",
    "get_location",
    "create_location",
    "update_location",
    "delete_location",
    "upsert_entry",
    "query_range",
    "delete_entry",
    "count_by_location",
]
