import pytest
from sqlalchemy import event

from sleep_tracker.exceptions import Conflict, InvalidInput, NotFound
from sleep_tracker.models import SleepEntry
from sleep_tracker.services import (
    create_location,
    delete_entry,
    delete_location,
    get_location,
    list_locations,
    update_location,
    upsert_entry,
)


def test_create_trims_name_and_blank_color(db, owner):
    location = create_location(db, owner.id, "  Parents  ", "  ")

    assert location.name == "Parents"
    assert location.color is None
    assert location.owner_id == owner.id


@pytest.mark.parametrize("name", ["", "   ", None, 12])
def test_create_requires_name(db, owner, name):
    with pytest.raises(InvalidInput, match="Name is required"):
        create_location(db, owner.id, name)


def test_list_only_own_locations_in_creation_order(db, owner, stranger):
    create_location(db, owner.id, "Parents")
    create_location(db, stranger.id, "Hotel")
    create_location(db, owner.id, "In-laws")

    assert [loc.name for loc in list_locations(db, owner.id)] == ["Parents", "In-laws"]


def test_get_other_users_location_is_not_found(db, owner, stranger):
    theirs = create_location(db, stranger.id, "Hotel")

    with pytest.raises(NotFound, match="Location not found"):
        get_location(db, owner.id, theirs.id)


def test_update_is_partial(db, owner):
    location = create_location(db, owner.id, "Parents", "#3b82f6")

    renamed = update_location(db, owner.id, location.id, {"name": " Mum & Dad "})
    assert renamed.name == "Mum & Dad"
    assert renamed.color == "#3b82f6"

    cleared = update_location(db, owner.id, location.id, {"color": None})
    assert cleared.name == "Mum & Dad"
    assert cleared.color is None


def test_update_rejects_blank_name(db, owner):
    location = create_location(db, owner.id, "Parents")

    with pytest.raises(InvalidInput):
        update_location(db, owner.id, location.id, {"name": "  "})
    assert get_location(db, owner.id, location.id).name == "Parents"


def test_update_other_users_location_is_not_found(db, owner, stranger):
    theirs = create_location(db, stranger.id, "Hotel")

    with pytest.raises(NotFound):
        update_location(db, owner.id, theirs.id, {"name": "Mine now"})


def test_delete_location_with_entries_conflicts(db, owner):
    location = create_location(db, owner.id, "Parents")
    upsert_entry(db, owner.id, "2024-01-15", location.id)

    with pytest.raises(Conflict, match="has sleep entries"):
        delete_location(db, owner.id, location.id)
    assert get_location(db, owner.id, location.id).name == "Parents"


def test_delete_racing_with_new_entry_conflicts(db, session_factory, owner):
    location = create_location(db, owner.id, "Parents")
    owner_id, location_id = owner.id, location.id

    def add_entry_elsewhere(session, flush_context, instances):
        other = session_factory()
        try:
            other.add(SleepEntry(owner_id=owner_id, date="2024-01-15", location_id=location_id))
            other.commit()
        finally:
            other.close()

    event.listen(db, "before_flush", add_entry_elsewhere, once=True)

    with pytest.raises(Conflict, match="has sleep entries"):
        delete_location(db, owner_id, location_id)
    assert get_location(db, owner_id, location_id).name == "Parents"


def test_delete_unused_location(db, owner):
    location = create_location(db, owner.id, "Parents")
    location_id = location.id

    delete_location(db, owner.id, location_id)

    with pytest.raises(NotFound):
        get_location(db, owner.id, location_id)


def test_delete_after_last_entry_removed(db, owner):
    location = create_location(db, owner.id, "Parents")
    location_id = location.id
    upsert_entry(db, owner.id, "2024-01-15", location_id)
    delete_entry(db, owner.id, "2024-01-15")

    delete_location(db, owner.id, location_id)

    assert list_locations(db, owner.id) == []


def test_delete_other_users_location_is_not_found(db, owner, stranger):
    theirs = create_location(db, stranger.id, "Hotel")

    with pytest.raises(NotFound):
        delete_location(db, owner.id, theirs.id)
    assert get_location(db, stranger.id, theirs.id).name == "Hotel"
