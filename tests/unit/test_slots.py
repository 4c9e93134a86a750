"""Test slot generation and booking rules."""
import pytest
from datetime import date

from slotbook import config
from slotbook.slots import (
    SlotStore,
    SlotStatus,
    MissingParameterError,
    SlotNotFoundError,
    SlotAlreadyBookedError,
    generate_slots_for_next_days,
)
from tests.conftest import FIRST_DAY, SECOND_DAY


def test_generate_slots_is_deterministic():
    """Same start date should give identical slots."""
    a = generate_slots_for_next_days(2, start=date(2026, 3, 16))
    b = generate_slots_for_next_days(2, start=date(2026, 3, 16))

    assert a == b
    assert len(a) == 2 * len(config.SLOT_TIMES)


def test_generate_slots_ids_and_order():
    """Ids are date-time composites, ordered by date then time."""
    slots = generate_slots_for_next_days(2, start=date(2026, 12, 31), times=["10:00", "12:00"], master="Anna")

    assert [s.id for s in slots] == [
        "2026-12-31-10:00",
        "2026-12-31-12:00",
        "2027-01-01-10:00",
        "2027-01-01-12:00",
    ]
    assert all(s.master_name == "Anna" for s in slots)
    assert all(s.user_id is None for s in slots)


def test_default_store_covers_days_ahead():
    store = SlotStore()
    assert len(store) == config.DAYS_AHEAD * len(config.SLOT_TIMES)
    assert store.all()[0].date == date.today().isoformat()


def test_book_free_slot_sets_holder(store):
    slot = store.book(f"{FIRST_DAY}-10:00", "alice")

    assert slot.user_id == "alice"
    assert store.get(f"{FIRST_DAY}-10:00").user_id == "alice"


def test_second_user_gets_conflict(store):
    """First writer wins, second user is rejected."""
    store.book(f"{FIRST_DAY}-10:00", "alice")

    with pytest.raises(SlotAlreadyBookedError):
        store.book(f"{FIRST_DAY}-10:00", "bob")

    assert store.get(f"{FIRST_DAY}-10:00").user_id == "alice"


def test_rebooking_by_same_user_is_idempotent(store):
    store.book(f"{FIRST_DAY}-10:00", "alice")
    slot = store.book(f"{FIRST_DAY}-10:00", "alice")

    assert slot.user_id == "alice"
    assert store.booked_count() == 1


def test_book_unknown_slot_raises(store):
    with pytest.raises(SlotNotFoundError):
        store.book("1999-01-01-10:00", "alice")


@pytest.mark.parametrize("user_id", [None, ""])
def test_book_requires_user_id(store, user_id):
    with pytest.raises(MissingParameterError) as exc_info:
        store.book(f"{FIRST_DAY}-10:00", user_id)

    assert str(exc_info.value) == "userId is required"
    assert store.booked_count() == 0


def test_slots_for_date_tags_status(store):
    store.book(f"{FIRST_DAY}-10:00", "alice")
    store.book(f"{FIRST_DAY}-12:00", "bob")

    statuses = {slot.time: status for slot, status in store.slots_for_date(FIRST_DAY, "alice")}

    assert statuses["10:00"] == SlotStatus.MINE
    assert statuses["12:00"] == SlotStatus.BOOKED
    assert statuses["14:00"] == SlotStatus.FREE


@pytest.mark.parametrize("caller", [None, ""])
def test_anonymous_caller_never_sees_mine(store, caller):
    store.book(f"{FIRST_DAY}-10:00", "alice")

    statuses = [status for _, status in store.slots_for_date(FIRST_DAY, caller)]

    assert SlotStatus.MINE not in statuses
    assert statuses.count(SlotStatus.BOOKED) == 1


def test_slots_for_date_only_returns_that_date(store):
    result = store.slots_for_date(SECOND_DAY)

    assert len(result) == len(config.SLOT_TIMES)
    assert {slot.date for slot, _ in result} == {SECOND_DAY}


def test_slots_for_unknown_date_is_empty(store):
    assert store.slots_for_date("1999-01-01") == []


def test_slots_for_date_requires_date(store):
    with pytest.raises(MissingParameterError):
        store.slots_for_date("")


def test_bookings_for_user_returns_exactly_booked(store):
    booked = [f"{FIRST_DAY}-10:00", f"{SECOND_DAY}-18:00"]
    for slot_id in booked:
        store.book(slot_id, "alice")
    store.book(f"{FIRST_DAY}-12:00", "bob")

    mine = store.bookings_for_user("alice")

    assert [s.id for s in mine] == booked


def test_bookings_for_user_requires_user_id(store):
    with pytest.raises(MissingParameterError):
        store.bookings_for_user(None)
