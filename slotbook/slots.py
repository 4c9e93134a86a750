"""In-memory slot store for a single provider.

Slots are generated once for a rolling window of days and only ever mutated
in place: a holder goes from empty to a user id through `book()` and never back.
"""
import threading
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Tuple

from slotbook import config


class SlotStatus(str, Enum):
    """Slot status relative to the caller."""
    FREE = "free"
    BOOKED = "booked"
    MINE = "mine"


class SlotError(Exception):
    """Base class for slot store errors."""
    status_code = 400


class MissingParameterError(SlotError):
    """Raised when a required parameter (date, userId) is missing."""
    status_code = 400

    def __init__(self, name: str):
        super().__init__(f"{name} is required")
        self.name = name


class SlotNotFoundError(SlotError):
    """Raised when slot_id does not match any slot."""
    status_code = 404

    def __init__(self, slot_id: str):
        super().__init__("Slot not found")
        self.slot_id = slot_id


class SlotAlreadyBookedError(SlotError):
    """Raised when the slot is held by a different user."""
    status_code = 409

    def __init__(self, slot_id: str):
        super().__init__("Slot already booked")
        self.slot_id = slot_id


@dataclass
class Slot:
    id: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    master_name: str
    user_id: Optional[str] = None

    def status_for(self, user_id: Optional[str]) -> SlotStatus:
        """Status of this slot as seen by user_id (None = anonymous)."""
        if not self.user_id:
            return SlotStatus.FREE
        if user_id and self.user_id == user_id:
            return SlotStatus.MINE
        return SlotStatus.BOOKED


def make_slot_id(slot_date: str, slot_time: str) -> str:
    return f"{slot_date}-{slot_time}"


def generate_slots_for_next_days(
    days: int,
    start: Optional[date] = None,
    times: Optional[List[str]] = None,
    master: Optional[str] = None
) -> List[Slot]:
    """Generate slots for `days` consecutive days starting at `start`.

    Args:
        days: Number of days (today included)
        start: First day, defaults to today
        times: Slot start times in HH:MM, defaults to config.SLOT_TIMES
        master: Provider name, defaults to config.MASTER_NAME

    Returns:
        Slots ordered by date, then by time
    """
    start = start or date.today()
    times = times if times is not None else config.SLOT_TIMES
    master = master or config.MASTER_NAME

    result = []
    for offset in range(days):
        slot_date = (start + timedelta(days=offset)).isoformat()
        for slot_time in times:
            result.append(Slot(
                id=make_slot_id(slot_date, slot_time),
                date=slot_date,
                time=slot_time,
                master_name=master
            ))
    return result


class SlotStore:
    """
    Shared slot collection with first-writer-wins booking.

    Pattern: single list guarded by a lock. Check-then-set in `book()` runs
    under the lock, so at most one distinct holder can ever be recorded.
    """

    def __init__(self, slots: Optional[List[Slot]] = None, days: Optional[int] = None):
        if slots is None:
            slots = generate_slots_for_next_days(days if days is not None else config.DAYS_AHEAD)
        self._slots = slots
        self._by_id = {s.id: s for s in slots}
        self.lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._slots)

    def all(self) -> List[Slot]:
        with self.lock:
            return list(self._slots)

    def get(self, slot_id: str) -> Slot:
        slot = self._by_id.get(slot_id)
        if slot is None:
            raise SlotNotFoundError(slot_id)
        return slot

    def slots_for_date(
        self,
        slot_date: str,
        user_id: Optional[str] = None
    ) -> List[Tuple[Slot, SlotStatus]]:
        """All slots on slot_date, each paired with its status for user_id."""
        if not slot_date:
            raise MissingParameterError("date")

        with self.lock:
            return [
                (s, s.status_for(user_id))
                for s in self._slots
                if s.date == slot_date
            ]

    def book(self, slot_id: str, user_id: Optional[str]) -> Slot:
        """
        Book slot_id for user_id.

        Re-booking a slot already held by the same user is a successful no-op.

        Raises:
            MissingParameterError: user_id empty
            SlotNotFoundError: unknown slot_id
            SlotAlreadyBookedError: slot held by another user
        """
        if not user_id:
            raise MissingParameterError("userId")

        with self.lock:
            slot = self.get(slot_id)
            if slot.user_id and slot.user_id != user_id:
                raise SlotAlreadyBookedError(slot_id)
            slot.user_id = user_id
            return slot

    def bookings_for_user(self, user_id: Optional[str]) -> List[Slot]:
        """Slots currently held by user_id, in generation order."""
        if not user_id:
            raise MissingParameterError("userId")

        with self.lock:
            return [s for s in self._slots if s.user_id == user_id]

    def booked_count(self) -> int:
        with self.lock:
            return sum(1 for s in self._slots if s.user_id)
