"""Slot API clients.

- SlotsClient: talks to the HTTP API
- LocalSlotsClient: same interface over an in-process SlotStore (local fallback)
- FallbackSlotsClient: remote first, local once the circuit breaker opens

All clients return SlotView lists and raise BookingError on rejected requests.
"""
import logging
from typing import List, Optional
from urllib.parse import quote

import requests

from slotbook import config
from slotbook.api.models import SlotView
from slotbook.circuit_breaker import CircuitBreaker, CircuitBreakerOpen
from slotbook.http_client import api_session, create_api_circuit_breaker, CONNECTION_ERRORS
from slotbook.slots import SlotStore, SlotStatus, SlotError

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Request rejected by the API (or the local store)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SlotsClient:
    """HTTP client for the slot API."""

    def __init__(self, base_url: str = config.API_BASE_URL,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or api_session

    def get_slots(self, slot_date: str, user_id: Optional[str] = None) -> List[SlotView]:
        params = {"date": slot_date}
        if user_id:
            params["userId"] = user_id
        response = self.session.get(f"{self.base_url}/slots", params=params)
        return [SlotView.model_validate(item) for item in self._json(response)]

    def book(self, slot_id: str, user_id: str) -> None:
        response = self.session.post(
            f"{self.base_url}/slots/{quote(slot_id, safe='')}/book",
            json={"userId": user_id}
        )
        self._json(response)

    def my_bookings(self, user_id: str) -> List[SlotView]:
        response = self.session.get(f"{self.base_url}/me/bookings", params={"userId": user_id})
        return [SlotView.model_validate(item) for item in self._json(response)]

    @staticmethod
    def _json(response: requests.Response):
        """Decode a JSON body, raising BookingError for non-2xx responses."""
        if not response.ok:
            try:
                message = response.json().get("error")
            except ValueError:
                message = None
            raise BookingError(message or f"Bad status: {response.status_code}",
                               status_code=response.status_code)
        return response.json()


class LocalSlotsClient:
    """In-process client (local fallback mode)."""

    def __init__(self, store: Optional[SlotStore] = None):
        self.store = store if store is not None else SlotStore()

    def get_slots(self, slot_date: str, user_id: Optional[str] = None) -> List[SlotView]:
        try:
            day_slots = self.store.slots_for_date(slot_date, user_id)
        except SlotError as e:
            raise BookingError(str(e), status_code=e.status_code)
        return [SlotView.from_slot(slot, status) for slot, status in day_slots]

    def book(self, slot_id: str, user_id: str) -> None:
        try:
            self.store.book(slot_id, user_id)
        except SlotError as e:
            raise BookingError(str(e), status_code=e.status_code)

    def my_bookings(self, user_id: str) -> List[SlotView]:
        try:
            mine = self.store.bookings_for_user(user_id)
        except SlotError as e:
            raise BookingError(str(e), status_code=e.status_code)
        return [SlotView.from_slot(slot, SlotStatus.MINE) for slot in mine]


class FallbackSlotsClient:
    """
    Remote client that falls back to local mode.

    Calls go through a circuit breaker. While it is closed, a connection
    failure is answered from the local store for that one call and the next
    call tries the API again. Once the breaker opens, the client switches to
    local mode for the rest of its life; the local store starts empty of
    bookings, matching a fresh server.
    """

    def __init__(self, remote: Optional[SlotsClient] = None,
                 local: Optional[LocalSlotsClient] = None,
                 breaker: Optional[CircuitBreaker] = None):
        self.remote = remote or SlotsClient()
        self._local = local
        self.breaker = breaker or create_api_circuit_breaker()
        self.mode = "remote"

    @property
    def local(self) -> LocalSlotsClient:
        if self._local is None:
            self._local = LocalSlotsClient()
        return self._local

    def _call(self, name: str, *args):
        if self.mode == "remote":
            try:
                return self.breaker.call(getattr(self.remote, name), *args)
            except CircuitBreakerOpen as e:
                logger.warning(f"{e}; switching to local mode")
                self.mode = "local"
            except CONNECTION_ERRORS as e:
                logger.warning(
                    f"Slot API unreachable ({e}); serving {name} locally "
                    f"({self.breaker.failure_count}/{self.breaker.failure_threshold} failures)"
                )
                if self.breaker.state == "open":
                    self.mode = "local"
        return getattr(self.local, name)(*args)

    def get_slots(self, slot_date: str, user_id: Optional[str] = None) -> List[SlotView]:
        return self._call("get_slots", slot_date, user_id)

    def book(self, slot_id: str, user_id: str) -> None:
        return self._call("book", slot_id, user_id)

    def my_bookings(self, user_id: str) -> List[SlotView]:
        return self._call("my_bookings", user_id)


def create_client(mode: str = config.CLIENT_MODE, base_url: str = config.API_BASE_URL):
    """
    Build a client for the given mode.

    Args:
        mode: "remote", "local" or "auto" (remote with local fallback)
        base_url: API base URL for remote modes

    Raises:
        ValueError: Unknown mode
    """
    mode = mode.lower()
    if mode == "remote":
        return SlotsClient(base_url)
    if mode == "local":
        return LocalSlotsClient()
    if mode == "auto":
        return FallbackSlotsClient(SlotsClient(base_url))
    raise ValueError(f"Unsupported client mode: {mode}")
