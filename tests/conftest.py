"""Shared test fixtures."""
import pytest
from datetime import date

from slotbook.api_server import create_app
from slotbook.slots import SlotStore, generate_slots_for_next_days


START = date(2026, 3, 16)
FIRST_DAY = "2026-03-16"
SECOND_DAY = "2026-03-17"


@pytest.fixture
def store() -> SlotStore:
    """Three days of slots starting on a fixed Monday."""
    return SlotStore(generate_slots_for_next_days(3, start=START, master="Марина"))


@pytest.fixture
def app(store):
    app = create_app(store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def api(app):
    """Flask test client."""
    with app.test_client() as client:
        yield client
