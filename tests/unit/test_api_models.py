"""Test API request/response models."""
import pytest
from pydantic import ValidationError

from slotbook.api.models import SlotView, BookRequest, ErrorResponse
from slotbook.slots import Slot, SlotStatus


def test_slot_view_serializes_camel_case():
    slot = Slot(id="2026-03-16-10:00", date="2026-03-16", time="10:00", master_name="Марина", user_id="42")

    wire = SlotView.from_slot(slot, SlotStatus.MINE).to_wire()

    assert wire == {
        "id": "2026-03-16-10:00",
        "date": "2026-03-16",
        "time": "10:00",
        "masterName": "Марина",
        "userId": "42",
        "status": "mine",
    }


def test_slot_view_omits_empty_holder():
    slot = Slot(id="2026-03-16-10:00", date="2026-03-16", time="10:00", master_name="Марина")

    wire = SlotView.from_slot(slot, SlotStatus.FREE).to_wire()

    assert "userId" not in wire
    assert wire["status"] == "free"


def test_slot_view_parses_wire_format():
    view = SlotView.model_validate({
        "id": "2026-03-16-10:00",
        "date": "2026-03-16",
        "time": "10:00",
        "masterName": "Марина",
        "status": "booked",
    })

    assert view.master_name == "Марина"
    assert view.user_id is None
    assert view.status == SlotStatus.BOOKED


def test_slot_view_rejects_unknown_status():
    with pytest.raises(ValidationError):
        SlotView.model_validate({
            "id": "x", "date": "2026-03-16", "time": "10:00",
            "masterName": "Марина", "status": "cancelled",
        })


def test_book_request_accepts_numeric_user_id():
    """Telegram ids may arrive as numbers."""
    req = BookRequest.model_validate({"userId": 123456})
    assert req.user_id == "123456"


def test_book_request_user_id_optional():
    assert BookRequest.model_validate({}).user_id is None


def test_error_response_shape():
    assert ErrorResponse(error="Slot not found").model_dump() == {"error": "Slot not found"}


@pytest.mark.parametrize("value", [0, "", False, True, 1.5, ["42"], {"id": 42}])
def test_book_request_non_caller_values_read_as_missing(value):
    assert BookRequest.model_validate({"userId": value}).user_id is None


def test_book_request_keeps_string_ids():
    assert BookRequest.model_validate({"userId": "0"}).user_id == "0"
