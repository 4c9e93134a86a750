"""Pydantic models for slot API request/response validation."""
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from slotbook.slots import Slot, SlotStatus


class SlotView(BaseModel):
    """A slot as returned by GET /api/slots and GET /api/me/bookings."""
    id: str = Field(..., description="Composite key: date + time", examples=["2026-10-16-10:00"])
    date: str = Field(..., description="Date in YYYY-MM-DD")
    time: str = Field(..., description="Start time in HH:MM")
    master_name: str = Field(..., alias="masterName", description="Provider name")
    user_id: Optional[str] = Field(None, alias="userId", description="Holder identifier")
    status: SlotStatus = Field(..., description="free / booked / mine relative to caller")

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "id": "2026-10-16-10:00",
                "date": "2026-10-16",
                "time": "10:00",
                "masterName": "Марина",
                "status": "free"
            }
        }
    )

    @classmethod
    def from_slot(cls, slot: Slot, status: SlotStatus) -> "SlotView":
        return cls(
            id=slot.id,
            date=slot.date,
            time=slot.time,
            master_name=slot.master_name,
            user_id=slot.user_id,
            status=status
        )

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, omitting an empty holder."""
        return self.model_dump(by_alias=True, exclude_none=True)


class BookRequest(BaseModel):
    """Request body for POST /api/slots/<id>/book.

    Telegram user ids arrive as integers from some hosts and are stored as
    strings. Zero, booleans and other non-string values do not name a caller
    and read as a missing userId.
    """
    user_id: Optional[str] = Field(None, alias="userId", description="Caller identifier")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("user_id", mode="before")
    @classmethod
    def normalize_user_id(cls, value: Any) -> Optional[str]:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return None
        return str(value) if value else None


class BookResponse(BaseModel):
    """Response body for a successful booking."""
    ok: bool = True


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: str = Field(..., description="Error message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"error": "Slot already booked"}
        }
    )
