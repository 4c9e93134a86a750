"""API package initialization."""
from slotbook.api.models import SlotView, BookRequest, BookResponse, ErrorResponse

__all__ = ["SlotView", "BookRequest", "BookResponse", "ErrorResponse"]
