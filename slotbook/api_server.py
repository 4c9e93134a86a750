"""Slot booking API.

Flask server with JSON endpoints for:
- Slot availability for a date (tagged free / booked / mine)
- Booking a slot by user id (first writer wins)
- Listing a user's bookings

Run with: slotbook-api  (or python -m slotbook.api_server)
"""
from datetime import datetime
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from slotbook import config
from slotbook.api.models import SlotView, BookRequest, BookResponse, ErrorResponse
from slotbook.logging_config import setup_structured_logging, get_logger, RequestIDMiddleware
from slotbook.slots import SlotStore, SlotStatus, SlotError, SlotNotFoundError, SlotAlreadyBookedError

logger = get_logger(__name__)


def error_response(message: str, status_code: int):
    return jsonify(ErrorResponse(error=message).model_dump()), status_code


def create_app(store: Optional[SlotStore] = None) -> Flask:
    """
    Build the Flask app around a slot store.

    Args:
        store: Slot store to serve, a fresh one for config.DAYS_AHEAD days if None

    Returns:
        Configured Flask app (store available as app.config["SLOT_STORE"])
    """
    app = Flask(__name__)
    app.json.ensure_ascii = False
    CORS(app, origins=config.CORS_ORIGINS)
    app.wsgi_app = RequestIDMiddleware(app.wsgi_app)

    slots = store if store is not None else SlotStore()
    app.config["SLOT_STORE"] = slots

    @app.errorhandler(SlotError)
    def handle_slot_error(exc: SlotError):
        """Map store errors to 400 / 404 / 409."""
        return error_response(str(exc), exc.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        """Handle Pydantic validation errors consistently."""
        logger.warning("validation_error", errors=exc.errors(include_url=False))
        return error_response("Invalid request body", 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return error_response(exc.name, exc.code)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        """Catch-all handler for unexpected exceptions."""
        logger.error("unexpected_error", error=str(exc), exc_info=True)
        return error_response("Internal Server Error", 500)

    @app.route('/api/slots', methods=['GET'])
    def get_slots():
        """GET /api/slots?date=2026-10-16&userId=42

        All slots for the date, each tagged relative to the caller.
        """
        slot_date = request.args.get('date', '')
        user_id = request.args.get('userId') or None

        day_slots = slots.slots_for_date(slot_date, user_id)

        return jsonify([
            SlotView.from_slot(slot, status).to_wire()
            for slot, status in day_slots
        ])

    @app.route('/api/slots/<slot_id>/book', methods=['POST'])
    def book_slot(slot_id):
        """POST /api/slots/2026-10-16-10:00/book

        Expected JSON body:
        {
            "userId": "42"
        }
        """
        body = BookRequest.model_validate(request.get_json(silent=True) or {})

        try:
            slot = slots.book(slot_id, body.user_id)
        except SlotAlreadyBookedError:
            logger.info("booking_conflict", slot_id=slot_id, user_id=body.user_id)
            raise
        except SlotNotFoundError:
            logger.info("slot_not_found", slot_id=slot_id)
            raise

        logger.info("slot_booked", slot_id=slot.id, user_id=slot.user_id)
        return jsonify(BookResponse().model_dump())

    @app.route('/api/me/bookings', methods=['GET'])
    def my_bookings():
        """GET /api/me/bookings?userId=42 - Slots held by the caller."""
        user_id = request.args.get('userId') or None

        mine = slots.bookings_for_user(user_id)

        return jsonify([
            SlotView.from_slot(slot, SlotStatus.MINE).to_wire()
            for slot in mine
        ])

    @app.route('/health', methods=['GET'])
    def health_check():
        """GET /health - Health check endpoint."""
        return jsonify({
            "success": True,
            "status": "healthy",
            "total_slots": len(slots),
            "booked_slots": slots.booked_count(),
            "timestamp": datetime.now().isoformat()
        })

    return app


def print_startup_info(store: SlotStore):
    """Print server startup information."""
    all_slots = store.all()
    dates = sorted({s.date for s in all_slots})
    print("=" * 70)
    print("🚀 SLOT BOOKING API")
    print("=" * 70)
    print(f"\n📍 Server: http://localhost:{config.API_PORT}")
    print(f"💇 Master: {config.MASTER_NAME}")
    if dates:
        print(f"📅 Days: {dates[0]} .. {dates[-1]} ({len(dates)} days)")
    print(f"⏰ Times: {', '.join(config.SLOT_TIMES)}")
    print(f"🧮 Slots: {len(all_slots)}")

    print("\n📡 Endpoints:")
    print("   GET   /api/slots?date=...&userId=...  - Slots for a date")
    print("   POST  /api/slots/<id>/book            - Book a slot")
    print("   GET   /api/me/bookings?userId=...     - My bookings")
    print("   GET   /health                         - Health check")

    print("\n✅ Server ready! Waiting for requests...")
    print("=" * 70)


def main():
    setup_structured_logging(config.LOG_LEVEL)
    app = create_app()
    print_startup_info(app.config["SLOT_STORE"])
    app.run(
        port=config.API_PORT,
        host=config.API_HOST,
        threaded=True
    )


if __name__ == '__main__':
    main()
