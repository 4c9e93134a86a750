"""Configuration for the slot booking demo.

All business constants centralized here - modify as needed without touching code.
Values marked with an env var name can be overridden from the environment or a .env file.
"""
import os
from dotenv import load_dotenv

# Load environment
load_dotenv()

# Single provider shown on every slot
MASTER_NAME = os.getenv("SLOTBOOK_MASTER_NAME", "Марина")

SLOT_TIMES = ["10:00", "12:00", "14:00", "16:00", "18:00"]

# Rolling window of days generated at startup (today included)
DAYS_AHEAD = int(os.getenv("SLOTBOOK_DAYS_AHEAD", "7"))

# Day picker shows days up to this (month, day) in the current year
BOOKING_CUTOFF = (3, 20)

# API Configuration
API_HOST = os.getenv("SLOTBOOK_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("SLOTBOOK_API_PORT", "3000"))
API_BASE_URL = os.getenv("SLOTBOOK_API_BASE_URL", f"http://localhost:{API_PORT}/api")
CORS_ORIGINS = os.getenv("SLOTBOOK_CORS_ORIGINS", "*")

# Client
HTTP_TIMEOUT = int(os.getenv("SLOTBOOK_HTTP_TIMEOUT", "15"))
CLIENT_MODE = os.getenv("SLOTBOOK_CLIENT_MODE", "auto")  # remote | local | auto

LOG_LEVEL = os.getenv("SLOTBOOK_LOG_LEVEL", "INFO")
