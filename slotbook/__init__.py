"""Appointment slot booking demo: in-memory slot API and terminal client."""

__version__ = "1.0.0"
