"""
Custom exceptions for Slot Calendar.
"""

from typing import Optional


class CalendarError(Exception):
    """Base exception for calendar scheduling errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidMinuteError(CalendarError, ValueError):
    """Raised when a minute index falls outside the day."""
    pass


class IncompleteRangeError(CalendarError, ValueError):
    """Raised when an operation needs both range bounds but one is missing."""
    pass


class NoOpenSessionError(CalendarError):
    """Raised when save/delete is requested with no edit surface open."""
    pass
