"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CalendarFeedHttpError,
    CalendarFeedUnavailableError,
    InfrastructureError,
)

__all__ = [
    "CalendarFeedHttpError",
    "CalendarFeedUnavailableError",
    "InfrastructureError",
]
