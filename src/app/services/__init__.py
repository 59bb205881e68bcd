"""Serviços de aplicação do widget de calendário.

Implementações concretas de IO ficam em app/infra/.
"""

from app.services.calendar_feed import CalendarFeedService
from app.services.ics_decoder import decode

__all__ = [
    "CalendarFeedService",
    "decode",
]
