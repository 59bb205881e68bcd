"""Factories de serviços do painel."""

from __future__ import annotations

import logging
from datetime import UTC, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfoNotFoundError

from app.infra.calendar.ics_feed_client import IcsFeedClient
from app.services.calendar_feed import CalendarFeedService
from config.logging import log_fallback
from config.settings import get_calendar_settings

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


def create_calendar_feed_service(
    http_client: httpx.AsyncClient | None = None,
) -> CalendarFeedService:
    """Cria CalendarFeedService usando o AsyncClient compartilhado do app."""
    settings = get_calendar_settings()
    zone: tzinfo
    try:
        zone = settings.zone()
    except (ZoneInfoNotFoundError, ValueError):
        log_fallback(logger, "calendar_timezone", reason="invalid_timezone")
        zone = UTC
    service = CalendarFeedService(
        feed=IcsFeedClient.from_settings(settings, client=http_client),
        settings=settings,
        zone=zone,
    )
    logger.debug(
        "calendar_feed_service_created",
        extra={"component": "bootstrap", "sources": [name for name, _ in service.sources()]},
    )
    return service
