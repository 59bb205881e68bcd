"""Endpoints do widget de calendario do painel."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.bootstrap.dependencies import create_calendar_feed_service
from config.settings import get_calendar_settings
from utils.errors import CalendarFeedUnavailableError

if TYPE_CHECKING:
    from app.services.calendar_feed import CalendarFeedService

logger = logging.getLogger(__name__)

router = APIRouter()

FEED_ERROR_MESSAGE = "Failed to fetch calendar data"
NOT_CONFIGURED_MESSAGE = "Calendar not configured"


@router.get("")
async def list_calendar_events(request: Request) -> JSONResponse:
    """Eventos recentes/futuros do feed ICS no shape {date}|{dateTime}."""
    service = _resolve_feed_service(request)
    try:
        events = await service.list_events()
    except CalendarFeedUnavailableError:
        logger.error(
            "calendar_route_failed",
            extra={"component": "calendar_route", "result": "error"},
        )
        return JSONResponse(content={"error": FEED_ERROR_MESSAGE}, status_code=500)

    return JSONResponse(content=[event.to_payload() for event in events])


@router.get("/embed")
async def calendar_embed() -> JSONResponse:
    """URL do iframe do Google Calendar usado na tela cheia."""
    embed_url = get_calendar_settings().embed_url
    if embed_url is None:
        return JSONResponse(content={"error": NOT_CONFIGURED_MESSAGE}, status_code=404)
    return JSONResponse(content={"calendarUrl": embed_url})


def _resolve_feed_service(request: Request) -> CalendarFeedService:
    state = request.app.state
    service = getattr(state, "calendar_feed_service", None)
    if service is None:
        service = create_calendar_feed_service(getattr(state, "http_client", None))
        state.calendar_feed_service = service
    return service
