"""Caso de uso do widget de calendario: baixar feed ICS e decodificar.

Fluxo:
1. URL publica do Google Calendar (quando GOOGLE_CALENDAR_ID existe)
2. Em falha, URL privada (CALENDAR_PRIVATE_ICS_URL) como fallback
3. Decodifica, filtra, ordena e limita a `max_events`
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING

from app.services.ics_decoder import decode
from config.logging import log_fallback
from utils.errors import CalendarFeedHttpError, CalendarFeedUnavailableError

if TYPE_CHECKING:
    from app.domain.calendar_event import Event
    from app.protocols.calendar_feed import IcsFeedSourceProtocol
    from config.settings import CalendarSettings

logger = logging.getLogger(__name__)

_COMPONENT = "calendar_feed"

SOURCE_PUBLIC = "public"
SOURCE_PRIVATE = "private"


class CalendarFeedService:
    """Orquestra fontes do feed e o decoder ICS."""

    __slots__ = ("_feed", "_settings", "_zone")

    def __init__(
        self,
        *,
        feed: IcsFeedSourceProtocol,
        settings: CalendarSettings,
        zone: tzinfo | None = None,
    ) -> None:
        self._feed = feed
        self._settings = settings
        self._zone = zone if zone is not None else settings.zone()

    def sources(self) -> list[tuple[str, str]]:
        """Fontes configuradas em ordem de tentativa: (nome, url)."""
        candidates = [
            (SOURCE_PUBLIC, self._settings.public_ics_url),
            (SOURCE_PRIVATE, self._settings.private_ics_url),
        ]
        return [(name, url) for name, url in candidates if url]

    async def fetch_feed_text(self) -> str:
        """Retorna o primeiro corpo ICS obtido com sucesso.

        Raises:
            CalendarFeedUnavailableError: Nenhuma fonte configurada ou
                todas falharam.
        """
        sources = self.sources()
        if not sources:
            logger.error(
                "calendar_feed_not_configured",
                extra={"component": _COMPONENT, "result": "error"},
            )
            raise CalendarFeedUnavailableError("calendar_feed_not_configured")

        last_error: CalendarFeedHttpError | None = None
        for index, (name, url) in enumerate(sources):
            if index > 0:
                log_fallback(logger, _COMPONENT, reason=f"{sources[index - 1][0]}_failed")
            try:
                return await self._feed.fetch_text(url, source=name)
            except CalendarFeedHttpError as exc:
                last_error = exc

        logger.error(
            "calendar_feed_unavailable",
            extra={
                "component": _COMPONENT,
                "result": "error",
                "sources_tried": [name for name, _ in sources],
                "last_status_code": last_error.status_code if last_error else None,
            },
        )
        raise CalendarFeedUnavailableError("calendar_feed_unavailable") from last_error

    async def list_events(self, now: datetime | None = None) -> list[Event]:
        """Eventos recentes/futuros do feed, limitados a `max_events`."""
        text = await self.fetch_feed_text()
        events = decode(
            text,
            now or datetime.now(UTC),
            zone=self._zone,
            lookback_days=self._settings.lookback_days,
        )
        limited = events[: self._settings.max_events]
        logger.info(
            "calendar_events_listed",
            extra={
                "component": _COMPONENT,
                "result": "ok",
                "total_events": len(events),
                "returned_events": len(limited),
            },
        )
        return limited


__all__ = ["SOURCE_PRIVATE", "SOURCE_PUBLIC", "CalendarFeedService"]
