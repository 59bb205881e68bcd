"""Client concreto que baixa feeds ICS (Google Calendar public/private)."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.observability import get_correlation_id
from app.protocols.calendar_feed import IcsFeedSourceProtocol
from utils.errors import CalendarFeedHttpError

if TYPE_CHECKING:
    import httpx

    from config.settings import CalendarSettings

logger = logging.getLogger(__name__)

_COMPONENT = "ics_feed_client"
_ACCEPT_HEADER = "text/calendar, text/plain;q=0.9, */*;q=0.5"


class IcsFeedClient(IcsFeedSourceProtocol):
    """Baixa o documento ICS completo como texto UTF-8."""

    __slots__ = ("_http",)

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    @classmethod
    def from_settings(
        cls,
        settings: CalendarSettings,
        client: httpx.AsyncClient | None = None,
    ) -> IcsFeedClient:
        config = HttpClientConfig(
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
            default_headers={"Accept": _ACCEPT_HEADER},
        )
        return cls(HttpClient(config, client=client))

    async def fetch_text(self, url: str, *, source: str) -> str:
        started_at = time.perf_counter()
        try:
            response = await self._http.get(url)
        except HttpError as exc:
            self._log_failure(source=source, status_code=exc.status_code, error=exc)
            raise CalendarFeedHttpError(
                "calendar_feed_fetch_failed",
                status_code=exc.status_code,
                source=source,
            ) from exc

        if not response.is_success:
            self._log_failure(source=source, status_code=response.status_code)
            raise CalendarFeedHttpError(
                "calendar_feed_bad_status",
                status_code=response.status_code,
                source=source,
            )

        body = response.content.decode("utf-8", errors="replace")
        logger.info(
            "calendar_feed_fetched",
            extra={
                "component": _COMPONENT,
                "source": source,
                "result": "ok",
                "status_code": response.status_code,
                "bytes": len(response.content),
                "latency_ms": round((time.perf_counter() - started_at) * 1000, 2),
                "correlation_id": get_correlation_id(),
            },
        )
        return body

    def _log_failure(
        self,
        *,
        source: str,
        status_code: int | None,
        error: Exception | None = None,
    ) -> None:
        extra: dict[str, object] = {
            "component": _COMPONENT,
            "source": source,
            "result": "error",
            "status_code": status_code,
            "correlation_id": get_correlation_id(),
        }
        if error is not None:
            extra["error_type"] = type(error).__name__
            cause = error.__cause__
            if cause is not None:
                extra["cause_type"] = type(cause).__name__
        logger.warning("calendar_feed_fetch_failed", extra=extra)
