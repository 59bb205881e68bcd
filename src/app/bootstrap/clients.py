"""Factory do cliente HTTP compartilhado (httpx)."""

from __future__ import annotations

import logging

import httpx

from config.settings import get_calendar_settings

logger = logging.getLogger(__name__)

_USER_AGENT = "personal-dashboard/1.0 (+calendar-feed)"


def create_http_client() -> httpx.AsyncClient:
    """Cria AsyncClient reaproveitado entre requisições (pool de conexões).

    Fechado no shutdown do lifespan do FastAPI.
    """
    settings = get_calendar_settings()
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        headers={"User-Agent": _USER_AGENT},
        follow_redirects=True,
    )
    logger.info("http_client_created", extra={"timeout_seconds": settings.request_timeout_seconds})
    return client
