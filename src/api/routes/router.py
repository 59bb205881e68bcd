"""Router raiz da API do painel.

- /health, /ready: probes, sem prefixo
- /api/calendar: feed de eventos e URL do embed
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.calendar.router import router as calendar_router
from api.routes.health.router import router as health_router

CALENDAR_PREFIX = "/api/calendar"


def create_api_router() -> APIRouter:
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(calendar_router, prefix=CALENDAR_PREFIX, tags=["calendar"])
    return api_router
