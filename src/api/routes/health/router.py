"""Liveness (/health) e readiness (/ready) da API do painel.

/ready não chama o Google: só confere se o AsyncClient compartilhado está
aberto e se ao menos uma fonte de feed está configurada. Falha do
provider aparece como 500 em /api/calendar.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from config.settings import get_base_settings, get_calendar_settings

router = APIRouter()

CheckStatus = Literal["ok", "degraded", "failed"]


class HealthResponse(BaseModel):
    status: str
    service: str
    environment: str
    timestamp: str
    version: str = "1.0.0"


class DependencyCheck(BaseModel):
    """Resultado de uma checagem do /ready."""

    status: CheckStatus
    error: str | None = None
    sources: list[str] = Field(default_factory=list)

    @property
    def usable(self) -> bool:
        return self.status != "failed"


class ReadinessResponse(BaseModel):
    status: Literal["ready", "not_ready"]
    checks: dict[str, DependencyCheck]
    timestamp: str


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    base = get_base_settings()
    return HealthResponse(
        status="healthy",
        service=base.service_name,
        environment=base.environment,
        timestamp=_now_iso(),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> JSONResponse:
    checks = {
        "http_client": _check_http_client(getattr(request.app.state, "http_client", None)),
        "calendar": _check_calendar_sources(),
    }
    ready = all(check.usable for check in checks.values())
    body = ReadinessResponse(
        status="ready" if ready else "not_ready",
        checks=checks,
        timestamp=_now_iso(),
    )
    return JSONResponse(content=body.model_dump(mode="json"), status_code=200 if ready else 503)


def _check_http_client(http_client: Any | None) -> DependencyCheck:
    if http_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    if getattr(http_client, "is_closed", False):
        return DependencyCheck(status="failed", error="closed")
    return DependencyCheck(status="ok")


def _check_calendar_sources() -> DependencyCheck:
    settings = get_calendar_settings()
    sources = [
        name
        for name, url in (("public", settings.public_ics_url), ("private", settings.private_ics_url))
        if url
    ]
    if not sources:
        return DependencyCheck(status="failed", error="not_configured")
    if len(sources) == 1:
        # Funciona, mas sem fallback entre fontes
        return DependencyCheck(status="degraded", error="single_source", sources=sources)
    return DependencyCheck(status="ok", sources=sources)
