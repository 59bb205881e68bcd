"""Settings do feed de calendario (Google Calendar via ICS).

Centralizar a leitura de env aqui evita espalhar parse de configuracao
pelas rotas e pelo caso de uso do feed.
"""

from __future__ import annotations

import os
from functools import lru_cache
from urllib.parse import quote
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field

GOOGLE_CALENDAR_BASE_URL = "https://calendar.google.com/calendar"
DEFAULT_CALENDAR_TIMEZONE = "America/Chicago"


class CalendarSettings(BaseModel):
    """Configuracoes usadas pela rota /api/calendar e pelo embed."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    google_calendar_id: str = Field(
        default="",
        description="ID do calendario publico no Google Calendar.",
    )
    private_ics_url: str | None = Field(
        default=None,
        description="URL secreta do feed ICS, usada como fallback da URL publica.",
    )
    calendar_timezone: str = Field(
        default=DEFAULT_CALENDAR_TIMEZONE,
        description="Timezone local para datas de dia inteiro e para o corte de filtro.",
    )
    max_events: int = Field(
        default=50,
        ge=1,
        description="Quantidade maxima de eventos retornados pela API.",
    )
    lookback_days: int = Field(
        default=7,
        ge=0,
        description="Dias no passado ainda exibidos no painel.",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout de cada requisicao ao provider de calendario.",
    )
    max_retries: int = Field(
        default=1,
        ge=0,
        description="Tentativas extras por fonte em 429/5xx/timeout.",
    )

    @property
    def is_configured(self) -> bool:
        """Existe ao menos uma fonte de feed configurada."""
        return bool(self.google_calendar_id or self.private_ics_url)

    @property
    def public_ics_url(self) -> str | None:
        if not self.google_calendar_id:
            return None
        return f"{GOOGLE_CALENDAR_BASE_URL}/ical/{self.google_calendar_id}/public/basic.ics"

    @property
    def embed_url(self) -> str | None:
        if not self.google_calendar_id:
            return None
        ctz = quote(self.calendar_timezone, safe="")
        return f"{GOOGLE_CALENDAR_BASE_URL}/embed?src={self.google_calendar_id}&ctz={ctz}"

    def zone(self) -> ZoneInfo:
        """Retorna o ZoneInfo configurado (levanta se o nome for invalido)."""
        return ZoneInfo(self.calendar_timezone)

    def validation_errors(self) -> list[str]:
        """Valida configuracoes de calendario (BaseModel ja reserva `validate`).

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if not self.is_configured:
            errors.append("GOOGLE_CALENDAR_ID ou CALENDAR_PRIVATE_ICS_URL deve ser configurado")

        if self.private_ics_url and not self.private_ics_url.startswith(("https://", "http://")):
            errors.append("CALENDAR_PRIVATE_ICS_URL deve ser uma URL http(s)")

        try:
            self.zone()
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"CALENDAR_TIMEZONE inválido: {self.calendar_timezone}")

        return errors


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _load_calendar_from_env() -> CalendarSettings:
    """Carrega CalendarSettings a partir de variaveis de ambiente."""
    return CalendarSettings(
        google_calendar_id=os.getenv("GOOGLE_CALENDAR_ID", "").strip(),
        private_ics_url=_read_optional_env("CALENDAR_PRIVATE_ICS_URL"),
        calendar_timezone=os.getenv("CALENDAR_TIMEZONE", DEFAULT_CALENDAR_TIMEZONE),
        max_events=int(os.getenv("CALENDAR_MAX_EVENTS", "50")),
        lookback_days=int(os.getenv("CALENDAR_LOOKBACK_DAYS", "7")),
        request_timeout_seconds=float(os.getenv("CALENDAR_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("CALENDAR_MAX_RETRIES", "1")),
    )


@lru_cache(maxsize=1)
def get_calendar_settings() -> CalendarSettings:
    """Retorna instancia cacheada de CalendarSettings."""
    return _load_calendar_from_env()


__all__ = [
    "DEFAULT_CALENDAR_TIMEZONE",
    "GOOGLE_CALENDAR_BASE_URL",
    "CalendarSettings",
    "get_calendar_settings",
]
