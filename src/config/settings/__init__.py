"""Settings do painel, carregadas do ambiente e cacheadas por processo.

- base: processo HTTP (ENVIRONMENT, PORT, LOG_LEVEL, CORS_ALLOWED_ORIGINS)
- calendar: fontes do feed ICS e parâmetros do widget (CALENDAR_*)

Testes que alteram env devem chamar `get_*_settings.cache_clear()`.
"""

from __future__ import annotations

from config.settings.base import (
    DEFAULT_PORT,
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.calendar import (
    DEFAULT_CALENDAR_TIMEZONE,
    GOOGLE_CALENDAR_BASE_URL,
    CalendarSettings,
    get_calendar_settings,
)

__all__ = [
    "DEFAULT_CALENDAR_TIMEZONE",
    "DEFAULT_PORT",
    "DEFAULT_SERVICE_NAME",
    "GOOGLE_CALENDAR_BASE_URL",
    "BaseSettings",
    "CalendarSettings",
    "Environment",
    "get_base_settings",
    "get_calendar_settings",
]
