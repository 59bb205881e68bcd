"""Formatter JSON dos logs do painel.

Todo record sai com os mesmos campos para facilitar busca no agregador
de logs (Cloud Logging/Loki):
- asctime, level, logger, message
- correlation_id, service
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem em que os campos aparecem na linha JSON
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com os campos padronizados.

    Campos passados via `extra` são anexados ao objeto JSON.

    Exemplo de output:
        {"asctime": "2025-07-16 12:00:00,000", "level": "INFO",
         "logger": "app.services.calendar_feed", "message": "calendar_feed_fetched",
         "correlation_id": "abc-123", "service": "personal-dashboard", "source": "public"}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
