"""Setup de logging JSON do painel.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="personal-dashboard")
    logger = get_logger(__name__)
    logger.info("calendar_feed_fetched", extra={"source": "public"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, PrivateFeedUrlFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "personal-dashboard"

# Clientes HTTP logam cada request em INFO; só interessam em DEBUG
_HTTP_LIBRARY_LOGGERS = ("httpx", "httpcore")


def _normalize_level(level: str) -> str:
    normalized = level.strip().upper()
    if normalized not in VALID_LOG_LEVELS:
        valid = ", ".join(sorted(VALID_LOG_LEVELS))
        raise ValueError(f"Nível de log inválido: {level}. Válidos: {valid}")
    return normalized


def _build_handler(
    level: str,
    service_name: str,
    correlation_id_getter: Callable[[], str] | None,
) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(PrivateFeedUrlFilter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    return handler


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Substitui os handlers do root por um único handler JSON.

    Chamada uma vez no bootstrap (e pelo script `decode_ics.py`).

    Raises:
        ValueError: Nível fora de VALID_LOG_LEVELS.
    """
    normalized = _normalize_level(level)

    root = logging.getLogger()
    root.setLevel(normalized)
    root.handlers = [_build_handler(normalized, service_name, correlation_id_getter)]

    library_level = logging.DEBUG if normalized == "DEBUG" else logging.WARNING
    for name in _HTTP_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    *,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um caminho degradado foi usado.

    Ex: URL privada após falha da pública, data ICS ilegível trocada
    pelo instante atual, timezone inválida trocada por UTC.
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms
    logger.info("fallback_applied", extra=extra)
