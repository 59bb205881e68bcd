"""Filters aplicados no handler raiz: contexto da requisição e redaction.

URLs privadas do Google Calendar carregam um token secreto no path
(`/private-<token>/basic.ics`). O httpx loga a URL completa em DEBUG,
então o token é mascarado antes de qualquer formatter.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

PRIVATE_TOKEN_PATTERN: Final = re.compile(r"private-[A-Za-z0-9]+")
PRIVATE_TOKEN_MASK: Final = "private-[REDACTED]"


def redact_private_feed_token(text: str) -> str:
    """Mascara o token de URLs privadas de calendário.

    Exemplo:
        >>> redact_private_feed_token(".../ical/x%40gmail.com/private-abc123/basic.ics")
        '.../ical/x%40gmail.com/private-[REDACTED]/basic.ics'
    """
    return PRIVATE_TOKEN_PATTERN.sub(PRIVATE_TOKEN_MASK, text)


class CorrelationIdFilter(logging.Filter):
    """Anexa `correlation_id` e `service` a cada record.

    Um `correlation_id` passado via `extra` tem precedência sobre o do
    contexto; sem getter, o campo sai vazio.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id_getter = correlation_id_getter

    def _current_correlation_id(self) -> str:
        if self._correlation_id_getter is None:
            return ""
        return self._correlation_id_getter()

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._current_correlation_id()
        record.service = self._service_name
        return True


class PrivateFeedUrlFilter(logging.Filter):
    """Remove tokens de feed privado da mensagem final do record."""

    def filter(self, record: logging.LogRecord) -> bool:
        rendered = record.getMessage()
        if PRIVATE_TOKEN_PATTERN.search(rendered):
            record.msg = redact_private_feed_token(rendered)
            record.args = ()
        return True
