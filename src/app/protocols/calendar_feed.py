"""Contrato de fonte de feed ICS usado pelo caso de uso de calendario.

Implementacoes: IcsFeedClient (httpx) e o fake em memoria dos testes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IcsFeedSourceProtocol(Protocol):
    """Contrato para baixar o texto bruto de um feed ICS."""

    async def fetch_text(self, url: str, *, source: str) -> str:
        """Retorna o corpo do feed; levanta CalendarFeedHttpError em falha."""
        ...
