"""Exceções de domínio para falhas recuperáveis de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class CalendarFeedHttpError(InfrastructureError):
    """Falha ao baixar um feed ICS de uma fonte específica.

    Attributes:
        status_code: Status HTTP retornado pelo provider (None em erro de rede).
        source: Identificador da fonte (ex: "public", "private").
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        source: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.source = source


class CalendarFeedUnavailableError(InfrastructureError):
    """Nenhuma fonte de calendário configurada respondeu com sucesso."""
