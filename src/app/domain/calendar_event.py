"""Modelos de dominio para eventos do feed de calendario.

O formato JSON espelha o shape `start: {date} | {dateTime}` da API do
Google Calendar, que e o que o widget de calendario do painel consome.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, tzinfo
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


def format_utc_instant(value: datetime) -> str:
    """Formata instante como ISO-8601 UTC com milissegundos (ex: 2025-07-16T12:00:00.000Z)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    utc_value = value.astimezone(UTC)
    millis = utc_value.microsecond // 1000
    return f"{utc_value.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}Z"


class DatePoint(BaseModel):
    """Inicio/fim de evento: dia inteiro (`date`) ou instante (`dateTime`).

    Exatamente uma das variantes fica preenchida.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    all_day: date | None = Field(
        default=None,
        alias="date",
        description="Data de calendario, sem horario (evento de dia inteiro).",
    )
    date_time: datetime | None = Field(
        default=None,
        alias="dateTime",
        description="Instante com horario, serializado sempre em UTC.",
    )

    @model_validator(mode="after")
    def _exactly_one_variant(self) -> DatePoint:
        if (self.all_day is None) == (self.date_time is None):
            raise ValueError("DatePoint requires exactly one of date or dateTime")
        if self.date_time is not None and self.date_time.tzinfo is None:
            raise ValueError("dateTime must be timezone-aware")
        return self

    @field_serializer("date_time")
    def _serialize_date_time(self, value: datetime | None) -> str | None:
        return format_utc_instant(value) if value is not None else None

    @classmethod
    def for_date(cls, value: date) -> DatePoint:
        return cls(date=value)

    @classmethod
    def for_instant(cls, value: datetime) -> DatePoint:
        return cls(dateTime=value.astimezone(UTC))

    @property
    def is_all_day(self) -> bool:
        return self.all_day is not None

    def effective_instant(self, zone: tzinfo) -> datetime:
        """Instante usado em comparacoes; dia inteiro vira meia-noite local."""
        if self.all_day is not None:
            return datetime.combine(self.all_day, time.min, tzinfo=zone)
        assert self.date_time is not None
        return self.date_time

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Event(BaseModel):
    """Evento normalizado entregue ao widget de calendario."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    summary: str = Field(..., min_length=1, description="Titulo do evento.")
    start: DatePoint = Field(..., description="Inicio do evento.")
    end: DatePoint = Field(..., description="Fim do evento (copia de start se ausente no feed).")
    description: str | None = Field(default=None, description="Descricao livre do evento.")
    location: str | None = Field(default=None, description="Local do evento.")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(slots=True)
class RawEventRecord:
    """Acumulador mutavel de um bloco VEVENT durante a leitura do feed."""

    summary: str | None = None
    start: DatePoint | None = None
    end: DatePoint | None = None
    description: str | None = None
    location: str | None = None

    def missing_fields(self) -> list[str]:
        missing: list[str] = []
        if not self.summary:
            missing.append("summary")
        if self.start is None:
            missing.append("start")
        return missing

    def to_event(self) -> Event:
        """Converte para Event; chamar apenas quando missing_fields() esta vazio."""
        assert self.summary and self.start is not None
        return Event(
            summary=self.summary,
            start=self.start,
            end=self.end if self.end is not None else self.start,
            description=self.description,
            location=self.location,
        )


__all__ = ["DatePoint", "Event", "RawEventRecord", "format_utc_instant"]
