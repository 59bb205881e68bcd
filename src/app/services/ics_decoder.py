"""Decoder deterministico de feeds iCalendar (ICS) para o widget de calendario.

Cobre apenas o subconjunto usado pelo feed publico do Google Calendar:
- blocos BEGIN:VEVENT / END:VEVENT
- SUMMARY, DESCRIPTION, LOCATION, DTSTART, DTEND

Fora do escopo: RRULE, VALARM, VTIMEZONE e desdobramento de linhas
(continuacoes com espaco inicial). Cada linha fisica e uma linha logica.

Nunca levanta excecao por conteudo ruim: campos/blocos invalidos sao
descartados com log e a leitura continua.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime, time, timedelta, tzinfo

from app.domain.calendar_event import DatePoint, Event, RawEventRecord
from config.logging import log_fallback

logger = logging.getLogger(__name__)

_COMPONENT = "ics_decoder"

BEGIN_EVENT = "BEGIN:VEVENT"
END_EVENT = "END:VEVENT"

# Propriedades de texto copiadas literalmente (sem unescape de \, \n etc.)
_TEXT_PROPERTIES: dict[str, str] = {
    "SUMMARY:": "summary",
    "DESCRIPTION:": "description",
    "LOCATION:": "location",
}
_DATE_PROPERTIES: dict[str, str] = {
    "DTSTART": "start",
    "DTEND": "end",
}
_PROPERTY_NAME_RE = re.compile(r"[;:]")

DEFAULT_LOOKBACK_DAYS = 7


def decode(
    ics_text: str | None,
    now: datetime | None = None,
    *,
    zone: tzinfo = UTC,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> list[Event]:
    """Converte o texto ICS em eventos filtrados e ordenados.

    Args:
        ics_text: Documento ICS completo (None/vazio retorna lista vazia).
        now: Instante de referencia para filtro e fallback de datas.
            Default: agora em UTC. Valor naive e tratado como UTC.
        zone: Timezone "local" para datas de dia inteiro e para o corte.
        lookback_days: Dias no passado ainda mantidos no resultado.

    Returns:
        Eventos com inicio >= inicio do dia (now - lookback_days),
        em ordem crescente de inicio. Sem limite de quantidade.
    """
    if not ics_text:
        return []

    reference = _as_aware(now or datetime.now(UTC))
    events = _scan_events(ics_text, reference, zone)
    kept = filter_recent(events, reference, zone=zone, lookback_days=lookback_days)
    ordered = sort_by_start(kept, zone=zone)

    logger.info(
        "ics_feed_decoded",
        extra={
            "component": _COMPONENT,
            "events_parsed": len(events),
            "events_kept": len(ordered),
        },
    )
    return ordered


def _scan_events(ics_text: str, now: datetime, zone: tzinfo) -> list[Event]:
    events: list[Event] = []
    current: RawEventRecord | None = None
    block_index = 0

    for raw_line in ics_text.split("\n"):
        line = raw_line.strip()

        if line.startswith(BEGIN_EVENT):
            current = RawEventRecord()
            block_index += 1
            continue

        if current is None:
            continue

        if line.startswith(END_EVENT):
            event = _finalize_block(current, block_index)
            if event is not None:
                events.append(event)
            current = None
            continue

        _apply_property(current, line, now, zone)

    return events


def _finalize_block(record: RawEventRecord, block_index: int) -> Event | None:
    missing = record.missing_fields()
    if missing:
        logger.debug(
            "ics_block_discarded",
            extra={"component": _COMPONENT, "block_index": block_index, "missing": missing},
        )
        return None
    return record.to_event()


def _apply_property(record: RawEventRecord, line: str, now: datetime, zone: tzinfo) -> None:
    for prefix, attr in _TEXT_PROPERTIES.items():
        if line.startswith(prefix):
            setattr(record, attr, line[len(prefix):])
            return

    name = _PROPERTY_NAME_RE.split(line, maxsplit=1)[0]
    attr = _DATE_PROPERTIES.get(name)
    if attr is None:
        return

    point = _parse_date_property(name, line, now, zone)
    if point is not None:
        setattr(record, attr, point)


def _parse_date_property(name: str, line: str, now: datetime, zone: tzinfo) -> DatePoint | None:
    """DTSTART/DTEND: valor e tudo apos o ultimo ':' (parametros podem conter ':')."""
    if ":" not in line:
        logger.warning(
            "ics_date_value_missing",
            extra={"component": _COMPONENT, "property": name},
        )
        return None

    token = line.rsplit(":", 1)[1]
    try:
        parsed = parse_date_token(token, now, zone=zone)
        if "VALUE=DATE" in line:
            return DatePoint.for_date(parsed.date())
        # Conversao para UTC pode estourar datetime.min (ex: ano 1 em zona +UTC)
        return DatePoint.for_instant(parsed)
    except (ValueError, OverflowError) as exc:
        logger.warning(
            "ics_date_token_invalid",
            extra={
                "component": _COMPONENT,
                "property": name,
                "token_length": len(token),
                "error_type": type(exc).__name__,
            },
        )
        return None


def parse_date_token(token: str, now: datetime, *, zone: tzinfo = UTC) -> datetime:
    """Interpreta um valor de data ICS ja sem prefixo de propriedade.

    Despacho por tamanho/sufixo:
    - YYYYMMDD: meia-noite local (`zone`)
    - YYYYMMDDTHHMMSSZ: instante UTC
    - YYYYMMDDTHHMMSS: horario flutuante lido como UTC (TZID e ignorado)
    - outro formato: ISO-8601 generico; se falhar, retorna `now`

    Raises:
        ValueError: Token com formato reconhecido mas campos invalidos
            (ex: mes 13). O chamador descarta o campo.
    """
    value = token.strip()

    if len(value) == 8 and value.isdigit():
        return datetime(int(value[0:4]), int(value[4:6]), int(value[6:8]), tzinfo=zone)

    if len(value) == 16 and value.endswith("Z"):
        return _fixed_offset_instant(value)

    if len(value) == 15 and value[8] == "T":
        # TODO: aplicar o TZID da propriedade quando o feed trouxer VTIMEZONE
        return _fixed_offset_instant(value)

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        log_fallback(logger, "ics_date_token", reason="unparseable_token")
        return now
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=zone)


def _fixed_offset_instant(value: str) -> datetime:
    return datetime(
        int(value[0:4]),
        int(value[4:6]),
        int(value[6:8]),
        int(value[9:11]),
        int(value[11:13]),
        int(value[13:15]),
        tzinfo=UTC,
    )


def filter_recent(
    events: list[Event],
    now: datetime,
    *,
    zone: tzinfo = UTC,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> list[Event]:
    """Mantem eventos que comecam a partir do inicio do dia (now - lookback_days)."""
    local_now = _as_aware(now).astimezone(zone)
    cutoff_day = (local_now - timedelta(days=lookback_days)).date()
    cutoff_instant = datetime.combine(cutoff_day, time.min, tzinfo=zone)
    cutoff_iso = cutoff_day.isoformat()

    kept: list[Event] = []
    for event in events:
        start = event.start
        if start.all_day is not None:
            # Datas ISO ordenam lexicograficamente na ordem do calendario
            if start.all_day.isoformat() >= cutoff_iso:
                kept.append(event)
        elif start.date_time is not None and start.date_time >= cutoff_instant:
            kept.append(event)
    return kept


def sort_by_start(events: list[Event], *, zone: tzinfo = UTC) -> list[Event]:
    """Ordena por instante efetivo de inicio; empates mantem a ordem do feed."""
    return sorted(events, key=lambda event: event.start.effective_instant(zone))


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


__all__ = [
    "BEGIN_EVENT",
    "DEFAULT_LOOKBACK_DAYS",
    "END_EVENT",
    "decode",
    "filter_recent",
    "parse_date_token",
    "sort_by_start",
]
