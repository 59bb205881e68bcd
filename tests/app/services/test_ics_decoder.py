"""Testes do decoder ICS (parse, default de fim, filtro e ordenacao)."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from app.services.ics_decoder import decode, filter_recent, parse_date_token, sort_by_start

NOW = datetime(2025, 7, 20, 0, 0, tzinfo=UTC)
CHICAGO = ZoneInfo("America/Chicago")


def _block(*lines: str) -> str:
    return "\r\n".join(("BEGIN:VEVENT", *lines, "END:VEVENT"))


def _ics(*blocks: str) -> str:
    header = "BEGIN:VCALENDAR\r\nVERSION:2.0\r\nPRODID:-//Google Inc//Google Calendar 70.9054//EN"
    return "\r\n".join((header, *blocks, "END:VCALENDAR")) + "\r\n"


def _payloads(text: str, now: datetime = NOW, **kwargs: object) -> list[dict[str, object]]:
    return [event.to_payload() for event in decode(text, now, **kwargs)]


class TestDatePoints:
    """Conversao de DTSTART/DTEND para {date} | {dateTime}."""

    def test_all_day_token_becomes_date(self) -> None:
        text = _ics(_block("SUMMARY:Ferias", "DTSTART;VALUE=DATE:20250716"))

        [payload] = _payloads(text)

        assert payload["start"] == {"date": "2025-07-16"}
        assert payload["end"] == {"date": "2025-07-16"}

    def test_utc_token_becomes_date_time_with_millis(self) -> None:
        text = _ics(_block("SUMMARY:Reuniao", "DTSTART:20250716T120000Z"))

        [payload] = _payloads(text)

        assert payload["start"] == {"dateTime": "2025-07-16T12:00:00.000Z"}

    def test_missing_end_copies_timed_start(self) -> None:
        text = _ics(_block("SUMMARY:Reuniao", "DTSTART:20250716T120000Z"))

        [payload] = _payloads(text)

        assert payload["end"] == {"dateTime": "2025-07-16T12:00:00.000Z"}

    def test_explicit_end_is_kept(self) -> None:
        text = _ics(
            _block(
                "SUMMARY:Reuniao",
                "DTSTART:20250716T120000Z",
                "DTEND:20250716T133000Z",
            )
        )

        [payload] = _payloads(text)

        assert payload["end"] == {"dateTime": "2025-07-16T13:30:00.000Z"}

    def test_all_day_end_uses_date_variant(self) -> None:
        text = _ics(
            _block(
                "SUMMARY:Viagem",
                "DTSTART;VALUE=DATE:20250716",
                "DTEND;VALUE=DATE:20250719",
            )
        )

        [payload] = _payloads(text)

        assert payload["start"] == {"date": "2025-07-16"}
        assert payload["end"] == {"date": "2025-07-19"}

    def test_floating_time_is_read_as_utc_ignoring_tzid(self) -> None:
        text = _ics(_block("SUMMARY:Dentista", "DTSTART;TZID=America/New_York:20250716T090000"))

        [payload] = _payloads(text)

        assert payload["start"] == {"dateTime": "2025-07-16T09:00:00.000Z"}

    def test_value_is_taken_after_last_colon(self) -> None:
        text = _ics(_block("SUMMARY:Call", 'DTSTART;X-ORIGIN="urn:x:1":20250716T120000Z'))

        [payload] = _payloads(text)

        assert payload["start"] == {"dateTime": "2025-07-16T12:00:00.000Z"}

    def test_date_token_without_value_date_is_local_midnight_instant(self) -> None:
        text = _ics(_block("SUMMARY:Plantao", "DTSTART:20250716"))

        [payload] = _payloads(text, zone=CHICAGO)

        # 2025-07-16 00:00 CDT (UTC-5)
        assert payload["start"] == {"dateTime": "2025-07-16T05:00:00.000Z"}

    def test_generic_iso_date_is_local_midnight_instant(self) -> None:
        text = _ics(_block("SUMMARY:Voo", "DTSTART:2025-07-16"))

        [payload] = _payloads(text, zone=CHICAGO)

        assert payload["start"] == {"dateTime": "2025-07-16T05:00:00.000Z"}

    def test_generic_iso_with_compact_offset_is_normalized_to_utc(self) -> None:
        text = _ics(_block("SUMMARY:Voo", "DTSTART:20250716T120000+0200"))

        [payload] = _payloads(text)

        assert payload["start"] == {"dateTime": "2025-07-16T10:00:00.000Z"}

    def test_generic_iso_with_value_date_keeps_calendar_day(self) -> None:
        text = _ics(_block("SUMMARY:Feriado", "DTSTART;VALUE=DATE:2025-07-16"))

        [payload] = _payloads(text)

        assert payload["start"] == {"date": "2025-07-16"}

    def test_iso_value_with_colons_is_cut_at_last_colon_and_falls_back_to_now(self) -> None:
        # Valor lido = "00" (apos o ultimo ':'), que nao e data valida
        text = _ics(_block("SUMMARY:Voo", "DTSTART:2025-07-16T12:00:00+02:00"))

        [payload] = _payloads(text)

        assert payload["start"] == {"dateTime": "2025-07-20T00:00:00.000Z"}

    def test_instant_outside_datetime_range_discards_block(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="app.services.ics_decoder")
        text = _ics(
            _block("SUMMARY:Ano um", "DTSTART:00010101"),
            _block("SUMMARY:Valido", "DTSTART;VALUE=DATE:20250801"),
        )

        payloads = _payloads(text, zone=ZoneInfo("Asia/Tokyo"))

        assert [p["summary"] for p in payloads] == ["Valido"]
        [record] = [r for r in caplog.records if r.getMessage() == "ics_date_token_invalid"]
        assert record.error_type == "OverflowError"

    def test_end_outside_datetime_range_keeps_event_with_default_end(self) -> None:
        text = _ics(
            _block(
                "SUMMARY:Fim quebrado",
                "DTSTART:20250716T120000Z",
                "DTEND:00010101",
            )
        )

        [payload] = _payloads(text, zone=ZoneInfo("Asia/Tokyo"))

        assert payload["end"] == {"dateTime": "2025-07-16T12:00:00.000Z"}

    def test_unparseable_value_falls_back_to_now(self) -> None:
        text = _ics(_block("SUMMARY:Quebrado", "DTSTART:garbage"))

        [payload] = _payloads(text)

        assert payload["start"] == {"dateTime": "2025-07-20T00:00:00.000Z"}

    def test_invalid_fields_in_known_shape_discard_block(self) -> None:
        text = _ics(
            _block("SUMMARY:Mes invalido", "DTSTART:20251340T120000Z"),
            _block("SUMMARY:Valido", "DTSTART:20250716T120000Z"),
        )

        payloads = _payloads(text)

        assert [p["summary"] for p in payloads] == ["Valido"]

    def test_invalid_end_keeps_event_with_default_end(self) -> None:
        text = _ics(
            _block("SUMMARY:Fim ruim", "DTSTART:20250716T120000Z", "DTEND:20250230T120000Z")
        )

        [payload] = _payloads(text)

        assert payload["end"] == payload["start"]

    def test_date_value_without_colon_is_ignored(self) -> None:
        text = _ics(_block("SUMMARY:Sem valor", "DTSTART"))

        assert _payloads(text) == []


class TestTextProperties:
    """SUMMARY/DESCRIPTION/LOCATION copiados literalmente."""

    def test_description_and_location_are_verbatim(self) -> None:
        text = _ics(
            _block(
                "SUMMARY:Aula\\, turma A",
                "DESCRIPTION:Levar caderno\\nE lapis",
                "LOCATION:Sala 1\\, Bloco 2",
                "DTSTART:20250716T120000Z",
            )
        )

        [payload] = _payloads(text)

        assert payload["summary"] == "Aula\\, turma A"
        assert payload["description"] == "Levar caderno\\nE lapis"
        assert payload["location"] == "Sala 1\\, Bloco 2"

    def test_optional_fields_are_omitted_when_absent(self) -> None:
        text = _ics(_block("SUMMARY:Simples", "DTSTART:20250716T120000Z"))

        [payload] = _payloads(text)

        assert set(payload) == {"summary", "start", "end"}

    def test_folded_summary_keeps_only_first_physical_line(self) -> None:
        text = _ics(
            _block(
                "SUMMARY:Planejamento trimestral com",
                " o time inteiro",
                "DTSTART:20250716T120000Z",
            )
        )

        [payload] = _payloads(text)

        assert payload["summary"] == "Planejamento trimestral com"

    def test_property_names_are_case_sensitive(self) -> None:
        text = _ics(_block("summary:minusculo", "DTSTART:20250716T120000Z"))

        assert _payloads(text) == []

    def test_other_properties_are_ignored(self) -> None:
        text = _ics(
            _block(
                "UID:abc@google.com",
                "DTSTAMP:20250701T000000Z",
                "SUMMARY:Com extras",
                "RRULE:FREQ=WEEKLY",
                "DTSTART:20250716T120000Z",
            )
        )

        [payload] = _payloads(text)

        assert payload["start"] == {"dateTime": "2025-07-16T12:00:00.000Z"}


class TestBlocks:
    """Invariante de campos minimos por bloco."""

    def test_block_without_summary_is_discarded(self) -> None:
        text = _ics(
            _block("SUMMARY:Antes", "DTSTART:20250716T100000Z"),
            _block("DTSTART:20250716T110000Z"),
            _block("SUMMARY:Depois", "DTSTART:20250716T120000Z"),
        )

        assert [p["summary"] for p in _payloads(text)] == ["Antes", "Depois"]

    def test_block_without_start_is_discarded(self) -> None:
        text = _ics(
            _block("SUMMARY:Sem inicio"),
            _block("SUMMARY:Com inicio", "DTSTART:20250716T120000Z"),
        )

        assert [p["summary"] for p in _payloads(text)] == ["Com inicio"]

    def test_empty_summary_is_discarded(self) -> None:
        text = _ics(_block("SUMMARY:", "DTSTART:20250716T120000Z"))

        assert _payloads(text) == []

    def test_one_event_per_block_in_block_order(self) -> None:
        same_start = "DTSTART:20250716T120000Z"
        text = _ics(*(_block(f"SUMMARY:Evento {i}", same_start) for i in range(5)))

        assert [p["summary"] for p in _payloads(text)] == [f"Evento {i}" for i in range(5)]

    def test_properties_outside_vevent_are_ignored(self) -> None:
        text = _ics(
            "BEGIN:VTIMEZONE\r\nTZID:America/Chicago\r\nBEGIN:DAYLIGHT\r\n"
            "DTSTART:19700308T020000\r\nEND:DAYLIGHT\r\nEND:VTIMEZONE",
            "SUMMARY:Solto",
        )

        assert _payloads(text) == []

    def test_discarded_block_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="app.services.ics_decoder")
        text = _ics(_block("DTSTART:20250716T120000Z"))

        decode(text, NOW)

        [record] = [r for r in caplog.records if r.getMessage() == "ics_block_discarded"]
        assert record.missing == ["summary"]
        assert record.block_index == 1

    def test_unparseable_date_logs_fallback(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="app.services.ics_decoder")
        text = _ics(_block("SUMMARY:Quebrado", "DTSTART:garbage"))

        decode(text, NOW)

        [record] = [r for r in caplog.records if r.getMessage() == "fallback_applied"]
        assert record.component == "ics_date_token"
        assert record.reason == "unparseable_token"


class TestEmptyInput:
    @pytest.mark.parametrize("text", ["", None])
    def test_empty_input_returns_empty_list(self, text: str | None) -> None:
        assert decode(text, NOW) == []

    def test_text_without_events_returns_empty_list(self) -> None:
        assert decode(_ics(), NOW) == []


class TestFilterAndSort:
    """Corte em (now - 7 dias) no inicio do dia local e ordenacao por inicio."""

    def test_all_day_older_than_lookback_is_excluded(self) -> None:
        text = _ics(
            _block("SUMMARY:Antigo", "DTSTART;VALUE=DATE:20250710"),
            _block("SUMMARY:Recente", "DTSTART;VALUE=DATE:20250714"),
        )

        assert [p["summary"] for p in _payloads(text)] == ["Recente"]

    def test_all_day_on_cutoff_day_is_included(self) -> None:
        text = _ics(
            _block("SUMMARY:Limite", "DTSTART;VALUE=DATE:20250713"),
            _block("SUMMARY:Fora", "DTSTART;VALUE=DATE:20250712"),
        )

        assert [p["summary"] for p in _payloads(text)] == ["Limite"]

    def test_timed_event_cutoff_is_start_of_day(self) -> None:
        text = _ics(
            _block("SUMMARY:Fora", "DTSTART:20250712T235959Z"),
            _block("SUMMARY:Dentro", "DTSTART:20250713T000000Z"),
        )

        assert [p["summary"] for p in _payloads(text)] == ["Dentro"]

    def test_cutoff_day_follows_local_zone(self) -> None:
        # 03:00 UTC do dia 20 ainda e dia 19 em Chicago -> corte em 12/07
        now = datetime(2025, 7, 20, 3, 0, tzinfo=UTC)
        text = _ics(_block("SUMMARY:Dia 12", "DTSTART;VALUE=DATE:20250712"))

        assert len(_payloads(text, now, zone=CHICAGO)) == 1
        assert _payloads(text, now) == []

    def test_lookback_days_is_configurable(self) -> None:
        text = _ics(
            _block("SUMMARY:Ontem", "DTSTART;VALUE=DATE:20250719"),
            _block("SUMMARY:Hoje", "DTSTART;VALUE=DATE:20250720"),
        )

        assert [p["summary"] for p in _payloads(text, lookback_days=0)] == ["Hoje"]

    def test_sorted_by_start_instant(self) -> None:
        text = _ics(
            _block("SUMMARY:Depois", "DTSTART:20250718T100000Z"),
            _block("SUMMARY:Antes", "DTSTART:20250716T090000Z"),
        )

        assert [p["summary"] for p in _payloads(text)] == ["Antes", "Depois"]

    def test_all_day_sorts_at_local_midnight(self) -> None:
        text = _ics(
            _block("SUMMARY:Manha", "DTSTART:20250716T090000Z"),
            _block("SUMMARY:Dia inteiro", "DTSTART;VALUE=DATE:20250716"),
            _block("SUMMARY:Vespera", "DTSTART:20250715T230000Z"),
        )

        assert [p["summary"] for p in _payloads(text)] == ["Vespera", "Dia inteiro", "Manha"]

    def test_naive_now_is_treated_as_utc(self) -> None:
        text = _ics(_block("SUMMARY:Recente", "DTSTART;VALUE=DATE:20250714"))

        assert len(_payloads(text, datetime(2025, 7, 20))) == 1

    def test_filter_and_sort_helpers_keep_stored_representation(self) -> None:
        text = _ics(_block("SUMMARY:Dia", "DTSTART;VALUE=DATE:20250716"))
        events = decode(text, NOW)

        result = sort_by_start(filter_recent(events, NOW))

        assert result[0].start.all_day is not None
        assert result[0].start.date_time is None


class TestEndToEnd:
    def test_three_block_scenario(self) -> None:
        text = _ics(
            _block(
                "SUMMARY:Consulta",
                "DTSTART:20250718T150000Z",
                "DTEND:20250718T160000Z",
                "LOCATION:Clinica",
            ),
            _block("DTSTART:20250719T100000Z"),
            _block("SUMMARY:Muito antigo", "DTSTART:20250630T100000Z"),
        )

        payloads = _payloads(text)

        assert payloads == [
            {
                "summary": "Consulta",
                "start": {"dateTime": "2025-07-18T15:00:00.000Z"},
                "end": {"dateTime": "2025-07-18T16:00:00.000Z"},
                "location": "Clinica",
            }
        ]

    def test_decoding_is_deterministic(self) -> None:
        text = _ics(
            _block("SUMMARY:A", "DTSTART:20250718T100000Z"),
            _block("SUMMARY:B", "DTSTART;VALUE=DATE:20250716"),
            _block("SUMMARY:C", "DTSTART:garbage"),
        )

        first = json.dumps(_payloads(text))
        second = json.dumps(_payloads(text))

        assert first == second


class TestParseDateToken:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("20250716", datetime(2025, 7, 16, tzinfo=UTC)),
            ("20250716T120000Z", datetime(2025, 7, 16, 12, 0, tzinfo=UTC)),
            ("20250716T235930", datetime(2025, 7, 16, 23, 59, 30, tzinfo=UTC)),
            ("2025-07-16T12:00:00Z", datetime(2025, 7, 16, 12, 0, tzinfo=UTC)),
            ("2025-07-16", datetime(2025, 7, 16, tzinfo=UTC)),
            ("not-a-date", NOW),
        ],
    )
    def test_dispatch_by_shape(self, token: str, expected: datetime) -> None:
        assert parse_date_token(token, NOW) == expected

    def test_date_only_uses_given_zone(self) -> None:
        parsed = parse_date_token("20250716", NOW, zone=CHICAGO)

        assert parsed == datetime(2025, 7, 16, tzinfo=CHICAGO)

    @pytest.mark.parametrize("token", ["20251301", "20250716T250000Z", "20250230T120000"])
    def test_out_of_range_fields_raise(self, token: str) -> None:
        with pytest.raises(ValueError):
            parse_date_token(token, NOW)
