#!/usr/bin/env python3
"""Decodifica um feed ICS local e imprime os eventos em JSON.

Requer o projeto instalado (`pip install -e .`), que coloca os pacotes de
`src/` no path; sem instalar, rode com `PYTHONPATH=src`.

Uso:
    python scripts/decode_ics.py --file basic.ics
    curl -s "$ICS_URL" | python scripts/decode_ics.py --now 2025-07-20T00:00:00Z --limit 10

Útil para depurar feeds sem subir a API.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from app.services.ics_decoder import DEFAULT_LOOKBACK_DAYS, decode
from config.logging import configure_logging


def _parse_now(raw: str | None) -> datetime:
    if not raw:
        return datetime.now(UTC)
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--file", type=Path, help="Arquivo .ics (padrão: stdin)")
    parser.add_argument("--now", help="Instante de referência ISO-8601 (padrão: agora)")
    parser.add_argument("--tz", default="UTC", help="Timezone local para datas de dia inteiro")
    parser.add_argument("--lookback-days", type=int, default=DEFAULT_LOOKBACK_DAYS)
    parser.add_argument("--limit", type=int, default=50)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, service_name="decode_ics")

    text = args.file.read_text(encoding="utf-8") if args.file else sys.stdin.read()
    events = decode(
        text,
        _parse_now(args.now),
        zone=ZoneInfo(args.tz),
        lookback_days=args.lookback_days,
    )
    payload = [event.to_payload() for event in events[: args.limit]]
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
