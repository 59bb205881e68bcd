"""Configuração do pytest para a API do painel."""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# src/ no sys.path para imports absolutos (api, app, config, utils)
_SRC = Path(__file__).resolve().parent.parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from config.settings import get_base_settings, get_calendar_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Settings são lidas do env e cacheadas; cada teste começa sem cache."""
    get_base_settings.cache_clear()
    get_calendar_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_calendar_settings.cache_clear()
