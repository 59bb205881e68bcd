"""Rotas HTTP do painel (calendar, health).

Rotas só adaptam HTTP: parsing de ICS e escolha de fonte ficam em
app/services/.
"""

from __future__ import annotations

from api.routes.router import CALENDAR_PREFIX, create_api_router

__all__ = ["CALENDAR_PREFIX", "create_api_router"]
