"""Protocolos e contratos do core da aplicação."""

from .calendar_feed import IcsFeedSourceProtocol

__all__ = [
    "IcsFeedSourceProtocol",
]
