"""Observabilidade: correlation_id por requisição e log de acesso HTTP."""

from app.observability.correlation import (
    MAX_CORRELATION_ID_LENGTH,
    accept_correlation_id,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.request_logging import (
    CORRELATION_HEADER,
    correlation_and_access_log,
)

__all__ = [
    "CORRELATION_HEADER",
    "MAX_CORRELATION_ID_LENGTH",
    "accept_correlation_id",
    "correlation_and_access_log",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
