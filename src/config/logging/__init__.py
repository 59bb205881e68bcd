"""Logging estruturado (JSON) do painel.

Todo record sai com correlation_id e service; tokens de feed privado
são mascarados antes da formatação.
"""

from config.logging.config import (
    DEFAULT_SERVICE_NAME,
    VALID_LOG_LEVELS,
    configure_logging,
    get_logger,
    log_fallback,
)
from config.logging.filters import (
    CorrelationIdFilter,
    PrivateFeedUrlFilter,
    redact_private_feed_token,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "VALID_LOG_LEVELS",
    "CorrelationIdFilter",
    "PrivateFeedUrlFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "redact_private_feed_token",
]
