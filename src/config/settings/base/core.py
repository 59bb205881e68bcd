"""Settings do processo HTTP do painel: ambiente, porta, CORS e logging.

Variáveis:
    ENVIRONMENT               development | staging (stage) | production (prod)
    SERVICE_NAME              nome no campo `service` dos logs
    PORT                      porta do uvicorn (default 8080)
    DEBUG                     true/1/yes força LOG_LEVEL=DEBUG
    LOG_LEVEL                 nível do root logger (default INFO)
    CORS_ALLOWED_ORIGINS      lista separada por vírgula (default "*")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

DEFAULT_SERVICE_NAME = "personal-dashboard"
DEFAULT_PORT = 8080

_TRUTHY = ("true", "1", "yes")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}


@dataclass(frozen=True)
class BaseSettings:
    """Configuração do processo (independe do calendário)."""

    environment: Environment = "development"
    service_name: str = DEFAULT_SERVICE_NAME
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    debug: bool = False
    log_level: str = "INFO"
    cors_allowed_origins: tuple[str, ...] = ("*",)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def strict_validation(self) -> bool:
        """Staging e produção não sobem com configuração inválida."""
        return self.environment in ("staging", "production")

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()

    def validate(self) -> list[str]:
        """Retorna erros de configuração (lista vazia = OK)."""
        errors: list[str] = []
        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")
        if self.log_level.upper() not in _LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        if not 0 < self.port < 65536:
            errors.append(f"PORT fora do intervalo: {self.port}")
        if self.is_production and "*" in self.cors_allowed_origins:
            errors.append("CORS_ALLOWED_ORIGINS não pode ser '*' em produção")
        return errors


def _parse_environment(raw: str) -> Environment:
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


def _parse_port(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        # validate() acusa o valor fora do intervalo
        return -1


def _parse_origins(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return ("*",)
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or ("*",)


def _load_base_from_env() -> BaseSettings:
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_parse_port(os.getenv("PORT")),
        debug=os.getenv("DEBUG", "").strip().lower() in _TRUTHY,
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        cors_allowed_origins=_parse_origins(os.getenv("CORS_ALLOWED_ORIGINS")),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
