"""Entrypoint da API do painel pessoal.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import (
    create_calendar_feed_service,
    create_http_client,
    initialize_app,
    validate_runtime_settings,
)
from app.observability import correlation_and_access_log
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup: valida settings, cria o AsyncClient compartilhado e o
    serviço de feed. Shutdown: fecha o AsyncClient.
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    app.state.http_client = create_http_client()
    app.state.calendar_feed_service = create_calendar_feed_service(app.state.http_client)

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    await app.state.http_client.aclose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    base = get_base_settings()
    fastapi_app = FastAPI(
        title="Personal Dashboard API",
        description="Feed de calendario e utilitarios do painel pessoal",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Front-end SvelteKit roda em outra origem
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(base.cors_allowed_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    fastapi_app.middleware("http")(correlation_and_access_log)

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": base.service_name})
    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    base = get_base_settings()
    logger.info("app_serving", extra={"host": base.host, "port": base.port})
    uvicorn.run("app.app:app", host=base.host, port=base.port, reload=base.is_development)


if __name__ == "__main__":
    main()
