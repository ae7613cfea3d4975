"""Entrypoint do endpoint de Flows do catálogo de diamantes.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.flow_factory import create_flow_envelope_use_case
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer log da aplicação
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Carrega a chave privada e monta o pipeline (uma única vez)

    Em staging/production, falha ao montar o pipeline impede o boot.
    """
    base = get_base_settings()
    logger.info("app_starting", extra={"service": base.service_name})
    validate_runtime_settings()
    app.state.envelope_use_case = None

    try:
        app.state.envelope_use_case = create_flow_envelope_use_case()
    except Exception as exc:
        logger.error(
            "envelope_pipeline_not_ready",
            extra={"component": "bootstrap", "error_type": type(exc).__name__},
        )
        if base.is_strict:
            raise

    yield

    logger.info("app_shutting_down", extra={"service": base.service_name})


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="Diamond Flow Endpoint",
        description="Endpoint de data-exchange de WhatsApp Flows para busca de diamantes",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    port = int(os.getenv("PORT", "3000"))
    logger.info("app_dev_server_starting", extra={"port": port})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=port,
        reload=True,
    )


if __name__ == "__main__":
    main()
