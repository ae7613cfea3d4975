"""Agregador de rotas: registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.whatsapp.flows import handle_flow_endpoint
from api.routes.whatsapp.router import router as whatsapp_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    # Health checks (/health, /ready e /webhook/health-check)
    api_router.include_router(health_router, tags=["health"])

    # WhatsApp (canal com prefixo)
    api_router.include_router(
        whatsapp_router,
        prefix="/webhook/whatsapp",
        tags=["whatsapp"],
    )

    # Caminho original configurado no Flow da Meta
    api_router.add_api_route(
        "/webhook",
        handle_flow_endpoint,
        methods=["POST"],
        tags=["whatsapp"],
    )

    return api_router
