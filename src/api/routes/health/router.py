"""Endpoints de health check e readiness."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/webhook/health-check")
async def webhook_health_check() -> dict[str, str]:
    """Health check no caminho usado pelo provedor de hospedagem."""
    return {"status": "ok"}


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: pronto quando a chave e o pipeline foram montados."""
    use_case = getattr(request.app.state, "envelope_use_case", None)
    ready = use_case is not None
    if not ready:
        logger.warning("readiness_pipeline_not_configured", extra={"component": "health"})

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"envelope_pipeline": "ok" if ready else "not_configured"},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)
