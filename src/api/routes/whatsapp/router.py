"""Router principal do WhatsApp: agrega os endpoints do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.whatsapp.flows import router as flows_router

router = APIRouter()

# Endpoint de data-exchange de Flows (POST /flow/endpoint)
router.include_router(flows_router)
