"""Endpoint de data-exchange para WhatsApp Flows (envelope criptografado)."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.observability import correlation_scope
from app.use_cases.flows import Classification, FailureReason, PipelineState

if TYPE_CHECKING:
    from app.use_cases.flows import EnvelopeOutcome, ProcessFlowEnvelopeUseCase

logger = logging.getLogger(__name__)

router = APIRouter()

GENERIC_FAILURE_BODY = "Something went wrong."


@router.post("/flow/endpoint")
async def handle_flow_endpoint(request: Request) -> Response:
    """Recebe o envelope da Meta, descriptografa e entrega ao catálogo."""
    with correlation_scope(request.headers.get("x-correlation-id")):
        use_case = _get_envelope_use_case(request)
        if use_case is None:
            logger.error(
                "flow_endpoint_misconfigured",
                extra={"component": "flow_endpoint", "missing": "envelope_pipeline"},
            )
            return PlainTextResponse("Flow endpoint misconfigured", status_code=503)

        body = _parse_json_object(await request.body())
        if body is None:
            return PlainTextResponse("Malformed request", status_code=400)

        outcome = await use_case.execute(body)
        return _to_response(outcome)


def _get_envelope_use_case(request: Request) -> ProcessFlowEnvelopeUseCase | None:
    return getattr(request.app.state, "envelope_use_case", None)


def _parse_json_object(raw_body: bytes) -> dict[str, Any] | None:
    try:
        payload = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def _to_response(outcome: EnvelopeOutcome) -> Response:
    """Converte o resultado do pipeline em resposta HTTP.

    Falhas de crypto/entrega viram um 500 opaco; só campos ausentes
    (erro do cliente) recebem detalhe, e nunca valores.
    """
    if outcome.keepalive:
        return JSONResponse({"status": "active"}, status_code=200)

    if outcome.classification == Classification.IGNORED:
        return JSONResponse({"status": "ignored"}, status_code=200)

    if outcome.failure == FailureReason.MISSING_FIELDS:
        return JSONResponse(
            {
                "error": "missing_encrypted_fields",
                "missing": list(outcome.missing_fields),
                "received_keys": list(outcome.received_keys),
            },
            status_code=400,
        )

    if outcome.state == PipelineState.DELIVERED:
        return PlainTextResponse("OK", status_code=200)

    return PlainTextResponse(GENERIC_FAILURE_BODY, status_code=500)
