"""Cliente HTTP especializado para WhatsApp/Meta API.

Estende HttpClient genérico com comportamentos específicos de WhatsApp:
- Bearer token validado antes de qualquer envio
- Tratamento de erros Meta (error.type, error.code)
- Logging estruturado sem PII (tokens, números, corpo das mensagens)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.meta_errors import parse_meta_error
from app.infra.http import HttpClient, HttpClientConfig, HttpError

if TYPE_CHECKING:
    import httpx

    from config.settings import WhatsAppSettings

logger: logging.Logger = logging.getLogger(__name__)


class WhatsAppHttpClient(HttpClient):
    """Cliente HTTP para envio de mensagens pela Graph API."""

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Envia mensagem via WhatsApp API.

        Args:
            endpoint: URL do endpoint (ex: .../messages)
            access_token: Bearer token para autenticação
            payload: Payload JSON da mensagem

        Returns:
            Response JSON da Meta

        Raises:
            ValueError: Se access_token está vazio
            HttpError: Se erro HTTP ou erro Meta no corpo
        """
        if not access_token or not access_token.strip():
            logger.error(
                "whatsapp_access_token_missing",
                extra={"endpoint": endpoint},
            )
            raise ValueError(
                "access_token é obrigatório para envio de mensagens. "
                "Verifique se WHATSAPP_ACCESS_TOKEN está configurado."
            )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        response = await self.post(endpoint, json=payload, headers=headers)
        return self._process_whatsapp_response(response, endpoint)

    def _process_whatsapp_response(
        self,
        response: httpx.Response,
        endpoint: str,
    ) -> dict[str, Any]:
        """Processa response da API Meta/WhatsApp."""
        try:
            response_data = response.json()
        except json.JSONDecodeError as exc:
            logger.error("whatsapp_response_invalid_json", extra={"endpoint": endpoint})
            raise HttpError("Response JSON inválido", status_code=response.status_code) from exc

        meta_error = parse_meta_error(response_data)
        if meta_error is not None:
            logger.warning(
                "whatsapp_api_error",
                extra={
                    "endpoint": endpoint,
                    "error_type": meta_error.error_type,
                    "error_code": meta_error.error_code,
                    "is_permanent": meta_error.is_permanent,
                },
            )
            raise HttpError(
                f"Meta API error: {meta_error.error_type} ({meta_error.error_code})",
                status_code=response.status_code,
                is_retryable=not meta_error.is_permanent,
            )

        if response.status_code >= 400:
            raise HttpError("whatsapp_http_error", status_code=response.status_code)

        logger.debug(
            "whatsapp_message_sent",
            extra={"endpoint": endpoint, "status_code": response.status_code},
        )
        return response_data


def create_whatsapp_http_client(
    settings: WhatsAppSettings | None = None,
) -> WhatsAppHttpClient:
    """Factory para criar cliente WhatsApp com config das settings.

    Args:
        settings: WhatsAppSettings opcional. Se None, carrega do ambiente.
    """
    # Import local para evitar dependência circular
    from config.settings import get_whatsapp_settings

    whatsapp = settings or get_whatsapp_settings()
    config = HttpClientConfig(
        timeout_seconds=whatsapp.request_timeout_seconds,
        max_retries=whatsapp.max_retries,
    )
    return WhatsAppHttpClient(config=config)
