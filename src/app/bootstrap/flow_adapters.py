"""Adapters concretos para o endpoint de Flows (wiring em app/bootstrap).

Este módulo é o único autorizado a acoplar app <-> api.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.payload_builders.whatsapp import ItemCardPayloadBuilder, TextPayloadBuilder
from app.protocols.outbound_sender import MessageSenderProtocol

if TYPE_CHECKING:
    from api.connectors.whatsapp.http_client import WhatsAppHttpClient
    from app.domain.catalog import CatalogItem

logger = logging.getLogger(__name__)


class GraphApiMessageSender(MessageSenderProtocol):
    """Sender de mensagens usando o cliente HTTP WhatsApp.

    Endpoint e token são resolvidos no startup e ficam fixos.
    """

    def __init__(
        self,
        http_client: WhatsAppHttpClient,
        endpoint: str,
        access_token: str,
    ) -> None:
        self._http_client = http_client
        self._endpoint = endpoint
        self._access_token = access_token
        self._text_builder = TextPayloadBuilder()
        self._card_builder = ItemCardPayloadBuilder()

    async def send_text(self, to: str, body: str) -> dict[str, Any]:
        return await self._send(self._text_builder.build(to, body), "text")

    async def send_item_card(self, to: str, item: CatalogItem) -> dict[str, Any]:
        return await self._send(self._card_builder.build(to, item), "interactive")

    async def _send(self, payload: dict[str, Any], message_type: str) -> dict[str, Any]:
        response = await self._http_client.send_message(
            endpoint=self._endpoint,
            access_token=self._access_token,
            payload=payload,
        )
        messages = response.get("messages")
        message_id = "unknown"
        if isinstance(messages, list) and messages and isinstance(messages[0], dict):
            message_id = str(messages[0].get("id", "unknown"))
        logger.info(
            "message_sent_to_whatsapp_api",
            extra={"message_id": message_id, "message_type": message_type},
        )
        return response
