"""Protocolos de envio outbound."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.catalog import CatalogItem


class MessageSenderProtocol(Protocol):
    """Contrato mínimo para enviar mensagens ao usuário do Flow."""

    async def send_text(self, to: str, body: str) -> dict[str, Any]: ...

    async def send_item_card(self, to: str, item: CatalogItem) -> dict[str, Any]: ...
