"""Use case de entrega dos resultados do catálogo ao usuário."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.catalog import CatalogFilters
    from app.protocols.catalog import CatalogLookupProtocol
    from app.protocols.outbound_sender import MessageSenderProtocol

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "❌ No matching diamonds found."
RESULTS_FOOTER_MESSAGE = "✨ That’s our top 10. Type *start over* to search again."


class DeliverCatalogResultsUseCase:
    """Busca itens no catálogo e envia um card por item, em ordem."""

    def __init__(
        self,
        catalog: CatalogLookupProtocol,
        sender: MessageSenderProtocol,
    ) -> None:
        self._catalog = catalog
        self._sender = sender

    async def execute(self, to: str, filters: CatalogFilters) -> int:
        """Executa busca + envio sequencial.

        Returns:
            Quantidade de mensagens enviadas (cards + mensagem final).
        """
        items = await self._catalog.lookup(filters)
        logger.info(
            "catalog_lookup_completed",
            extra={"component": "deliver_catalog", "item_count": len(items)},
        )

        if not items:
            await self._sender.send_text(to, NO_RESULTS_MESSAGE)
            return 1

        # Sequencial para preservar a ordem das mensagens no chat
        for item in items:
            await self._sender.send_item_card(to, item)
        await self._sender.send_text(to, RESULTS_FOOTER_MESSAGE)
        return len(items) + 1
