"""Cliente HTTP do colaborador de busca de catálogo.

Envia os cinco filtros como JSON e lê a lista ``diamonds`` da resposta.
Registros malformados são descartados individualmente.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.catalog import CatalogFilters, CatalogItem
from app.infra.http import HttpClient, HttpClientConfig, HttpError

if TYPE_CHECKING:
    from config.settings import CatalogSettings

logger = logging.getLogger(__name__)

RESULTS_KEY = "diamonds"


class CatalogHttpClient(HttpClient):
    """Implementa CatalogLookupProtocol sobre HTTP."""

    def __init__(
        self,
        lookup_url: str,
        config: HttpClientConfig | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(config, **kwargs)
        self._lookup_url = lookup_url

    async def lookup(self, filters: CatalogFilters) -> list[CatalogItem]:
        """Busca itens que atendem aos filtros.

        Raises:
            HttpError: Falha HTTP, status >= 400 ou corpo não-JSON
        """
        if not self._lookup_url:
            raise HttpError("catalog_lookup_url_not_configured")

        response = await self.post(self._lookup_url, json=filters.model_dump())
        if response.status_code >= 400:
            raise HttpError("catalog_http_error", status_code=response.status_code)

        try:
            body = response.json()
        except json.JSONDecodeError as exc:
            raise HttpError("catalog_invalid_json", status_code=response.status_code) from exc

        return _parse_items(body)


def _parse_items(body: Any) -> list[CatalogItem]:
    raw_items = body.get(RESULTS_KEY) if isinstance(body, dict) else None
    if not isinstance(raw_items, list):
        return []

    items: list[CatalogItem] = []
    for raw in raw_items:
        try:
            items.append(CatalogItem.model_validate(raw))
        except ValidationError:
            logger.warning("catalog_item_discarded", extra={"reason": "invalid_record"})
    return items


def create_catalog_http_client(settings: CatalogSettings | None = None) -> CatalogHttpClient:
    """Factory para criar cliente de catálogo com config das settings."""
    from config.settings import get_catalog_settings

    catalog = settings or get_catalog_settings()
    config = HttpClientConfig(
        timeout_seconds=catalog.request_timeout_seconds,
        max_retries=catalog.max_retries,
        # Web apps do Apps Script respondem POST com 302 para o resultado
        follow_redirects=True,
    )
    return CatalogHttpClient(lookup_url=catalog.lookup_url, config=config)
