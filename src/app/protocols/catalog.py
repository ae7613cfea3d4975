"""Protocolo do colaborador de busca de catálogo."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.catalog import CatalogFilters, CatalogItem


class CatalogLookupProtocol(Protocol):
    """Contrato mínimo para buscar itens do catálogo por filtros."""

    async def lookup(self, filters: CatalogFilters) -> list[CatalogItem]: ...
