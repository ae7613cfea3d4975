"""Modelos de domínio do catálogo de diamantes.

Contratos compartilhados entre o pipeline de flows e o colaborador de
catálogo, sem acoplar ao formato do provider externo.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue

# Separador entre tag de ação e id do item em botões de resposta
REPLY_ID_SEPARATOR = "::"
ADD_TO_CART_ACTION = "add_to_cart"


class CatalogFilters(BaseModel):
    """Critérios de busca enviados ao catálogo (todos opcionais).

    Valores JSON seguem sem conversão: o catálogo decide como
    interpretar número, texto ou lista.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    shape: JsonValue = Field(default=None, description="Lapidação (ex: round).")
    min_carat: JsonValue = Field(default=None, description="Quilate mínimo.")
    max_carat: JsonValue = Field(default=None, description="Quilate máximo.")
    color: JsonValue = Field(default=None, description="Grau de cor (ex: D, E).")
    clarity: JsonValue = Field(default=None, description="Grau de pureza (ex: VS1).")

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> CatalogFilters:
        """Extrai os cinco filtros de um payload descriptografado."""
        return cls.model_validate({name: payload.get(name) for name in cls.model_fields})


class CatalogItem(BaseModel):
    """Registro retornado pela busca de catálogo."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    stone_id: str = Field(..., description="Identificador da pedra.")
    title: str = Field(default="", description="Título exibido no card.")
    subtitle: str = Field(default="", description="Linha de detalhes do card.")
    image_url: str = Field(default="", description="URL da imagem do card.")
    certificate_url: str = Field(default="", description="URL do certificado.")

    @property
    def reply_id(self) -> str:
        """Id do botão de resposta: ``add_to_cart::<stone_id>``."""
        return f"{ADD_TO_CART_ACTION}{REPLY_ID_SEPARATOR}{self.stone_id}"
