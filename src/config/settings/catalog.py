"""Settings do colaborador de busca de catálogo (Apps Script)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class CatalogSettings:
    """Configurações do endpoint de catálogo.

    Attributes:
        lookup_url: URL que recebe os filtros e devolve ``{"diamonds": [...]}``
        request_timeout_seconds: Timeout por requisição
        max_retries: Tentativas extras em 429/5xx/falha de conexão
    """

    lookup_url: str = ""
    request_timeout_seconds: float = 15.0
    max_retries: int = 2

    def validate(self) -> list[str]:
        """Valida configurações do catálogo.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.lookup_url:
            errors.append("CATALOG_LOOKUP_URL não configurado")
        elif not self.lookup_url.startswith(("https://", "http://")):
            errors.append("CATALOG_LOOKUP_URL deve ser uma URL http(s)")

        if self.request_timeout_seconds <= 0:
            errors.append("CATALOG_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("CATALOG_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> CatalogSettings:
    """Carrega CatalogSettings a partir de variáveis de ambiente."""
    return CatalogSettings(
        lookup_url=os.getenv("CATALOG_LOOKUP_URL", os.getenv("GOOGLE_SCRIPT_URL", "")),
        request_timeout_seconds=float(os.getenv("CATALOG_REQUEST_TIMEOUT_SECONDS", "15")),
        max_retries=int(os.getenv("CATALOG_MAX_RETRIES", "2")),
    )


@lru_cache(maxsize=1)
def get_catalog_settings() -> CatalogSettings:
    """Retorna instância cacheada de CatalogSettings."""
    return _load_from_env()
