"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Catálogo (colaborador externo)
from config.settings.catalog import (
    CatalogSettings,
    get_catalog_settings,
)

# Channel-specific settings
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    # Base
    "BaseSettings",
    # Catalog
    "CatalogSettings",
    "Environment",
    # Channels
    "WhatsAppSettings",
    "get_base_settings",
    "get_catalog_settings",
    "get_whatsapp_settings",
]
