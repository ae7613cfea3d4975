"""Conector do catálogo de diamantes (endpoint Apps Script)."""

from .client import CatalogHttpClient, create_catalog_http_client

__all__ = ["CatalogHttpClient", "create_catalog_http_client"]
