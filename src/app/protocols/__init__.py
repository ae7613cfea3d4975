"""Protocolos e contratos do core da aplicação."""

from .catalog import CatalogLookupProtocol
from .outbound_sender import MessageSenderProtocol

__all__ = [
    "CatalogLookupProtocol",
    "MessageSenderProtocol",
]
