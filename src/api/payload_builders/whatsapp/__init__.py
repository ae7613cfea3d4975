"""Builders de payload para API Meta/WhatsApp.

Um builder por tipo de mensagem usada pelo endpoint de Flows.
"""

from api.payload_builders.whatsapp.base import build_base_payload
from api.payload_builders.whatsapp.interactive import ItemCardPayloadBuilder, format_item_body
from api.payload_builders.whatsapp.text import TextPayloadBuilder

__all__ = [
    "ItemCardPayloadBuilder",
    "TextPayloadBuilder",
    "build_base_payload",
    "format_item_body",
]
