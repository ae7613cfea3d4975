"""Builder para o card interativo de item do catálogo.

Formato: header com imagem, corpo com título/subtítulo/certificado e
um único botão de resposta cujo id codifica ação + id do item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.whatsapp.base import build_base_payload

if TYPE_CHECKING:
    from app.domain.catalog import CatalogItem

ADD_TO_CART_TITLE = "🛒 Add to Cart"


def format_item_body(item: CatalogItem) -> str:
    """Texto do corpo do card (markdown do WhatsApp)."""
    return f"💎 *{item.title}*\n{item.subtitle}\n📄 Certificate: {item.certificate_url}"


class ItemCardPayloadBuilder:
    """Builder para mensagem interativa do tipo ``button`` com imagem."""

    def build(self, to: str, item: CatalogItem) -> dict[str, Any]:
        """Constrói payload completo do card de um item."""
        payload = build_base_payload(to, "interactive")
        payload["interactive"] = {
            "type": "button",
            "header": {
                "type": "image",
                "image": {"link": item.image_url},
            },
            "body": {"text": format_item_body(item)},
            "action": {
                "buttons": [
                    {
                        "type": "reply",
                        "reply": {
                            "id": item.reply_id,
                            "title": ADD_TO_CART_TITLE,
                        },
                    }
                ]
            },
        }
        return payload
