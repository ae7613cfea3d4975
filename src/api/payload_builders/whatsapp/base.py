"""Campos comuns a todo payload de mensagem da API Meta."""

from __future__ import annotations

from typing import Any

MESSAGING_PRODUCT = "whatsapp"


def build_base_payload(to: str, message_type: str) -> dict[str, Any]:
    """Monta o envelope base (produto, destinatário e tipo)."""
    if not to or not to.strip():
        raise ValueError("Destinatário (to) é obrigatório")
    return {
        "messaging_product": MESSAGING_PRODUCT,
        "recipient_type": "individual",
        "to": to,
        "type": message_type,
    }
