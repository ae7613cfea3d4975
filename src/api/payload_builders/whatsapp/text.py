"""Builder para mensagens de texto."""

from __future__ import annotations

from typing import Any

from api.payload_builders.whatsapp.base import build_base_payload

# Limite da API Meta para corpo de texto
MAX_TEXT_BODY_LENGTH = 4096


class TextPayloadBuilder:
    """Builder para mensagens de texto simples."""

    def build(self, to: str, body: str) -> dict[str, Any]:
        """Constrói payload completo para mensagem de texto.

        Raises:
            ValueError: Se o corpo estiver vazio ou exceder o limite
        """
        if not body:
            raise ValueError("Corpo da mensagem de texto é obrigatório")
        if len(body) > MAX_TEXT_BODY_LENGTH:
            raise ValueError(f"Corpo excede {MAX_TEXT_BODY_LENGTH} caracteres")

        payload = build_base_payload(to, "text")
        payload["text"] = {
            "preview_url": False,
            "body": body,
        }
        return payload
