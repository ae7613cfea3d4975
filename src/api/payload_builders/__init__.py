"""Payload builders por canal: construção de payloads para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Business API (texto e card interativo de item)
"""

__all__: list[str] = []
