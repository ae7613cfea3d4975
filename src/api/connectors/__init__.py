"""Connectors: adapters de borda para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Business API (envio de mensagens)
- catalog/: busca de catálogo de diamantes

Cada colaborador tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
