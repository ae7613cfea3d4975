"""API: camada de borda e adapters externos.

Responsabilidades:
- Receber o envelope de Flows via HTTP
- Falar com colaboradores externos (catálogo, Graph API)
- Construir payloads para APIs externas

Subpastas:
- connectors/: clientes HTTP por colaborador
- payload_builders/: construção de payloads de mensagem
- routes/: endpoints HTTP (flows, health)

NÃO PODE conter: decriptografia, classificação de envelope, orquestração.
"""
