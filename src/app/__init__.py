"""App: coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: pipeline de envelope de Flows e entrega do catálogo
- infra/: implementações concretas (crypto, http)
- protocols/: contratos/interfaces dos colaboradores externos
- domain/: modelos do catálogo
- observability/: correlation_id para logs estruturados

Padrão: app executa; api adapta; config configura.
"""
