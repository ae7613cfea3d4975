"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="diamond-flow-endpoint")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("catalog_lookup_completed", extra={"item_count": 3})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "diamond-flow-endpoint"

# Bibliotecas que logam URLs completas por request (a URL do catálogo
# carrega o id do deployment do Apps Script)
QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado no root logger.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).
    Handlers existentes são substituídos por um único handler JSON com
    injeção de correlation_id e redação de campos sensíveis.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [_build_handler(level_upper, service_name, correlation_id_getter)]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _build_handler(
    level: str,
    service_name: str,
    correlation_id_getter: Callable[[], str] | None,
) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    # Redação roda depois da injeção de contexto, antes do formatter
    handler.addFilter(SensitiveFieldFilter())
    return handler


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado (geralmente ``__name__``)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um caminho alternativo foi acionado (sem PII).

    Ex: recuperação da tag GCM a partir do fim do ciphertext, que muda o
    que conta como "autenticado" e precisa ser observável em produção.

    Args:
        logger: Logger do módulo que aplicou o fallback.
        component: Nome do componente (ex: "flow_payload_decrypt").
        reason: Razão do fallback, sem PII.
        elapsed_ms: Tempo decorrido em ms (quando aplicável).
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms
    logger.info(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
