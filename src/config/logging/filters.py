"""Filters de logging para injeção de contexto e redação.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço

Campos redigidos: material de chave, ciphertext, plaintext e telefones
passados por engano via ``extra``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "[redacted]"

# Atributos de LogRecord que nunca podem sair com valor real
SENSITIVE_LOG_FIELDS = frozenset(
    {
        "aes_key",
        "encrypted_aes_key",
        "encrypted_flow_data",
        "initial_vector",
        "authentication_tag",
        "plaintext",
        "payload",
        "from",
        "to",
    }
)


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Substitui por ``[redacted]`` os campos sensíveis presentes no record."""

    def __init__(self, fields: frozenset[str] = SENSITIVE_LOG_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for name in record.__dict__.keys() & self._fields:
            setattr(record, name, REDACTED)
        return True
