"""Erros e helpers de parsing para API Meta/WhatsApp."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Códigos HTTP que não adianta repetir
_PERMANENT_HTTP_CODES = frozenset({400, 401, 403, 404, 413})

# Códigos Graph API de throttling (transitórios)
_THROTTLING_CODES = frozenset({4, 80007, 130429, 131048, 131056})

_PERMANENT_TYPES = frozenset({"OAuthException", "InvalidRequest"})


@dataclass(frozen=True)
class WhatsAppApiError:
    """Erro retornado pela API Meta/WhatsApp (sem a mensagem original)."""

    error_type: str
    error_code: int
    is_permanent: bool  # True se erro não é retentável


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Classifica erro como permanente ou transitório.

    Throttling (ex: 130429) é sempre transitório, mesmo com tipo
    OAuthException; códigos 4xx conhecidos e tipos de request inválido
    são permanentes.
    """
    if error_code in _THROTTLING_CODES:
        return False
    if error_code in _PERMANENT_HTTP_CODES:
        return True
    return error_type in _PERMANENT_TYPES


def parse_meta_error(response_data: Any) -> WhatsAppApiError | None:
    """Extrai informações de erro do response da Meta.

    Returns:
        WhatsAppApiError se houver erro, None se sucesso
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = str(error_obj.get("type") or "unknown")
    raw_code = error_obj.get("code", 0)
    error_code = raw_code if isinstance(raw_code, int) else 0

    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        is_permanent=is_permanent_error(error_code, error_type),
    )
