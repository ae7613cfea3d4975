"""Decodificação base64 tolerante para campos do envelope."""

from __future__ import annotations

import base64
import binascii
import re

from .errors import InvalidEncodingError

# Alfabeto padrão + URL-safe (padding já removido)
_BASE64_CHARS = re.compile(r"[A-Za-z0-9+/_\-]+")


def decode_base64(raw_value: object) -> bytes:
    """Decodifica base64 padrão ou URL-safe, com ou sem padding.

    Valor vazio ou não-string retorna ``b""``; o chamador deve tratar
    isso como campo ausente.

    Raises:
        InvalidEncodingError: Se o valor contém caracteres fora do alfabeto
            ou tem comprimento impossível para base64.
    """
    if not isinstance(raw_value, str):
        return b""
    value = raw_value.strip().rstrip("=")
    if not value:
        return b""
    if not _BASE64_CHARS.fullmatch(value):
        raise InvalidEncodingError("Invalid base64 payload: invalid characters in input")

    normalized = value.replace("+", "-").replace("/", "_")
    padded = normalized + ("=" * (-len(normalized) % 4))
    try:
        return base64.urlsafe_b64decode(padded)
    except (ValueError, binascii.Error) as exc:
        raise InvalidEncodingError(f"Invalid base64 payload: {exc}") from exc
