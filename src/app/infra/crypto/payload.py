"""Descriptografia autenticada (AES-GCM) do payload de Flows."""

from __future__ import annotations

import json
import logging
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from config.logging import log_fallback

from .constants import AES_KEY_SIZES_ALLOWED, TAG_SIZE
from .errors import (
    AuthenticationFailedError,
    MissingTagError,
    PayloadFormatError,
    UnsupportedKeySizeError,
)

logger = logging.getLogger(__name__)


def split_tag_from_tail(ciphertext: bytes) -> tuple[bytes, bytes]:
    """Modo fallback: trata os últimos 16 bytes do ciphertext como tag GCM.

    Usado apenas quando o envelope não traz a tag em campo próprio.
    Não é comportamento de protocolo: é uma suposição de interoperabilidade.

    Returns:
        (ciphertext sem a tag, tag)

    Raises:
        MissingTagError: Se não sobra ciphertext após remover a tag.
    """
    if len(ciphertext) <= TAG_SIZE:
        raise MissingTagError(
            f"Ciphertext too short to carry a tag: {len(ciphertext)} bytes"
        )
    return ciphertext[:-TAG_SIZE], ciphertext[-TAG_SIZE:]


def decrypt_payload(
    ciphertext: bytes,
    iv: bytes,
    tag: bytes | None,
    aes_key: bytes,
    *,
    allow_tag_fallback: bool = True,
) -> Any:
    """Descriptografa e parseia o payload JSON do Flow.

    A força do AES (128/192/256) vem exclusivamente do tamanho da chave.
    Falha de autenticação nunca expõe plaintext parcial.

    Args:
        ciphertext: Dados criptografados (sem tag, se `tag` informada)
        iv: Nonce GCM
        tag: Tag de autenticação separada (16 bytes); vazia/None aciona o fallback
        aes_key: Chave AES recuperada via RSA-OAEP
        allow_tag_fallback: Se False, tag ausente é erro imediato

    Returns:
        Valor JSON descriptografado

    Raises:
        UnsupportedKeySizeError: Chave fora de 16/24/32 bytes
        MissingTagError: Tag ausente e não recuperável
        AuthenticationFailedError: Tag de tamanho inválido ou tag/IV/ciphertext
            não autenticam
        PayloadFormatError: Plaintext não é JSON UTF-8
    """
    if len(aes_key) not in AES_KEY_SIZES_ALLOWED:
        raise UnsupportedKeySizeError(f"Invalid AES key size: {len(aes_key)}")

    if tag:
        if len(tag) != TAG_SIZE:
            raise AuthenticationFailedError(f"Invalid authentication tag size: {len(tag)}")
        body, resolved_tag = ciphertext, tag
    elif allow_tag_fallback:
        body, resolved_tag = split_tag_from_tail(ciphertext)
        log_fallback(logger, "flow_payload_decrypt", reason="tag_recovered_from_ciphertext_tail")
    else:
        raise MissingTagError("Authentication tag missing and tail fallback disabled")

    try:
        plaintext = AESGCM(aes_key).decrypt(iv, body + resolved_tag, None)
    except InvalidTag as exc:
        raise AuthenticationFailedError("Flow payload authentication failed") from exc
    except ValueError as exc:
        # Nonce de tamanho inválido para GCM
        raise AuthenticationFailedError(f"Flow payload decryption rejected: {exc}") from exc

    try:
        return json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PayloadFormatError(f"Flow payload is not valid JSON: {type(exc).__name__}") from exc
