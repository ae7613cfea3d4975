"""Testes para descriptografia autenticada do payload (AES-GCM)."""

from __future__ import annotations

import logging
import os

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.infra.crypto import (
    AuthenticationFailedError,
    MissingTagError,
    PayloadFormatError,
    UnsupportedKeySizeError,
    decrypt_payload,
    split_tag_from_tail,
)
from fakes.flow_envelopes import encrypt_json

PAYLOAD = {"from": "15551234567", "shape": "round", "min_carat": 1.0, "color": "D"}


def _flip_bit(data: bytes, index: int = 0) -> bytes:
    mutable = bytearray(data)
    mutable[index] ^= 0x01
    return bytes(mutable)


@pytest.mark.parametrize("size", [16, 24, 32])
def test_decrypts_with_separate_tag(size: int) -> None:
    key, iv = os.urandom(size), os.urandom(12)
    ciphertext, tag = encrypt_json(PAYLOAD, key, iv)

    assert decrypt_payload(ciphertext, iv, tag, key) == PAYLOAD


def test_tail_fallback_matches_separate_tag() -> None:
    key, iv = os.urandom(16), os.urandom(12)
    ciphertext, tag = encrypt_json(PAYLOAD, key, iv)

    separate = decrypt_payload(ciphertext, iv, tag, key)
    fallback = decrypt_payload(ciphertext + tag, iv, None, key)

    assert separate == fallback == PAYLOAD


def test_tail_fallback_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    key, iv = os.urandom(16), os.urandom(12)
    ciphertext, tag = encrypt_json(PAYLOAD, key, iv)

    with caplog.at_level(logging.INFO):
        decrypt_payload(ciphertext + tag, iv, b"", key)

    assert any(getattr(record, "fallback_used", False) for record in caplog.records)


def test_fallback_disabled_requires_tag() -> None:
    key, iv = os.urandom(16), os.urandom(12)
    ciphertext, tag = encrypt_json(PAYLOAD, key, iv)

    with pytest.raises(MissingTagError):
        decrypt_payload(ciphertext + tag, iv, None, key, allow_tag_fallback=False)


def test_ciphertext_too_short_for_tail_tag() -> None:
    with pytest.raises(MissingTagError):
        decrypt_payload(os.urandom(16), os.urandom(12), None, os.urandom(16))


@pytest.mark.parametrize("target", ["ciphertext", "tag", "iv"])
def test_single_bit_flip_fails_authentication(target: str) -> None:
    key, iv = os.urandom(32), os.urandom(12)
    ciphertext, tag = encrypt_json(PAYLOAD, key, iv)
    parts = {"ciphertext": ciphertext, "tag": tag, "iv": iv}
    parts[target] = _flip_bit(parts[target])

    with pytest.raises(AuthenticationFailedError):
        decrypt_payload(parts["ciphertext"], parts["iv"], parts["tag"], key)


def test_wrong_key_fails_authentication() -> None:
    iv = os.urandom(12)
    ciphertext, tag = encrypt_json(PAYLOAD, os.urandom(16), iv)

    with pytest.raises(AuthenticationFailedError):
        decrypt_payload(ciphertext, iv, tag, os.urandom(16))


@pytest.mark.parametrize("size", [0, 8, 15, 20, 31, 64])
def test_unsupported_key_size(size: int) -> None:
    with pytest.raises(UnsupportedKeySizeError):
        decrypt_payload(b"x" * 40, os.urandom(12), os.urandom(16), b"k" * size)


def test_non_json_plaintext_raises_format_error() -> None:
    key, iv = os.urandom(16), os.urandom(12)
    sealed = AESGCM(key).encrypt(iv, b"not json", None)

    with pytest.raises(PayloadFormatError):
        decrypt_payload(sealed, iv, None, key)


def test_split_tag_from_tail() -> None:
    body, tag = split_tag_from_tail(b"a" * 5 + b"t" * 16)
    assert body == b"aaaaa"
    assert tag == b"t" * 16


@pytest.mark.parametrize("tag_size", [4, 12, 15, 17, 32])
def test_separate_tag_must_have_gcm_size(tag_size: int) -> None:
    """Tag separada com tamanho errado não é re-dividida pelo AES-GCM."""
    key, iv = os.urandom(16), os.urandom(12)
    ciphertext, tag = encrypt_json(PAYLOAD, key, iv)
    # Realoca bytes entre ciphertext e tag mantendo a concatenação idêntica
    sealed = ciphertext + tag
    body, bad_tag = sealed[:-tag_size], sealed[-tag_size:]

    with pytest.raises(AuthenticationFailedError, match="tag size"):
        decrypt_payload(body, iv, bad_tag, key)
