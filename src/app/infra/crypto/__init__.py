"""Módulo de criptografia para envelopes de WhatsApp Flows.

Pipeline de duas etapas:
- RSA-OAEP (SHA-256) recupera a chave AES do envelope
- AES-GCM autentica e descriptografa o payload JSON

Localizado em app/infra/ para manter boundaries corretas:
- app/ não importa de api/ (exceto via bootstrap)
- Este módulo é usado pelos use cases de flows em app/
"""

from .constants import AES_KEY_SIZES_ALLOWED, TAG_SIZE
from .encoding import decode_base64
from .errors import (
    AuthenticationFailedError,
    FlowCryptoError,
    InvalidEncodingError,
    InvalidPrivateKeyError,
    KeyMismatchError,
    MissingTagError,
    PayloadFormatError,
    UnsupportedKeySizeError,
    UnwrapError,
)
from .keys import (
    PrivateKeyMaterial,
    load_private_key,
    load_private_key_file,
    unwrap_aes_key,
    unwrap_wrapped_key,
)
from .payload import decrypt_payload, split_tag_from_tail

__all__ = [
    "AES_KEY_SIZES_ALLOWED",
    "TAG_SIZE",
    "AuthenticationFailedError",
    "FlowCryptoError",
    "InvalidEncodingError",
    "InvalidPrivateKeyError",
    "KeyMismatchError",
    "MissingTagError",
    "PayloadFormatError",
    "PrivateKeyMaterial",
    "UnsupportedKeySizeError",
    "UnwrapError",
    "decode_base64",
    "decrypt_payload",
    "load_private_key",
    "load_private_key_file",
    "split_tag_from_tail",
    "unwrap_aes_key",
    "unwrap_wrapped_key",
]
