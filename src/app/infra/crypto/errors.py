"""Erros de criptografia para envelopes de WhatsApp Flows.

Definido em app/infra para manter boundaries corretas.
Cada classe corresponde a um estágio do pipeline, para que o orquestrador
classifique a falha sem inspecionar mensagens.
"""

from __future__ import annotations


class FlowCryptoError(Exception):
    """Erro em operação criptográfica de Flow."""


class InvalidPrivateKeyError(FlowCryptoError):
    """Chave privada RSA não pôde ser carregada."""


class InvalidEncodingError(FlowCryptoError):
    """Campo presente, mas não é base64 válido."""


class KeyMismatchError(FlowCryptoError):
    """Tamanho da chave AES cifrada difere do módulo da chave privada.

    Indica par de chaves errado configurado (erro de operador),
    e não uma falha criptográfica transitória.
    """

    def __init__(self, wrapped_key_bytes: int, modulus_bytes: int) -> None:
        super().__init__(
            f"Wrapped key has {wrapped_key_bytes} bytes, "
            f"private key modulus has {modulus_bytes} bytes"
        )
        self.wrapped_key_bytes = wrapped_key_bytes
        self.modulus_bytes = modulus_bytes


class UnwrapError(FlowCryptoError):
    """Falha na decriptografia RSA-OAEP da chave AES."""


class UnsupportedKeySizeError(FlowCryptoError):
    """Chave AES recuperada não tem 16, 24 ou 32 bytes."""


class MissingTagError(FlowCryptoError):
    """Tag ausente e ciphertext curto demais para conter uma."""


class AuthenticationFailedError(FlowCryptoError):
    """Tag GCM não confere (payload adulterado ou IV/chave incorretos)."""


class PayloadFormatError(FlowCryptoError):
    """Plaintext autenticado, mas não é JSON utilizável."""
