"""Operações de chave RSA para envelopes de Flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.hashes import SHA256

from .encoding import decode_base64
from .errors import InvalidPrivateKeyError, KeyMismatchError, UnwrapError

_OAEP_SHA256 = padding.OAEP(
    mgf=padding.MGF1(algorithm=SHA256()),
    algorithm=SHA256(),
    label=None,
)


@dataclass(frozen=True, slots=True)
class PrivateKeyMaterial:
    """Chave privada RSA carregada uma única vez no startup.

    Somente leitura; pode ser compartilhada entre requests concorrentes.
    """

    key: rsa.RSAPrivateKey

    @property
    def modulus_bytes(self) -> int:
        """Tamanho do módulo em bytes (ex: 256 para RSA-2048)."""
        return (self.key.key_size + 7) // 8


def load_private_key(private_key_pem: str, passphrase: str | None = None) -> PrivateKeyMaterial:
    """Carrega chave privada RSA em formato PEM.

    Args:
        private_key_pem: Chave privada em formato PEM
        passphrase: Senha da chave (opcional)

    Returns:
        PrivateKeyMaterial com a chave RSA

    Raises:
        InvalidPrivateKeyError: Se chave inválida ou não-RSA
    """
    passphrase_bytes = passphrase.encode() if passphrase and passphrase.strip() else None

    def _load(password: bytes | None) -> object:
        return serialization.load_pem_private_key(
            private_key_pem.encode("utf-8"),
            password=password,
            backend=default_backend(),
        )

    try:
        key = _load(passphrase_bytes)
    except Exception as exc:
        # Permite fallback quando a chave não está criptografada, mas uma
        # passphrase foi injetada por configuração.
        exc_text = str(exc).lower()
        if not (passphrase_bytes and "private key is not encrypted" in exc_text):
            raise InvalidPrivateKeyError(f"Invalid private key: {exc}") from exc
        try:
            key = _load(None)
        except Exception as retry_exc:
            raise InvalidPrivateKeyError(f"Invalid private key: {retry_exc}") from retry_exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise InvalidPrivateKeyError("Invalid private key: expected an RSA key")
    return PrivateKeyMaterial(key=key)


def load_private_key_file(path: str | Path, passphrase: str | None = None) -> PrivateKeyMaterial:
    """Lê arquivo PEM do disco e carrega a chave privada."""
    try:
        pem = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidPrivateKeyError(f"Private key file not readable: {exc}") from exc
    return load_private_key(pem, passphrase)


def unwrap_aes_key(encrypted_aes_key: str, private_key: PrivateKeyMaterial) -> bytes:
    """Descriptografa chave AES criptografada com RSA-OAEP (SHA-256).

    O tamanho do ciphertext é comparado com o módulo antes de qualquer
    operação RSA: divergência indica par de chaves errado.

    Args:
        encrypted_aes_key: Chave AES criptografada (base64)
        private_key: Chave privada carregada no startup

    Returns:
        Bytes brutos da chave AES (tamanho validado pelo decryptor)

    Raises:
        InvalidEncodingError: Se base64 inválido
        KeyMismatchError: Se tamanho difere do módulo RSA
        UnwrapError: Se decriptografia RSA falhar
    """
    return unwrap_wrapped_key(decode_base64(encrypted_aes_key), private_key)


def unwrap_wrapped_key(wrapped: bytes, private_key: PrivateKeyMaterial) -> bytes:
    """Variante de ``unwrap_aes_key`` para bytes já decodificados.

    Raises:
        KeyMismatchError: Se tamanho difere do módulo RSA
        UnwrapError: Se decriptografia RSA falhar
    """
    if len(wrapped) != private_key.modulus_bytes:
        raise KeyMismatchError(len(wrapped), private_key.modulus_bytes)

    try:
        return private_key.key.decrypt(wrapped, _OAEP_SHA256)
    except Exception as exc:
        raise UnwrapError(f"AES key decryption failed: {type(exc).__name__}") from exc
