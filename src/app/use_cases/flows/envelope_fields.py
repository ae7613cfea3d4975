"""Extração dos campos do envelope criptografado de Flows.

Cada campo lógico tem uma lista fixa e ordenada de aliases aceitos.
A busca tenta o nível superior primeiro e, se nada casar, percorre a
estrutura em largura até ``MAX_SEARCH_DEPTH`` níveis.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any

from app.infra.crypto import InvalidEncodingError, decode_base64

WRAPPED_KEY_ALIASES: tuple[str, ...] = ("encrypted_aes_key", "encryptedAesKey")
CIPHERTEXT_ALIASES: tuple[str, ...] = ("encrypted_flow_data", "encryptedFlowData")
IV_ALIASES: tuple[str, ...] = ("initial_vector", "initialVector", "initial_vectors", "iv")
TAG_ALIASES: tuple[str, ...] = ("authentication_tag", "authenticationTag", "auth_tag", "tag")

MAX_SEARCH_DEPTH = 8

KEEPALIVE_ACTION = "ping"

# Campos de entrega genérica do provider (ex: webhook de mensagens da Meta)
PROVIDER_METADATA_MARKERS: tuple[str, ...] = ("object", "entry")


class MissingFieldsError(ValueError):
    """Envelope sem algum dos campos obrigatórios (erro do cliente)."""

    def __init__(self, missing: list[str], received_keys: list[str]) -> None:
        super().__init__(f"Missing encrypted fields: {', '.join(missing)}")
        self.missing = missing
        self.received_keys = received_keys


class EnvelopeFieldEncodingError(InvalidEncodingError):
    """Campo presente mas não é base64 válido; ``field`` é o nome canônico."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Invalid base64 in envelope field: {field}")
        self.field = field


@dataclass(frozen=True, slots=True)
class EnvelopeFields:
    """Campos do envelope ainda codificados em base64 (``None`` = ausente)."""

    wrapped_key: str | None = None
    ciphertext: str | None = None
    iv: str | None = None
    tag: str | None = None

    @property
    def is_empty(self) -> bool:
        return not any((self.wrapped_key, self.ciphertext, self.iv, self.tag))

    def missing_required(self) -> list[str]:
        """Nomes canônicos dos campos obrigatórios ausentes, em ordem fixa."""
        return [name for name, value in self.required_items() if not value]

    def required_items(self) -> tuple[tuple[str, str | None], ...]:
        return (
            (WRAPPED_KEY_ALIASES[0], self.wrapped_key),
            (CIPHERTEXT_ALIASES[0], self.ciphertext),
            (IV_ALIASES[0], self.iv),
        )


@dataclass(frozen=True, slots=True)
class DecodedEnvelope:
    """Campos do envelope já em bytes; ``tag`` vazia aciona o fallback."""

    wrapped_key: bytes
    ciphertext: bytes
    iv: bytes
    tag: bytes = b""


def extract_envelope_fields(payload: dict[str, Any]) -> EnvelopeFields:
    """Localiza os quatro campos do envelope em um request de formato livre."""
    return EnvelopeFields(
        wrapped_key=find_field(payload, WRAPPED_KEY_ALIASES),
        ciphertext=find_field(payload, CIPHERTEXT_ALIASES),
        iv=find_field(payload, IV_ALIASES),
        tag=find_field(payload, TAG_ALIASES),
    )


def decode_envelope_fields(payload: dict[str, Any], fields: EnvelopeFields) -> DecodedEnvelope:
    """Decodifica os campos uma única vez, antes de qualquer operação RSA/AES.

    Campo obrigatório que decodifica para zero bytes conta como ausente.
    Campos ausentes têm precedência sobre erros de encoding.

    Raises:
        MissingFieldsError: Com os campos ausentes e as chaves recebidas.
        EnvelopeFieldEncodingError: Com o primeiro campo de base64 inválido.
    """
    decoded: dict[str, bytes] = {}
    missing: list[str] = []
    invalid: list[str] = []
    for name, value in (*fields.required_items(), (TAG_ALIASES[0], fields.tag)):
        try:
            decoded[name] = decode_base64(value)
        except InvalidEncodingError:
            invalid.append(name)
            continue
        if not decoded[name] and name != TAG_ALIASES[0]:
            missing.append(name)

    if missing:
        raise MissingFieldsError(missing, received_top_level_keys(payload))
    if invalid:
        raise EnvelopeFieldEncodingError(invalid[0])

    return DecodedEnvelope(
        wrapped_key=decoded[WRAPPED_KEY_ALIASES[0]],
        ciphertext=decoded[CIPHERTEXT_ALIASES[0]],
        iv=decoded[IV_ALIASES[0]],
        tag=decoded[TAG_ALIASES[0]],
    )


def find_field(
    payload: dict[str, Any],
    aliases: tuple[str, ...],
    max_depth: int = MAX_SEARCH_DEPTH,
) -> str | None:
    """Retorna o primeiro valor string não-vazio entre os aliases.

    Ordem: aliases no nível superior; depois busca em largura sobre
    objetos/listas aninhados, limitada por ``max_depth``.
    """
    top_level = _match_aliases(payload, aliases)
    if top_level is not None:
        return top_level
    return _breadth_first_search(payload, aliases, max_depth)


def _match_aliases(node: dict[str, Any], aliases: tuple[str, ...]) -> str | None:
    for alias in aliases:
        value = node.get(alias)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _breadth_first_search(
    root: dict[str, Any],
    aliases: tuple[str, ...],
    max_depth: int,
) -> str | None:
    queue: deque[tuple[Any, int]] = deque([(root, 0)])
    while queue:
        node, depth = queue.popleft()
        if isinstance(node, dict):
            if depth > 0:
                match = _match_aliases(node, aliases)
                if match is not None:
                    return match
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        if depth >= max_depth:
            continue
        queue.extend(
            (child, depth + 1) for child in children if isinstance(child, (dict, list))
        )
    return None


def is_keepalive(payload: dict[str, Any]) -> bool:
    """True se o objeto traz ``action == "ping"``."""
    return payload.get("action") == KEEPALIVE_ACTION


def has_provider_metadata(payload: dict[str, Any]) -> bool:
    """True se o corpo parece um evento de entrega do provider, não um envelope."""
    return any(marker in payload for marker in PROVIDER_METADATA_MARKERS)


def received_top_level_keys(payload: dict[str, Any]) -> list[str]:
    """Nomes das chaves de nível superior (nunca os valores)."""
    return sorted(str(key) for key in payload)
