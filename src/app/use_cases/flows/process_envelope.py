"""Use case do pipeline de envelope criptografado de Flows.

Fluxo por request:
1. Classifica: ping externo, envelope candidato ou tráfego não reconhecido
2. Decodifica os campos uma vez (campo que decodifica vazio conta como ausente)
3. Recupera a chave AES via RSA-OAEP
4. Descriptografa e autentica o payload (AES-GCM)
5. Ping interno encerra; senão busca no catálogo e envia as mensagens

Nenhuma falha é repetida internamente e nenhum fragmento de chave,
ciphertext ou plaintext sai do pipeline (nem em logs).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.domain.catalog import CatalogFilters
from app.infra.crypto import (
    FlowCryptoError,
    KeyMismatchError,
    PayloadFormatError,
    decrypt_payload,
    unwrap_wrapped_key,
)

from .deliver_catalog import DeliverCatalogResultsUseCase
from .envelope_fields import (
    WRAPPED_KEY_ALIASES,
    DecodedEnvelope,
    EnvelopeFieldEncodingError,
    MissingFieldsError,
    decode_envelope_fields,
    extract_envelope_fields,
    has_provider_metadata,
    is_keepalive,
)
from .states import SUCCESS_STATES, Classification, FailureReason, PipelineState

if TYPE_CHECKING:
    from app.infra.crypto import PrivateKeyMaterial
    from app.protocols.catalog import CatalogLookupProtocol
    from app.protocols.outbound_sender import MessageSenderProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "flow_envelope"


@dataclass(frozen=True, slots=True)
class EnvelopeContext:
    """Contexto imutável montado uma vez no startup.

    A chave privada é o único recurso compartilhado entre requests
    (somente leitura).
    """

    private_key: PrivateKeyMaterial
    catalog: CatalogLookupProtocol
    sender: MessageSenderProtocol
    tag_fallback_enabled: bool = True


@dataclass(frozen=True, slots=True)
class EnvelopeOutcome:
    """Resultado terminal de uma execução do pipeline."""

    state: PipelineState
    classification: Classification | None = None
    failure: FailureReason | None = None
    missing_fields: tuple[str, ...] = field(default_factory=tuple)
    received_keys: tuple[str, ...] = field(default_factory=tuple)
    messages_sent: int = 0
    keepalive: bool = False

    @property
    def succeeded(self) -> bool:
        return self.state in SUCCESS_STATES


class ProcessFlowEnvelopeUseCase:
    """Orquestra classificação, decriptografia e entrega de um envelope."""

    def __init__(self, context: EnvelopeContext) -> None:
        self._context = context
        self._delivery = DeliverCatalogResultsUseCase(
            catalog=context.catalog,
            sender=context.sender,
        )

    async def execute(self, raw_request: dict[str, Any]) -> EnvelopeOutcome:
        """Executa o pipeline completo para um request já parseado."""
        if is_keepalive(raw_request):
            logger.info("flow_keepalive", extra={"component": _COMPONENT, "stage": "outer"})
            return EnvelopeOutcome(
                state=PipelineState.CLASSIFIED,
                classification=Classification.KEEPALIVE,
                keepalive=True,
            )

        fields = extract_envelope_fields(raw_request)
        if fields.is_empty and has_provider_metadata(raw_request):
            logger.info("flow_request_ignored", extra={"component": _COMPONENT})
            return EnvelopeOutcome(
                state=PipelineState.CLASSIFIED,
                classification=Classification.IGNORED,
            )

        try:
            envelope = decode_envelope_fields(raw_request, fields)
        except MissingFieldsError as exc:
            logger.warning(
                "flow_envelope_missing_fields",
                extra={
                    "component": _COMPONENT,
                    "missing": exc.missing,
                    "received_keys": exc.received_keys,
                },
            )
            return EnvelopeOutcome(
                state=PipelineState.FAILED,
                classification=Classification.CANDIDATE,
                failure=FailureReason.MISSING_FIELDS,
                missing_fields=tuple(exc.missing),
                received_keys=tuple(exc.received_keys),
            )
        except EnvelopeFieldEncodingError as exc:
            logger.error(
                "flow_envelope_field_invalid",
                extra={"component": _COMPONENT, "field": exc.field},
            )
            if exc.field == WRAPPED_KEY_ALIASES[0]:
                return self._failed(FailureReason.KEY_UNWRAP)
            return self._failed(FailureReason.PAYLOAD_DECRYPT)

        try:
            aes_key = unwrap_wrapped_key(envelope.wrapped_key, self._context.private_key)
        except KeyMismatchError as exc:
            logger.error(
                "flow_key_mismatch",
                extra={
                    "component": _COMPONENT,
                    "wrapped_key_bytes": exc.wrapped_key_bytes,
                    "modulus_bytes": exc.modulus_bytes,
                },
            )
            return self._failed(FailureReason.KEY_UNWRAP)
        except FlowCryptoError as exc:
            logger.error(
                "flow_key_unwrap_failed",
                extra={"component": _COMPONENT, "error_type": type(exc).__name__},
            )
            return self._failed(FailureReason.KEY_UNWRAP)

        try:
            payload = self._decrypt(envelope, aes_key)
        except FlowCryptoError as exc:
            logger.error(
                "flow_payload_decrypt_failed",
                extra={"component": _COMPONENT, "error_type": type(exc).__name__},
            )
            return self._failed(FailureReason.PAYLOAD_DECRYPT)
        finally:
            del aes_key

        if is_keepalive(payload):
            logger.info("flow_keepalive", extra={"component": _COMPONENT, "stage": "inner"})
            return EnvelopeOutcome(
                state=PipelineState.PAYLOAD_DECRYPTED,
                classification=Classification.CANDIDATE,
                keepalive=True,
            )

        recipient = payload.get("from")
        if not isinstance(recipient, str) or not recipient.strip():
            logger.error(
                "flow_payload_decrypt_failed",
                extra={"component": _COMPONENT, "error_type": PayloadFormatError.__name__},
            )
            return self._failed(FailureReason.PAYLOAD_DECRYPT)

        filters = CatalogFilters.from_payload(payload)
        try:
            sent = await self._delivery.execute(recipient, filters)
        except Exception as exc:
            logger.error(
                "flow_delivery_failed",
                extra={"component": _COMPONENT, "error_type": type(exc).__name__},
            )
            return self._failed(FailureReason.DELIVERY)

        logger.info(
            "flow_envelope_delivered",
            extra={"component": _COMPONENT, "messages_sent": sent},
        )
        return EnvelopeOutcome(
            state=PipelineState.DELIVERED,
            classification=Classification.CANDIDATE,
            messages_sent=sent,
        )

    def _decrypt(self, envelope: DecodedEnvelope, aes_key: bytes) -> dict[str, Any]:
        payload = decrypt_payload(
            envelope.ciphertext,
            envelope.iv,
            envelope.tag or None,
            aes_key,
            allow_tag_fallback=self._context.tag_fallback_enabled,
        )
        if not isinstance(payload, dict):
            raise PayloadFormatError("Flow payload must be a JSON object")
        return payload

    @staticmethod
    def _failed(reason: FailureReason) -> EnvelopeOutcome:
        return EnvelopeOutcome(
            state=PipelineState.FAILED,
            classification=Classification.CANDIDATE,
            failure=reason,
        )
