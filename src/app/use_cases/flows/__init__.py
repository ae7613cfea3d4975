"""Use cases do endpoint de WhatsApp Flows (envelope criptografado)."""

from .deliver_catalog import DeliverCatalogResultsUseCase
from .envelope_fields import (
    DecodedEnvelope,
    EnvelopeFieldEncodingError,
    EnvelopeFields,
    MissingFieldsError,
    decode_envelope_fields,
    extract_envelope_fields,
)
from .process_envelope import EnvelopeContext, EnvelopeOutcome, ProcessFlowEnvelopeUseCase
from .states import Classification, FailureReason, PipelineState

__all__ = [
    "Classification",
    "DecodedEnvelope",
    "DeliverCatalogResultsUseCase",
    "EnvelopeContext",
    "EnvelopeFieldEncodingError",
    "EnvelopeFields",
    "EnvelopeOutcome",
    "FailureReason",
    "MissingFieldsError",
    "PipelineState",
    "ProcessFlowEnvelopeUseCase",
    "decode_envelope_fields",
    "extract_envelope_fields",
]
