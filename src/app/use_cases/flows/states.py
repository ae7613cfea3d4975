"""Estados do pipeline de envelope de Flows.

Uma execução por request, sem estado persistido. Transições:
RECEIVED → CLASSIFIED → KEY_UNWRAPPED → PAYLOAD_DECRYPTED → DELIVERED,
com FAILED alcançável a partir de qualquer estado.
"""

from enum import StrEnum


class PipelineState(StrEnum):
    """Estado alcançado pelo pipeline ao terminar."""

    RECEIVED = "RECEIVED"
    CLASSIFIED = "CLASSIFIED"
    KEY_UNWRAPPED = "KEY_UNWRAPPED"
    PAYLOAD_DECRYPTED = "PAYLOAD_DECRYPTED"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"

    def __str__(self) -> str:
        return self.value


class Classification(StrEnum):
    """Classificação do request antes de qualquer decriptografia."""

    KEEPALIVE = "keepalive"
    CANDIDATE = "candidate"
    IGNORED = "ignored"


class FailureReason(StrEnum):
    """Estágio em que o pipeline falhou."""

    MISSING_FIELDS = "missing-fields"
    KEY_UNWRAP = "key-unwrap"
    PAYLOAD_DECRYPT = "payload-decrypt"
    DELIVERY = "delivery"


# Estados que encerram a execução com sucesso
SUCCESS_STATES: frozenset[PipelineState] = frozenset({
    PipelineState.CLASSIFIED,
    PipelineState.PAYLOAD_DECRYPTED,
    PipelineState.DELIVERED,
})
