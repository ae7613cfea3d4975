"""Factory de wiring para o pipeline de envelopes de Flows (bootstrap)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.catalog import create_catalog_http_client
from api.connectors.whatsapp import create_whatsapp_http_client
from app.bootstrap.flow_adapters import GraphApiMessageSender
from app.infra.crypto import load_private_key, load_private_key_file
from app.use_cases.flows import EnvelopeContext, ProcessFlowEnvelopeUseCase
from config.settings import get_catalog_settings, get_whatsapp_settings

if TYPE_CHECKING:
    from app.infra.crypto import PrivateKeyMaterial
    from config.settings import CatalogSettings, WhatsAppSettings

logger = logging.getLogger(__name__)


def load_flow_private_key(settings: WhatsAppSettings) -> PrivateKeyMaterial:
    """Carrega a chave do env (PEM) ou, se vazia, do arquivo configurado.

    Raises:
        InvalidPrivateKeyError: Se nenhuma fonte produzir chave RSA válida
    """
    passphrase = settings.flow_private_key_passphrase or None
    if settings.flow_private_key:
        key = load_private_key(settings.flow_private_key, passphrase)
        source = "env"
    else:
        key = load_private_key_file(settings.flow_private_key_path, passphrase)
        source = "file"
    logger.info(
        "flow_private_key_loaded",
        extra={"component": "bootstrap", "source": source, "modulus_bytes": key.modulus_bytes},
    )
    return key


def create_envelope_context(
    whatsapp: WhatsAppSettings | None = None,
    catalog: CatalogSettings | None = None,
) -> EnvelopeContext:
    """Monta o contexto imutável do pipeline (chave + colaboradores)."""
    whatsapp = whatsapp or get_whatsapp_settings()
    catalog = catalog or get_catalog_settings()

    sender = GraphApiMessageSender(
        http_client=create_whatsapp_http_client(whatsapp),
        endpoint=whatsapp.get_messages_endpoint(),
        access_token=whatsapp.access_token,
    )
    return EnvelopeContext(
        private_key=load_flow_private_key(whatsapp),
        catalog=create_catalog_http_client(catalog),
        sender=sender,
        tag_fallback_enabled=whatsapp.flow_tag_fallback_enabled,
    )


def create_flow_envelope_use_case(
    context: EnvelopeContext | None = None,
) -> ProcessFlowEnvelopeUseCase:
    """Cria o use case do endpoint de Flows com dependências injetadas."""
    return ProcessFlowEnvelopeUseCase(context or create_envelope_context())
