"""Settings específicas de WhatsApp.

Configurações do canal WhatsApp via Graph API e do material de chave
usado pelo endpoint de Flows.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes do Graph API
GRAPH_API_VERSION: str = "v24.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"

DEFAULT_FLOW_PRIVATE_KEY_PATH = "keys/private_plain.key"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        access_token: Token de acesso à Graph API
        phone_number_id: ID do número de telefone no Meta Business
        messages_url: URL completa de envio (sobrepõe api_base_url/phone_number_id)
        api_version: Versão da Graph API (ex: v24.0)
        api_base_url: URL base da Graph API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro
        flow_private_key: Chave privada RSA (PEM) do endpoint de Flows
        flow_private_key_path: Arquivo PEM usado quando flow_private_key vazio
        flow_private_key_passphrase: Senha da chave privada (opcional)
        flow_tag_fallback_enabled: Recupera a tag GCM do fim do ciphertext
            quando o envelope não traz a tag separada
    """

    # Credenciais (carregadas de env)
    access_token: str = ""
    phone_number_id: str = ""
    messages_url: str = ""

    # API
    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    # Flows
    flow_private_key: str = ""
    flow_private_key_path: str = DEFAULT_FLOW_PRIVATE_KEY_PATH
    flow_private_key_passphrase: str = ""
    flow_tag_fallback_enabled: bool = True

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    def get_messages_endpoint(self, phone_number_id: str | None = None) -> str:
        """Retorna URL para envio de mensagens.

        Args:
            phone_number_id: ID do número. Usa self.phone_number_id se None.

        Returns:
            messages_url se configurada; senão
            https://graph.facebook.com/v24.0/{id}/messages

        Raises:
            ValueError: Se nenhuma das duas formas estiver configurada.
        """
        if self.messages_url and phone_number_id is None:
            return self.messages_url
        pid = phone_number_id or self.phone_number_id
        if not pid:
            raise ValueError("phone_number_id é obrigatório")
        return f"{self.api_endpoint}/{pid}/messages"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.phone_number_id and not self.messages_url:
            errors.append("WHATSAPP_PHONE_NUMBER_ID ou WHATSAPP_API_URL não configurado")

        if not self.access_token:
            errors.append("WHATSAPP_ACCESS_TOKEN não configurado")

        if not self.flow_private_key and not self.flow_private_key_path:
            errors.append("FLOW_PRIVATE_KEY ou FLOW_PRIVATE_KEY_PATH não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("WHATSAPP_MAX_RETRIES deve ser >= 0")

        return errors


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        access_token=os.getenv("WHATSAPP_ACCESS_TOKEN", os.getenv("WHATSAPP_TOKEN", "")),
        phone_number_id=os.getenv("WHATSAPP_PHONE_NUMBER_ID", ""),
        messages_url=os.getenv("WHATSAPP_API_URL", ""),
        api_version=os.getenv("WHATSAPP_API_VERSION", GRAPH_API_VERSION),
        api_base_url=os.getenv("WHATSAPP_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("WHATSAPP_MAX_RETRIES", "3")),
        flow_private_key=os.getenv("FLOW_PRIVATE_KEY", ""),
        flow_private_key_path=os.getenv("FLOW_PRIVATE_KEY_PATH", DEFAULT_FLOW_PRIVATE_KEY_PATH),
        flow_private_key_passphrase=os.getenv("FLOW_PRIVATE_KEY_PASSPHRASE", ""),
        flow_tag_fallback_enabled=_env_flag("FLOW_TAG_FALLBACK_ENABLED", "true"),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
