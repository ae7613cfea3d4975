"""Conector WhatsApp - adapter de borda para Meta Graph API.

Responsabilidades:
- HTTP client para envio de mensagens
- Parsing e classificação de erros da Graph API
"""

from .http_client import WhatsAppHttpClient, create_whatsapp_http_client
from .meta_errors import WhatsAppApiError, is_permanent_error, parse_meta_error

__all__ = [
    "WhatsAppApiError",
    "WhatsAppHttpClient",
    "create_whatsapp_http_client",
    "is_permanent_error",
    "parse_meta_error",
]
