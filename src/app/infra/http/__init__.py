"""Cliente HTTP assíncrono com retry para chamadas a colaboradores externos."""

from .client import HttpClient, HttpClientConfig, HttpError

__all__ = ["HttpClient", "HttpClientConfig", "HttpError"]
