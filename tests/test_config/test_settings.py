"""Testes para config.settings (base, whatsapp e catálogo)."""

from __future__ import annotations

import pytest

from config.settings import CatalogSettings, WhatsAppSettings
from config.settings.base.core import BaseSettings, _load_base_from_env, _parse_environment
from config.settings.catalog import _load_from_env as load_catalog_from_env
from config.settings.whatsapp import DEFAULT_FLOW_PRIVATE_KEY_PATH
from config.settings.whatsapp import _load_from_env as load_whatsapp_from_env


class TestBaseSettings:
    """Testes de BaseSettings."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("STAGE", "staging"), ("qa", "development")],
    )
    def test_parse_environment(self, raw: str, expected: str) -> None:
        assert _parse_environment(raw) == expected

    def test_strict_environments(self) -> None:
        assert BaseSettings(environment="staging").is_strict
        assert BaseSettings(environment="production").is_production
        assert not BaseSettings().is_strict

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DEBUG", "1")

        settings = _load_base_from_env()

        assert settings.environment == "production"
        assert settings.log_level == "DEBUG"
        assert settings.debug is True
        assert settings.validate() == []

    def test_empty_service_name_is_invalid(self) -> None:
        assert BaseSettings(service_name="").validate()


class TestWhatsAppSettings:
    """Testes de WhatsAppSettings."""

    def test_messages_endpoint_from_phone_number_id(self) -> None:
        settings = WhatsAppSettings(phone_number_id="123", api_version="v19.0")
        assert settings.get_messages_endpoint() == "https://graph.facebook.com/v19.0/123/messages"

    def test_messages_url_overrides_phone_number_id(self) -> None:
        settings = WhatsAppSettings(phone_number_id="123", messages_url="https://proxy.test/m")
        assert settings.get_messages_endpoint() == "https://proxy.test/m"
        assert settings.get_messages_endpoint("999").endswith("/999/messages")

    def test_messages_endpoint_requires_id(self) -> None:
        with pytest.raises(ValueError):
            WhatsAppSettings().get_messages_endpoint()

    def test_validate_reports_missing_credentials(self) -> None:
        errors = WhatsAppSettings(flow_private_key_path="").validate()
        assert len(errors) == 3

    def test_loads_legacy_token_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WHATSAPP_ACCESS_TOKEN", raising=False)
        monkeypatch.setenv("WHATSAPP_TOKEN", "legacy")
        monkeypatch.setenv("FLOW_TAG_FALLBACK_ENABLED", "false")
        monkeypatch.delenv("FLOW_PRIVATE_KEY_PATH", raising=False)

        settings = load_whatsapp_from_env()

        assert settings.access_token == "legacy"
        assert settings.flow_tag_fallback_enabled is False
        assert settings.flow_private_key_path == DEFAULT_FLOW_PRIVATE_KEY_PATH


class TestCatalogSettings:
    """Testes de CatalogSettings."""

    def test_validate_requires_http_url(self) -> None:
        assert CatalogSettings().validate() == ["CATALOG_LOOKUP_URL não configurado"]
        assert CatalogSettings(lookup_url="ftp://x").validate()
        assert CatalogSettings(lookup_url="https://script.test/exec").validate() == []

    def test_loads_google_script_url_alias(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CATALOG_LOOKUP_URL", raising=False)
        monkeypatch.setenv("GOOGLE_SCRIPT_URL", "https://script.test/exec")

        assert load_catalog_from_env().lookup_url == "https://script.test/exec"
