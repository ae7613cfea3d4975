"""Testes do wiring do pipeline de Flows e da validação de startup."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from app import bootstrap
from app.bootstrap import flow_factory
from app.bootstrap.flow_adapters import GraphApiMessageSender
from app.infra.crypto import InvalidPrivateKeyError
from app.use_cases.flows import ProcessFlowEnvelopeUseCase
from config.settings import CatalogSettings, WhatsAppSettings
from config.settings.base.core import BaseSettings
from fakes.flow_envelopes import private_pem, sample_items


def _whatsapp(**overrides) -> WhatsAppSettings:
    defaults = {"access_token": "token", "phone_number_id": "123"}
    defaults.update(overrides)
    return WhatsAppSettings(**defaults)


class TestLoadFlowPrivateKey:
    """Testes de carga da chave a partir das settings."""

    def test_env_pem_takes_precedence(self, rsa_private_key, tmp_path) -> None:
        settings = _whatsapp(
            flow_private_key=private_pem(rsa_private_key),
            flow_private_key_path=str(tmp_path / "absent.key"),
        )
        assert flow_factory.load_flow_private_key(settings).modulus_bytes == 256

    def test_falls_back_to_file(self, rsa_private_key, tmp_path) -> None:
        key_file = tmp_path / "private_plain.key"
        key_file.write_text(private_pem(rsa_private_key, b"pw"), encoding="utf-8")
        settings = _whatsapp(flow_private_key_path=str(key_file), flow_private_key_passphrase="pw")

        assert flow_factory.load_flow_private_key(settings).modulus_bytes == 256

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(InvalidPrivateKeyError):
            flow_factory.load_flow_private_key(
                _whatsapp(flow_private_key_path=str(tmp_path / "absent.key"))
            )


def test_create_flow_envelope_use_case(rsa_private_key) -> None:
    context = flow_factory.create_envelope_context(
        whatsapp=_whatsapp(
            flow_private_key=private_pem(rsa_private_key),
            flow_tag_fallback_enabled=False,
        ),
        catalog=CatalogSettings(lookup_url="https://script.test/exec"),
    )

    use_case = flow_factory.create_flow_envelope_use_case(context)

    assert isinstance(use_case, ProcessFlowEnvelopeUseCase)
    assert isinstance(context.sender, GraphApiMessageSender)
    assert context.tag_fallback_enabled is False


@pytest.mark.asyncio
async def test_graph_api_sender_builds_card_payload() -> None:
    calls: list[dict] = []

    class _Client:
        async def send_message(self, endpoint: str, access_token: str, payload: dict) -> dict:
            calls.append({"endpoint": endpoint, "token": access_token, "payload": payload})
            return {"messages": [{"id": "wamid.1"}]}

    sender = GraphApiMessageSender(_Client(), "https://graph.test/123/messages", "token")
    item = sample_items(1)[0]

    await sender.send_item_card("15551234567", item)
    await sender.send_text("15551234567", "done")

    assert calls[0]["payload"]["interactive"]["action"]["buttons"][0]["reply"]["id"] == (
        "add_to_cart::D1"
    )
    assert calls[1]["payload"]["text"]["body"] == "done"


class TestValidateRuntimeSettings:
    """Testes de validate_runtime_settings."""

    def _patch(self, monkeypatch: pytest.MonkeyPatch, environment: str) -> None:
        monkeypatch.setattr(
            bootstrap, "get_base_settings", lambda: BaseSettings(environment=environment)
        )
        monkeypatch.setattr(bootstrap, "get_whatsapp_settings", lambda: WhatsAppSettings())
        monkeypatch.setattr(
            bootstrap,
            "get_catalog_settings",
            lambda: SimpleNamespace(validate=lambda: []),
        )

    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._patch(monkeypatch, "development")

        errors = bootstrap.validate_runtime_settings()

        assert errors
        assert all(error.startswith("whatsapp: ") for error in errors)

    def test_production_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._patch(monkeypatch, "production")

        with pytest.raises(RuntimeError, match="production"):
            bootstrap.validate_runtime_settings()
