"""Testes do ciclo de vida da aplicação (montagem do pipeline no startup)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app import app as app_module
from app.infra.crypto import InvalidPrivateKeyError
from config.settings.base.core import BaseSettings


def _patch_settings(monkeypatch: pytest.MonkeyPatch, environment: str) -> None:
    monkeypatch.setattr(
        app_module, "get_base_settings", lambda: BaseSettings(environment=environment)
    )
    monkeypatch.setattr(app_module, "validate_runtime_settings", lambda: [])


def test_pipeline_is_built_once_at_startup(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, "development")
    built: list[object] = []

    def _factory() -> object:
        built.append(object())
        return built[-1]

    monkeypatch.setattr(app_module, "create_flow_envelope_use_case", _factory)

    with TestClient(app_module.create_app()) as client:
        assert client.get("/ready").status_code == 200
        assert client.get("/ready").status_code == 200

    assert len(built) == 1


def test_development_boots_without_key(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, "development")

    def _factory() -> object:
        raise InvalidPrivateKeyError("Private key file not readable")

    monkeypatch.setattr(app_module, "create_flow_envelope_use_case", _factory)

    with TestClient(app_module.create_app()) as client:
        assert client.get("/ready").status_code == 503
        assert client.post("/webhook", json={"action": "ping"}).status_code == 503


def test_production_refuses_to_boot_without_key(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, "production")

    def _factory() -> object:
        raise InvalidPrivateKeyError("Private key file not readable")

    monkeypatch.setattr(app_module, "create_flow_envelope_use_case", _factory)

    with pytest.raises(InvalidPrivateKeyError), TestClient(app_module.create_app()):
        pass
