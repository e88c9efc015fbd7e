"""Tests for rpcstore settings resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from rpcstore.config import RpcStoreSettings, load_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep host environment and home config out of settings tests."""
    for name in (
        "RPCSTORE_CLIENT__BASE_URL",
        "RPCSTORE_CLIENT__KEY_PREFIX",
        "RPCSTORE_CLIENT__PAGE_LIMIT",
        "RPCSTORE_SERVER__PORT",
        "RPCSTORE_LOGGING__LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setitem(
        RpcStoreSettings.model_config, "yaml_file", tmp_path / "absent.yaml"
    )


def test_defaults_without_sources() -> None:
    """Unset sources should fall back to the documented defaults."""
    settings = load_settings()

    assert settings.client.base_url == "http://127.0.0.1:8750"
    assert settings.client.page_limit == 64
    assert settings.server.port == 8750
    assert settings.server.namespace == ""
    assert settings.logging.level == "INFO"


def test_env_overrides_nested_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    """Nested fields should be settable through double-underscore env names."""
    monkeypatch.setenv("RPCSTORE_CLIENT__KEY_PREFIX", "tenant-a/")
    monkeypatch.setenv("RPCSTORE_SERVER__PORT", "9100")

    settings = load_settings()

    assert settings.client.key_prefix == "tenant-a/"
    assert settings.server.port == 9100


def test_yaml_file_values_are_loaded(tmp_path: Path) -> None:
    """An explicit config file should supply values below env and init."""
    config_path = tmp_path / "rpcstore.yaml"
    config_path.write_text(
        "client:\n  base_url: http://blob.internal:9000\n  page_limit: 10\n"
        "server:\n  namespace: blob\n",
        encoding="utf-8",
    )

    settings = load_settings(config_path=config_path)

    assert settings.client.base_url == "http://blob.internal:9000"
    assert settings.client.page_limit == 10
    assert settings.server.namespace == "blob"


def test_env_beats_yaml_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Environment values should win over file values."""
    config_path = tmp_path / "rpcstore.yaml"
    config_path.write_text("client:\n  page_limit: 10\n", encoding="utf-8")
    monkeypatch.setenv("RPCSTORE_CLIENT__PAGE_LIMIT", "5")

    settings = load_settings(config_path=config_path)

    assert settings.client.page_limit == 5


def test_explicit_overrides_beat_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Init overrides should take precedence over the environment."""
    monkeypatch.setenv("RPCSTORE_CLIENT__BASE_URL", "http://from-env:1")

    settings = load_settings(client={"base_url": "http://from-init:2"})

    assert settings.client.base_url == "http://from-init:2"


def test_invalid_values_are_rejected() -> None:
    """Out-of-range settings should fail validation."""
    with pytest.raises(ValidationError):
        load_settings(client={"page_limit": -1})
    with pytest.raises(ValidationError):
        load_settings(server={"port": 0})


def test_client_settings_build_store_options() -> None:
    """Client settings should translate into proxy options."""
    settings = load_settings(
        client={"method_prefix": "blob.", "key_prefix": "foo/", "page_limit": 8}
    )

    options = settings.client.store_options()

    assert options.method_prefix == "blob."
    assert options.key_prefix == b"foo/"
    assert options.page_limit == 8
