"""Tests for client settings resolution."""

from __future__ import annotations

import json

import pytest

from anthropic_rest.core.config import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    ClientSettings,
    ConfigFileError,
    load_settings,
    require_api_key,
)


def test_load_settings_returns_defaults_without_file_or_env(tmp_path) -> None:
    settings = load_settings(tmp_path / "missing.json", environ={})

    assert settings == ClientSettings()
    assert settings.api_version == DEFAULT_API_VERSION
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout is None


def test_load_settings_reads_file(tmp_path) -> None:
    path = tmp_path / "anthropic.json"
    path.write_text(
        json.dumps({"api_key": "sk-file", "base_url": "http://proxy.internal/v1", "timeout": 30}),
        encoding="utf-8",
    )

    settings = load_settings(path, environ={})

    assert settings.api_key == "sk-file"
    assert settings.base_url == "http://proxy.internal/v1"
    assert settings.timeout == 30


def test_environment_overrides_file(tmp_path) -> None:
    path = tmp_path / "anthropic.json"
    path.write_text(json.dumps({"api_key": "sk-file", "api_version": "2023-01-01"}))

    settings = load_settings(
        path,
        environ={
            "ANTHROPIC_API_KEY": " sk-env ",
            "ANTHROPIC_ADMIN_KEY": "sk-admin",
            "ANTHROPIC_API_VERSION": "",
            "ANTHROPIC_TIMEOUT_SECONDS": "2.5",
        },
    )

    assert settings.api_key == "sk-env"
    assert settings.admin_api_key == "sk-admin"
    assert settings.api_version == "2023-01-01"
    assert settings.timeout == 2.5


def test_load_settings_uses_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-process")

    assert load_settings().api_key == "sk-process"


def test_secrets_are_hidden_from_repr() -> None:
    settings = ClientSettings(api_key="sk-secret", admin_api_key="sk-admin-secret")

    assert "sk-secret" not in repr(settings)
    assert "sk-admin-secret" not in repr(settings)


@pytest.mark.parametrize(
    "content",
    ["{not json", "[]", json.dumps({"unknown": 1}), json.dumps({"timeout": -1})],
)
def test_load_settings_rejects_invalid_files(tmp_path, content: str) -> None:
    path = tmp_path / "anthropic.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigFileError):
        load_settings(path, environ={})


def test_load_settings_rejects_non_numeric_timeout() -> None:
    with pytest.raises(ConfigFileError, match="ANTHROPIC_TIMEOUT_SECONDS"):
        load_settings(environ={"ANTHROPIC_TIMEOUT_SECONDS": "soon"})


def test_require_api_key() -> None:
    settings = ClientSettings(api_key="sk-standard")

    assert require_api_key(settings) == "sk-standard"
    with pytest.raises(ConfigFileError):
        require_api_key(settings, admin=True)
