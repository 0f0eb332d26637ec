"""Client settings loaded from an optional JSON file and environment variables."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
DEFAULT_API_VERSION = "2023-06-01"

ENV_API_KEY = "ANTHROPIC_API_KEY"
ENV_ADMIN_KEY = "ANTHROPIC_ADMIN_KEY"
ENV_API_VERSION = "ANTHROPIC_API_VERSION"
ENV_BASE_URL = "ANTHROPIC_BASE_URL"
ENV_TIMEOUT = "ANTHROPIC_TIMEOUT_SECONDS"

ENV_KEY_FIELDS: dict[str, str] = {
    ENV_API_KEY: "api_key",
    ENV_ADMIN_KEY: "admin_api_key",
    ENV_API_VERSION: "api_version",
    ENV_BASE_URL: "base_url",
}


class ClientSettings(BaseModel):
    """Resolved connection settings for the standard and admin clients."""

    model_config = ConfigDict(extra="forbid", strict=True)

    api_key: StrictStr | None = Field(default=None, repr=False)
    admin_api_key: StrictStr | None = Field(default=None, repr=False)
    api_version: StrictStr = DEFAULT_API_VERSION
    base_url: StrictStr = DEFAULT_BASE_URL
    timeout: float | None = Field(default=None, gt=0.0)


class ConfigFileError(RuntimeError):
    """Raised when settings cannot be read, parsed or validated."""


def load_settings(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ClientSettings:
    """Resolve settings: defaults, then the JSON file at ``path``, then env vars."""
    env = os.environ if environ is None else environ
    merged: dict[str, Any] = {}
    if path is not None and path.exists():
        merged.update(_read_config_file(path))

    for env_name, field_name in ENV_KEY_FIELDS.items():
        value = env.get(env_name)
        if value is not None and value.strip():
            merged[field_name] = value.strip()

    raw_timeout = env.get(ENV_TIMEOUT)
    if raw_timeout is not None and raw_timeout.strip():
        try:
            merged["timeout"] = float(raw_timeout)
        except ValueError as exc:
            raise ConfigFileError(f"{ENV_TIMEOUT} must be a number, got {raw_timeout!r}") from exc

    try:
        return ClientSettings.model_validate(merged)
    except ValidationError as exc:
        source = str(path) if path is not None else "environment"
        raise ConfigFileError(f"invalid settings from {source}: {exc}") from exc


def require_api_key(settings: ClientSettings, *, admin: bool = False) -> str:
    """Return the credential the requested client needs or raise ``ConfigFileError``."""
    if admin:
        if not settings.admin_api_key:
            raise ConfigFileError(f"{ENV_ADMIN_KEY} is not set")
        return settings.admin_api_key
    if not settings.api_key:
        raise ConfigFileError(f"{ENV_API_KEY} is not set")
    return settings.api_key


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigFileError(f"invalid JSON in {path}: {exc.msg}") from exc
    except OSError as exc:
        raise ConfigFileError(f"unable to read {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigFileError(f"invalid config in {path}: expected a JSON object")
    return payload
