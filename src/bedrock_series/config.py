"""Configuration loading and defaults."""

from __future__ import annotations

import os
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .llm.types import ConfigurationError

DEFAULT_SETTINGS: Dict[str, Any] = {
    "region": None,
    "transport": "boto3",
    "timeout_seconds": 60,
    "prompt_template": None,
    "backends": {
        "nova": {"model_id": "us.amazon.nova-pro-v1:0"},
        "llama": {"model_id": "us.meta.llama3-2-1b-instruct-v1:0"},
        "llama70b": {"model_id": "us.meta.llama3-3-70b-instruct-v1:0"},
        "claude": {"model_id": "us.anthropic.claude-3-5-sonnet-20241022-v2:0"},
        "deepseek": {"model_id": "us.deepseek.r1-v1:0"},
    },
}


@dataclass(frozen=True)
class Credentials:
    region: str
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    api_key: Optional[str] = None


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(settings_path: str = "config/settings.yaml") -> Dict[str, Any]:
    """Loads settings.yaml and merges it onto defaults."""
    merged = deepcopy(DEFAULT_SETTINGS)
    config_path = Path(settings_path)
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as f:
            try:
                user_cfg = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid settings file {config_path}: {exc}") from exc
        if not isinstance(user_cfg, dict):
            raise ConfigurationError(f"Settings file {config_path} must contain a mapping")
        merged = _deep_merge(merged, _normalize_backends(user_cfg))

    unknown = sorted(set(merged["backends"]) - set(DEFAULT_SETTINGS["backends"]))
    if unknown:
        raise ConfigurationError(f"UnknownBackend in settings: {', '.join(unknown)}")

    timeout = merged.get("timeout_seconds")
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 1:
        raise ConfigurationError(f"timeout_seconds must be a positive integer, got {timeout!r}")
    template = merged.get("prompt_template")
    if template is not None and not isinstance(template, str):
        raise ConfigurationError("prompt_template must be a string")
    return merged


def _normalize_backends(user_cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Empty YAML entries (`backends:` or `nova:` with nothing under it) mean 'use defaults'."""
    if "backends" not in user_cfg:
        return user_cfg
    backends = user_cfg["backends"]
    if backends is None:
        return {key: value for key, value in user_cfg.items() if key != "backends"}
    if not isinstance(backends, dict):
        raise ConfigurationError("backends must be a mapping of backend name to settings")

    normalized: Dict[str, Any] = {}
    for name, entry in backends.items():
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise ConfigurationError(f"backends.{name} must be a mapping")
        model_id = entry.get("model_id")
        if model_id is not None and not isinstance(model_id, str):
            raise ConfigurationError(f"backends.{name}.model_id must be a string")
        normalized[str(name)] = entry
    return dict(user_cfg, backends=normalized)


def load_credentials(settings: Dict[str, Any], environ: Mapping[str, str] | None = None) -> Credentials:
    """Reads AWS credentials and region; anything the transport needs must be present."""
    env = os.environ if environ is None else environ
    region = env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or settings.get("region")
    if not region:
        raise ConfigurationError("AWS_REGION missing")

    if settings.get("transport") == "http":
        api_key = env.get("AWS_BEARER_TOKEN_BEDROCK")
        if not api_key:
            raise ConfigurationError("AWS_BEARER_TOKEN_BEDROCK missing")
        return Credentials(region=str(region), api_key=api_key)

    access_key_id = env.get("AWS_ACCESS_KEY_ID")
    secret_access_key = env.get("AWS_SECRET_ACCESS_KEY")
    missing = [
        name
        for name, value in (
            ("AWS_ACCESS_KEY_ID", access_key_id),
            ("AWS_SECRET_ACCESS_KEY", secret_access_key),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"{'/'.join(missing)} missing")
    return Credentials(
        region=str(region),
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
    )
