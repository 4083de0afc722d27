# cognitive_core/azure_cfg.py
from __future__ import annotations
import os, json, pathlib
from dataclasses import dataclass
from typing import Any, Mapping

from openai import AzureOpenAI

AZURE_ENV_KEYS = {
    "endpoint": "AZURE_OPENAI_ENDPOINT",
    "api_key": "AZURE_OPENAI_API_KEY",
    "api_version": "AZURE_OPENAI_API_VERSION",
    "deployment": "AZURE_OPENAI_DEPLOYMENT",
}


class AzureNotConfigured(RuntimeError):
    pass


@dataclass(frozen=True)
class AzureSettings:
    endpoint: str
    api_key: str
    deployment: str
    api_version: str


def _from_env(cfg: Mapping[str, Any] | None = None) -> dict[str, str]:
    cfg = cfg or {}
    return {field: str(cfg.get(env) or os.getenv(env, "")) for field, env in AZURE_ENV_KEYS.items()}


def _from_json(path: str = ".azure_config.json") -> dict[str, str]:
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    try:
        j = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return {field: str(j.get(field, "")) for field in AZURE_ENV_KEYS}


def settings(cfg: Mapping[str, Any] | None = None) -> AzureSettings:
    """Resolve Azure settings: explicit cfg, then env, then .azure_config.json."""
    values = _from_env(cfg)
    if not all(values.values()):
        for k, v in _from_json().items():
            if not values.get(k):
                values[k] = v
    missing = [k for k, v in values.items() if not v]
    if missing:
        raise AzureNotConfigured(f"Azure OpenAI not configured. Missing: {', '.join(missing)}")
    return AzureSettings(**values)


def is_configured(cfg: Mapping[str, Any] | None = None) -> bool:
    try:
        settings(cfg)
    except AzureNotConfigured:
        return False
    return True


def client(s: AzureSettings | None = None) -> AzureOpenAI:
    s = s or settings()
    return AzureOpenAI(
        azure_endpoint=s.endpoint,
        api_key=s.api_key,
        api_version=s.api_version,
    )
