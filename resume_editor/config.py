"""Configuration loading for the resume editor."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from .retry import RetryConfig

DEFAULT_CONFIG_PATH = "config/config.local.yaml"


@dataclass
class EditorConfig:
    """Provider and pipeline settings."""

    api_key: str = ""
    provider: str = "gemini"
    model: str = "gemini-2.5-flash"
    api_base: str = ""  # Custom API endpoint (proxy)
    max_tokens: int = 3000
    temperature: float = 0.3
    polish_enabled: bool = True
    polish_timeout: float = 60.0
    retry: RetryConfig = field(default_factory=RetryConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        polish = data.get("polish") or {}
        return cls(
            api_key=data.get("api_key", "") or "",
            provider=data.get("provider", "gemini"),
            model=data.get("model", "gemini-2.5-flash"),
            api_base=data.get("api_base", "") or "",
            max_tokens=data.get("max_tokens", 3000),
            temperature=data.get("temperature", 0.3),
            polish_enabled=bool(polish.get("enabled", True)),
            polish_timeout=float(polish.get("timeout_seconds", 60)),
            retry=RetryConfig.from_dict(polish.get("retry") or {}),
        )


def load_raw_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """Load raw configuration dictionary from YAML file.

    Priority order:
    1. config.local.yaml (user's local config with secrets)
    2. config.yaml (template/defaults)
    """
    repo_root = Path(__file__).resolve().parents[1]

    def _resolve(candidate: str) -> Path:
        path = Path(candidate)
        if path.exists():
            return path
        alt = repo_root / candidate
        if alt.exists():
            return alt
        return path

    def _load_yaml(path: Path) -> dict:
        if not path.exists():
            return {}
        with open(path) as f:
            data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Config file must be a mapping: {path}")
            return data

    target = _resolve(config_path)

    # Default behavior: load config.yaml first, then overlay config.local.yaml.
    if Path(config_path).name == "config.local.yaml":
        base = _load_yaml(_resolve("config/config.yaml"))
        merged = deep_merge(base, _load_yaml(target))
        if not merged:
            raise FileNotFoundError(f"Config file not found: {config_path} (also missing fallback config/config.yaml)")
        return merged

    # Explicit non-local config path: load as-is.
    data = _load_yaml(target)
    if not data:
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return data


def deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> EditorConfig:
    """Load editor configuration from YAML file."""
    return EditorConfig.from_dict(load_raw_config(config_path))
