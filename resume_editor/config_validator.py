"""Configuration validator for resume editor startup checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .providers import PROVIDER_DEFAULTS, resolve_api_key


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Provider settings are only checked when polishing is enabled.

    Args:
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []
    polish = raw_config.get("polish") or {}

    if not isinstance(polish, dict):
        errors.append(ConfigError(field="polish", message="polish must be a mapping", severity=Severity.ERROR))
        polish = {}

    enabled = polish.get("enabled", True)
    if not isinstance(enabled, bool):
        errors.append(
            ConfigError(
                field="polish.enabled",
                message=f"polish.enabled must be true or false, got {enabled!r}",
                severity=Severity.ERROR,
            )
        )

    # --- Timeout ---
    timeout = polish.get("timeout_seconds", 60)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        errors.append(
            ConfigError(
                field="polish.timeout_seconds",
                message=f"polish.timeout_seconds must be a positive number, got {timeout}",
                severity=Severity.ERROR,
            )
        )

    # --- Retry ---
    retry = polish.get("retry") or {}
    if not isinstance(retry, dict):
        errors.append(
            ConfigError(field="polish.retry", message="polish.retry must be a mapping", severity=Severity.ERROR)
        )
        retry = {}

    attempts = retry.get("max_attempts", 1)
    if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
        errors.append(
            ConfigError(
                field="polish.retry.max_attempts",
                message=f"polish.retry.max_attempts must be an integer >= 1, got {attempts}",
                severity=Severity.ERROR,
            )
        )
    elif attempts > 5:
        errors.append(
            ConfigError(
                field="polish.retry.max_attempts",
                message=f"polish.retry.max_attempts={attempts} may exceed the polish timeout",
                severity=Severity.WARNING,
            )
        )

    if enabled is False:
        return errors

    # --- Provider ---
    provider = str(raw_config.get("provider", "gemini") or "gemini").lower()
    if provider not in PROVIDER_DEFAULTS:
        errors.append(
            ConfigError(
                field="provider",
                message=f"Unknown provider {provider!r}; expected one of {', '.join(sorted(PROVIDER_DEFAULTS))}",
                severity=Severity.ERROR,
            )
        )

    # --- API Key ---
    try:
        resolve_api_key(provider, str(raw_config.get("api_key", "") or ""))
    except ValueError as e:
        errors.append(ConfigError(field="api_key", message=str(e), severity=Severity.ERROR))

    # --- Model ---
    model = raw_config.get("model", "")
    if not model or not isinstance(model, str):
        errors.append(
            ConfigError(
                field="model",
                message="model must be a non-empty string",
                severity=Severity.ERROR,
            )
        )

    # --- Temperature ---
    temperature = raw_config.get("temperature", 0.3)
    if isinstance(temperature, bool) or not isinstance(temperature, (int, float)) or temperature < 0 or temperature > 2:
        errors.append(
            ConfigError(
                field="temperature",
                message=f"temperature must be a number between 0 and 2, got {temperature}",
                severity=Severity.ERROR,
            )
        )

    # --- Max tokens ---
    max_tokens = raw_config.get("max_tokens", 3000)
    if isinstance(max_tokens, bool) or not isinstance(max_tokens, int) or max_tokens <= 0:
        errors.append(
            ConfigError(
                field="max_tokens",
                message=f"max_tokens must be a positive integer, got {max_tokens}",
                severity=Severity.ERROR,
            )
        )

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)
