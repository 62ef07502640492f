from __future__ import annotations

from dataclasses import dataclass
import os

OUTPUT_TABLE = "table"
OUTPUT_JSON = "json"
OUTPUT_YAML = "yaml"
OUTPUT_CSV = "csv"
OUTPUT_PRETTY = "pretty"
OUTPUT_MODES = (OUTPUT_TABLE, OUTPUT_JSON, OUTPUT_YAML, OUTPUT_CSV, OUTPUT_PRETTY)
OUTPUT_MODE_ALIASES = {
    "structured-text": OUTPUT_YAML,
    "delimited-text": OUTPUT_CSV,
    "decorated-text": OUTPUT_PRETTY,
}

COLOR_AUTO = "auto"
COLOR_ALWAYS = "always"
COLOR_NEVER = "never"
COLOR_MODES = (COLOR_AUTO, COLOR_ALWAYS, COLOR_NEVER)

DEFAULT_VELERO_NAMESPACE = "velero"


class ConfigurationError(ValueError):
    """Raised when an option value is not recognized."""


@dataclass(frozen=True)
class AppConfig:
    velero_namespace: str = os.getenv("PVBL_VELERO_NAMESPACE", DEFAULT_VELERO_NAMESPACE)
    output_mode: str = os.getenv("PVBL_OUTPUT", OUTPUT_TABLE)
    color_mode: str = os.getenv("PVBL_COLOR", COLOR_AUTO)
    log_level: str = os.getenv("PVBL_LOG_LEVEL", "WARNING")
    request_timeout_seconds: int = int(os.getenv("PVBL_REQUEST_TIMEOUT_SECONDS", "20"))


def validate_output_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    normalized = OUTPUT_MODE_ALIASES.get(normalized, normalized)
    if normalized not in OUTPUT_MODES:
        raise ConfigurationError(
            f"Invalid --output: {mode} (allowed: {'|'.join(OUTPUT_MODES)})"
        )
    return normalized


def validate_color_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    if normalized not in COLOR_MODES:
        raise ConfigurationError(
            f"Invalid --color: {mode} (allowed: {'|'.join(COLOR_MODES)})"
        )
    return normalized
