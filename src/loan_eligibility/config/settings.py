from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class ServingSettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8000
    api_key: str = "dev-api-key-change-in-production"
    result_delay_seconds: float = 1.2
    narration_delay_seconds: float = 0.5


class NarrationSettings(BaseSettings):
    enabled: bool = True
    lang: str = "en-IN"
    rate: float = 0.95
    pitch: float = 1.0


class Settings(BaseSettings):
    serving: ServingSettings = Field(default_factory=ServingSettings)
    narration: NarrationSettings = Field(default_factory=NarrationSettings)
    log_level: str = "INFO"
    json_logs: bool = True


def _deep_merge(base: dict, override: dict) -> dict:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(config_dir: Path | None = None) -> Settings:
    """Load settings from YAML config files, then override with environment variables."""
    if config_dir is None:
        config_dir = PROJECT_ROOT / "configs"

    merged: dict[str, Any] = {}
    for config_file in ["serving.yaml", "narration.yaml"]:
        path = config_dir / config_file
        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f)
                if data:
                    merged = _deep_merge(merged, data)

    settings_kwargs: dict[str, Any] = {}

    if "serving" in merged:
        settings_kwargs["serving"] = ServingSettings(**merged["serving"])
    if "narration" in merged:
        settings_kwargs["narration"] = NarrationSettings(**merged["narration"])
    for key in ("log_level", "json_logs"):
        if key in merged:
            settings_kwargs[key] = merged[key]

    return Settings(**settings_kwargs)
