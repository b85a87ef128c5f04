"""Configuration helpers for anchor generation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass(frozen=True)
class GenerationConfig:
    """Typed wrapper around the generation configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    @property
    def model(self) -> str:
        return str(self.raw["model"])

    @property
    def temperature(self) -> float:
        return float(self.raw["temperature"])

    @property
    def suggestions_per_product(self) -> int:
        return int(self.raw["suggestions_per_product"])


DEFAULTS: Dict[str, Any] = {
    "model": "gemini-3-pro-preview",
    "temperature": 0.7,
    "suggestions_per_product": 5,
}


def load_config(path: str | Path | None = None) -> GenerationConfig:
    """Load configuration from YAML, merging with defaults.

    ``LINKJUICE_GEMINI_MODEL`` in the environment overrides the model name
    from both the defaults and the file.
    """

    data: Dict[str, Any] = DEFAULTS.copy()

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)

    model_override = os.getenv("LINKJUICE_GEMINI_MODEL")
    if model_override:
        data["model"] = model_override

    return GenerationConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
