"""Runtime configuration for the engine.

Only output sizing and logging are configurable. Scoring weights and
bucket thresholds are product-tuned constants and live with the code that
uses them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ADAPTIVE_ENGINE_CONFIG"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class EngineConfig:
    recommendation_cap: int = 3
    insight_cap: int = 3
    # how many recent analytic insights to request per refresh
    analytics_limit: int = 3
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        for name in ("recommendation_cap", "insight_cap", "analytics_limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}")
        object.__setattr__(self, "log_level", level)


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Load configuration from YAML; a missing file yields the defaults."""

    raw_path = path or os.getenv(CONFIG_ENV_VAR)
    if not raw_path:
        return EngineConfig()

    config_path = Path(raw_path)
    if not config_path.exists():
        logger.info("No config file at %s, using defaults", config_path)
        return EngineConfig()

    with open(config_path, encoding="utf-8") as handle:
        try:
            payload = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Malformed config file {config_path}") from exc

    if not isinstance(payload, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    known = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(payload) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys %s in %s", unknown, config_path)

    return EngineConfig(**{key: value for key, value in payload.items() if key in known})
