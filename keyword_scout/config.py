"""
Runtime settings.

Defaults are overridden by ``config/settings.yaml`` and then by
``KEYWORD_SCOUT_*`` environment variables (``config/.env`` is loaded first).
"""

import os
from dataclasses import dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from loguru import logger

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "settings.yaml"
ENV_FILE = PROJECT_ROOT / "config" / ".env"
ENV_PREFIX = "KEYWORD_SCOUT_"

# yaml section -> {yaml key: Settings attribute}
YAML_SECTIONS: Dict[str, Dict[str, str]] = {
    "suggestions": {
        "remote_enabled": "remote_enabled",
        "timeout": "suggest_timeout",
        "max_live": "suggest_max_live",
        "expander_limit": "expander_limit",
        "alphabet_limit": "alphabet_limit",
    },
    "search": {
        "max_related": "max_related",
        "batch_size": "batch_size",
        "batch_delay": "batch_delay",
        "lightweight": "lightweight",
    },
    "trends": {
        "enabled": "trends_enabled",
        "geo": "trends_geo",
        "language": "trends_language",
        "timeframe": "trends_timeframe",
        "max_attempts": "trends_max_attempts",
        "min_interval": "trends_min_interval",
    },
    "random": {
        "seed": "random_seed",
    },
    "logging": {
        "level": "log_level",
        "dir": "log_dir",
    },
    "api": {
        "host": "api_host",
        "port": "api_port",
        "cors_origins": "cors_origins",
    },
    "preferences": {
        "db_path": "preferences_db",
        "history_size": "history_size",
    },
}


@dataclass
class Settings:
    """All tunables of the service."""
    # Suggestions
    remote_enabled: bool = True
    suggest_timeout: float = 3.0
    suggest_max_live: int = 20
    expander_limit: int = 200
    alphabet_limit: int = 50

    # Search orchestration
    max_related: Optional[int] = None
    batch_size: int = 5
    batch_delay: float = 1.0
    lightweight: bool = False

    # Google Trends
    trends_enabled: bool = True
    trends_geo: str = "US"
    trends_language: str = "en-US"
    trends_timeframe: str = "today 1-m"
    trends_max_attempts: int = 1
    trends_min_interval: float = 1.0

    # Randomness (None = unseeded)
    random_seed: Optional[int] = None

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Presentation state
    preferences_db: str = "data/preferences.db"
    history_size: int = 5


def _coerce(value: str, current: Any, name: str) -> Any:
    """Convert an environment string to the type of the current value."""
    if isinstance(current, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        return int(value)
    if isinstance(current, float):
        return float(value)
    if isinstance(current, list):
        return [v.strip() for v in value.split(",") if v.strip()]
    if current is None and name in ("random_seed", "max_related"):
        return int(value) if value.strip() else None
    return value


def _apply_yaml(settings: Settings, data: Dict[str, Any]) -> None:
    for section, mapping in YAML_SECTIONS.items():
        values = data.get(section) or {}
        if not isinstance(values, dict):
            logger.warning(f"Ignoring malformed config section '{section}'")
            continue
        for key, attr in mapping.items():
            if key in values:
                setattr(settings, attr, values[key])


def _apply_env(settings: Settings) -> None:
    for f in fields(settings):
        raw = os.environ.get(ENV_PREFIX + f.name.upper())
        if raw is None:
            continue
        try:
            setattr(settings, f.name, _coerce(raw, getattr(settings, f.name), f.name))
        except ValueError:
            logger.warning(f"Invalid value for {ENV_PREFIX + f.name.upper()}: {raw!r}")


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """Build settings from defaults, the yaml file and the environment."""
    load_dotenv(ENV_FILE)

    settings = Settings()
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        _apply_yaml(settings, data)
    else:
        logger.debug(f"No config file at {path}, using defaults")

    _apply_env(settings)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings (loaded once)."""
    return load_settings()
