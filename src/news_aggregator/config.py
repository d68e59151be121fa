"""Configuration management."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml


@dataclass
class StorageConfig:
    """Cache database settings."""
    database_path: Path = Path("cache.db")
    retention_days: int = 7


@dataclass
class FeedsConfig:
    """Feed registration settings."""
    registry_path: Path = Path("config/feeds.yaml")


@dataclass
class FetchConfig:
    """Source fetch settings."""
    timeout: float = 10.0
    hackernews_limit: int = 30
    rss_limit: int = 50


@dataclass
class Settings:
    """Application settings."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    feeds: FeedsConfig = field(default_factory=FeedsConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)

    @property
    def database_path(self) -> Path:
        return self.storage.database_path

    @property
    def registry_path(self) -> Path:
        return self.feeds.registry_path


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _apply_section(section: Any, values: dict, name: str) -> None:
    """Copy YAML values onto a config dataclass, rejecting unknown keys."""
    known = {f.name: f for f in fields(section)}
    for key, value in values.items():
        if key not in known:
            raise ValueError(f"Unknown setting '{name}.{key}'")
        if isinstance(getattr(section, key), Path):
            value = Path(value)
        setattr(section, key, value)


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)
    settings = Settings()

    for name in ("storage", "feeds", "fetch"):
        if name in config:
            _apply_section(getattr(settings, name), config[name] or {}, name)

    # Environment wins over the YAML file
    database_path = os.getenv("NEWS_AGGREGATOR_DB")
    if database_path:
        settings.storage.database_path = Path(database_path)

    registry_path = os.getenv("NEWS_AGGREGATOR_FEEDS")
    if registry_path:
        settings.feeds.registry_path = Path(registry_path)

    return settings
