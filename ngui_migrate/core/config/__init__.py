"""Configuration loading (YAML file, .env and environment overrides)."""

from .config_loader import MigrateConfig, ValidationSettings, load_config

__all__ = ["MigrateConfig", "ValidationSettings", "load_config"]
