"""ngui-migrate configuration.

Settings come from three layers, later ones winning:

1. Built-in defaults (``MigrateConfig()``)
2. ``ngui-migrate.yaml`` in the project root, or an explicit ``--config`` path
3. Environment variables (``.env`` is loaded first via python-dotenv)

Custom mappings from the YAML file are applied to a fresh registry,
never to the process-wide default.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from ..constants import (
    BACKUP_DIR_NAME,
    BUILD_COMMAND,
    CONFIG_FILE_NAME,
    DEFAULT_REPORT_FILENAME,
    TARGET_DEPENDENCIES,
    TSC_COMMAND,
)
from ..errors import ConfigError
from ..mappings import MappingRegistry

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "NGUI_MIGRATE_LOG_LEVEL"
ENV_BACKUP_DIR = "NGUI_MIGRATE_BACKUP_DIR"
ENV_VALIDATION_TIMEOUT = "NGUI_MIGRATE_VALIDATION_TIMEOUT"


@dataclass
class ValidationSettings:
    timeout_seconds: Optional[float] = None
    tsc_command: List[str] = field(default_factory=lambda: list(TSC_COMMAND))
    build_command: List[str] = field(default_factory=lambda: list(BUILD_COMMAND))


@dataclass
class MigrateConfig:
    log_level: str = "INFO"
    backup_dir: str = BACKUP_DIR_NAME
    exclude_dirs: List[str] = field(default_factory=list)
    target_dependencies: Dict[str, str] = field(default_factory=lambda: dict(TARGET_DEPENDENCIES))
    custom_mappings: Dict[str, Dict[str, str]] = field(default_factory=dict)
    unsupported: Dict[str, List[str]] = field(default_factory=dict)
    validation: ValidationSettings = field(default_factory=ValidationSettings)
    report_filename: str = DEFAULT_REPORT_FILENAME

    def build_registry(self) -> MappingRegistry:
        """Default tables extended with this config's custom entries.

        Raises:
            ConfigError: If a custom entry names an unknown table or
                contradicts an existing mapping.
        """
        registry = MappingRegistry.default()
        try:
            for table, entries in self.custom_mappings.items():
                for source, target in entries.items():
                    registry.add_custom_mapping(table, source, target)
            for kind, names in self.unsupported.items():
                for name in names:
                    registry.add_unsupported(kind, name)
        except ValueError as e:
            raise ConfigError(f"Invalid custom mapping: {e}") from e
        return registry


def _as_command(value: Any, key: str) -> List[str]:
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f"validation.{key} must be a string or a list of strings")


def _apply_yaml(config: MigrateConfig, data: Dict[str, Any]) -> None:
    if "log_level" in data:
        config.log_level = str(data["log_level"]).upper()
    if "backup_dir" in data:
        config.backup_dir = str(data["backup_dir"])
    if "exclude_dirs" in data:
        config.exclude_dirs = [str(d) for d in data["exclude_dirs"] or []]
    if "target_dependencies" in data:
        config.target_dependencies = {str(k): str(v) for k, v in (data["target_dependencies"] or {}).items()}
    if "custom_mappings" in data:
        mappings = data["custom_mappings"] or {}
        if not isinstance(mappings, dict):
            raise ConfigError("custom_mappings must be a mapping of table name to entries")
        config.custom_mappings = {
            str(table): {str(k): str(v) for k, v in (entries or {}).items()}
            for table, entries in mappings.items()
        }
    if "unsupported" in data:
        config.unsupported = {str(kind): [str(n) for n in names or []] for kind, names in (data["unsupported"] or {}).items()}

    validation = data.get("validation") or {}
    if "timeout_seconds" in validation:
        timeout = validation["timeout_seconds"]
        config.validation.timeout_seconds = float(timeout) if timeout is not None else None
    if "tsc_command" in validation:
        config.validation.tsc_command = _as_command(validation["tsc_command"], "tsc_command")
    if "build_command" in validation:
        config.validation.build_command = _as_command(validation["build_command"], "build_command")

    report = data.get("report") or {}
    if "default_filename" in report:
        config.report_filename = str(report["default_filename"])


def _apply_env(config: MigrateConfig) -> None:
    if os.getenv(ENV_LOG_LEVEL):
        config.log_level = os.getenv(ENV_LOG_LEVEL).upper()
    if os.getenv(ENV_BACKUP_DIR):
        config.backup_dir = os.getenv(ENV_BACKUP_DIR)
    timeout = os.getenv(ENV_VALIDATION_TIMEOUT)
    if timeout:
        try:
            config.validation.timeout_seconds = float(timeout)
        except ValueError:
            logger.warning(f"Ignoring non-numeric {ENV_VALIDATION_TIMEOUT}={timeout!r}")


def load_config(project_path: Optional[str] = None, config_path: Optional[str] = None) -> MigrateConfig:
    """Load configuration for a project.

    Args:
        project_path: Project root searched for ``ngui-migrate.yaml``
        config_path: Explicit config file; must exist when given

    Returns:
        MigrateConfig with defaults, file and environment merged

    Raises:
        ConfigError: If the file is unreadable, not valid YAML, or has
            values of the wrong shape
    """
    load_dotenv()
    config = MigrateConfig()

    if config_path:
        path: Optional[Path] = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    elif project_path:
        path = Path(project_path) / CONFIG_FILE_NAME
        if not path.is_file():
            logger.debug(f"{CONFIG_FILE_NAME} not found in {project_path}, using defaults")
            path = None
    else:
        path = None

    if path is not None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping at the top level")
        try:
            _apply_yaml(config, data)
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in {path}: {e}") from e
        logger.info(f"Loaded configuration from {path}")

    _apply_env(config)
    return config
