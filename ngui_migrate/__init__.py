"""ngui-migrate: migrate Angular projects from ag-Grid to ng-ui."""

from .core.config import MigrateConfig, load_config
from .core.errors import (
    BackupMissingError,
    ConfigError,
    ExternalProcessError,
    FileIOError,
    MigrationToolError,
    ParseError,
    ProjectNotFoundError,
    TransformationMismatchError,
)
from .core.mappings import MappingRegistry, add_custom_mapping, add_unsupported, get_default_registry
from .core.report import CompatibilityReport, analyze_compatibility
from .core.runner import MigrationResult, MigrationRunner, MigrationScope, RollbackResult
from .core.scanner import ProjectScanner, UsageRecord, scan_file, scan_project
from .core.transformers import Transformation, apply_transformations, generate_transformations
from .core.validation import ValidationReport, validate_project

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "MigrateConfig",
    "load_config",
    "MappingRegistry",
    "add_custom_mapping",
    "add_unsupported",
    "get_default_registry",
    "ProjectScanner",
    "UsageRecord",
    "scan_file",
    "scan_project",
    "Transformation",
    "apply_transformations",
    "generate_transformations",
    "CompatibilityReport",
    "analyze_compatibility",
    "MigrationRunner",
    "MigrationResult",
    "MigrationScope",
    "RollbackResult",
    "ValidationReport",
    "validate_project",
    "MigrationToolError",
    "ParseError",
    "TransformationMismatchError",
    "FileIOError",
    "BackupMissingError",
    "ExternalProcessError",
    "ProjectNotFoundError",
    "ConfigError",
]
