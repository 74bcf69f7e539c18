"""Migration orchestration, backups and package.json updates."""

from .backup import create_backup, find_latest_backup, restore_backup
from .manifest import update_manifest
from .migration_runner import MigrationRunner, check_project_shape, filter_records, resolve_project
from .models import (
    MigrationError,
    MigrationResult,
    MigrationScope,
    MigrationStage,
    MigrationWarning,
    RollbackResult,
)

__all__ = [
    "MigrationRunner",
    "check_project_shape",
    "filter_records",
    "resolve_project",
    "create_backup",
    "find_latest_backup",
    "restore_backup",
    "update_manifest",
    "MigrationError",
    "MigrationResult",
    "MigrationScope",
    "MigrationStage",
    "MigrationWarning",
    "RollbackResult",
]
