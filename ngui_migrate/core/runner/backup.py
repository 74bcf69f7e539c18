"""Whole-tree project backups under ``<project>/.migration-backups``."""

import logging
import os
import shutil
from datetime import datetime
from typing import Optional

from ..constants import BACKUP_DIR_NAME, BACKUP_PREFIX, BACKUP_TIMESTAMP_FORMAT
from ..errors import BackupMissingError, FileIOError

logger = logging.getLogger(__name__)

# Never copied into a backup (at any depth)
BACKUP_EXCLUDES = frozenset({"node_modules", "dist", ".git", ".angular"})


def _ignore_for(backup_dir_name: str):
    excluded = BACKUP_EXCLUDES | {backup_dir_name}

    def ignore(_dirpath, names):
        return [name for name in names if name in excluded]

    return ignore


def create_backup(project_path: str, backup_dir_name: str = BACKUP_DIR_NAME) -> str:
    """Copy the project tree into a new timestamped backup directory.

    A partially written backup is removed before the error propagates.

    Raises:
        FileIOError: If the copy fails
    """
    backups_root = os.path.join(project_path, backup_dir_name)
    stamp = datetime.now().strftime(BACKUP_TIMESTAMP_FORMAT)
    backup_path = os.path.join(backups_root, f"{BACKUP_PREFIX}{stamp}")

    try:
        os.makedirs(backups_root, exist_ok=True)
        shutil.copytree(project_path, backup_path, ignore=_ignore_for(backup_dir_name))
    except (OSError, shutil.Error) as e:
        if os.path.isdir(backup_path):
            shutil.rmtree(backup_path, ignore_errors=True)
        raise FileIOError(backup_path, f"Backup failed: {e}") from e

    logger.info(f"Backup created at {backup_path}")
    return backup_path


def find_latest_backup(project_path: str, backup_dir_name: str = BACKUP_DIR_NAME) -> Optional[str]:
    """Most recent backup directory, or None.

    Backup names embed a sortable timestamp, so the lexicographically
    last entry is the newest.
    """
    backups_root = os.path.join(project_path, backup_dir_name)
    if not os.path.isdir(backups_root):
        return None
    entries = sorted(
        name for name in os.listdir(backups_root)
        if name.startswith(BACKUP_PREFIX) and os.path.isdir(os.path.join(backups_root, name))
    )
    if not entries:
        return None
    return os.path.join(backups_root, entries[-1])


def restore_backup(project_path: str, backup_path: str) -> int:
    """Copy a backup over the project tree.

    Files created after the backup are left in place.

    Returns:
        Number of files restored

    Raises:
        BackupMissingError: If ``backup_path`` is not a directory
        FileIOError: If the copy fails
    """
    if not os.path.isdir(backup_path):
        raise BackupMissingError(f"Backup not found: {backup_path}")

    restored = sum(len(files) for _, _, files in os.walk(backup_path))
    try:
        shutil.copytree(backup_path, project_path, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise FileIOError(project_path, f"Rollback failed: {e}") from e

    logger.info(f"Restored {restored} files from {backup_path}")
    return restored
