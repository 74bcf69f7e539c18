"""Migration runner result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..transformers.models import Transformation


class MigrationStage(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    BACKING_UP = "backing_up"
    GENERATING_TRANSFORMATIONS = "generating_transformations"
    APPLYING = "applying"
    PREVIEWING = "previewing"
    UPDATING_MANIFEST = "updating_manifest"
    DONE = "done"


class MigrationScope(str, Enum):
    FULL = "full"
    SELECTIVE = "selective"
    CONFIG = "config"
    TEMPLATES = "templates"


@dataclass
class MigrationError:
    file_path: str
    message: str
    line: int = 0
    column: int = 0
    severity: str = "error"


@dataclass
class MigrationWarning:
    file_path: str
    message: str
    line: int = 0
    column: int = 0
    suggestion: Optional[str] = None


@dataclass
class MigrationResult:
    success: bool = True
    files_processed: int = 0
    files_modified: int = 0
    errors: List[MigrationError] = field(default_factory=list)
    warnings: List[MigrationWarning] = field(default_factory=list)
    transformations: List[Transformation] = field(default_factory=list)
    backup_path: Optional[str] = None
    failed_stage: Optional[MigrationStage] = None
    cancelled: bool = False


@dataclass
class RollbackResult:
    project_path: str
    backup_path: str
    files_restored: int = 0
