"""Post-migration validation."""

from .models import CheckResult, Finding, ValidationReport
from .validator import MigrationValidator, validate_project

__all__ = [
    "CheckResult",
    "Finding",
    "MigrationValidator",
    "ValidationReport",
    "validate_project",
]
