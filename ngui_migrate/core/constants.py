"""Shared constants for ngui-migrate.

This module contains constants that are used across multiple modules
to avoid duplication and ensure consistency.
"""

# =============================================================================
# Project Layout
# =============================================================================

# Directory (relative to the project root) holding timestamped backups
BACKUP_DIR_NAME = ".migration-backups"

# Backup directory names are "backup-" + a lexicographically sortable stamp
BACKUP_PREFIX = "backup-"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S%f"

# Files whose absence makes a project look "not Angular"
PROJECT_MARKER_FILES = ("package.json", "angular.json", "tsconfig.json")

# Per-project config file name
CONFIG_FILE_NAME = "ngui-migrate.yaml"

# Default HTML report file name used by the wizard
DEFAULT_REPORT_FILENAME = "ag-grid-migration-report.html"

# =============================================================================
# Target Library
# =============================================================================

# Dependencies written into package.json after a migration
TARGET_DEPENDENCIES = {
    "@ng-ui/grid": "^1.0.0",
    "@ng-ui/core": "^1.0.0",
}

# Valid entry points under the @ng-ui scope
TARGET_MODULES = frozenset({
    "core",
    "grid",
    "theme",
    "export",
    "cell",
    "column",
    "row",
    "data",
})

# =============================================================================
# Validation
# =============================================================================

TSC_COMMAND = ["npx", "tsc", "--noEmit", "--project", "tsconfig.json"]
BUILD_COMMAND = ["npx", "ng", "build", "--configuration=production"]

# Maximum number of compiler lines kept per failed check
MAX_TOOL_OUTPUT_LINES = 10

# =============================================================================
# Compatibility Scoring
# =============================================================================

SUPPORT_WEIGHTS = {
    "supported": 1.0,
    "partial": 0.7,
    "unsupported": 0.0,
}

# Effort points per usage kind
EFFORT_WEIGHTS = {
    "imports": 1,
    "components": 2,
    "configurations": 3,
    "api_calls": 3,
    "css_classes": 1,
    "unsupported_features": 5,
}

EFFORT_LOW_THRESHOLD = 50
EFFORT_MEDIUM_THRESHOLD = 150
