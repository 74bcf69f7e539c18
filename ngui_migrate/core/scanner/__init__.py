"""ngui-migrate usage scanner — tree-sitter for scripts, regex for markup.

Public API:
    scan_project(project_root, registry) → List[UsageRecord]
    scan_file(path, registry) → UsageRecord
    ProjectScanner(registry, exclude_dirs).scan(project_root)
"""

import logging
import os
from typing import Iterable, List, Optional

from ..errors import ParseError
from ..mappings import MappingRegistry, get_default_registry
from .heuristics import (
    get_config_kind,
    is_config_property,
    is_grid_api_call,
    is_library_package,
    looks_like_library_class,
)
from .models import (
    ApiCallUsage,
    Attribute,
    ComponentUsage,
    ConfigUsage,
    CssClassUsage,
    Expression,
    ImportSpecifier,
    ImportUsage,
    LiteralProperty,
    ObjectLiteral,
    SkippedFile,
    SymbolUsage,
    UsageRecord,
)
from .utils import collect_files, detect_language, get_scanner, should_skip_directory

logger = logging.getLogger(__name__)

__all__ = [
    "scan_project",
    "scan_file",
    "ProjectScanner",
    "detect_language",
    "should_skip_directory",
    "get_config_kind",
    "is_config_property",
    "is_grid_api_call",
    "is_library_package",
    "looks_like_library_class",
    "ApiCallUsage",
    "Attribute",
    "ComponentUsage",
    "ConfigUsage",
    "CssClassUsage",
    "Expression",
    "ImportSpecifier",
    "ImportUsage",
    "LiteralProperty",
    "ObjectLiteral",
    "SkippedFile",
    "SymbolUsage",
    "UsageRecord",
]


def scan_file(file_path: str, registry: Optional[MappingRegistry] = None) -> UsageRecord:
    """Scan a single file.

    Raises:
        ParseError: If the file cannot be read or parsed
        ValueError: If the file type is not scanned
    """
    language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Unsupported file type: {file_path}")
    return get_scanner(language).scan_file(file_path, registry or get_default_registry())


class ProjectScanner:
    """Walks a project and collects one UsageRecord per file with usage.

    Unreadable or unparsable files are logged, listed in ``skipped`` and
    otherwise ignored; they never abort the scan.
    """

    def __init__(
        self,
        registry: Optional[MappingRegistry] = None,
        exclude_dirs: Iterable[str] = (),
    ):
        self.registry = registry or get_default_registry()
        self.exclude_dirs = tuple(exclude_dirs)
        self.skipped: List[SkippedFile] = []
        self.files_scanned = 0

    def scan(self, project_root: str) -> List[UsageRecord]:
        project_root = os.path.abspath(project_root)
        self.skipped = []
        self.files_scanned = 0
        records: List[UsageRecord] = []

        for file_path in collect_files(project_root, self.exclude_dirs):
            self.files_scanned += 1
            try:
                record = scan_file(file_path, self.registry)
            except ParseError as e:
                logger.warning(f"Skipping {file_path}: {e.message} (line {e.line})")
                self.skipped.append(SkippedFile(file_path=file_path, reason=e.message))
                continue

            if record.has_usage():
                records.append(record)

        logger.info(
            f"Scanned {self.files_scanned} files in {project_root}: "
            f"{len(records)} with ag-Grid usage, {len(self.skipped)} skipped"
        )
        return records


def scan_project(project_root: str, registry: Optional[MappingRegistry] = None) -> List[UsageRecord]:
    """Scan every TS/JS/HTML/CSS file under ``project_root``."""
    return ProjectScanner(registry).scan(project_root)
