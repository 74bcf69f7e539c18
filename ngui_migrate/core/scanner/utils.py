"""Scanner utilities.

Language detection, file collection, scanner registry, and offset helpers.
"""

import bisect
import os
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from ..constants import BACKUP_DIR_NAME

if TYPE_CHECKING:
    from .base import BaseSourceScanner

# Extension → language mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".ts": "typescript",
    ".js": "javascript",
    ".html": "html",
    ".css": "css",
    ".scss": "css",
    ".sass": "css",
}

# Scan order: scripts, then templates, then stylesheets
_LANGUAGE_GROUP: Dict[str, int] = {
    "typescript": 0,
    "javascript": 0,
    "html": 1,
    "css": 2,
}

# Directories to skip during file walking
SKIP_DIRECTORIES = frozenset({
    ".git",
    ".angular",
    "node_modules",
    "dist",
    "coverage",
    BACKUP_DIR_NAME,
})

# Test specs and declaration files are never migrated
SKIP_FILE_SUFFIXES: Tuple[str, ...] = (
    ".spec.ts",
    ".test.ts",
    ".spec.js",
    ".test.js",
    ".d.ts",
)

# language → scanner instance, filled on first use
_scanner_registry: Dict[str, "BaseSourceScanner"] = {}


def detect_language(file_path: str) -> Optional[str]:
    """Detect the scanner language from a file extension.

    Args:
        file_path: Path to the source file

    Returns:
        Language identifier string or None if the file is not scanned
    """
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_scanner(language: str) -> "BaseSourceScanner":
    """Get a scanner instance for the given language.

    Raises:
        ValueError: If language is not supported
    """
    if language not in _scanner_registry:
        if language == "typescript":
            from .typescript_scanner import TypeScriptScanner
            _scanner_registry["typescript"] = TypeScriptScanner()
        elif language == "javascript":
            from .javascript_scanner import JavaScriptScanner
            _scanner_registry["javascript"] = JavaScriptScanner()
        elif language == "html":
            from .template_scanner import TemplateScanner
            _scanner_registry["html"] = TemplateScanner()
        elif language == "css":
            from .stylesheet_scanner import StylesheetScanner
            _scanner_registry["css"] = StylesheetScanner()
        else:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {sorted(set(SUPPORTED_EXTENSIONS.values()))}"
            )

    return _scanner_registry[language]


def should_skip_directory(dir_name: str, extra: Iterable[str] = ()) -> bool:
    """Check if a directory should be skipped during file walking."""
    return dir_name in SKIP_DIRECTORIES or dir_name in extra or dir_name.startswith(".")


def is_skipped_file(file_path: str) -> bool:
    return file_path.endswith(SKIP_FILE_SUFFIXES)


def collect_files(project_root: str, exclude_dirs: Iterable[str] = ()) -> List[str]:
    """Collect every scannable file under ``project_root``.

    Returns:
        Absolute paths ordered scripts → templates → stylesheets, each
        group sorted by relative path.
    """
    extra = frozenset(exclude_dirs)
    found: List[Tuple[int, str, str]] = []

    for dirpath, dirnames, filenames in os.walk(project_root):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_directory(d, extra))
        for filename in filenames:
            full_path = os.path.join(dirpath, filename)
            language = detect_language(filename)
            if language is None or is_skipped_file(filename):
                continue
            rel_path = os.path.relpath(full_path, project_root)
            found.append((_LANGUAGE_GROUP[language], rel_path, full_path))

    found.sort()
    return [full_path for _, _, full_path in found]


class LineIndex:
    """Maps character offsets in a text to (1-based line, 0-based column)."""

    def __init__(self, text: str):
        self._starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._starts.append(i + 1)

    def position(self, offset: int) -> Tuple[int, int]:
        index = bisect.bisect_right(self._starts, offset) - 1
        return index + 1, offset - self._starts[index]
