"""Base interface for language-specific usage scanners.

Defines the Strategy pattern base class that all scanners implement.
File reading lives here; language-specific detection is delegated.
"""

import logging
from abc import ABC, abstractmethod

from ..errors import ParseError
from ..mappings import MappingRegistry
from .models import UsageRecord

logger = logging.getLogger(__name__)


class BaseSourceScanner(ABC):
    """Abstract base for scanners producing one UsageRecord per file.

    Subclasses implement:
    - get_language(): returns language name string
    - scan_source(): detects ag-Grid usage in already-loaded text
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'typescript', 'html')."""
        ...

    @abstractmethod
    def scan_source(self, source_text: str, file_path: str, registry: MappingRegistry) -> UsageRecord:
        """Detect usage in source text.

        Args:
            source_text: File content
            file_path: Path recorded on the resulting UsageRecord
            registry: Tables used for detection

        Returns:
            UsageRecord (possibly empty)

        Raises:
            ParseError: If the source cannot be parsed
        """
        ...

    def scan_file(self, file_path: str, registry: MappingRegistry) -> UsageRecord:
        """Read and scan a file.

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                source_text = f.read()
        except OSError as e:
            raise ParseError(file_path, f"Cannot read file: {e}") from e

        return self.scan_source(source_text, file_path, registry)
