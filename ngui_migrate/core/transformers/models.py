"""Transformation data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class TransformKind(str, Enum):
    IMPORT = "import"
    COMPONENT = "component"
    CONFIG = "config"
    CSS = "css"
    SYMBOL = "symbol"


@dataclass
class Transformation:
    """A single line-local text replacement.

    ``old_text`` must still be present on ``line`` when the edit is
    applied; otherwise the edit is skipped and reported.
    """

    file_path: str
    kind: TransformKind
    line: int
    column: int
    old_text: str
    new_text: str
    description: str


@dataclass
class TransformWarning:
    """Something a generator could not (fully) migrate."""

    file_path: str
    line: int
    column: int
    message: str
    suggestion: Optional[str] = None


@dataclass
class TransformBatch:
    transformations: List[Transformation] = field(default_factory=list)
    warnings: List[TransformWarning] = field(default_factory=list)

    def add(self, transformation: Optional[Transformation]) -> None:
        """Append an edit, dropping ``None`` and no-op replacements."""
        if transformation is not None and transformation.old_text != transformation.new_text:
            self.transformations.append(transformation)

    def warn(self, file_path: str, line: int, column: int, message: str, suggestion: Optional[str] = None) -> None:
        self.warnings.append(TransformWarning(file_path, line, column, message, suggestion))

    def extend(self, other: "TransformBatch") -> None:
        self.transformations.extend(other.transformations)
        self.warnings.extend(other.warnings)
