"""Apply line-local transformations to file text."""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ..errors import TransformationMismatchError
from .models import Transformation

logger = logging.getLogger(__name__)


@dataclass
class ApplyOutcome:
    text: str
    applied: List[Transformation] = field(default_factory=list)
    skipped: List[TransformationMismatchError] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def apply_transformations(text: str, transformations: Sequence[Transformation]) -> ApplyOutcome:
    """Apply edits bottom-up, right-to-left so earlier anchors stay valid.

    Each edit replaces ``old_text`` at its recorded column; when the text
    is not there it falls back to the first occurrence on the same line.
    Edits whose ``old_text`` is missing from the line are skipped.
    """
    lines = text.split("\n")
    outcome = ApplyOutcome(text=text)

    for t in sorted(transformations, key=lambda t: (t.line, t.column), reverse=True):
        index = t.line - 1
        if index < 0 or index >= len(lines) or not t.old_text:
            outcome.skipped.append(TransformationMismatchError(t.file_path, t.line, t.old_text))
            continue

        line = lines[index]
        start = t.column
        if line[start:start + len(t.old_text)] != t.old_text:
            start = line.find(t.old_text)
        if start < 0:
            logger.warning(f"{t.file_path}:{t.line}: '{t.old_text}' not found, skipping edit")
            outcome.skipped.append(TransformationMismatchError(t.file_path, t.line, t.old_text))
            continue

        lines[index] = line[:start] + t.new_text + line[start + len(t.old_text):]
        outcome.applied.append(t)

    outcome.text = "\n".join(lines)
    return outcome
