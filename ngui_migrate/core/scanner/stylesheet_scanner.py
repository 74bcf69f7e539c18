"""Stylesheet scanner for CSS, SCSS and Sass files.

Selector classes are found with a ``.ag-`` regex, minus grid selectors
and package names.  ``--ag-*`` custom properties are reported as class
usages too so they flow through the same transformer.
"""

import logging
import re

from ..mappings import MappingRegistry
from .base import BaseSourceScanner
from .heuristics import looks_like_library_class
from .models import CssClassUsage, UsageRecord
from .utils import LineIndex

logger = logging.getLogger(__name__)


class StylesheetScanner(BaseSourceScanner):
    """Regex-based scanner for stylesheets."""

    def get_language(self) -> str:
        return "css"

    def scan_source(self, source_text: str, file_path: str, registry: MappingRegistry) -> UsageRecord:
        class_re = re.compile(r"\.(" + re.escape(registry.css_class_prefix) + r"[\w-]+)")
        variable_re = re.compile(r"(?<![\w-])" + re.escape(registry.css_variable_prefix) + r"[\w-]+")
        index = LineIndex(source_text)

        found = []
        for match in class_re.finditer(source_text):
            if looks_like_library_class(match.group(1), registry):
                found.append((match.start(1), match.group(1)))
        for match in variable_re.finditer(source_text):
            found.append((match.start(), match.group(0)))
        found.sort()

        css_classes = []
        for offset, name in found:
            line, column = index.position(offset)
            css_classes.append(CssClassUsage(name=name, line=line, column=column, raw_text=name))

        return UsageRecord(file_path=file_path, css_classes=css_classes)
