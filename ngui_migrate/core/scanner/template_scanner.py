"""Angular template scanner — regex-based.

Finds grid component tags (with their attributes and closing tag) and
ag-Grid CSS classes used in ``class="..."`` attributes.  The same rules
are applied to inline templates found in TypeScript string literals.

Does NOT use tree-sitter; exposes the same
scan_file/scan_source interface as the script scanners.
"""

import logging
import re
from typing import List, Tuple

from ..mappings import MappingRegistry
from .base import BaseSourceScanner
from .heuristics import looks_like_library_class
from .models import Attribute, ComponentUsage, CssClassUsage, UsageRecord
from .utils import LineIndex

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# Attribute region of an opening tag; quoted values may contain '>'
_TAG_BODY = r"((?:[^>\"']|\"[^\"]*\"|'[^']*')*)>"

# name, name="v", name='v', name=v  (covers [x], (x), [(x)], #x, *x)
_ATTRIBUTE_RE = re.compile(
    r"([^\s=/>\"']+)(?:\s*=\s*(\"[^\"]*\"|'[^']*'|[^\s>\"']+))?"
)

# class="a b c" but not [class]="..." or ngClass="..."
_CLASS_ATTR_RE = re.compile(
    r"(?<![\w\-\[.:])class\s*=\s*(?:\"([^\"]*)\"|'([^']*)')",
    re.IGNORECASE,
)

_TOKEN_RE = re.compile(r"\S+")


def _selector_pattern(registry: MappingRegistry) -> "re.Pattern[str]":
    selectors = sorted(registry.selectors, key=len, reverse=True)
    alternatives = "|".join(re.escape(s) for s in selectors)
    return re.compile(r"<(" + alternatives + r")(?=[\s/>])" + _TAG_BODY, re.IGNORECASE)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def scan_template_text(
    text: str,
    registry: MappingRegistry,
    line_offset: int = 0,
    column_offset: int = 0,
) -> Tuple[List[ComponentUsage], List[CssClassUsage]]:
    """Scan template markup for grid components and ag-Grid classes.

    Args:
        text: Template markup
        registry: Tables used for detection
        line_offset: Added to every reported line (for inline templates)
        column_offset: Added to columns on the first line of ``text``

    Returns:
        (components, css_classes) in document order
    """
    index = LineIndex(text)

    def locate(offset: int) -> Tuple[int, int]:
        line, column = index.position(offset)
        if line == 1:
            column += column_offset
        return line + line_offset, column

    components: List[ComponentUsage] = []
    if registry.selectors:
        for match in _selector_pattern(registry).finditer(text):
            components.append(_build_component(text, match, locate))

    css_classes: List[CssClassUsage] = []
    for match in _CLASS_ATTR_RE.finditer(text):
        group = 1 if match.group(1) is not None else 2
        value_start = match.start(group)
        for token in _TOKEN_RE.finditer(match.group(group)):
            name = token.group(0)
            if not looks_like_library_class(name, registry):
                continue
            line, column = locate(value_start + token.start())
            css_classes.append(CssClassUsage(name=name, line=line, column=column, raw_text=name))

    return components, css_classes


def _build_component(text: str, match: "re.Match[str]", locate) -> ComponentUsage:
    selector = match.group(1)
    body = match.group(2)
    body_start = match.start(2)
    line, column = locate(match.start())

    attributes: List[Attribute] = []
    for attr in _ATTRIBUTE_RE.finditer(body):
        attr_line, attr_column = locate(body_start + attr.start())
        attributes.append(
            Attribute(
                name=attr.group(1),
                value=_unquote(attr.group(2) or ""),
                line=attr_line,
                column=attr_column,
                raw_text=attr.group(0),
            )
        )

    component = ComponentUsage(
        line=line,
        column=column,
        selector=selector,
        attributes=attributes,
        raw_text=match.group(0),
    )

    if not body.rstrip().endswith("/"):
        closing = re.compile(r"</\s*" + re.escape(selector) + r"\s*>", re.IGNORECASE)
        close_match = closing.search(text, match.end())
        if close_match:
            component.closing_line, component.closing_column = locate(close_match.start())
            component.closing_text = close_match.group(0)

    return component


class TemplateScanner(BaseSourceScanner):
    """Regex-based scanner for Angular HTML templates."""

    def get_language(self) -> str:
        return "html"

    def scan_source(self, source_text: str, file_path: str, registry: MappingRegistry) -> UsageRecord:
        components, css_classes = scan_template_text(source_text, registry)
        if components:
            logger.debug("Found %d grid component(s) in %s", len(components), file_path)
        return UsageRecord(file_path=file_path, components=components, css_classes=css_classes)
