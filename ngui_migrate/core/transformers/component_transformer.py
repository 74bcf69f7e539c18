"""Grid component tag transformer.

Works token by token: the ``<selector`` tag name, each renamed or
unsupported attribute, and the closing tag are separate edits, so
class-name edits inside the same tag never collide with them.
"""

import logging
from typing import List

from ..mappings import MappingRegistry
from ..scanner.models import Attribute, ComponentUsage
from .models import TransformBatch, Transformation, TransformKind

logger = logging.getLogger(__name__)


def unsupported_marker(attr: Attribute) -> str:
    if attr.value:
        return f'<!-- TODO: Migrate {attr.name}="{attr.value}" manually -->'
    return f"<!-- TODO: Migrate {attr.name} manually -->"


def _attribute_edit(
    file_path: str,
    attr: Attribute,
    registry: MappingRegistry,
    batch: TransformBatch,
) -> bool:
    """Queue the edit for one attribute; returns True if it needs manual work."""
    first_line = attr.raw_text.split("\n", 1)[0]

    if attr.name in registry.unsupported_attributes:
        batch.warn(
            file_path,
            attr.line,
            attr.column,
            f"Unsupported grid attribute '{attr.name}' requires manual migration",
            "Check the ng-ui grid documentation for an equivalent feature",
        )
        if "\n" in attr.raw_text:
            return True
        batch.add(
            Transformation(
                file_path=file_path,
                kind=TransformKind.COMPONENT,
                line=attr.line,
                column=attr.column,
                old_text=attr.raw_text,
                new_text=unsupported_marker(attr),
                description=f"Mark unsupported attribute '{attr.name}' for manual migration",
            )
        )
        return True

    new_name = registry.attributes.get(attr.name)
    if new_name and new_name != attr.name:
        batch.add(
            Transformation(
                file_path=file_path,
                kind=TransformKind.COMPONENT,
                line=attr.line,
                column=attr.column,
                old_text=first_line,
                new_text=new_name + first_line[len(attr.name):],
                description=f"Transform attribute '{attr.name}' to '{new_name}'",
            )
        )
    return False


def transform_component(file_path: str, usage: ComponentUsage, registry: MappingRegistry) -> TransformBatch:
    """Rewrite a grid component tag, its attributes and its closing tag."""
    batch = TransformBatch()
    new_selector = registry.selectors.get(usage.selector, usage.selector)

    attribute_batch = TransformBatch()
    manual: List[str] = [
        attr.name for attr in usage.attributes if _attribute_edit(file_path, attr, registry, attribute_batch)
    ]

    description = f"Transform ag-Grid component from '{usage.selector}' to '{new_selector}'"
    if manual:
        description += f" ({len(manual)} manual changes required)"

    if new_selector != usage.selector:
        batch.add(
            Transformation(
                file_path=file_path,
                kind=TransformKind.COMPONENT,
                line=usage.line,
                column=usage.column,
                old_text=f"<{usage.selector}",
                new_text=f"<{new_selector}",
                description=description,
            )
        )
        if usage.closing_line is not None and usage.closing_text and "\n" not in usage.closing_text:
            batch.add(
                Transformation(
                    file_path=file_path,
                    kind=TransformKind.COMPONENT,
                    line=usage.closing_line,
                    column=usage.closing_column or 0,
                    old_text=usage.closing_text,
                    new_text=f"</{new_selector}>",
                    description=f"Transform closing tag for '{usage.selector}'",
                )
            )

    batch.extend(attribute_batch)
    return batch
