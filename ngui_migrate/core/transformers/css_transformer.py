"""CSS class and custom property transformer."""

import logging

from ..mappings import MappingRegistry
from ..scanner.models import CssClassUsage
from ..scanner.utils import detect_language
from .models import TransformBatch, Transformation, TransformKind

logger = logging.getLogger(__name__)


def transform_css_classes(file_path: str, usage: CssClassUsage, registry: MappingRegistry) -> TransformBatch:
    """Rename one ag-Grid class occurrence.

    Resolution order: exact mapping, longest mapped prefix, unsupported
    placeholder, TODO-wrapped unknown class.  In stylesheets the name sits
    inside a selector, so unsupported and unknown classes only produce a
    warning and the selector is left as written.
    """
    batch = TransformBatch()
    name = usage.name
    in_stylesheet = detect_language(file_path) == "css"

    if name.startswith(registry.css_variable_prefix):
        new_name = registry.target_css_variable_prefix + name[len(registry.css_variable_prefix):]
        description = f"Transform CSS custom property '{name}' to '{new_name}'"
    else:
        mapped = registry.lookup_css_class(name)
        if mapped is not None:
            new_name = mapped
            description = f"Transform CSS class '{name}' to '{new_name}'"
        elif name in registry.unsupported_css:
            batch.warn(
                file_path,
                usage.line,
                usage.column,
                f"CSS class '{name}' has no ng-ui equivalent",
                "Remove the styling or restyle the ng-ui grid manually",
            )
            if in_stylesheet:
                return batch
            new_name = f"/* TODO: {name} is not supported */ {usage.raw_text}"
            description = f"Mark unsupported CSS class '{name}'"
        else:
            batch.warn(
                file_path,
                usage.line,
                usage.column,
                f"Unknown ag-Grid CSS class '{name}'",
                "Find the matching ngui-* class and rename it manually",
            )
            if in_stylesheet:
                return batch
            new_name = f"/* TODO: Transform {name} */ {usage.raw_text}"
            description = f"Mark unknown ag-Grid CSS class '{name}'"

    batch.add(
        Transformation(
            file_path=file_path,
            kind=TransformKind.CSS,
            line=usage.line,
            column=usage.column,
            old_text=usage.raw_text,
            new_text=new_name,
            description=description,
        )
    )
    return batch
