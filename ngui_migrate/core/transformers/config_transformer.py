"""Grid configuration transformer.

Renames grid option keys, rewrites the few values whose vocabulary
changed, replaces unsupported options with a ``_todo_`` placeholder,
and walks ``columnDefs`` / ``defaultColDef`` values column by column.
Every edit touches a single line: whole ``key: value`` pairs when the
pair fits on one line, otherwise just the key.
"""

import logging
from typing import Any, Optional, Union

from ..mappings import MappingRegistry
from ..scanner.models import ConfigUsage, Expression, LiteralProperty, ObjectLiteral
from .models import TransformBatch, Transformation, TransformKind

logger = logging.getLogger(__name__)

PropertyLike = Union[ConfigUsage, LiteralProperty]


def _requote(key_text: str, new_key: str) -> str:
    if key_text[:1] in ("'", '"'):
        return key_text[0] + new_key + key_text[0]
    return new_key


def _quote_of(value_text: str) -> str:
    return value_text[0] if value_text[:1] in ("'", '"', "`") else "'"


def _is_multiline(prop: PropertyLike) -> bool:
    return "\n" in prop.raw_text


def _pair_edit(
    file_path: str,
    prop: PropertyLike,
    key: str,
    new_key: str,
    new_value_text: Optional[str],
    description: str,
) -> Optional[Transformation]:
    """Build the edit for renaming a key and/or replacing its value."""
    key_changed = new_key != key
    value_changed = new_value_text is not None and new_value_text != prop.value_text
    if not key_changed and not value_changed:
        return None

    new_key_text = _requote(prop.key_text, new_key)
    if value_changed and not _is_multiline(prop):
        separator = prop.raw_text[len(prop.key_text):len(prop.raw_text) - len(prop.value_text)]
        old_text = prop.raw_text
        new_text = new_key_text + separator + new_value_text
    elif key_changed:
        old_text, new_text = prop.key_text, new_key_text
    else:
        return None

    return Transformation(
        file_path=file_path,
        kind=TransformKind.CONFIG,
        line=prop.line,
        column=prop.column,
        old_text=old_text,
        new_text=new_text,
        description=description,
    )


def _config_value(key: str, value: Any, value_text: str, registry: MappingRegistry) -> Optional[str]:
    """Rewritten value source for ``key``, or None when it stays as is."""
    value_map = registry.config_values.get(key)
    if value_map and isinstance(value, str) and value in value_map:
        quote = _quote_of(value_text)
        return f"{quote}{value_map[value]}{quote}"
    if key in registry.boolean_config and isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return "true" if value else "false"
    return None


def replaces_whole_pair(usage: ConfigUsage, registry: MappingRegistry) -> bool:
    """True when an unsupported option's whole ``key: value`` text is swapped for a placeholder."""
    if usage.property_name not in registry.unsupported_config:
        return False
    return not _is_multiline(usage) and "*/" not in usage.value_text


def _unsupported_placeholder(file_path: str, usage: ConfigUsage, registry: MappingRegistry, batch: TransformBatch) -> None:
    key = usage.property_name
    batch.warn(
        file_path,
        usage.line,
        usage.column,
        f"Unsupported config property '{key}' requires manual migration",
        "Check the ng-ui grid documentation for an equivalent feature",
    )

    if replaces_whole_pair(usage, registry):
        old_text = usage.raw_text
        new_text = f"_todo_{key}: undefined /* TODO: Migrate {key}: {usage.value_text} manually */"
    else:
        old_text = usage.key_text
        new_text = f"/* TODO: Migrate {key} manually */ _todo_{key}"

    batch.add(
        Transformation(
            file_path=file_path,
            kind=TransformKind.CONFIG,
            line=usage.line,
            column=usage.column,
            old_text=old_text,
            new_text=new_text,
            description=f"Mark unsupported config property '{key}' for manual migration",
        )
    )


# ── Column definitions ────────────────────────────────────────────────


def _transform_filter(file_path: str, prop: LiteralProperty, registry: MappingRegistry, batch: TransformBatch) -> None:
    value = prop.value

    if isinstance(value, bool) or value is None:
        batch.add(_pair_edit(file_path, prop, prop.key, "filterable", None, "Transform column property 'filter' to 'filterable'"))
        return

    if isinstance(value, str):
        filter_type = registry.filter_types.get(value, value)
        quote = _quote_of(prop.value_text)
        if _is_multiline(prop):
            batch.add(_pair_edit(file_path, prop, prop.key, "filterable", None, "Transform column property 'filter' to 'filterable'"))
            return
        batch.add(
            Transformation(
                file_path=file_path,
                kind=TransformKind.CONFIG,
                line=prop.line,
                column=prop.column,
                old_text=prop.raw_text,
                new_text=f"filterable: true, filterType: {quote}{filter_type}{quote}",
                description=f"Transform column filter '{value}' to filter type '{filter_type}'",
            )
        )
        return

    if isinstance(value, ObjectLiteral):
        new_key = "filterable: true, filterConfig"
        description = "Transform column filter object to 'filterConfig'"
        _transform_filter_config(file_path, value, registry, batch)
    else:
        new_key = "filterable: true, filterComponent"
        description = "Transform custom column filter to 'filterComponent'"
        batch.warn(
            file_path,
            prop.line,
            prop.column,
            f"Custom filter component '{prop.value_text}' must be ported to the ng-ui filter API",
            "Implement the ng-ui filter component interface",
        )

    batch.add(
        Transformation(
            file_path=file_path,
            kind=TransformKind.CONFIG,
            line=prop.line,
            column=prop.column,
            old_text=prop.key_text,
            new_text=new_key,
            description=description,
        )
    )


def _transform_filter_config(file_path: str, params: ObjectLiteral, registry: MappingRegistry, batch: TransformBatch) -> None:
    for prop in params.properties:
        new_key = registry.filter_config.get(prop.key, prop.key)
        batch.add(
            _pair_edit(file_path, prop, prop.key, new_key, None, f"Transform filter option '{prop.key}' to '{new_key}'")
        )


def _transform_named_value(
    file_path: str, prop: LiteralProperty, table: dict, label: str, batch: TransformBatch
) -> None:
    if not isinstance(prop.value, str) or prop.value not in table:
        return
    quote = _quote_of(prop.value_text)
    new_value = table[prop.value]
    batch.add(
        _pair_edit(
            file_path,
            prop,
            prop.key,
            prop.key,
            f"{quote}{new_value}{quote}",
            f"Transform built-in {label} '{prop.value}' to '{new_value}'",
        )
    )


def _transform_column(file_path: str, column: ObjectLiteral, registry: MappingRegistry, batch: TransformBatch) -> None:
    for prop in column.properties:
        key = prop.key
        if key == "filter":
            _transform_filter(file_path, prop, registry, batch)
            continue
        if key == "cellRenderer":
            _transform_named_value(file_path, prop, registry.cell_renderers, "cell renderer", batch)
            continue
        if key == "cellEditor":
            _transform_named_value(file_path, prop, registry.cell_editors, "cell editor", batch)
            continue

        new_key = registry.columns.get(key, key)
        batch.add(_pair_edit(file_path, prop, key, new_key, None, f"Transform column property '{key}' to '{new_key}'"))

        if key == "filterParams" and isinstance(prop.value, ObjectLiteral):
            _transform_filter_config(file_path, prop.value, registry, batch)
        elif key == "children":
            _transform_columns(file_path, prop.value, registry, batch)


def _transform_columns(file_path: str, value: Any, registry: MappingRegistry, batch: TransformBatch) -> None:
    if isinstance(value, ObjectLiteral):
        _transform_column(file_path, value, registry, batch)
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, ObjectLiteral):
                _transform_column(file_path, item, registry, batch)
    elif isinstance(value, Expression):
        logger.debug("Column definitions built at runtime (%s) are left untouched", value.text)


def transform_grid_config(file_path: str, usage: ConfigUsage, registry: MappingRegistry) -> TransformBatch:
    """Rewrite one grid configuration property (and its columns)."""
    batch = TransformBatch()
    key = usage.property_name

    if key in registry.unsupported_config:
        _unsupported_placeholder(file_path, usage, registry, batch)
        return batch

    new_key = registry.config.get(key, key)
    new_value_text = _config_value(key, usage.value, usage.value_text, registry)
    batch.add(
        _pair_edit(
            file_path,
            usage,
            key,
            new_key,
            new_value_text,
            f"Transform ag-Grid configuration property '{key}' to '{new_key}'",
        )
    )

    if key in registry.column_containers:
        _transform_columns(file_path, usage.value, registry, batch)

    return batch
