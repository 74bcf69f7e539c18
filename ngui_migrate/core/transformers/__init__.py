"""Transformation generators: usage records in, line-local edits out.

Public API:
    generate_transformations(records, registry) → TransformBatch
    transform(usage, file_path, registry) → TransformBatch  (per usage type)
    apply_transformations(text, transformations) → ApplyOutcome
"""

import logging
from functools import singledispatch
from typing import Iterable, List, Optional, Tuple

from ..mappings import MappingRegistry, get_default_registry
from ..scanner.models import (
    ApiCallUsage,
    ComponentUsage,
    ConfigUsage,
    CssClassUsage,
    ImportUsage,
    SymbolUsage,
    UsageRecord,
)
from .apply import ApplyOutcome, apply_transformations
from .component_transformer import transform_component
from .config_transformer import replaces_whole_pair, transform_grid_config
from .css_transformer import transform_css_classes
from .import_transformer import transform_import
from .models import TransformBatch, Transformation, TransformKind, TransformWarning
from .symbol_transformer import transform_symbol_reference

logger = logging.getLogger(__name__)

__all__ = [
    "generate_transformations",
    "transform",
    "transform_import",
    "transform_component",
    "transform_grid_config",
    "transform_css_classes",
    "transform_symbol_reference",
    "apply_transformations",
    "ApplyOutcome",
    "TransformBatch",
    "Transformation",
    "TransformKind",
    "TransformWarning",
]


@singledispatch
def transform(usage, file_path: str, registry: MappingRegistry) -> TransformBatch:
    raise TypeError(f"No transformer for {type(usage).__name__}")


@transform.register
def _(usage: ImportUsage, file_path: str, registry: MappingRegistry) -> TransformBatch:
    return transform_import(file_path, usage, registry)


@transform.register
def _(usage: ComponentUsage, file_path: str, registry: MappingRegistry) -> TransformBatch:
    return transform_component(file_path, usage, registry)


@transform.register
def _(usage: ConfigUsage, file_path: str, registry: MappingRegistry) -> TransformBatch:
    return transform_grid_config(file_path, usage, registry)


@transform.register
def _(usage: CssClassUsage, file_path: str, registry: MappingRegistry) -> TransformBatch:
    return transform_css_classes(file_path, usage, registry)


@transform.register
def _(usage: SymbolUsage, file_path: str, registry: MappingRegistry) -> TransformBatch:
    return transform_symbol_reference(file_path, usage, registry)


@transform.register
def _(usage: ApiCallUsage, file_path: str, registry: MappingRegistry) -> TransformBatch:
    # API calls are reported for manual review only
    return TransformBatch()


def _replaced_spans(record: UsageRecord, registry: MappingRegistry) -> List[Tuple[int, int, int]]:
    """(line, start, end) of config pairs replaced whole by a placeholder."""
    return [
        (usage.line, usage.column, usage.column + len(usage.raw_text))
        for usage in record.configurations
        if replaces_whole_pair(usage, registry)
    ]


def _nested_in(transformation: Transformation, spans: List[Tuple[int, int, int]]) -> bool:
    start = transformation.column
    end = start + len(transformation.old_text)
    for line, span_start, span_end in spans:
        if transformation.line != line or (start, end) == (span_start, span_end):
            continue
        if span_start <= start and end <= span_end:
            return True
    return False


def generate_transformations(
    records: Iterable[UsageRecord],
    registry: Optional[MappingRegistry] = None,
) -> TransformBatch:
    """Generate every edit (and warning) for a set of usage records.

    Edits that fall inside an unsupported option whose whole pair becomes a
    placeholder are dropped; the placeholder keeps the original text.
    """
    registry = registry or get_default_registry()
    batch = TransformBatch()
    for record in records:
        record_batch = TransformBatch()
        for usage in record.usages():
            record_batch.extend(transform(usage, record.file_path, registry))

        spans = _replaced_spans(record, registry)
        for transformation in record_batch.transformations:
            if spans and _nested_in(transformation, spans):
                logger.debug(f"Dropping nested edit inside unsupported option: {transformation.description}")
                continue
            batch.add(transformation)
        batch.warnings.extend(record_batch.warnings)
    return batch
