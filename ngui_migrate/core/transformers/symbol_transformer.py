"""Renames references to imported ag-Grid symbols (types, decorators, NgModule lists)."""

from ..mappings import MappingRegistry
from ..scanner.models import SymbolUsage
from .models import TransformBatch, Transformation, TransformKind


def transform_symbol_reference(file_path: str, usage: SymbolUsage, registry: MappingRegistry) -> TransformBatch:
    batch = TransformBatch()
    new_name = registry.symbols.get(usage.name)
    if new_name:
        batch.add(
            Transformation(
                file_path=file_path,
                kind=TransformKind.SYMBOL,
                line=usage.line,
                column=usage.column,
                old_text=usage.name,
                new_text=new_name,
                description=f"Transform ag-Grid type reference '{usage.name}' to '{new_name}'",
            )
        )
    return batch
