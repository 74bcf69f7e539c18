"""Import statement transformer.

Maps the module source and every named specifier.  Aliases survive,
unmapped names pass through, and default / namespace / named imports
keep their shape.
"""

import logging
from typing import List

from ..mappings import MappingRegistry
from ..scanner.models import ImportSpecifier, ImportUsage
from .models import TransformBatch, Transformation, TransformKind

logger = logging.getLogger(__name__)


def _map_name(spec: ImportSpecifier, registry: MappingRegistry) -> str:
    if spec.kind != "named":
        return spec.name
    return registry.symbols.get(spec.name, spec.name)


def _render_import(usage: ImportUsage, new_source: str, registry: MappingRegistry) -> str:
    quote = '"' if f'"{usage.module_source}"' in usage.raw_text else "'"
    keyword = "import type" if usage.type_only else "import"
    semicolon = ";" if usage.raw_text.rstrip().endswith(";") else ""

    clauses: List[str] = []
    named: List[str] = []
    for spec in usage.specifiers:
        if spec.kind == "default":
            clauses.append(spec.name)
        elif spec.kind == "namespace":
            clauses.append(f"* as {spec.alias}")
        else:
            name = _map_name(spec, registry)
            named.append(f"{name} as {spec.alias}" if spec.alias else name)
    if named:
        clauses.append("{ " + ", ".join(named) + " }")

    if not clauses:
        return f"{keyword} {quote}{new_source}{quote}{semicolon}"
    return f"{keyword} {', '.join(clauses)} from {quote}{new_source}{quote}{semicolon}"


def transform_import(file_path: str, usage: ImportUsage, registry: MappingRegistry) -> TransformBatch:
    """Rewrite one ag-Grid import.

    Single-line imports are replaced as a whole statement; multi-line
    imports get one edit per changed token so every edit stays on one line.
    """
    batch = TransformBatch()
    new_source = registry.imports.get(usage.module_source, usage.module_source)
    renamed = [spec for spec in usage.specifiers if _map_name(spec, registry) != spec.name]

    if new_source == usage.module_source and not renamed:
        if usage.module_source not in registry.imports:
            batch.warn(
                file_path,
                usage.line,
                usage.column,
                f"No ng-ui equivalent for import '{usage.module_source}'",
                "Remove the import or replace it manually",
            )
        return batch

    description = f"Transform ag-Grid import from '{usage.module_source}' to '{new_source}'"

    if not usage.is_multiline:
        batch.add(
            Transformation(
                file_path=file_path,
                kind=TransformKind.IMPORT,
                line=usage.line,
                column=usage.column,
                old_text=usage.raw_text,
                new_text=_render_import(usage, new_source, registry),
                description=description,
            )
        )
        return batch

    quote = '"' if f'"{usage.module_source}"' in usage.raw_text else "'"
    batch.add(
        Transformation(
            file_path=file_path,
            kind=TransformKind.IMPORT,
            line=usage.source_line,
            column=usage.source_column,
            old_text=f"{quote}{usage.module_source}{quote}",
            new_text=f"{quote}{new_source}{quote}",
            description=description,
        )
    )
    for spec in renamed:
        batch.add(
            Transformation(
                file_path=file_path,
                kind=TransformKind.IMPORT,
                line=spec.line,
                column=spec.column,
                old_text=spec.name,
                new_text=_map_name(spec, registry),
                description=f"Rename imported symbol '{spec.name}' to '{_map_name(spec, registry)}'",
            )
        )
    return batch
