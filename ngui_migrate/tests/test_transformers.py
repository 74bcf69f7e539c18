"""Tests for the transformation generators."""

import pytest

from ngui_migrate.core.mappings import MappingRegistry
from ngui_migrate.core.scanner.models import ApiCallUsage, CssClassUsage, SymbolUsage
from ngui_migrate.core.scanner.stylesheet_scanner import StylesheetScanner
from ngui_migrate.core.scanner.template_scanner import TemplateScanner
from ngui_migrate.core.scanner.typescript_scanner import TypeScriptScanner
from ngui_migrate.core.transformers import (
    TransformKind,
    apply_transformations,
    generate_transformations,
    transform,
    transform_css_classes,
    transform_symbol_reference,
)


# ── Fixtures ──────────────────────────────────────────────────────────────


def _registry() -> MappingRegistry:
    return MappingRegistry.default()


def _migrate(source: str, file_path: str = "app.ts", registry: MappingRegistry = None):
    """Scan, generate and apply; returns (batch, migrated text)."""
    registry = registry or _registry()
    if file_path.endswith(".html"):
        scanner = TemplateScanner()
    elif file_path.endswith((".css", ".scss", ".sass")):
        scanner = StylesheetScanner()
    else:
        scanner = TypeScriptScanner()
    record = scanner.scan_source(source, file_path, registry)
    batch = generate_transformations([record], registry)
    return batch, apply_transformations(source, batch.transformations).text


def _css_usage(name: str) -> CssClassUsage:
    return CssClassUsage(name=name, line=1, column=5, raw_text=name)


MULTILINE_IMPORT = """import {
  AgGridModule,
  GridOptions,
} from 'ag-grid-angular';
"""

MULTILINE_TEMPLATE = """<ag-grid-angular
  class="ag-theme-alpine"
  [rowData]="rowData"
  (gridReady)="onGridReady($event)">
</ag-grid-angular>
"""

COLUMN_DEFS = """const gridOptions = {
  columnDefs: [
    { headerName: 'Name', field: 'name', filter: 'agTextColumnFilter' },
    { field: 'age', filter: true, filterParams: { filterOptions: ['equals'] } },
    { field: 'role', cellEditor: 'agSelectCellEditor', cellRenderer: 'agGroupCellRenderer' },
  ],
};
"""

MIGRATED_COLUMN_DEFS = """const gridOptions = {
  columns: [
    { header: 'Name', field: 'name', filterable: true, filterType: 'text' },
    { field: 'age', filterable: true, filterConfig: { options: ['equals'] } },
    { field: 'role', cellEditor: 'select', cellRenderer: 'groupRenderer' },
  ],
};
"""

MULTILINE_UNSUPPORTED = """const options = {
  statusBar: {
    panels: [],
  },
};
"""


# =========================================================================
# Tests: imports
# =========================================================================

class TestImportTransformer:
    def test_named_import(self):
        source = "import { AgGridAngular } from 'ag-grid-angular';\n"
        batch, text = _migrate(source)

        assert len(batch.transformations) == 1
        t = batch.transformations[0]
        assert t.kind == TransformKind.IMPORT
        assert t.new_text == "import { NgUiGridComponent } from '@ng-ui/grid';"
        assert t.description == "Transform ag-Grid import from 'ag-grid-angular' to '@ng-ui/grid'"
        assert text == "import { NgUiGridComponent } from '@ng-ui/grid';\n"

    def test_rescan_after_migration_finds_nothing(self):
        source = "import { AgGridAngular } from 'ag-grid-angular';\n"
        _, text = _migrate(source)
        batch, again = _migrate(text)
        assert batch.transformations == []
        assert again == text

    def test_generation_is_deterministic(self):
        source = "import { AgGridAngular } from 'ag-grid-angular';\n"
        assert _migrate(source)[0] == _migrate(source)[0]

    def test_default_import(self):
        _, text = _migrate("import Grid from 'ag-grid-community';\n")
        assert text == "import Grid from '@ng-ui/core';\n"

    def test_namespace_import(self):
        _, text = _migrate("import * as agGrid from '@ag-grid-community/core';\n")
        assert text == "import * as agGrid from '@ng-ui/core';\n"

    def test_alias_and_quotes_preserved(self):
        _, text = _migrate('import { ColDef as Column, RowNode } from "ag-grid-community"\n')
        assert text == 'import { NgUiColumnDefinition as Column, NgUiRowNode } from "@ng-ui/core"\n'

    def test_type_only_import(self):
        _, text = _migrate("import type { GridOptions } from 'ag-grid-community';\n")
        assert text == "import type { NgUiGridConfig } from '@ng-ui/core';\n"

    def test_unmapped_symbol_passes_through(self):
        _, text = _migrate("import { ModuleRegistry } from 'ag-grid-community';\n")
        assert text == "import { ModuleRegistry } from '@ng-ui/core';\n"

    def test_multiline_import_edited_token_by_token(self):
        batch, text = _migrate(MULTILINE_IMPORT)
        assert len(batch.transformations) == 3
        assert all("\n" not in t.old_text for t in batch.transformations)
        assert text == "import {\n  NgUiGridModule,\n  NgUiGridConfig,\n} from '@ng-ui/grid';\n"

    def test_unmapped_module_warns(self):
        batch, text = _migrate("import 'ag-grid-community/styles/ag-grid.css';\n")
        assert batch.transformations == []
        assert len(batch.warnings) == 1
        assert "ag-grid-community/styles/ag-grid.css" in batch.warnings[0].message


# =========================================================================
# Tests: components
# =========================================================================

class TestComponentTransformer:
    def test_single_line_component(self):
        source = '<ag-grid-angular [rowData]="rows" [enableRangeSelection]="true"></ag-grid-angular>\n'
        batch, text = _migrate(source, "grid.html")

        assert text == (
            '<ngui-grid [data]="rows" '
            '<!-- TODO: Migrate [enableRangeSelection]="true" manually -->'
            "></ngui-grid>\n"
        )
        assert batch.transformations[0].description == (
            "Transform ag-Grid component from 'ag-grid-angular' to 'ngui-grid' (1 manual changes required)"
        )
        assert len(batch.warnings) == 1
        assert "[enableRangeSelection]" in batch.warnings[0].message

    def test_multiline_component(self):
        _, text = _migrate(MULTILINE_TEMPLATE, "grid.html")
        assert text == (
            "<ngui-grid\n"
            '  class="ngui-theme-alpine"\n'
            '  [data]="rowData"\n'
            '  (gridReady)="onGridReady($event)">\n'
            "</ngui-grid>\n"
        )

    def test_template_reference_renamed(self):
        _, text = _migrate("<ag-grid-angular #agGrid></ag-grid-angular>", "grid.html")
        assert text == "<ngui-grid #nguiGrid></ngui-grid>"

    def test_closing_tag_description(self):
        batch, _ = _migrate("<ag-grid-angular></ag-grid-angular>", "grid.html")
        assert [t.description for t in batch.transformations][1] == "Transform closing tag for 'ag-grid-angular'"


# =========================================================================
# Tests: grid configuration
# =========================================================================

class TestConfigTransformer:
    def test_supported_and_unsupported_keys(self):
        source = "const options = { rowData: x, enableRangeSelection: true };\n"
        batch, text = _migrate(source)

        assert text == (
            "const options = { data: x, _todo_enableRangeSelection: undefined "
            "/* TODO: Migrate enableRangeSelection: true manually */ };\n"
        )
        assert len(batch.warnings) == 1
        assert "enableRangeSelection" in batch.warnings[0].message

    def test_value_rewrites(self):
        _, text = _migrate("const o = { rowSelection: 'multiple', pagination: 1 };\n")
        assert text == "const o = { rowSelection: 'multi', paginated: true };\n"

    def test_passthrough_key_untouched(self):
        batch, text = _migrate("const o = { rowHeight: 32, rowSelection: 'single' };\n")
        assert batch.transformations == []
        assert text == "const o = { rowHeight: 32, rowSelection: 'single' };\n"

    def test_column_definitions(self):
        _, text = _migrate(COLUMN_DEFS)
        assert text == MIGRATED_COLUMN_DEFS

    def test_default_col_def(self):
        _, text = _migrate("const o = { defaultColDef: { sortable: true, filter: true } };\n")
        assert text == "const o = { defaultColumn: { sortable: true, filterable: true } };\n"

    def test_custom_filter_component(self):
        batch, text = _migrate("const o = { columnDefs: [{ field: 'a', filter: PriceFilter }] };\n")
        assert text == "const o = { columns: [{ field: 'a', filterable: true, filterComponent: PriceFilter }] };\n"
        assert any("PriceFilter" in w.message for w in batch.warnings)

    def test_unsupported_option_keeps_nested_text(self):
        source = "const o = { autoGroupColumnDef: { cellClass: 'ag-cell' }, rowData: rows };\n"
        batch, text = _migrate(source)

        assert text == (
            "const o = { _todo_autoGroupColumnDef: undefined "
            "/* TODO: Migrate autoGroupColumnDef: { cellClass: 'ag-cell' } manually */, data: rows };\n"
        )
        assert all(t.new_text != "ngui-cell" for t in batch.transformations)

    def test_multiline_unsupported_value_keeps_lines(self):
        batch, text = _migrate(MULTILINE_UNSUPPORTED)
        assert text.splitlines()[1] == "  /* TODO: Migrate statusBar manually */ _todo_statusBar: {"
        assert len(batch.warnings) == 1

    def test_quoted_keys_keep_quotes(self):
        _, text = _migrate("const o = { 'rowData': rows };\n")
        assert text == "const o = { 'data': rows };\n"

    def test_no_noop_edits(self):
        for source in (COLUMN_DEFS, MULTILINE_UNSUPPORTED, "const o = { rowHeight: 32, gridOptions: {} };\n"):
            batch, _ = _migrate(source)
            assert all(t.old_text != t.new_text for t in batch.transformations)


# =========================================================================
# Tests: CSS classes and symbols
# =========================================================================

class TestCssTransformer:
    def test_exact_mapping(self):
        batch = transform_css_classes("styles.css", _css_usage("ag-theme-alpine"), _registry())
        assert batch.transformations[0].new_text == "ngui-theme-alpine"
        assert batch.warnings == []

    def test_prefix_mapping(self):
        batch = transform_css_classes("styles.css", _css_usage("ag-header-cell-text-wrap"), _registry())
        assert batch.transformations[0].new_text == "ngui-header-cell-text-wrap"

    def test_custom_prefix_mapping(self):
        registry = _registry()
        registry.add_custom_mapping("css", "theme-alpine", "theme2-alpine")
        batch = transform_css_classes("styles.css", _css_usage("theme-alpine-compact"), registry)
        assert batch.transformations[0].new_text == "theme2-alpine-compact"

    def test_unsupported_class(self):
        batch = transform_css_classes("grid.html", _css_usage("ag-status-bar"), _registry())
        assert batch.transformations[0].new_text == "/* TODO: ag-status-bar is not supported */ ag-status-bar"
        assert len(batch.warnings) == 1

    def test_unknown_class(self):
        batch = transform_css_classes("grid.html", _css_usage("ag-fancy-widget"), _registry())
        assert batch.transformations[0].new_text == "/* TODO: Transform ag-fancy-widget */ ag-fancy-widget"
        assert "ag-fancy-widget" in batch.warnings[0].message

    def test_stylesheet_keeps_unmapped_selectors(self):
        source = ".ag-theme-alpine .ag-status-bar { color: red; }\n.ag-foo-widget { x: 1 }\n"
        batch, text = _migrate(source, "styles.scss")

        assert text == ".ngui-theme-alpine .ag-status-bar { color: red; }\n.ag-foo-widget { x: 1 }\n"
        assert [t.old_text for t in batch.transformations] == ["ag-theme-alpine"]
        assert [w.line for w in batch.warnings] == [1, 2]

    def test_custom_property(self):
        usage = _css_usage("--ag-header-background-color")
        batch = transform_css_classes("styles.css", usage, _registry())
        assert batch.transformations[0].new_text == "--ngui-header-background-color"

    def test_inline_template_classes(self):
        source = "const t = `<div class=\"ag-row ag-cell\"></div>`;\n"
        _, text = _migrate(source)
        assert text == "const t = `<div class=\"ngui-row ngui-cell\"></div>`;\n"


class TestSymbolTransformer:
    def test_mapped_symbol(self):
        batch = transform_symbol_reference("app.ts", SymbolUsage("GridApi", 3, 10), _registry())
        t = batch.transformations[0]
        assert (t.kind, t.old_text, t.new_text) == (TransformKind.SYMBOL, "GridApi", "NgUiGridApi")

    def test_references_renamed_with_import(self):
        source = (
            "import { GridApi } from 'ag-grid-community';\n"
            "let api: GridApi;\n"
        )
        _, text = _migrate(source)
        assert text == "import { NgUiGridApi } from '@ng-ui/core';\nlet api: NgUiGridApi;\n"

    def test_aliased_import_references_untouched(self):
        source = (
            "import { GridApi as Api } from 'ag-grid-community';\n"
            "let api: Api;\n"
        )
        _, text = _migrate(source)
        assert text.splitlines()[1] == "let api: Api;"


class TestDispatch:
    def test_api_calls_produce_no_edits(self):
        usage = ApiCallUsage(1, 0, "gridApi", "sizeColumnsToFit", [], "gridApi.sizeColumnsToFit()")
        batch = transform(usage, "app.ts", _registry())
        assert batch.transformations == [] and batch.warnings == []

    def test_unknown_usage_type(self):
        with pytest.raises(TypeError):
            transform(object(), "app.ts", _registry())
