"""Static ag-Grid → ng-ui mapping tables.

Plain dictionaries and frozensets; ``MappingRegistry.default()`` copies
them so that custom mappings never leak into these module-level values.
Rename tables never map a key to itself.
"""

from typing import Dict, FrozenSet, Tuple

# =============================================================================
# Detection
# =============================================================================

# npm packages (and package scopes) that identify ag-Grid imports
SOURCE_PACKAGES: Tuple[str, ...] = (
    "ag-grid-angular",
    "ag-grid-community",
    "ag-grid-enterprise",
    "@ag-grid-community/core",
    "@ag-grid-community/angular",
    "@ag-grid-enterprise/all-modules",
)

SOURCE_PACKAGE_SCOPES: Tuple[str, ...] = (
    "@ag-grid-community/",
    "@ag-grid-enterprise/",
)

# Prefix shared by every ag-Grid CSS class
CSS_CLASS_PREFIX = "ag-"

# CSS custom properties: --ag-* → --ngui-*
CSS_VARIABLE_PREFIX = "--ag-"
TARGET_CSS_VARIABLE_PREFIX = "--ngui-"

# Grid API methods recognised on any receiver
API_METHODS: FrozenSet[str] = frozenset({
    "setRowData",
    "getRowData",
    "setColumnDefs",
    "getColumnDefs",
    "sizeColumnsToFit",
    "autoSizeColumns",
    "autoSizeAllColumns",
    "exportDataAsCsv",
    "exportDataAsExcel",
    "selectAll",
    "deselectAll",
    "getSelectedRows",
    "getSelectedNodes",
    "refreshCells",
    "redrawRows",
    "setQuickFilter",
    "setFilterModel",
    "getFilterModel",
    "onFilterChanged",
    "getModel",
    "forEachNode",
    "getRenderedNodes",
    "startEditingCell",
    "stopEditing",
    "showLoadingOverlay",
    "hideOverlay",
    "paginationGoToPage",
})

# Receiver-name substrings that mark a call as a grid API call
API_OBJECT_INDICATORS: Tuple[str, ...] = ("grid", "Grid", "Api")

# Config keys that are recognised but keep their name in ng-ui
PASSTHROUGH_CONFIG_PROPERTIES: FrozenSet[str] = frozenset({
    "gridOptions",
    "rowSelection",
    "rowHeight",
    "headerHeight",
    "animateRows",
    "getRowId",
    "getRowClass",
    "getRowStyle",
    "getRowHeight",
    "onGridReady",
    "onSelectionChanged",
    "onRowClicked",
    "onCellClicked",
    "onCellValueChanged",
    "onColumnResized",
    "onSortChanged",
    "onFilterChanged",
    "context",
})

# Config keys whose value is a column definition (or a list of them)
COLUMN_CONTAINER_PROPERTIES: FrozenSet[str] = frozenset({
    "columnDefs",
    "defaultColDef",
})

# Config keys that only exist in ag-Grid Enterprise
ENTERPRISE_CONFIG_PROPERTIES: FrozenSet[str] = frozenset({
    "enableRangeSelection",
    "enableCharts",
    "masterDetail",
    "treeData",
    "statusBar",
    "sideBar",
    "toolPanel",
    "pivotMode",
})

# =============================================================================
# Imports & symbols
# =============================================================================

IMPORT_MAPPINGS: Dict[str, str] = {
    "ag-grid-angular": "@ng-ui/grid",
    "ag-grid-community": "@ng-ui/core",
    "ag-grid-enterprise": "@ng-ui/grid",
    "@ag-grid-community/core": "@ng-ui/core",
    "@ag-grid-community/angular": "@ng-ui/grid",
    "@ag-grid-community/csv-export": "@ng-ui/export",
    "@ag-grid-enterprise/all-modules": "@ng-ui/grid",
    "@ag-grid-enterprise/excel-export": "@ng-ui/export",
    "@ag-grid-enterprise/clipboard": "@ng-ui/grid",
    "@ag-grid-enterprise/range-selection": "@ng-ui/grid",
    "@ag-grid-enterprise/row-grouping": "@ng-ui/grid",
    "@ag-grid-enterprise/set-filter": "@ng-ui/grid",
    "@ag-grid-enterprise/multi-filter": "@ng-ui/grid",
}

SYMBOL_MAPPINGS: Dict[str, str] = {
    "AgGridAngular": "NgUiGridComponent",
    "AgGridModule": "NgUiGridModule",
    "GridOptions": "NgUiGridConfig",
    "ColDef": "NgUiColumnDefinition",
    "ColGroupDef": "NgUiColumnGroupDefinition",
    "GridApi": "NgUiGridApi",
    "ColumnApi": "NgUiColumnApi",
    "GridReadyEvent": "NgUiGridReadyEvent",
    "SelectionChangedEvent": "NgUiSelectionChangedEvent",
    "RowClickedEvent": "NgUiRowClickedEvent",
    "CellClickedEvent": "NgUiCellClickedEvent",
    "ColumnResizedEvent": "NgUiColumnResizedEvent",
    "ISetFilterParams": "NgUiSetFilterConfig",
    "ITextFilterParams": "NgUiTextFilterConfig",
    "INumberFilterParams": "NgUiNumberFilterConfig",
    "IDateFilterParams": "NgUiDateFilterConfig",
    "ICellRendererParams": "NgUiCellRendererParams",
    "ICellEditorParams": "NgUiCellEditorParams",
    "ICellRendererAngularComp": "NgUiCellRenderer",
    "RowNode": "NgUiRowNode",
    "IRowNode": "NgUiRowNode",
    "Column": "NgUiColumn",
    "GetRowIdFunc": "NgUiGetRowIdFunc",
    "IsRowSelectable": "NgUiIsRowSelectable",
}

# =============================================================================
# Templates
# =============================================================================

SELECTOR_MAPPINGS: Dict[str, str] = {
    "ag-grid-angular": "ngui-grid",
    "AgGridAngular": "NgUiGridComponent",
}

ATTRIBUTE_MAPPINGS: Dict[str, str] = {
    "[rowData]": "[data]",
    "[columnDefs]": "[columns]",
    "[gridOptions]": "[config]",
    "[defaultColDef]": "[defaultColumn]",
    "[enableSorting]": "[sortable]",
    "[enableFiltering]": "[filterable]",
    "[enableColResize]": "[resizable]",
    "[pagination]": "[paginated]",
    "[paginationPageSize]": "[pageSize]",
    "[paginationAutoPageSize]": "[autoPageSize]",
    "[suppressRowClickSelection]": "[disableRowClickSelection]",
    "[suppressColumnMoveAnimation]": "[disableColumnMoveAnimation]",
    "[suppressRowHoverHighlight]": "[disableRowHover]",
    "[suppressCellSelection]": "[disableCellSelection]",
    "[components]": "[customComponents]",
    "[frameworkComponents]": "[customComponents]",
    "#agGrid": "#nguiGrid",
}

UNSUPPORTED_ATTRIBUTES: FrozenSet[str] = frozenset({
    "[enableRangeSelection]",
    "[enableCharts]",
    "[allowContextMenuWithControlKey]",
    "[enableBrowserTooltips]",
    "[suppressContextMenu]",
    "[masterDetail]",
    "[treeData]",
    "[groupDefaultExpanded]",
    "[autoGroupColumnDef]",
    "[groupHeaderHeight]",
    "[getContextMenuItems]",
    "[getMainMenuItems]",
    "[statusBar]",
    "[sideBar]",
    "[toolPanel]",
    "(rangeSelectionChanged)",
    "(chartCreated)",
    "(masterDetailOpened)",
    "(pivotModeChanged)",
})

# Event bindings that have no ng-ui counterpart (also flagged by the validator)
UNSUPPORTED_EVENTS: Tuple[str, ...] = (
    "(rangeSelectionChanged)",
    "(chartCreated)",
    "(masterDetailOpened)",
    "(pivotModeChanged)",
)

# =============================================================================
# Grid configuration
# =============================================================================

CONFIG_MAPPINGS: Dict[str, str] = {
    "rowData": "data",
    "columnDefs": "columns",
    "defaultColDef": "defaultColumn",
    "suppressRowClickSelection": "disableRowClickSelection",
    "suppressRowDeselection": "disableRowDeselection",
    "rowMultiSelectWithClick": "multiSelectWithClick",
    "suppressCellSelection": "disableCellSelection",
    "enableSorting": "sortable",
    "suppressMenuHide": "persistentMenu",
    "enableFiltering": "filterable",
    "quickFilterText": "quickFilter",
    "pagination": "paginated",
    "paginationPageSize": "pageSize",
    "paginationAutoPageSize": "autoPageSize",
    "enableColResize": "resizable",
    "suppressColumnMoveAnimation": "disableColumnMoveAnimation",
    "suppressColumnVirtualisation": "disableColumnVirtualization",
    "suppressRowHoverHighlight": "disableRowHover",
    "loadingOverlayComponent": "loadingComponent",
    "noRowsOverlayComponent": "emptyStateComponent",
    "components": "customComponents",
    "frameworkComponents": "customComponents",
}

UNSUPPORTED_CONFIG: FrozenSet[str] = frozenset({
    "enableRangeSelection",
    "enableCharts",
    "masterDetail",
    "treeData",
    "pivotMode",
    "statusBar",
    "sideBar",
    "toolPanel",
    "groupDefaultExpanded",
    "autoGroupColumnDef",
    "getContextMenuItems",
    "getMainMenuItems",
    "allowContextMenuWithControlKey",
    "suppressContextMenu",
    "enableBrowserTooltips",
    "clipboardDeliminator",
    "processDataFromClipboard",
    "sendToClipboard",
})

# Value rewrites for renamed keys: {source key: {source value: target value}}
CONFIG_VALUE_MAPPINGS: Dict[str, Dict[str, str]] = {
    "rowSelection": {"multiple": "multi"},
}

# Keys whose value must end up a boolean
BOOLEAN_CONFIG_PROPERTIES: FrozenSet[str] = frozenset({"pagination"})

COLUMN_MAPPINGS: Dict[str, str] = {
    "headerName": "header",
    "filter": "filterable",
    "suppressMovable": "disableMovable",
    "filterParams": "filterConfig",
    "floatingFilter": "showQuickFilter",
    "floatingFilterComponent": "quickFilterComponent",
    "rowGroup": "groupBy",
    "rowGroupIndex": "groupIndex",
    "enableRowGroup": "allowGrouping",
    "aggFunc": "aggregation",
    "enableValue": "allowAggregation",
}

FILTER_TYPE_MAPPINGS: Dict[str, str] = {
    "agTextColumnFilter": "text",
    "agNumberColumnFilter": "number",
    "agDateColumnFilter": "date",
    "agSetColumnFilter": "set",
    "agMultiColumnFilter": "multi",
}

FILTER_CONFIG_MAPPINGS: Dict[str, str] = {
    "filterOptions": "options",
    "suppressAndOrCondition": "disableAndOr",
}

CELL_RENDERER_MAPPINGS: Dict[str, str] = {
    "agGroupCellRenderer": "groupRenderer",
    "agAnimateShowChangeCellRenderer": "animatedRenderer",
    "agAnimateSlideCellRenderer": "slideRenderer",
}

CELL_EDITOR_MAPPINGS: Dict[str, str] = {
    "agTextCellEditor": "text",
    "agLargeTextCellEditor": "textarea",
    "agSelectCellEditor": "select",
    "agPopupTextCellEditor": "popup",
    "agPopupSelectCellEditor": "popupSelect",
}

# =============================================================================
# Styles
# =============================================================================

_PREFIX_SWAPPED_CLASSES = (
    "ag-theme-alpine",
    "ag-theme-balham",
    "ag-theme-material",
    "ag-theme-fresh",
    "ag-theme-dark",
    "ag-theme-blue",
    "ag-theme-bootstrap",
    "ag-grid",
    "ag-root-wrapper",
    "ag-root",
    "ag-body",
    "ag-body-container",
    "ag-body-viewport",
    "ag-header",
    "ag-header-row",
    "ag-header-cell",
    "ag-header-cell-text",
    "ag-header-select-all",
    "ag-row",
    "ag-row-even",
    "ag-row-odd",
    "ag-row-selected",
    "ag-row-hover",
    "ag-row-editing",
    "ag-row-group",
    "ag-cell",
    "ag-cell-value",
    "ag-cell-edit",
    "ag-cell-focus",
    "ag-cell-selected",
    "ag-cell-range-selected",
    "ag-cell-inline-editing",
    "ag-cell-popup-editing",
    "ag-filter",
    "ag-filter-input",
    "ag-filter-select",
    "ag-set-filter",
    "ag-text-filter",
    "ag-number-filter",
    "ag-date-filter",
    "ag-overlay",
    "ag-loading",
    "ag-no-rows-overlay",
    "ag-menu",
    "ag-menu-option",
    "ag-menu-separator",
    "ag-context-menu",
    "ag-sort-ascending-icon",
    "ag-sort-descending-icon",
    "ag-sort-none-icon",
    "ag-selection-checkbox",
    "ag-checkbox-input",
    "ag-group-expanded",
    "ag-group-collapsed",
    "ag-group-title-bar",
)

CSS_CLASS_MAPPINGS: Dict[str, str] = {
    name: "ngui-" + name[len(CSS_CLASS_PREFIX):] for name in _PREFIX_SWAPPED_CLASSES
}
CSS_CLASS_MAPPINGS.update({
    "ag-header-cell-menu-button": "ngui-header-menu-button",
    "ag-header-cell-resize": "ngui-header-resize",
    "ag-floating-filter-input": "ngui-quick-filter-input",
    "ag-paging-panel": "ngui-pagination-panel",
    "ag-paging-button": "ngui-pagination-button",
    "ag-paging-description": "ngui-pagination-description",
    "ag-checkbox-input-wrapper": "ngui-checkbox-wrapper",
    "ag-body-horizontal-scroll": "ngui-horizontal-scroll",
    "ag-body-vertical-scroll": "ngui-vertical-scroll",
})

UNSUPPORTED_CSS_CLASSES: FrozenSet[str] = frozenset({
    "ag-status-bar",
    "ag-side-bar",
    "ag-tool-panel",
    "ag-column-tool-panel",
    "ag-filters-tool-panel",
    "ag-charts-range-selection",
    "ag-range-selection",
    "ag-master-detail",
    "ag-detail-row",
    "ag-pivot-mode",
    "ag-watermark",
    "ag-rtl",
    "ag-ltr",
})
