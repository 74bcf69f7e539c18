"""Compatibility analyzer.

Maps every detected construct to a feature key, looks the feature up
in a curated support table, and derives the score, the manual-change
list and an effort estimate from the counts.  Nothing here touches the
file system.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from ..constants import (
    EFFORT_LOW_THRESHOLD,
    EFFORT_MEDIUM_THRESHOLD,
    EFFORT_WEIGHTS,
    SUPPORT_WEIGHTS,
)
from ..mappings import MappingRegistry, get_default_registry
from ..scanner.models import UsageRecord
from .models import (
    CompatibilityReport,
    CompatibilitySummary,
    EstimatedEffort,
    FeatureCompatibility,
    ManualChange,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Curated feature tables
# =============================================================================

FEATURE_SUPPORT: Dict[str, str] = {
    # supported
    "rowData": "supported",
    "columnDefs": "supported",
    "gridOptions": "supported",
    "components": "supported",
    "events": "supported",
    "sorting": "supported",
    "filtering": "supported",
    "pagination": "supported",
    "selection": "supported",
    "cellRendering": "supported",
    "cellEditing": "supported",
    "columnResizing": "supported",
    "export": "supported",
    "exportCSV": "supported",
    "exportExcel": "supported",
    # partial
    "api_calls": "partial",
    "customFilters": "partial",
    "customRenderers": "partial",
    "customEditors": "partial",
    "overlays": "partial",
    "grouping": "partial",
    "aggregation": "partial",
    "virtualScrolling": "partial",
    "contextMenu": "partial",
    "tooltips": "partial",
    # unsupported
    "rangeSelection": "unsupported",
    "charts": "unsupported",
    "masterDetail": "unsupported",
    "treeData": "unsupported",
    "pivotMode": "unsupported",
    "statusBar": "unsupported",
    "sideBar": "unsupported",
    "toolPanel": "unsupported",
    "serverSideModel": "unsupported",
    "infiniteModel": "unsupported",
    "clipboardOperations": "unsupported",
    "advancedFiltering": "unsupported",
    "columnGrouping": "unsupported",
}

CONFIG_FEATURES: Dict[str, str] = {
    "rowData": "rowData",
    "columnDefs": "columnDefs",
    "defaultColDef": "columnDefs",
    "gridOptions": "gridOptions",
    "context": "gridOptions",
    "rowHeight": "gridOptions",
    "headerHeight": "gridOptions",
    "getRowHeight": "gridOptions",
    "animateRows": "gridOptions",
    "getRowId": "gridOptions",
    "getRowClass": "gridOptions",
    "getRowStyle": "gridOptions",
    "suppressRowHoverHighlight": "gridOptions",
    "suppressColumnMoveAnimation": "gridOptions",
    "enableSorting": "sorting",
    "enableFiltering": "filtering",
    "quickFilterText": "filtering",
    "pagination": "pagination",
    "paginationPageSize": "pagination",
    "paginationAutoPageSize": "pagination",
    "rowSelection": "selection",
    "suppressRowClickSelection": "selection",
    "suppressRowDeselection": "selection",
    "rowMultiSelectWithClick": "selection",
    "suppressCellSelection": "selection",
    "enableColResize": "columnResizing",
    "onGridReady": "events",
    "onSelectionChanged": "events",
    "onRowClicked": "events",
    "onCellClicked": "events",
    "onCellValueChanged": "events",
    "onColumnResized": "events",
    "onSortChanged": "events",
    "onFilterChanged": "events",
    "components": "customRenderers",
    "frameworkComponents": "customRenderers",
    "loadingOverlayComponent": "overlays",
    "noRowsOverlayComponent": "overlays",
    "suppressColumnVirtualisation": "virtualScrolling",
    "suppressMenuHide": "contextMenu",
    "getContextMenuItems": "contextMenu",
    "getMainMenuItems": "contextMenu",
    "allowContextMenuWithControlKey": "contextMenu",
    "suppressContextMenu": "contextMenu",
    "enableBrowserTooltips": "tooltips",
    "enableRangeSelection": "rangeSelection",
    "enableCharts": "charts",
    "masterDetail": "masterDetail",
    "treeData": "treeData",
    "pivotMode": "pivotMode",
    "statusBar": "statusBar",
    "sideBar": "sideBar",
    "toolPanel": "toolPanel",
    "groupDefaultExpanded": "columnGrouping",
    "autoGroupColumnDef": "columnGrouping",
    "clipboardDeliminator": "clipboardOperations",
    "processDataFromClipboard": "clipboardOperations",
    "sendToClipboard": "clipboardOperations",
}

FEATURE_DESCRIPTIONS: Dict[str, str] = {
    "rowData": "Data binding and display",
    "columnDefs": "Column definitions and configuration",
    "gridOptions": "Grid options object",
    "components": "Grid component usage in templates",
    "events": "Grid event callbacks",
    "sorting": "Column sorting functionality",
    "filtering": "Data filtering and search",
    "pagination": "Data pagination controls",
    "selection": "Row and cell selection",
    "cellRendering": "Custom cell rendering",
    "cellEditing": "Inline cell editing",
    "columnResizing": "Column resizing",
    "export": "Data export capabilities",
    "api_calls": "Direct grid API calls",
    "customRenderers": "Framework cell renderer components",
    "overlays": "Loading and empty-state overlays",
    "grouping": "Row grouping and aggregation",
    "virtualScrolling": "Row and column virtualisation",
    "contextMenu": "Context and column menus",
    "tooltips": "Cell tooltips",
    "rangeSelection": "Excel-like range selection (Enterprise)",
    "charts": "Integrated charting (Enterprise)",
    "masterDetail": "Master-detail row expansion (Enterprise)",
    "treeData": "Hierarchical tree data display",
    "pivotMode": "Pivot table functionality (Enterprise)",
    "statusBar": "Status bar panels (Enterprise)",
    "sideBar": "Side bar (Enterprise)",
    "toolPanel": "Tool panels (Enterprise)",
    "columnGrouping": "Auto group columns (Enterprise)",
    "clipboardOperations": "Clipboard integration (Enterprise)",
}

MIGRATION_NOTES: Dict[str, str] = {
    "rangeSelection": "Consider implementing custom selection logic or using third-party solutions",
    "charts": "Use external charting libraries like Chart.js or D3.js",
    "masterDetail": "Implement custom expandable rows with nested components",
    "treeData": "Use ng-ui tree components or implement custom hierarchical display",
    "pivotMode": "Consider using dedicated pivot table libraries",
    "customFilters": "May require adjusting filter component interfaces",
    "customRenderers": "Cell renderer API may differ, review implementation",
    "grouping": "Basic grouping supported, advanced features may need custom implementation",
    "api_calls": "Grid API calls are not rewritten; port them to the ng-ui grid API",
}

CONFIG_SUGGESTIONS: Dict[str, str] = {
    "enableRangeSelection": "Remove or implement custom selection behavior",
    "enableCharts": "Use external charting library integration",
    "masterDetail": "Use nested component architecture",
    "treeData": "Use ng-ui tree components",
    "statusBar": "Implement custom status display",
    "sideBar": "Create custom sidebar component",
    "toolPanel": "Build custom tool panel",
}

API_SUGGESTIONS: Dict[str, str] = {
    "exportDataAsExcel": "Use ng-ui export service with Excel format",
    "exportDataAsCsv": "Use ng-ui export service with CSV format",
    "selectAll": "Use ng-ui grid selection API",
    "getSelectedRows": "Access selected rows through ng-ui API",
    "setQuickFilter": "Use ng-ui filter API",
    "sizeColumnsToFit": "Use ng-ui column sizing API",
}

# attribute substring → feature
_ATTRIBUTE_FEATURES = (
    ("sort", "sorting"),
    ("filter", "filtering"),
    ("selection", "selection"),
    ("pagination", "pagination"),
    ("resiz", "columnResizing"),
)

# method substring → feature
_API_FEATURES = (
    ("export", "export"),
    ("selection", "selection"),
    ("filter", "filtering"),
    ("sort", "sorting"),
    ("group", "grouping"),
)


def feature_status(feature: str) -> str:
    return FEATURE_SUPPORT.get(feature, "partial")


def config_feature(property_name: str) -> str:
    return CONFIG_FEATURES.get(property_name, property_name)


def api_feature(method_name: str) -> str:
    lowered = method_name.lower()
    for needle, feature in _API_FEATURES:
        if needle in lowered:
            return feature
    return "api_calls"


def attribute_feature(attribute_name: str) -> Optional[str]:
    lowered = attribute_name.lower()
    for needle, feature in _ATTRIBUTE_FEATURES:
        if needle in lowered:
            return feature
    return None


def count_features(records: Iterable[UsageRecord]) -> Counter:
    """Usage count per feature key across all records."""
    counts: Counter = Counter()
    for record in records:
        for config in record.configurations:
            counts[config_feature(config.property_name)] += 1
        for call in record.api_calls:
            counts[api_feature(call.method_name)] += 1
        for component in record.components:
            counts["components"] += 1
            for attr in component.attributes:
                feature = attribute_feature(attr.name)
                if feature:
                    counts[feature] += 1
    return counts


def compute_overall_score(features: Sequence[FeatureCompatibility]) -> int:
    """Usage-weighted support percentage; 100 when nothing was observed."""
    total = sum(f.usage_count for f in features)
    if total == 0:
        return 100
    weighted = sum(SUPPORT_WEIGHTS[f.status] * f.usage_count for f in features)
    return round(weighted / total * 100)


def _manual_changes(records: Sequence[UsageRecord], registry: MappingRegistry) -> List[ManualChange]:
    changes: List[ManualChange] = []
    for record in records:
        for config in record.configurations:
            status = feature_status(config_feature(config.property_name))
            if status == "supported":
                continue
            changes.append(
                ManualChange(
                    file_path=record.file_path,
                    line=config.line,
                    description=f"Configuration property '{config.property_name}' needs manual migration",
                    reason="Feature not supported" if status == "unsupported" else "Feature partially supported",
                    suggestion=CONFIG_SUGGESTIONS.get(
                        config.property_name, "Review ng-ui documentation for alternatives"
                    ),
                    priority="high" if status == "unsupported" else "medium",
                )
            )

        for call in record.api_calls:
            if feature_status(api_feature(call.method_name)) != "unsupported":
                continue
            changes.append(
                ManualChange(
                    file_path=record.file_path,
                    line=call.line,
                    description=f"API call '{call.method_name}' not supported",
                    reason="API method not available in ng-ui",
                    suggestion=API_SUGGESTIONS.get(
                        call.method_name, "Check ng-ui API documentation for equivalent method"
                    ),
                    priority="high",
                )
            )

        for imp in record.imports:
            if "enterprise" in imp.module_source:
                changes.append(
                    ManualChange(
                        file_path=record.file_path,
                        line=imp.line,
                        description=f"Enterprise package '{imp.module_source}' detected",
                        reason="Enterprise features not available in ng-ui",
                        suggestion="Consider alternative implementation or remove feature",
                        priority="high",
                    )
                )
        for config in record.configurations:
            if config.property_name in registry.enterprise_config:
                changes.append(
                    ManualChange(
                        file_path=record.file_path,
                        line=config.line,
                        description=f"Enterprise config '{config.property_name}' detected",
                        reason="Enterprise features not available in ng-ui",
                        suggestion="Consider alternative implementation or remove feature",
                        priority="high",
                    )
                )
    return changes


def _estimate_effort(records: Sequence[UsageRecord], manual_change_count: int) -> EstimatedEffort:
    automatic_points = 0
    manual_points = 0
    for record in records:
        automatic_points += len(record.imports) * EFFORT_WEIGHTS["imports"]
        automatic_points += len(record.components) * EFFORT_WEIGHTS["components"]
        automatic_points += len(record.css_classes) * EFFORT_WEIGHTS["css_classes"]
        for config in record.configurations:
            if feature_status(config_feature(config.property_name)) == "supported":
                automatic_points += EFFORT_WEIGHTS["configurations"]
            else:
                manual_points += EFFORT_WEIGHTS["configurations"]
        manual_points += len(record.api_calls) * EFFORT_WEIGHTS["api_calls"]
    manual_points += manual_change_count * EFFORT_WEIGHTS["unsupported_features"]

    total = automatic_points + manual_points
    automatic = round(automatic_points / total * 100) if total else 100

    if total < EFFORT_LOW_THRESHOLD:
        time_estimate, complexity = "1-2 hours", "low"
    elif total < EFFORT_MEDIUM_THRESHOLD:
        time_estimate, complexity = "4-8 hours", "medium"
    else:
        time_estimate, complexity = "1-3 days", "high"

    return EstimatedEffort(
        automatic=automatic,
        manual=100 - automatic,
        time_estimate=time_estimate,
        complexity=complexity,
    )


def analyze_compatibility(
    records: Sequence[UsageRecord],
    total_files: Optional[int] = None,
    registry: Optional[MappingRegistry] = None,
) -> CompatibilityReport:
    """Build a CompatibilityReport from scanner output.

    Args:
        records: UsageRecords from the scanner
        total_files: Number of files scanned (defaults to len(records))
        registry: Tables used for enterprise detection
    """
    registry = registry or get_default_registry()
    counts = count_features(records)

    features = [
        FeatureCompatibility(
            feature=feature,
            status=feature_status(feature),
            usage_count=count,
            description=FEATURE_DESCRIPTIONS.get(feature, "Feature functionality"),
            migration_notes=None if feature_status(feature) == "supported" else MIGRATION_NOTES.get(feature),
        )
        for feature, count in counts.items()
    ]
    features.sort(key=lambda f: (-f.usage_count, f.feature))

    manual_changes = _manual_changes(records, registry)
    summary = CompatibilitySummary(
        full=sum(1 for f in features if f.status == "supported"),
        partial=sum(1 for f in features if f.status == "partial"),
        unsupported=sum(1 for f in features if f.status == "unsupported"),
    )

    report = CompatibilityReport(
        overall_score=compute_overall_score(features),
        total_files=len(records) if total_files is None else total_files,
        affected_files=len(records),
        compatibility=summary,
        features=features,
        manual_changes=manual_changes,
        estimated_effort=_estimate_effort(records, len(manual_changes)),
    )
    logger.info(
        f"Compatibility score {report.overall_score}% across {report.affected_files} files "
        f"({len(manual_changes)} manual changes)"
    )
    return report
