"""Tests for the mapping tables and MappingRegistry."""

import pytest

from ngui_migrate.core.mappings import MappingRegistry, registry as registry_module, tables
from ngui_migrate.core.mappings import add_custom_mapping, add_unsupported, get_default_registry


# =========================================================================
# Tests: built-in tables
# =========================================================================

class TestBuiltinTables:
    def test_unsupported_sets_disjoint_from_mappings(self):
        assert MappingRegistry.default().find_conflicts() == []

    def test_no_identity_renames(self):
        registry = MappingRegistry.default()
        for table in (
            registry.imports,
            registry.symbols,
            registry.selectors,
            registry.attributes,
            registry.config,
            registry.columns,
            registry.css_classes,
        ):
            assert all(source != target for source, target in table.items())

    def test_css_prefix_swap(self):
        assert tables.CSS_CLASS_MAPPINGS["ag-theme-alpine"] == "ngui-theme-alpine"
        assert tables.CSS_CLASS_MAPPINGS["ag-paging-panel"] == "ngui-pagination-panel"

    def test_unsupported_events_are_unsupported_attributes(self):
        assert set(tables.UNSUPPORTED_EVENTS) <= tables.UNSUPPORTED_ATTRIBUTES


# =========================================================================
# Tests: registry extension
# =========================================================================

class TestRegistryExtension:
    def test_default_is_isolated_from_tables(self):
        registry = MappingRegistry.default()
        registry.add_custom_mapping("css", "ag-custom", "ngui-custom")
        assert "ag-custom" not in tables.CSS_CLASS_MAPPINGS
        assert "ag-custom" not in MappingRegistry.default().css_classes

    def test_copy_is_deep(self):
        registry = MappingRegistry.default()
        clone = registry.copy()
        clone.add_unsupported("css", "ag-sparkline")
        assert "ag-sparkline" not in registry.unsupported_css

    def test_unknown_table_rejected(self):
        with pytest.raises(ValueError, match="Unknown mapping table"):
            MappingRegistry.default().add_custom_mapping("widgets", "a", "b")

    def test_mapping_an_unsupported_name_rejected(self):
        with pytest.raises(ValueError, match="marked unsupported"):
            MappingRegistry.default().add_custom_mapping("config", "enableCharts", "charts")

    def test_marking_a_mapped_name_unsupported_rejected(self):
        with pytest.raises(ValueError, match="already has a config mapping"):
            MappingRegistry.default().add_unsupported("config", "rowData")

    def test_unknown_unsupported_kind_rejected(self):
        with pytest.raises(ValueError, match="Unknown unsupported set"):
            MappingRegistry.default().add_unsupported("symbol", "GridApi")

    def test_process_default_mutated_in_place(self, monkeypatch):
        monkeypatch.setattr(registry_module, "_default_registry", None)
        add_custom_mapping("symbol", "GridOptionsService", "NgUiGridConfigService")
        add_unsupported("attribute", "[enableRtl]")

        registry = get_default_registry()
        assert registry.symbols["GridOptionsService"] == "NgUiGridConfigService"
        assert "[enableRtl]" in registry.unsupported_attributes
        assert get_default_registry() is registry


# =========================================================================
# Tests: lookups
# =========================================================================

class TestLookups:
    def test_source_packages(self):
        registry = MappingRegistry.default()
        assert registry.is_source_package("ag-grid-angular")
        assert registry.is_source_package("ag-grid-community/styles/ag-grid.css")
        assert registry.is_source_package("@ag-grid-enterprise/charts")
        assert not registry.is_source_package("@angular/core")
        assert not registry.is_source_package("@ng-ui/grid")

    def test_css_exact_match(self):
        assert MappingRegistry.default().lookup_css_class("ag-header-cell") == "ngui-header-cell"

    def test_css_longest_prefix_wins(self):
        registry = MappingRegistry.default()
        assert registry.lookup_css_class("ag-header-cell-text-wrap") == "ngui-header-cell-text-wrap"

    def test_css_prefix_only_at_dash_boundary(self):
        assert MappingRegistry.default().lookup_css_class("ag-filters-tool-panel") is None

    def test_custom_prefix_mapping(self):
        registry = MappingRegistry.default()
        registry.add_custom_mapping("css", "theme-alpine", "theme2-alpine")
        assert registry.lookup_css_class("theme-alpine-compact") == "theme2-alpine-compact"

    def test_config_properties_include_passthrough_and_unsupported(self):
        properties = MappingRegistry.default().config_properties()
        assert {"rowData", "rowSelection", "enableRangeSelection", "defaultColDef"} <= properties
        assert "field" not in properties

    def test_target_packages_distinct(self):
        targets = MappingRegistry.default().target_packages()
        assert len(targets) == len(set(targets))
        assert "@ng-ui/grid" in targets
