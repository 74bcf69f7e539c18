"""Mapping registry.

Every generator and the scanner read their tables through a
``MappingRegistry`` value instead of module globals, so tests and
config-driven runs can work on an isolated copy.  The process-wide
default lives in ``_default_registry`` and is only mutated through
``add_custom_mapping`` / ``add_unsupported``.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from . import tables

logger = logging.getLogger(__name__)

# table name → attribute holding the dict
_MAPPING_TABLES = {
    "import": "imports",
    "symbol": "symbols",
    "selector": "selectors",
    "attribute": "attributes",
    "config": "config",
    "column": "columns",
    "css": "css_classes",
    "filter_type": "filter_types",
    "filter_config": "filter_config",
    "cell_renderer": "cell_renderers",
    "cell_editor": "cell_editors",
}

# unsupported set name → (attribute holding the set, mapping table it must stay disjoint from)
_UNSUPPORTED_SETS = {
    "config": ("unsupported_config", "config"),
    "attribute": ("unsupported_attributes", "attributes"),
    "css": ("unsupported_css", "css_classes"),
}


@dataclass
class MappingRegistry:
    """All ag-Grid → ng-ui lookup tables for one migration run."""

    imports: Dict[str, str] = field(default_factory=dict)
    symbols: Dict[str, str] = field(default_factory=dict)
    selectors: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, str] = field(default_factory=dict)
    config: Dict[str, str] = field(default_factory=dict)
    columns: Dict[str, str] = field(default_factory=dict)
    css_classes: Dict[str, str] = field(default_factory=dict)
    filter_types: Dict[str, str] = field(default_factory=dict)
    filter_config: Dict[str, str] = field(default_factory=dict)
    cell_renderers: Dict[str, str] = field(default_factory=dict)
    cell_editors: Dict[str, str] = field(default_factory=dict)
    config_values: Dict[str, Dict[str, str]] = field(default_factory=dict)
    boolean_config: Set[str] = field(default_factory=set)
    unsupported_config: Set[str] = field(default_factory=set)
    unsupported_attributes: Set[str] = field(default_factory=set)
    unsupported_css: Set[str] = field(default_factory=set)
    passthrough_config: Set[str] = field(default_factory=set)
    column_containers: FrozenSet[str] = frozenset()
    enterprise_config: FrozenSet[str] = frozenset()
    source_packages: Tuple[str, ...] = ()
    source_package_scopes: Tuple[str, ...] = ()
    api_methods: FrozenSet[str] = frozenset()
    api_object_indicators: Tuple[str, ...] = ()
    css_class_prefix: str = tables.CSS_CLASS_PREFIX
    css_variable_prefix: str = tables.CSS_VARIABLE_PREFIX
    target_css_variable_prefix: str = tables.TARGET_CSS_VARIABLE_PREFIX

    @classmethod
    def default(cls) -> "MappingRegistry":
        """Build a fresh registry from the built-in tables."""
        return cls(
            imports=dict(tables.IMPORT_MAPPINGS),
            symbols=dict(tables.SYMBOL_MAPPINGS),
            selectors=dict(tables.SELECTOR_MAPPINGS),
            attributes=dict(tables.ATTRIBUTE_MAPPINGS),
            config=dict(tables.CONFIG_MAPPINGS),
            columns=dict(tables.COLUMN_MAPPINGS),
            css_classes=dict(tables.CSS_CLASS_MAPPINGS),
            filter_types=dict(tables.FILTER_TYPE_MAPPINGS),
            filter_config=dict(tables.FILTER_CONFIG_MAPPINGS),
            cell_renderers=dict(tables.CELL_RENDERER_MAPPINGS),
            cell_editors=dict(tables.CELL_EDITOR_MAPPINGS),
            config_values=copy.deepcopy(tables.CONFIG_VALUE_MAPPINGS),
            boolean_config=set(tables.BOOLEAN_CONFIG_PROPERTIES),
            unsupported_config=set(tables.UNSUPPORTED_CONFIG),
            unsupported_attributes=set(tables.UNSUPPORTED_ATTRIBUTES),
            unsupported_css=set(tables.UNSUPPORTED_CSS_CLASSES),
            passthrough_config=set(tables.PASSTHROUGH_CONFIG_PROPERTIES),
            column_containers=tables.COLUMN_CONTAINER_PROPERTIES,
            enterprise_config=tables.ENTERPRISE_CONFIG_PROPERTIES,
            source_packages=tables.SOURCE_PACKAGES,
            source_package_scopes=tables.SOURCE_PACKAGE_SCOPES,
            api_methods=tables.API_METHODS,
            api_object_indicators=tables.API_OBJECT_INDICATORS,
        )

    def copy(self) -> "MappingRegistry":
        """Return a deep copy that can be extended without touching this one."""
        return copy.deepcopy(self)

    # ── Extension ─────────────────────────────────────────────────────

    def add_custom_mapping(self, table: str, source: str, target: str) -> None:
        """Add or override ``source → target`` in the named mapping table.

        Raises:
            ValueError: If the table is unknown or ``source`` is currently
                marked unsupported in the matching unsupported set.
        """
        attr = _MAPPING_TABLES.get(table)
        if attr is None:
            raise ValueError(
                f"Unknown mapping table: {table}. Supported: {sorted(_MAPPING_TABLES)}"
            )
        for set_attr, mapping_attr in _UNSUPPORTED_SETS.values():
            if mapping_attr == attr and source in getattr(self, set_attr):
                raise ValueError(f"'{source}' is marked unsupported and cannot be mapped")

        getattr(self, attr)[source] = target
        logger.debug("Custom %s mapping: %s -> %s", table, source, target)

    def add_unsupported(self, kind: str, name: str) -> None:
        """Mark ``name`` as unsupported for ``kind`` (config, attribute, css).

        Raises:
            ValueError: If the kind is unknown or ``name`` already has a mapping.
        """
        entry = _UNSUPPORTED_SETS.get(kind)
        if entry is None:
            raise ValueError(
                f"Unknown unsupported set: {kind}. Supported: {sorted(_UNSUPPORTED_SETS)}"
            )
        set_attr, mapping_attr = entry
        if name in getattr(self, mapping_attr):
            raise ValueError(f"'{name}' already has a {kind} mapping")

        getattr(self, set_attr).add(name)
        logger.debug("Marked %s '%s' as unsupported", kind, name)

    def find_conflicts(self) -> List[str]:
        """List every key present both in a mapping table and its unsupported set."""
        conflicts: List[str] = []
        for kind, (set_attr, mapping_attr) in _UNSUPPORTED_SETS.items():
            overlap = getattr(self, set_attr) & set(getattr(self, mapping_attr))
            conflicts.extend(f"{kind}:{name}" for name in sorted(overlap))
        return conflicts

    # ── Lookups ───────────────────────────────────────────────────────

    def is_source_package(self, module_source: str) -> bool:
        return module_source in self.source_packages or module_source.startswith(
            self.source_packages + self.source_package_scopes
        )

    def config_properties(self) -> Set[str]:
        """Every object-literal key the scanner treats as grid configuration."""
        return (
            set(self.config)
            | self.unsupported_config
            | self.passthrough_config
            | set(self.column_containers)
        )

    def lookup_css_class(self, name: str) -> Optional[str]:
        """Resolve a CSS class by exact match, then by the longest mapped prefix.

        A prefix only matches at a ``-`` boundary, so ``ag-filters-tool-panel``
        is not treated as a variant of ``ag-filter``.
        """
        if name in self.css_classes:
            return self.css_classes[name]

        best: Optional[str] = None
        for key in self.css_classes:
            if name.startswith(key + "-") and (best is None or len(key) > len(best)):
                best = key
        if best is None:
            return None
        return self.css_classes[best] + name[len(best):]

    def target_packages(self) -> List[str]:
        """Distinct target modules in mapping order."""
        return list(dict.fromkeys(self.imports.values()))


_default_registry: Optional[MappingRegistry] = None


def get_default_registry() -> MappingRegistry:
    """Return the process-wide registry, building it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = MappingRegistry.default()
    return _default_registry


def add_custom_mapping(table: str, source: str, target: str) -> None:
    """Extend the process-wide registry in place."""
    get_default_registry().add_custom_mapping(table, source, target)


def add_unsupported(kind: str, name: str) -> None:
    """Extend the process-wide unsupported sets in place."""
    get_default_registry().add_unsupported(kind, name)
