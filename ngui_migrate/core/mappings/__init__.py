"""ag-Grid → ng-ui mapping tables and the registry that wraps them."""

from .registry import (
    MappingRegistry,
    add_custom_mapping,
    add_unsupported,
    get_default_registry,
)

__all__ = [
    "MappingRegistry",
    "add_custom_mapping",
    "add_unsupported",
    "get_default_registry",
]
