"""Detection predicates shared by the scanners.

Each predicate takes the registry explicitly so that custom mappings
loaded from config are honoured during detection as well.
"""

import re
from typing import Optional

from ..mappings import MappingRegistry

_CLASS_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]+")


def is_library_package(module_source: str, registry: MappingRegistry) -> bool:
    """True for ag-Grid npm packages and any path inside them."""
    return registry.is_source_package(module_source)


def is_grid_api_call(object_name: str, method_name: str, registry: MappingRegistry) -> bool:
    """True when ``object_name.method_name(...)`` looks like a grid API call.

    Known API method names match on any receiver; other methods only
    match when the receiver name hints at a grid (``gridApi``,
    ``this.grid``, ``columnApi``...).
    """
    if method_name in registry.api_methods:
        return True
    return any(indicator in object_name for indicator in registry.api_object_indicators)


def is_config_property(key: Optional[str], registry: MappingRegistry) -> bool:
    return bool(key) and key in registry.config_properties()


def looks_like_library_class(token: str, registry: MappingRegistry) -> bool:
    """True for a whitespace-free token that reads as an ag-Grid CSS class.

    Package names and selectors share the ``ag-`` prefix and are excluded.
    """
    prefix = registry.css_class_prefix
    if not token.startswith(prefix) or len(token) == len(prefix):
        return False
    if not _CLASS_TOKEN_RE.fullmatch(token):
        return False
    return token not in registry.selectors and not registry.is_source_package(token)


def get_config_kind(key: str) -> str:
    if key == "gridOptions":
        return "grid_options"
    if key == "columnDefs":
        return "column_defs"
    if key == "defaultColDef":
        return "default_col_def"
    return "other"
