"""Usage scanner data models.

Pure data containers describing where ag-Grid shows up in a file.
Lines are 1-based, columns 0-based character offsets into the line.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class Expression:
    """Non-literal source code kept verbatim (identifiers, calls, arrows...)."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class LiteralProperty:
    """One ``key: value`` pair of an object literal, with its location."""

    key: str  # unquoted key
    key_text: str  # key as written, quotes included
    value: Any
    value_text: str
    raw_text: str  # whole pair text
    line: int
    column: int

    @property
    def is_multiline(self) -> bool:
        return "\n" in self.raw_text


@dataclass(frozen=True)
class ObjectLiteral:
    """An object literal as an ordered tuple of properties."""

    properties: Tuple[LiteralProperty, ...] = ()

    def get(self, key: str) -> Optional[LiteralProperty]:
        for prop in self.properties:
            if prop.key == key:
                return prop
        return None

    def keys(self) -> List[str]:
        return [prop.key for prop in self.properties]


@dataclass
class ImportSpecifier:
    """One imported binding: ``default``, ``namespace`` or ``named``."""

    kind: str
    name: str  # imported name ("*" for namespace imports)
    alias: Optional[str] = None  # local name when it differs
    line: int = 0
    column: int = 0


@dataclass
class ImportUsage:
    line: int
    column: int
    module_source: str
    imported_names: List[str]
    raw_text: str
    specifiers: List[ImportSpecifier] = field(default_factory=list)
    end_line: int = 0
    source_line: int = 0  # location of the quoted module string
    source_column: int = 0
    type_only: bool = False

    @property
    def is_multiline(self) -> bool:
        return "\n" in self.raw_text


@dataclass
class Attribute:
    name: str
    value: str
    line: int = 0
    column: int = 0
    raw_text: str = ""


@dataclass
class ComponentUsage:
    line: int
    column: int
    selector: str
    attributes: List[Attribute]
    raw_text: str
    closing_line: Optional[int] = None
    closing_column: Optional[int] = None
    closing_text: str = ""


@dataclass
class ConfigUsage:
    """A grid configuration property found in an object literal."""

    line: int
    column: int
    property_name: str
    value: Any
    config_kind: str  # "grid_options" | "column_defs" | "default_col_def" | "other"
    raw_text: str
    key_text: str = ""
    value_text: str = ""

    @property
    def is_multiline(self) -> bool:
        return "\n" in self.raw_text


@dataclass
class ApiCallUsage:
    line: int
    column: int
    object_name: str
    method_name: str
    args: List[str]
    raw_text: str


@dataclass
class CssClassUsage:
    name: str
    line: int
    column: int
    raw_text: str


@dataclass
class SymbolUsage:
    """A type or value reference to a symbol imported from an ag-Grid package."""

    name: str
    line: int
    column: int


@dataclass
class UsageRecord:
    """Everything ag-Grid related found in one file."""

    file_path: str
    imports: List[ImportUsage] = field(default_factory=list)
    components: List[ComponentUsage] = field(default_factory=list)
    configurations: List[ConfigUsage] = field(default_factory=list)
    api_calls: List[ApiCallUsage] = field(default_factory=list)
    css_classes: List[CssClassUsage] = field(default_factory=list)
    symbol_references: List[SymbolUsage] = field(default_factory=list)

    def has_usage(self) -> bool:
        return bool(
            self.imports
            or self.components
            or self.configurations
            or self.api_calls
            or self.css_classes
            or self.symbol_references
        )

    def usages(self) -> List[Any]:
        """All usages in generation order."""
        return [
            *self.imports,
            *self.symbol_references,
            *self.components,
            *self.configurations,
            *self.css_classes,
        ]


@dataclass
class SkippedFile:
    """A file the scanner could not read or parse."""

    file_path: str
    reason: str
