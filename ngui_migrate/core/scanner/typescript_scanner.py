"""TypeScript usage scanner using tree-sitter.

Walks the syntax tree of a TypeScript file and records ag-Grid imports,
grid API calls, grid configuration properties, references to imported
ag-Grid symbols, CSS class names in string literals, and grid tags in
inline templates.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Set, Tuple

import tree_sitter
import tree_sitter_typescript

from ..errors import ParseError
from ..mappings import MappingRegistry
from .base import BaseSourceScanner
from .heuristics import (
    get_config_kind,
    is_config_property,
    is_grid_api_call,
    is_library_package,
    looks_like_library_class,
)
from .models import (
    ApiCallUsage,
    Attribute,
    ComponentUsage,
    ConfigUsage,
    CssClassUsage,
    Expression,
    ImportSpecifier,
    ImportUsage,
    LiteralProperty,
    ObjectLiteral,
    SymbolUsage,
    UsageRecord,
)
from .template_scanner import scan_template_text
from .utils import LineIndex

logger = logging.getLogger(__name__)

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())

_TOKEN_RE = re.compile(r"\S+")
_RECEIVER_SPLIT_RE = re.compile(r"[.?!\s]+")

_JSX_TAG_PARENTS = frozenset({
    "jsx_opening_element",
    "jsx_closing_element",
    "jsx_self_closing_element",
})


@dataclass
class _ScanState:
    """Per-file scan state shared by the visitor methods."""

    source: bytes
    lines: List[bytes]
    registry: MappingRegistry
    imported_symbols: Set[str] = field(default_factory=set)
    record: Optional[UsageRecord] = None


class TypeScriptScanner(BaseSourceScanner):
    """tree-sitter based scanner for TypeScript sources."""

    def get_language(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE

    def scan_source(self, source_text: str, file_path: str, registry: MappingRegistry) -> UsageRecord:
        source_bytes = source_text.encode("utf-8")
        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        if tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            raise ParseError(file_path, "Tree-sitter reported syntax errors", line=line)

        state = _ScanState(
            source=source_bytes,
            lines=source_bytes.split(b"\n"),
            registry=registry,
            record=UsageRecord(file_path=file_path),
        )

        for child in tree.root_node.children:
            if child.type == "import_statement":
                self._visit_import(child, state)

        self._walk(tree.root_node, state)
        return state.record

    # ── Traversal ─────────────────────────────────────────────────────

    def _walk(self, root: tree_sitter.Node, state: _ScanState) -> None:
        """Depth-first walk in document order.

        The boolean on the stack marks nodes inside a columnDefs /
        defaultColDef value, whose keys belong to that entry.
        """
        registry = state.registry
        stack: List[Tuple[tree_sitter.Node, bool]] = [(root, False)]

        while stack:
            node, in_columns = stack.pop()
            node_type = node.type
            child_in_columns = in_columns

            if node_type == "import_statement":
                continue
            if node_type in ("string", "template_string"):
                self._visit_string(node, state)
                continue

            if node_type == "call_expression":
                self._visit_call(node, state)
            elif node_type == "pair":
                key = _property_key(node.child_by_field_name("key"), state)
                if not in_columns and is_config_property(key, registry):
                    self._record_config(node, key, state)
                if key in registry.column_containers:
                    child_in_columns = True
            elif node_type in ("jsx_element", "jsx_self_closing_element"):
                self._visit_jsx(node, state)
            elif node_type in ("identifier", "type_identifier"):
                self._visit_identifier(node, state)

            for child in reversed(node.children):
                stack.append((child, child_in_columns))

    # ── Visitors ──────────────────────────────────────────────────────

    def _visit_import(self, node: tree_sitter.Node, state: _ScanState) -> None:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return
        module_source = _node_text(source_node, state)[1:-1]
        if not is_library_package(module_source, state.registry):
            return

        specifiers: List[ImportSpecifier] = []
        for clause in node.named_children:
            if clause.type == "import_clause":
                specifiers.extend(self._import_specifiers(clause, state))

        for spec in specifiers:
            if spec.kind == "named" and spec.alias is None and spec.name in state.registry.symbols:
                state.imported_symbols.add(spec.name)

        line, column = _position(node, state)
        source_line, source_column = _position(source_node, state)
        state.record.imports.append(
            ImportUsage(
                line=line,
                column=column,
                module_source=module_source,
                imported_names=[_imported_name(spec) for spec in specifiers],
                raw_text=_node_text(node, state),
                specifiers=specifiers,
                end_line=node.end_point.row + 1,
                source_line=source_line,
                source_column=source_column,
                type_only=any(child.type == "type" for child in node.children),
            )
        )

    def _import_specifiers(self, clause: tree_sitter.Node, state: _ScanState) -> List[ImportSpecifier]:
        specifiers: List[ImportSpecifier] = []
        for child in clause.named_children:
            if child.type == "identifier":
                line, column = _position(child, state)
                specifiers.append(ImportSpecifier("default", _node_text(child, state), None, line, column))
            elif child.type == "namespace_import":
                local = next((c for c in child.named_children if c.type == "identifier"), None)
                line, column = _position(child, state)
                specifiers.append(
                    ImportSpecifier("namespace", "*", _node_text(local, state) if local else None, line, column)
                )
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    name_node = spec.child_by_field_name("name")
                    alias_node = spec.child_by_field_name("alias")
                    line, column = _position(name_node, state)
                    specifiers.append(
                        ImportSpecifier(
                            "named",
                            _node_text(name_node, state),
                            _node_text(alias_node, state) if alias_node else None,
                            line,
                            column,
                        )
                    )
        return specifiers

    def _visit_call(self, node: tree_sitter.Node, state: _ScanState) -> None:
        function = node.child_by_field_name("function")
        if function is None or function.type != "member_expression":
            return
        receiver = function.child_by_field_name("object")
        prop = function.child_by_field_name("property")
        if receiver is None or prop is None:
            return

        method_name = _node_text(prop, state)
        segments = [s for s in _RECEIVER_SPLIT_RE.split(_node_text(receiver, state)) if s]
        object_name = segments[-1] if segments else ""
        if not is_grid_api_call(object_name, method_name, state.registry):
            return

        arguments = node.child_by_field_name("arguments")
        args = []
        if arguments is not None:
            args = [_node_text(arg, state) for arg in arguments.named_children if arg.type != "comment"]

        line, column = _position(node, state)
        state.record.api_calls.append(
            ApiCallUsage(
                line=line,
                column=column,
                object_name=object_name,
                method_name=method_name,
                args=args,
                raw_text=_node_text(node, state),
            )
        )

    def _record_config(self, node: tree_sitter.Node, key: str, state: _ScanState) -> None:
        prop = _literal_property(node, state)
        state.record.configurations.append(
            ConfigUsage(
                line=prop.line,
                column=prop.column,
                property_name=key,
                value=prop.value,
                config_kind=get_config_kind(key),
                raw_text=prop.raw_text,
                key_text=prop.key_text,
                value_text=prop.value_text,
            )
        )

    def _visit_jsx(self, node: tree_sitter.Node, state: _ScanState) -> None:
        if node.type == "jsx_self_closing_element":
            opening, closing = node, None
        else:
            opening = node.child_by_field_name("open_tag")
            closing = node.child_by_field_name("close_tag")
        if opening is None:
            return
        name_node = opening.child_by_field_name("name")
        if name_node is None:
            return
        selector = _node_text(name_node, state)
        if selector not in state.registry.selectors:
            return

        attributes: List[Attribute] = []
        for attr in opening.named_children:
            if attr.type != "jsx_attribute" or not attr.named_children:
                continue
            parts = attr.named_children
            value = ""
            if len(parts) > 1:
                value = _node_text(parts[1], state)
                if parts[1].type == "string":
                    value = value[1:-1]
            line, column = _position(attr, state)
            attributes.append(
                Attribute(
                    name=_node_text(parts[0], state),
                    value=value,
                    line=line,
                    column=column,
                    raw_text=_node_text(attr, state),
                )
            )

        line, column = _position(opening, state)
        usage = ComponentUsage(
            line=line,
            column=column,
            selector=selector,
            attributes=attributes,
            raw_text=_node_text(opening, state),
        )
        if closing is not None:
            usage.closing_line, usage.closing_column = _position(closing, state)
            usage.closing_text = _node_text(closing, state)
        state.record.components.append(usage)

    def _visit_string(self, node: tree_sitter.Node, state: _ScanState) -> None:
        content = _node_text(node, state)[1:-1]
        row = node.start_point.row
        _, column = _position(node, state)

        if "<" in content:
            components, css_classes = scan_template_text(
                content, state.registry, line_offset=row, column_offset=column + 1
            )
            state.record.components.extend(components)
            state.record.css_classes.extend(css_classes)
            return

        index = LineIndex(content)
        for token in _TOKEN_RE.finditer(content):
            name = token.group(0)
            if not looks_like_library_class(name, state.registry):
                continue
            rel_line, rel_column = index.position(token.start())
            if rel_line == 1:
                rel_column += column + 1
            state.record.css_classes.append(
                CssClassUsage(name=name, line=row + rel_line, column=rel_column, raw_text=name)
            )

    def _visit_identifier(self, node: tree_sitter.Node, state: _ScanState) -> None:
        if not state.imported_symbols:
            return
        name = _node_text(node, state)
        if name not in state.imported_symbols:
            return
        if node.parent is not None and node.parent.type in _JSX_TAG_PARENTS:
            return
        line, column = _position(node, state)
        state.record.symbol_references.append(SymbolUsage(name=name, line=line, column=column))


# ── Node helpers ──────────────────────────────────────────────────────


def _node_text(node: tree_sitter.Node, state: _ScanState) -> str:
    return state.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _position(node: tree_sitter.Node, state: _ScanState) -> Tuple[int, int]:
    """(1-based line, 0-based character column) of a node's start."""
    row, byte_column = node.start_point.row, node.start_point.column
    line_bytes = state.lines[row] if row < len(state.lines) else b""
    return row + 1, len(line_bytes[:byte_column].decode("utf-8", errors="replace"))


def _first_error_line(node: tree_sitter.Node) -> int:
    while True:
        if node.type == "ERROR" or node.is_missing:
            return node.start_point.row + 1
        child = next((c for c in node.children if c.has_error or c.is_missing), None)
        if child is None:
            return node.start_point.row + 1
        node = child


def _imported_name(spec: ImportSpecifier) -> str:
    if spec.kind == "namespace":
        return f"* as {spec.alias}"
    return spec.name


def _property_key(node: Optional[tree_sitter.Node], state: _ScanState) -> Optional[str]:
    if node is None:
        return None
    text = _node_text(node, state)
    if node.type == "string":
        return text[1:-1]
    if node.type in ("property_identifier", "number"):
        return text
    return None


def _literal_property(node: tree_sitter.Node, state: _ScanState) -> LiteralProperty:
    key_node = node.child_by_field_name("key")
    value_node = node.child_by_field_name("value")
    key_text = _node_text(key_node, state)
    line, column = _position(key_node, state)
    return LiteralProperty(
        key=_property_key(key_node, state) or key_text,
        key_text=key_text,
        value=_literal_value(value_node, state),
        value_text=_node_text(value_node, state) if value_node is not None else "",
        raw_text=_node_text(node, state),
        line=line,
        column=column,
    )


def _literal_value(node: Optional[tree_sitter.Node], state: _ScanState) -> Any:
    """Convert a literal node into plain Python data.

    Anything that is not a literal is kept as an ``Expression``.
    """
    if node is None:
        return None
    node_type = node.type
    text = _node_text(node, state)

    if node_type == "string":
        return text[1:-1]
    if node_type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return Expression(text)
        return text[1:-1]
    if node_type == "number":
        try:
            return int(text, 0)
        except ValueError:
            try:
                return float(text)
            except ValueError:
                return Expression(text)
    if node_type == "true":
        return True
    if node_type == "false":
        return False
    if node_type in ("null", "undefined"):
        return None
    if node_type == "array":
        return [_literal_value(child, state) for child in node.named_children if child.type != "comment"]
    if node_type == "object":
        properties = []
        for child in node.named_children:
            if child.type == "pair":
                properties.append(_literal_property(child, state))
            elif child.type == "shorthand_property_identifier":
                name = _node_text(child, state)
                line, column = _position(child, state)
                properties.append(LiteralProperty(name, name, Expression(name), name, name, line, column))
        return ObjectLiteral(tuple(properties))
    if node_type == "parenthesized_expression" and node.named_children:
        return _literal_value(node.named_children[0], state)
    return Expression(text)
