"""JavaScript usage scanner using tree-sitter.

Same detection rules as the TypeScript scanner; the JavaScript grammar
also parses JSX, so ``<AgGridAngular ...>`` elements are found too.
"""

import tree_sitter
import tree_sitter_javascript

from .typescript_scanner import TypeScriptScanner

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())


class JavaScriptScanner(TypeScriptScanner):
    """tree-sitter based scanner for JavaScript (and JSX) sources."""

    def get_language(self) -> str:
        return "javascript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JS_LANGUAGE
