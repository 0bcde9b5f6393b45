"""Tree-sitter based enclosing-definition lookup for Python, TypeScript and JavaScript."""

from __future__ import annotations

import logging

import tree_sitter_javascript as tsjs
import tree_sitter_python as tspython
import tree_sitter_typescript as tsts
from tree_sitter import Language, Parser

from fim_complete.context.document import CursorPosition, Document
from fim_complete.locator.base import node_text

logger = logging.getLogger(__name__)

PY_LANGUAGE = Language(tspython.language())
TS_LANGUAGE = Language(tsts.language_typescript())
TSX_LANGUAGE = Language(tsts.language_tsx())
JS_LANGUAGE = Language(tsjs.language())

_DEFINITION_TYPES: dict[str, frozenset[str]] = {
    "python": frozenset({"function_definition"}),
    "javascript": frozenset({
        "function_declaration",
        "function_expression",
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    }),
}
_DEFINITION_TYPES["typescript"] = _DEFINITION_TYPES["javascript"]


class TreeSitterLocator:
    """Finds the innermost function or method containing the cursor."""

    def __init__(self, language: str, file_path: str = ""):
        if language not in _DEFINITION_TYPES:
            raise ValueError(f"Unsupported language: {language}")
        self._language = language
        self._definition_types = _DEFINITION_TYPES[language]
        self._parser = Parser(self._grammar(language, file_path))

    @staticmethod
    def _grammar(language: str, file_path: str) -> Language:
        if language == "python":
            return PY_LANGUAGE
        if language == "javascript":
            return JS_LANGUAGE
        # TypeScript: choose TSX for .tsx files
        if file_path.endswith(".tsx"):
            return TSX_LANGUAGE
        return TS_LANGUAGE

    def find_enclosing_definition(
        self, document: Document, cursor: CursorPosition,
    ) -> str | None:
        if not document.lines:
            return None
        cursor = document.clamp(cursor)
        source = document.text.encode("utf-8")
        tree = self._parser.parse(source)

        # tree-sitter columns are byte offsets
        byte_column = len(document.line(cursor.line)[:cursor.column].encode("utf-8"))
        point = (cursor.line, byte_column)
        node = self._innermost_definition(
            tree.root_node.descendant_for_point_range(point, point),
        )
        if node is None and byte_column > 0 and not document.line(cursor.line).strip():
            node = self._definition_above_blank_line(tree, document, cursor.line, byte_column)
        if node is None:
            logger.debug("No enclosing definition at %d:%d", cursor.line, cursor.column)
            return None

        # Include decorators in the returned span
        if node.parent is not None and node.parent.type == "decorated_definition":
            node = node.parent
        return node_text(node, source)

    def _innermost_definition(self, node, max_start_column: int | None = None):
        while node is not None:
            if node.type in self._definition_types and (
                max_start_column is None or node.start_point[1] < max_start_column
            ):
                return node
            node = node.parent
        return None

    def _definition_above_blank_line(self, tree, document: Document, line: int, byte_column: int):
        """Resolve an indented blank line past the end of a definition's last statement.

        Anchors on the last character of the nearest non-blank line above and
        keeps only definitions whose header starts left of the cursor column.
        """
        for row in range(line - 1, -1, -1):
            text = document.line(row)
            if text.strip():
                anchor = (row, len(text.rstrip().encode("utf-8")) - 1)
                node = tree.root_node.descendant_for_point_range(anchor, anchor)
                return self._innermost_definition(node, max_start_column=byte_column)
        return None
