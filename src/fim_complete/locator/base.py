from __future__ import annotations

from typing import Protocol

from fim_complete.context.document import CursorPosition, Document


class LocatorUnavailable(RuntimeError):
    """The host cannot resolve definitions for this buffer."""


class DefinitionLocator(Protocol):
    def find_enclosing_definition(
        self, document: Document, cursor: CursorPosition,
    ) -> str | None: ...


class NullLocator:
    """Locator for hosts without syntax-tree support. Never finds anything."""

    def find_enclosing_definition(
        self, document: Document, cursor: CursorPosition,
    ) -> str | None:
        return None


def node_text(node, source: bytes) -> str:
    """Extract the text of a tree-sitter node from the source bytes."""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
