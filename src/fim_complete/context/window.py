"""Bounded slice extraction around the cursor."""

from __future__ import annotations

import logging

from fim_complete.constants import (
    DEFAULT_IMPORT_LINE_COUNT,
    DEFAULT_PREFIX_LINE_COUNT,
    DEFAULT_SUFFIX_LINE_COUNT,
    MAX_DEFINITION_CHARS,
)
from fim_complete.context.dataclasses import ContextWindow
from fim_complete.context.document import CursorPosition, Document
from fim_complete.locator.base import DefinitionLocator, LocatorUnavailable

logger = logging.getLogger(__name__)


class WindowExtractor:
    """Reads the imports header, prefix and suffix slices of a document snapshot.

    The enclosing definition comes from the optional locator. A locator that
    is unavailable or fails yields no definition; it is never an error here.
    """

    def __init__(
        self,
        locator: DefinitionLocator | None = None,
        import_line_count: int = DEFAULT_IMPORT_LINE_COUNT,
        prefix_line_count: int = DEFAULT_PREFIX_LINE_COUNT,
        suffix_line_count: int = DEFAULT_SUFFIX_LINE_COUNT,
        max_definition_chars: int = MAX_DEFINITION_CHARS,
    ):
        self._locator = locator
        self.import_line_count = import_line_count
        self.prefix_line_count = prefix_line_count
        self.suffix_line_count = suffix_line_count
        self.max_definition_chars = max_definition_chars

    def extract(self, document: Document, cursor: CursorPosition) -> ContextWindow:
        cursor = document.clamp(cursor)
        window = ContextWindow(
            imports=self.imports(document),
            prefix=self.prefix(document, cursor),
            suffix=self.suffix(document, cursor),
            enclosing_definition=self.enclosing_definition(document, cursor),
            cursor_line=cursor.line + 1,
            import_line_count=self.import_line_count,
        )
        logger.debug(
            "Extracted window at %d:%d: imports=%d prefix=%d suffix=%d definition=%s chars",
            cursor.line, cursor.column,
            len(window.imports), len(window.prefix), len(window.suffix),
            len(window.enclosing_definition) if window.enclosing_definition is not None else "none",
        )
        return window

    def imports(self, document: Document) -> str:
        return document.get_slice(0, self.import_line_count)

    def prefix(self, document: Document, cursor: CursorPosition) -> str:
        """Lines before the cursor line plus the cursor line up to the column."""
        start = max(0, cursor.line - self.prefix_line_count)
        before = document.get_slice(start, cursor.line)
        head = document.line(cursor.line)[:cursor.column]
        if cursor.line > start:
            return f"{before}\n{head}"
        return head

    def suffix(self, document: Document, cursor: CursorPosition) -> str:
        """The cursor line from the column on, plus the lines after it."""
        tail = document.line(cursor.line)[cursor.column:]
        after_start = cursor.line + 1
        after_end = after_start + self.suffix_line_count
        if after_start < document.line_count:
            return f"{tail}\n{document.get_slice(after_start, after_end)}"
        return tail

    def enclosing_definition(self, document: Document, cursor: CursorPosition) -> str | None:
        if self._locator is None:
            return None
        try:
            definition = self._locator.find_enclosing_definition(document, cursor)
        except LocatorUnavailable as e:
            logger.debug("Definition locator unavailable: %s", e)
            return None
        except Exception as e:
            logger.warning("Definition lookup failed, continuing without it: %s", e)
            return None
        if definition is None:
            return None
        if len(definition) >= self.max_definition_chars:
            logger.debug(
                "Ignoring enclosing definition of %d chars (cap %d)",
                len(definition), self.max_definition_chars,
            )
            return None
        return definition
