"""Editor host interface and a file-backed implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Protocol

from fim_complete.context.document import CursorPosition, Document

logger = logging.getLogger(__name__)


class EditorHost(Protocol):
    def get_document(self) -> Document: ...

    def get_cursor_position(self) -> CursorPosition: ...

    def insert_text(self, text: str) -> None: ...

    def show_status(self, message: str) -> None: ...


class FileBufferHost:
    """Treats a file on disk as the editor buffer.

    The document is read once on construction. insert_text splices at the
    cursor; with write=True the file is rewritten in place, otherwise the
    result is only kept in `inserted` / `text`.
    """

    def __init__(
        self,
        path: Path,
        cursor: CursorPosition,
        write: bool = False,
        status_sink: Callable[[str], None] | None = None,
    ):
        self.path = path
        self._document = Document.from_text(path.read_text(encoding="utf-8"))
        self._cursor = self._document.clamp(cursor)
        self._write = write
        self._status_sink = status_sink
        self.inserted: str | None = None
        self.statuses: list[str] = []

    @property
    def text(self) -> str:
        return self._document.text

    def get_document(self) -> Document:
        return self._document

    def get_cursor_position(self) -> CursorPosition:
        return self._cursor

    def insert_text(self, text: str) -> None:
        lines = list(self._document.lines) or [""]
        line = lines[self._cursor.line]
        col = self._cursor.column
        spliced = line[:col] + text + line[col:]
        lines[self._cursor.line:self._cursor.line + 1] = spliced.split("\n")
        self._document = Document(tuple(lines))
        self.inserted = text
        if self._write:
            self.path.write_text(self._document.text, encoding="utf-8")
            logger.info("Wrote %d chars into %s", len(text), self.path)

    def show_status(self, message: str) -> None:
        self.statuses.append(message)
        if self._status_sink is not None:
            self._status_sink(message)
