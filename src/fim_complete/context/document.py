"""Read-only document snapshot and cursor position."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CursorPosition:
    """0-based (line, column) position; column counts characters."""
    line: int
    column: int

    def __post_init__(self):
        if self.line < 0:
            raise ValueError(f"line must be >= 0, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")


@dataclass(frozen=True)
class Document:
    """Immutable snapshot of a buffer as an ordered sequence of lines."""
    lines: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> Document:
        if not text:
            return cls(())
        return cls(tuple(text.split("\n")))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def line(self, index: int) -> str:
        """Return line `index`, or "" when it is outside the document."""
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""

    def get_slice(self, start: int, end: int) -> str:
        """Return lines [start, end) joined with newlines, clamped to the document."""
        start = max(0, start)
        end = min(len(self.lines), end)
        if start >= end:
            return ""
        return "\n".join(self.lines[start:end])

    def clamp(self, cursor: CursorPosition) -> CursorPosition:
        """Clamp a cursor to the nearest position inside the document."""
        if not self.lines:
            return CursorPosition(0, 0)
        line = min(cursor.line, len(self.lines) - 1)
        column = min(cursor.column, len(self.lines[line]))
        return CursorPosition(line, column)
