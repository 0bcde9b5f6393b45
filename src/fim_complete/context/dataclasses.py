"""Context extraction dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContextWindow:
    """Raw slices read around the cursor."""
    imports: str
    prefix: str
    suffix: str
    enclosing_definition: str | None = None
    cursor_line: int = 1  # 1-based line of the cursor
    import_line_count: int = 0


@dataclass(frozen=True)
class AssembledContext:
    """Merged prefix/suffix pair ready for prompt formatting."""
    final_prefix: str
    suffix: str
    strategy: str = "prefix"  # "prefix", "imports+prefix", "imports+definition+tail"
