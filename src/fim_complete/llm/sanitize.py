"""Raw completion cleanup: escapes, markdown fences, leaked FIM markers."""

from __future__ import annotations

import re

from fim_complete.llm.fim import FIM_FORMATS, QWEN_FIM, FimFormat

_OPEN_FENCE_RE = re.compile(r"\A\n*```[\w+#.-]*[ \t]*(?:\n|\Z)")
_CLOSE_FENCE_RE = re.compile(r"\n?```\s*\Z")

_ALL_MARKERS: frozenset[str] = frozenset(
    marker for fmt in FIM_FORMATS.values() for marker in fmt.markers
)


def unescape(text: str) -> str:
    """Turn literal \\n and \\t into control characters, drop literal \\r."""
    return text.replace("\\n", "\n").replace("\\t", "\t").replace("\\r", "")


def strip_fences(text: str) -> str:
    """Strip a leading ```lang opener and a trailing ``` closer, if present."""
    text = _OPEN_FENCE_RE.sub("", text, count=1)
    return _CLOSE_FENCE_RE.sub("", text, count=1)


def strip_markers(text: str, markers) -> str:
    # Longest first so a marker containing another is removed whole
    for marker in sorted(markers, key=len, reverse=True):
        text = text.replace(marker, "")
    return text


def clean_completion(raw: str, fim_format: FimFormat = QWEN_FIM) -> str:
    """Return the exact text to insert; "" means no completion.

    Leading whitespace is kept so indentation lines up with the cursor.
    """
    markers = _ALL_MARKERS | set(fim_format.markers)
    text = unescape(raw)
    # Repeat until stable so cleaning twice changes nothing
    while True:
        cleaned = strip_markers(strip_fences(text), markers).rstrip()
        if cleaned == text:
            return cleaned
        text = cleaned
