"""Context assembly: merge window slices into one prefix and one suffix."""

from __future__ import annotations

import logging

from fim_complete.constants import SECTION_SEPARATOR, TRAILING_PREFIX_CHARS
from fim_complete.context.dataclasses import AssembledContext, ContextWindow

logger = logging.getLogger(__name__)


def last_portion(text: str, max_chars: int = TRAILING_PREFIX_CHARS) -> str:
    """Keep at most the trailing `max_chars` characters of text."""
    if len(text) <= max_chars:
        return text
    return text[-max_chars:]


def assemble_context(
    window: ContextWindow,
    trailing_prefix_chars: int = TRAILING_PREFIX_CHARS,
) -> AssembledContext:
    """Build the final prefix without repeating text the model already sees.

    - Cursor inside the imports region: the raw prefix already starts at the
      top of the file, so it is used as is.
    - Enclosing definition not already in the raw prefix: imports, the
      definition, then only the tail of the raw prefix.
    - Otherwise: imports followed by the raw prefix.

    The suffix passes through unchanged.
    """
    if window.cursor_line <= window.import_line_count:
        final_prefix = window.prefix
        strategy = "prefix"
    elif window.enclosing_definition and window.enclosing_definition not in window.prefix:
        final_prefix = (
            window.imports
            + SECTION_SEPARATOR
            + window.enclosing_definition
            + SECTION_SEPARATOR
            + last_portion(window.prefix, trailing_prefix_chars)
        )
        strategy = "imports+definition+tail"
    else:
        final_prefix = window.imports + SECTION_SEPARATOR + window.prefix
        strategy = "imports+prefix"

    logger.debug("Assembled prefix via %s: %d chars", strategy, len(final_prefix))
    return AssembledContext(final_prefix=final_prefix, suffix=window.suffix, strategy=strategy)
