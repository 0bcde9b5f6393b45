"""File extension / language constants and context window defaults."""

LANGUAGE_MAP: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

KNOWN_EXTENSIONS: frozenset[str] = frozenset(LANGUAGE_MAP)

# Line budgets for the three document slices around the cursor.
DEFAULT_IMPORT_LINE_COUNT = 15
DEFAULT_PREFIX_LINE_COUNT = 30
DEFAULT_SUFFIX_LINE_COUNT = 20

# Enclosing definitions at or above this size are ignored.
MAX_DEFINITION_CHARS = 2000

# Trailing slice of the raw prefix kept after an enclosing definition
# (~5 lines at 80 columns).
TRAILING_PREFIX_CHARS = 400

# Separator placed between the assembled prefix sections.
SECTION_SEPARATOR = "\n...\n"


def language_from_extension(file_path: str) -> str | None:
    """Map file path to language name via extension, or None if unsupported."""
    for ext, lang in LANGUAGE_MAP.items():
        if file_path.endswith(ext):
            return lang
    return None
