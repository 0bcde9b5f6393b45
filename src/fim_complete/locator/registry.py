"""File path -> definition locator dispatch."""

from fim_complete.constants import language_from_extension
from fim_complete.locator.base import DefinitionLocator, NullLocator
from fim_complete.locator.tree_sitter_locator import TreeSitterLocator

_LOCATORS: dict[str, DefinitionLocator] = {}


def get_locator(file_path: str) -> DefinitionLocator:
    """Get or create a locator for the file's language.

    Unsupported extensions get a NullLocator, so the pipeline runs with
    imports and prefix only.
    """
    language = language_from_extension(file_path)
    if language is None:
        return NullLocator()
    # TSX needs its own grammar
    key = "tsx" if file_path.endswith(".tsx") else language
    if key not in _LOCATORS:
        _LOCATORS[key] = TreeSitterLocator(language, file_path)
    return _LOCATORS[key]
