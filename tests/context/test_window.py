"""Tests for context/window.py."""

from unittest.mock import MagicMock

from fim_complete.context.document import CursorPosition, Document
from fim_complete.context.window import WindowExtractor
from fim_complete.locator.base import LocatorUnavailable, NullLocator


def _numbered(count: int) -> Document:
    return Document(tuple(f"line {i}" for i in range(count)))


def _locator(returns=None, raises=None):
    locator = MagicMock()
    if raises is not None:
        locator.find_enclosing_definition.side_effect = raises
    else:
        locator.find_enclosing_definition.return_value = returns
    return locator


class TestImports:
    def test_first_lines(self):
        window = WindowExtractor().extract(_numbered(40), CursorPosition(35, 0))
        assert window.imports == "\n".join(f"line {i}" for i in range(15))

    def test_short_document_returns_everything(self):
        window = WindowExtractor().extract(_numbered(3), CursorPosition(2, 0))
        assert window.imports == "line 0\nline 1\nline 2"

    def test_custom_count(self):
        window = WindowExtractor(import_line_count=2).extract(_numbered(10), CursorPosition(9, 0))
        assert window.imports == "line 0\nline 1"


class TestPrefix:
    def test_truncated_at_cursor_column(self):
        doc = Document.from_text("def f():\n    return 42")
        window = WindowExtractor().extract(doc, CursorPosition(1, 11))
        assert window.prefix == "def f():\n    return "

    def test_bounded_by_prefix_line_count(self):
        window = WindowExtractor().extract(_numbered(100), CursorPosition(50, 4))
        lines = window.prefix.split("\n")
        assert len(lines) == 31
        assert lines[0] == "line 20"
        assert lines[-1] == "line"

    def test_starts_at_document_start_when_short(self):
        window = WindowExtractor().extract(_numbered(5), CursorPosition(3, 6))
        assert window.prefix == "line 0\nline 1\nline 2\nline 3"

    def test_cursor_on_first_line(self):
        doc = Document.from_text("print('x')")
        window = WindowExtractor().extract(doc, CursorPosition(0, 5))
        assert window.prefix == "print"


class TestSuffix:
    def test_starts_at_cursor_column(self):
        doc = Document.from_text("value = compute(a, b)\nnext_line")
        window = WindowExtractor().extract(doc, CursorPosition(0, 16))
        assert window.suffix == "a, b)\nnext_line"

    def test_bounded_by_suffix_line_count(self):
        window = WindowExtractor().extract(_numbered(100), CursorPosition(10, 0))
        lines = window.suffix.split("\n")
        assert len(lines) == 21
        assert lines[0] == "line 10"
        assert lines[-1] == "line 30"

    def test_last_line(self):
        window = WindowExtractor().extract(_numbered(3), CursorPosition(2, 4))
        assert window.suffix == " 2"


class TestEnclosingDefinition:
    def test_no_locator(self):
        window = WindowExtractor().extract(_numbered(5), CursorPosition(1, 0))
        assert window.enclosing_definition is None

    def test_null_locator(self):
        window = WindowExtractor(locator=NullLocator()).extract(_numbered(5), CursorPosition(1, 0))
        assert window.enclosing_definition is None

    def test_accepts_small_definition(self):
        locator = _locator(returns="def f():\n    pass")
        window = WindowExtractor(locator=locator).extract(_numbered(5), CursorPosition(1, 0))
        assert window.enclosing_definition == "def f():\n    pass"

    def test_rejects_definition_at_cap(self):
        locator = _locator(returns="x" * 2000)
        window = WindowExtractor(locator=locator).extract(_numbered(5), CursorPosition(1, 0))
        assert window.enclosing_definition is None

    def test_accepts_definition_just_below_cap(self):
        locator = _locator(returns="x" * 1999)
        window = WindowExtractor(locator=locator).extract(_numbered(5), CursorPosition(1, 0))
        assert window.enclosing_definition == "x" * 1999

    def test_unavailable_locator_degrades_to_absent(self):
        locator = _locator(raises=LocatorUnavailable("no syntax tree"))
        window = WindowExtractor(locator=locator).extract(_numbered(5), CursorPosition(1, 0))
        assert window.enclosing_definition is None

    def test_failing_locator_degrades_to_absent(self, caplog):
        locator = _locator(raises=RuntimeError("parser crashed"))
        window = WindowExtractor(locator=locator).extract(_numbered(5), CursorPosition(1, 0))
        assert window.enclosing_definition is None
        assert "parser crashed" in caplog.text


class TestEdgeCases:
    def test_empty_document(self):
        window = WindowExtractor().extract(Document(), CursorPosition(0, 0))
        assert window.imports == ""
        assert window.prefix == ""
        assert window.suffix == ""
        assert window.cursor_line == 1

    def test_cursor_beyond_document_is_clamped(self):
        window = WindowExtractor().extract(_numbered(3), CursorPosition(10, 99))
        assert window.cursor_line == 3
        assert window.prefix.endswith("line 2")
        assert window.suffix == ""

    def test_cursor_line_is_one_based(self):
        window = WindowExtractor().extract(_numbered(30), CursorPosition(19, 0))
        assert window.cursor_line == 20
