"""Tests for context/assembly.py."""

import pytest

from fim_complete.context.assembly import assemble_context, last_portion
from fim_complete.context.dataclasses import ContextWindow
from fim_complete.context.document import CursorPosition, Document
from fim_complete.context.window import WindowExtractor

SEPARATOR_OVERHEAD = 2 * len("\n...\n")


def _window(**overrides):
    values = dict(
        imports="import os",
        prefix="x = 1\ny = ",
        suffix="\nprint(y)",
        enclosing_definition=None,
        cursor_line=40,
        import_line_count=15,
    )
    values.update(overrides)
    return ContextWindow(**values)


class TestLastPortion:
    def test_short_text_unchanged(self):
        assert last_portion("abc", 400) == "abc"

    def test_keeps_tail(self):
        text = "a" * 100 + "b" * 400
        assert last_portion(text, 400) == "b" * 400


class TestAssembleContext:
    def test_cursor_in_imports_region_uses_raw_prefix(self):
        window = _window(cursor_line=15, enclosing_definition="def f():\n    pass")
        result = assemble_context(window)
        assert result.final_prefix == window.prefix
        assert result.strategy == "prefix"

    def test_definition_not_in_prefix(self):
        definition = "def helper(a):\n    return a * 2"
        window = _window(enclosing_definition=definition)
        result = assemble_context(window)
        assert result.final_prefix == (
            "import os\n...\n" + definition + "\n...\n" + "x = 1\ny = "
        )
        assert result.strategy == "imports+definition+tail"

    def test_definition_path_truncates_prefix_tail(self):
        prefix = "p" * 1000 + "tail"
        window = _window(prefix=prefix, enclosing_definition="def g():\n    ...")
        result = assemble_context(window)
        assert result.final_prefix.endswith(prefix[-400:])
        assert "p" * 401 not in result.final_prefix

    def test_definition_already_in_prefix_not_duplicated(self):
        definition = "def add(a, b):\n    return a + b"
        prefix = "import os\n\n" + definition + "\n\nresult = "
        window = _window(prefix=prefix, enclosing_definition=definition)
        result = assemble_context(window)
        assert result.final_prefix.count(definition) == 1
        assert result.final_prefix == "import os\n...\n" + prefix
        assert result.strategy == "imports+prefix"

    def test_substring_match_is_case_sensitive(self):
        definition = "def Add(a, b):\n    return a + b"
        prefix = "def add(a, b):\n    return a + b\n"
        window = _window(prefix=prefix, enclosing_definition=definition)
        assert assemble_context(window).strategy == "imports+definition+tail"

    def test_no_definition(self):
        window = _window()
        result = assemble_context(window)
        assert result.final_prefix == "import os\n...\nx = 1\ny = "

    def test_suffix_passes_through(self):
        window = _window(enclosing_definition="def f():\n    pass")
        assert assemble_context(window).suffix == "\nprint(y)"


class TestAssemblyBounds:
    @pytest.mark.parametrize("line_count", [0, 1, 10, 16, 200])
    @pytest.mark.parametrize("definition", [None, "def f():\n" + "    x = 1\n" * 100])
    def test_final_prefix_is_bounded(self, line_count, definition):
        document = Document(tuple("abcdefghij" * 8 for _ in range(line_count)))

        class _Locator:
            def find_enclosing_definition(self, doc, cursor):
                return definition

        extractor = WindowExtractor(locator=_Locator())
        for cursor_line in {0, line_count // 2, max(0, line_count - 1)}:
            window = extractor.extract(document, CursorPosition(cursor_line, 3))
            result = assemble_context(window)
            bound = (
                len(window.imports)
                + min(len(definition or ""), 2000)
                + max(len(window.prefix), 400)
                + SEPARATOR_OVERHEAD
            )
            assert len(result.final_prefix) <= bound
            if line_count == 200:
                assert len(result.final_prefix) < len(document.text)

    def test_empty_document_degrades_to_empty(self):
        window = WindowExtractor().extract(Document(), CursorPosition(0, 0))
        result = assemble_context(window)
        assert result.final_prefix == ""
        assert result.suffix == ""
