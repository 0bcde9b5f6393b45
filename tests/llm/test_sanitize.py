"""Tests for llm/sanitize.py."""

import pytest

from fim_complete.llm.fim import STARCODER_FIM
from fim_complete.llm.sanitize import clean_completion, strip_fences, unescape


class TestUnescape:
    def test_newline_and_tab(self):
        assert unescape("a\\nb\\tc") == "a\nb\tc"

    def test_carriage_return_dropped(self):
        assert unescape("a\\r\\nb") == "a\nb"


class TestStripFences:
    def test_with_language_tag(self):
        assert strip_fences("```python\nfoo()\n```") == "foo()"

    def test_without_language_tag(self):
        assert strip_fences("```\nfoo()\n```\n") == "foo()"

    def test_inline_backticks_untouched(self):
        assert strip_fences("x = `cmd`") == "x = `cmd`"


class TestCleanCompletion:
    def test_fenced_block(self):
        assert clean_completion("```python\nfoo()\n```") == "foo()"

    def test_escaped_newline_scenario(self):
        assert clean_completion("    return a + b\\n") == "    return a + b"

    def test_leading_indentation_preserved(self):
        assert clean_completion("    x = 1\n    y = 2\n\n") == "    x = 1\n    y = 2"

    def test_leaked_markers_removed(self):
        raw = "return total<|fim_middle|><|endoftext|>"
        assert clean_completion(raw) == "return total"

    def test_markers_of_other_formats_removed(self):
        assert clean_completion("x + 1<fim_pad>") == "x + 1"
        assert clean_completion("x + 1<|fim_pad|>", STARCODER_FIM) == "x + 1"

    def test_nested_marker_fragments(self):
        assert clean_completion("a<|fim_<|fim_pad|>pad|>") == "a"

    def test_whitespace_only_is_empty(self):
        assert clean_completion("  \n\t\n") == ""

    def test_empty(self):
        assert clean_completion("") == ""

    @pytest.mark.parametrize("raw", [
        "```python\nfoo()\n```",
        "```\n```\nbar()",
        "    return a + b\n",
        "value<|endoftext|>\n\n",
        "  leading\n\ttabs\t\n",
    ])
    def test_idempotent(self, raw):
        once = clean_completion(raw)
        assert clean_completion(once) == once
