"""Tests for constants.py."""

from fim_complete.constants import KNOWN_EXTENSIONS, LANGUAGE_MAP, language_from_extension


class TestLanguageMap:
    def test_python_extensions(self):
        assert LANGUAGE_MAP[".py"] == "python"
        assert LANGUAGE_MAP[".pyi"] == "python"

    def test_typescript_extensions(self):
        assert LANGUAGE_MAP[".ts"] == "typescript"
        assert LANGUAGE_MAP[".tsx"] == "typescript"

    def test_known_extensions_derived(self):
        assert KNOWN_EXTENSIONS == frozenset(LANGUAGE_MAP)


class TestLanguageFromExtension:
    def test_known(self):
        assert language_from_extension("src/app/main.py") == "python"
        assert language_from_extension("web/App.tsx") == "typescript"
        assert language_from_extension("web/index.mjs") == "javascript"

    def test_unknown(self):
        assert language_from_extension("README.md") is None
