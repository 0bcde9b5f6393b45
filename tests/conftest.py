"""Shared test fixtures."""

import pytest

from fim_complete.config import CompletionSettings
from fim_complete.context.document import Document

SAMPLE_SOURCE = '''import os
import sys

from pathlib import Path


def add(a, b):
    total = a + b
    return total


class Greeter:
    def greet(self, name):
        message = f"Hello, {name}"
        return message
'''


@pytest.fixture
def tmp_repo(tmp_path):
    """Create a temporary directory acting as a repo root."""
    return tmp_path


@pytest.fixture
def settings():
    return CompletionSettings()


@pytest.fixture
def sample_document():
    return Document.from_text(SAMPLE_SOURCE)
