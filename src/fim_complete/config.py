"""TOML config loader and validation."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from fim_complete.constants import (
    DEFAULT_IMPORT_LINE_COUNT,
    DEFAULT_PREFIX_LINE_COUNT,
    DEFAULT_SUFFIX_LINE_COUNT,
)

CONFIG_DIR = ".fim_complete"

DEFAULT_MODEL = "qwen2.5-coder:1.5b-base"
DEFAULT_ENDPOINT_URL = "http://localhost:11434/api/generate"
DEFAULT_FIM_FORMAT = "qwen"


@dataclass(frozen=True)
class CompletionSettings:
    """Resolved settings for one completion invocation."""
    model: str = DEFAULT_MODEL
    endpoint_url: str = DEFAULT_ENDPOINT_URL
    fim_format: str = DEFAULT_FIM_FORMAT
    timeout: float | None = None  # None blocks until the endpoint answers
    import_line_count: int = DEFAULT_IMPORT_LINE_COUNT
    prefix_line_count: int = DEFAULT_PREFIX_LINE_COUNT
    suffix_line_count: int = DEFAULT_SUFFIX_LINE_COUNT

    def __post_init__(self):
        for key in ("import_line_count", "prefix_line_count", "suffix_line_count"):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{key} must be a positive integer, got {value!r}")
        for key in ("model", "endpoint_url"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{key} must be a non-empty string, got {value!r}")
        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
                raise ValueError(f"timeout must be a positive number, got {self.timeout!r}")

        from fim_complete.llm.fim import get_fim_format

        get_fim_format(self.fim_format)


def load_config(repo_path: Path) -> dict | None:
    """Load .fim_complete/config.toml. Returns None if the file doesn't exist."""
    config_file = repo_path / CONFIG_DIR / "config.toml"
    if not config_file.exists():
        return None
    with open(config_file, "rb") as f:
        return tomllib.load(f)


def _optional_section(config: dict | None, section: str) -> dict:
    """Extract an optional config section; absent sections are empty."""
    if config is None:
        return {}
    value = config.get(section)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(
            f"[{section}] in config.toml must be a table, got {type(value).__name__}"
        )
    return value


def resolve_settings(config: dict | None, **overrides) -> CompletionSettings:
    """Merge defaults, [completion]/[context] config values and overrides.

    Overrides whose value is None are ignored, so CLI options that were not
    given fall through to the config file and then to the defaults.

    Raises:
        RuntimeError: a section is present but not a table.
        ValueError: a value fails validation.
    """
    completion = _optional_section(config, "completion")
    context = _optional_section(config, "context")

    values: dict = {}
    for key in ("model", "endpoint_url", "fim_format", "timeout"):
        if key in completion:
            values[key] = completion[key]
    for key in ("import_line_count", "prefix_line_count", "suffix_line_count"):
        if key in context:
            values[key] = context[key]
    for key, value in overrides.items():
        if value is not None:
            values[key] = value

    return CompletionSettings(**values)


def create_default_config(repo_path: Path) -> Path:
    """Create a default config.toml in .fim_complete/. Returns the path."""
    config_dir = repo_path / CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.toml"
    if config_path.exists():
        raise FileExistsError(f"Config already exists: {config_path}")
    config_path.write_text(
        '[completion]\n'
        f'model = "{DEFAULT_MODEL}"\n'
        f'endpoint_url = "{DEFAULT_ENDPOINT_URL}"\n'
        '# FIM marker family: qwen, starcoder\n'
        f'fim_format = "{DEFAULT_FIM_FORMAT}"\n'
        '# timeout = 30.0  # seconds; omit to wait for the endpoint indefinitely\n'
        '\n'
        '[context]\n'
        f'import_line_count = {DEFAULT_IMPORT_LINE_COUNT}\n'
        f'prefix_line_count = {DEFAULT_PREFIX_LINE_COUNT}\n'
        f'suffix_line_count = {DEFAULT_SUFFIX_LINE_COUNT}\n'
    )
    return config_path
