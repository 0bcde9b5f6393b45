"""Shared helpers for CLI commands."""

import logging

import click


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)


def load_settings(repo_path, **overrides):
    """Load config from the repo and resolve settings, raising click.UsageError on bad values."""
    from fim_complete.config import load_config, resolve_settings

    config = load_config(repo_path)
    try:
        return resolve_settings(config, **overrides)
    except (ValueError, RuntimeError) as e:
        raise click.UsageError(f"Invalid configuration: {e}") from e


def make_trace_logger(repo_path, trace_id, file_path, trace_flag, trace_output):
    """Create a TraceLogger if tracing is enabled, else return None."""
    if not trace_flag and not trace_output:
        return None
    from pathlib import Path

    from fim_complete.config import CONFIG_DIR
    from fim_complete.trace import TraceLogger

    if trace_output:
        output_path = Path(trace_output)
    else:
        output_path = repo_path / CONFIG_DIR / "traces" / f"trace_{trace_id}.md"
    return TraceLogger(output_path, trace_id, str(file_path))
