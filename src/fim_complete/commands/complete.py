"""Business logic for `fimc complete`."""

import uuid
from pathlib import Path

import click

from fim_complete.commands import configure_logging, load_settings, make_trace_logger
from fim_complete.context.document import CursorPosition


def run_complete(
    file_path: str,
    line: int,
    column: int,
    repo_path: str,
    model: str | None,
    endpoint: str | None,
    fim_format: str | None,
    write: bool,
    trace_flag: bool,
    trace_output: str | None,
    verbose: bool,
) -> None:
    """Complete at the cursor and print (or write) the inserted text."""
    configure_logging(verbose)

    from fim_complete.llm.client import CompletionClient
    from fim_complete.locator.registry import get_locator
    from fim_complete.orchestrator.host import FileBufferHost
    from fim_complete.orchestrator.runner import complete_at_cursor

    repo = Path(repo_path).resolve()
    settings = load_settings(repo, model=model, endpoint_url=endpoint, fim_format=fim_format)

    path = Path(file_path)
    host = FileBufferHost(
        path,
        CursorPosition(line, column),
        write=write,
        status_sink=lambda message: click.echo(message, err=True),
    )
    trace_logger = make_trace_logger(repo, str(uuid.uuid4()), path, trace_flag, trace_output)

    try:
        with CompletionClient(settings.endpoint_url, timeout=settings.timeout) as client:
            outcome = complete_at_cursor(
                host, client, settings,
                locator=get_locator(str(path)),
                trace_logger=trace_logger,
            )
    finally:
        if trace_logger is not None:
            trace_path = trace_logger.finalize()
            click.echo(f"Trace written to {trace_path}", err=True)

    if outcome.inserted and not write:
        click.echo(outcome.text)
