"""Business logic for `fimc debug`."""

import json
from pathlib import Path

import click

from fim_complete.commands import configure_logging, load_settings
from fim_complete.context.document import CursorPosition


def run_debug(
    file_path: str,
    line: int,
    column: int,
    repo_path: str,
    model: str | None,
    fim_format: str | None,
    show_payload: bool,
    verbose: bool,
) -> None:
    """Show the prefix/suffix a completion would send, without calling the endpoint."""
    configure_logging(verbose)

    from fim_complete.locator.registry import get_locator
    from fim_complete.orchestrator.host import FileBufferHost
    from fim_complete.orchestrator.runner import prepare_completion

    repo = Path(repo_path).resolve()
    settings = load_settings(repo, model=model, fim_format=fim_format)

    path = Path(file_path)
    host = FileBufferHost(path, CursorPosition(line, column))
    prepared = prepare_completion(host, settings, locator=get_locator(str(path)))

    cursor = host.get_cursor_position()
    click.echo(f"Cursor:   {cursor.line}:{cursor.column}")
    click.echo(f"Strategy: {prepared.context.strategy}")
    click.echo(f"=== Prefix ({len(prepared.context.final_prefix)} chars) ===")
    click.echo(prepared.context.final_prefix)
    click.echo(f"=== Suffix ({len(prepared.context.suffix)} chars) ===")
    click.echo(prepared.context.suffix)
    if show_payload:
        click.echo("=== Payload ===")
        click.echo(json.dumps(prepared.request.to_payload(), indent=2))
