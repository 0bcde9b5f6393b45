"""Click CLI for fim-complete."""

import click


@click.group()
def cli():
    """fimc — fill-in-the-middle code completion at a cursor."""


@cli.command()
@click.argument("repo_path", default=".", type=click.Path(exists=True))
def init(repo_path):
    """Initialize a .fim_complete directory with config.toml."""
    from pathlib import Path

    from fim_complete.config import CONFIG_DIR, create_default_config

    repo = Path(repo_path).resolve()
    config_path = create_default_config(repo)
    click.echo(f"Created {config_path}")

    # Ensure .fim_complete/ is in .gitignore
    gitignore = repo / ".gitignore"
    marker = f"{CONFIG_DIR}/"
    if gitignore.exists():
        content = gitignore.read_text()
        if marker not in content:
            with open(gitignore, "a") as f:
                f.write(f"\n{marker}\n")
            click.echo(f"Added {marker} to .gitignore")
    else:
        gitignore.write_text(f"{marker}\n")
        click.echo(f"Created .gitignore with {marker}")


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--line", type=click.IntRange(min=0), required=True, help="0-based cursor line.")
@click.option("--column", type=click.IntRange(min=0), required=True, help="0-based cursor column.")
@click.option("--repo", "repo_path", default=".", type=click.Path(exists=True), help="Repository path.")
@click.option("--model", default=None, help="Model name (overrides config).")
@click.option("--endpoint", default=None, help="Generate endpoint URL (overrides config).")
@click.option("--fim-format", default=None, help="FIM marker format (overrides config).")
@click.option("--write", is_flag=True, help="Insert the completion into FILE in place.")
@click.option("--trace", "trace_flag", is_flag=True, help="Enable completion trace log.")
@click.option("--trace-output", type=click.Path(), default=None, help="Custom trace output path (implies --trace).")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def complete(file_path, line, column, repo_path, model, endpoint, fim_format, write, trace_flag, trace_output, verbose):
    """Complete code at the cursor in FILE."""
    from fim_complete.commands.complete import run_complete

    run_complete(
        file_path, line, column, repo_path, model, endpoint, fim_format,
        write, trace_flag, trace_output, verbose,
    )


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--line", type=click.IntRange(min=0), required=True, help="0-based cursor line.")
@click.option("--column", type=click.IntRange(min=0), required=True, help="0-based cursor column.")
@click.option("--repo", "repo_path", default=".", type=click.Path(exists=True), help="Repository path.")
@click.option("--model", default=None, help="Model name (overrides config).")
@click.option("--fim-format", default=None, help="FIM marker format (overrides config).")
@click.option("--payload", "show_payload", is_flag=True, help="Also print the request payload.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def debug(file_path, line, column, repo_path, model, fim_format, show_payload, verbose):
    """Show the context a completion would send, without calling the model."""
    from fim_complete.commands.debug import run_debug

    run_debug(file_path, line, column, repo_path, model, fim_format, show_payload, verbose)
