"""Main CLI entry point for dotenv-diff."""

import typer
from rich.console import Console

from dotenv_diff.cli import compare, scan

app = typer.Typer(
    name="dotenv-diff",
    help="Cross-check environment variables between env files and a codebase.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="compare")(compare.compare_cmd)
app.command(name="scan")(scan.scan_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    structured_logs: bool = typer.Option(
        False, "--structured-logs", help="Timestamped log lines with context fields"
    ),
) -> None:
    """
    dotenv-diff: keep env files and code in sync.

    - [bold]compare[/bold]: Compare an env file with its example
    - [bold]scan[/bold]: Scan source code for env variable usage, secrets and framework mistakes
    """
    from dotenv_diff.utils.logging import configure_logging, level_for

    configure_logging(level=level_for(verbose, quiet), structured=structured_logs)


@app.command()
def version() -> None:
    """Show the dotenv-diff version."""
    from dotenv_diff import __version__

    console.print(f"dotenv-diff version {__version__}")


if __name__ == "__main__":
    app()
