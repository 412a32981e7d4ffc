"""daogen CLI - Main entrypoint."""

import typer
from rich.console import Console

from daogen import __version__
from daogen.cli.commands import config_cmd, generate_cmd
from daogen.kernel.logging import LogLevel, configure_logging

app = typer.Typer(
    name="daogen",
    help="daogen - generate cached DAO factory methods for mapper interfaces.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.command("generate", help="Generate the implementation of a mapper")(generate_cmd.generate)
app.add_typer(config_cmd.app, name="config", help="Configuration management")


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Suppress non-error output"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable verbose logging"),
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
) -> None:
    """daogen CLI.

    -q and -V set the log level for every subcommand, overriding the level
    found in the configuration file.
    """
    level: LogLevel | None = None
    if quiet:
        level = "ERROR"
    elif verbose:
        level = "DEBUG"
    ctx.obj = level
    configure_logging(level=level or "WARNING", format="rich")

    if version:
        console.print(f"[bold blue]daogen[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
