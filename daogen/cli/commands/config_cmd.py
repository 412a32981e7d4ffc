"""Configuration management commands."""

from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console

from daogen.compiler.config_loader import load_config
from daogen.kernel.exceptions import ConfigurationError

app = typer.Typer(help="Configuration management commands")
console = Console(stderr=True)


@app.command("show")
def show_config(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="kind: Config YAML or pyproject.toml to use"),
    ] = None,
) -> None:
    """Show the effective configuration as YAML."""
    try:
        config = load_config(config_path)
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[red]✗ Configuration error:[/red] {e}")
        raise typer.Exit(1) from e
    typer.echo(yaml.safe_dump(asdict(config), sort_keys=False), nl=False)
