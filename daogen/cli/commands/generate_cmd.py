"""Mapper implementation generation command."""

import importlib
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from daogen.compiler.config_loader import load_config
from daogen.compiler.diagnostics import DiagnosticReport
from daogen.compiler.mapper_generator import generate_mapper_source
from daogen.kernel.exceptions import ConfigurationError, ScanError
from daogen.kernel.logging import configure_from_config

app = typer.Typer()
console = Console()
err_console = Console(stderr=True)


def _resolve_target(target: str) -> type:
    """Import ``module:Mapper`` (nested classes use dots after the colon).

    Modules are looked up from the working directory first, as with
    ``python -m``.

    Raises
    ------
    typer.BadParameter
        If the target is malformed or cannot be imported
    """
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise typer.BadParameter(f"expected MODULE:MAPPER, got {target!r}")
    working_dir = str(Path.cwd())
    if working_dir not in sys.path:
        sys.path.insert(0, working_dir)
        importlib.invalidate_caches()
    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"cannot import {module_name!r}: {e}") from e
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise typer.BadParameter(f"{module_name!r} has no attribute {qualname!r}") from e
    if not isinstance(obj, type):
        raise typer.BadParameter(f"{target!r} is not a class")
    return obj


def _print_diagnostics(report: DiagnosticReport) -> None:
    table = Table(title="Diagnostics", show_header=True, border_style="red")
    table.add_column("Severity", style="bold")
    table.add_column("Location", style="cyan")
    table.add_column("Message", style="white")
    for diagnostic in report.diagnostics:
        color = "red" if diagnostic.severity == "error" else "yellow"
        table.add_row(
            f"[{color}]{diagnostic.severity}[/{color}]", diagnostic.location, diagnostic.message
        )
    err_console.print(table)


@app.command()
def generate(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="Mapper to implement, as MODULE:MAPPER")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the module here instead of stdout"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="kind: Config YAML or pyproject.toml to use"),
    ] = None,
) -> None:
    """Generate the implementation module of a mapper interface.

    Methods that fail validation are listed and left out; the command then
    exits with status 1.

    Examples
    --------
    daogen generate myapp.mappers:InventoryMapper
    daogen generate myapp.mappers:InventoryMapper -o myapp/mappers_impl.py
    """
    try:
        config = load_config(config_path)
    except (ConfigurationError, FileNotFoundError) as e:
        err_console.print(f"[red]✗ Configuration error:[/red] {e}")
        raise typer.Exit(1) from e

    configure_from_config(config.logging, level=ctx.obj)
    mapper = _resolve_target(target)

    report = DiagnosticReport()
    try:
        source = generate_mapper_source(mapper, report, config.generator)
    except ScanError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1) from e

    if report.diagnostics:
        _print_diagnostics(report)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(source, encoding="utf-8")
        err_console.print(f"[green]✓ Wrote[/green] {output}")
    elif console.is_terminal:
        console.print(Syntax(source, "python"))
    else:
        typer.echo(source, nl=False)

    if report.has_errors:
        raise typer.Exit(1)
