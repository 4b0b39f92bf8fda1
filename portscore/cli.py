#!/usr/bin/env python3
"""
portscore: score how feasible it is to port a repository to Azure App Service,
and gate the port on that score.
"""
from pathlib import Path

import typer

from portscore import ui
from portscore.error_handler import handle_errors

app = typer.Typer(
    name="portscore",
    help="Azure App Service portability scoring CLI.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from portscore.commands import config_cmd

app.add_typer(config_cmd.app, name="config", help="Inspect configuration", rich_help_panel="Advanced")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr."),
    plain: bool = typer.Option(False, "--plain", help="Plain text output (no colors, no panels)."),
):
    """Azure App Service portability scoring CLI."""
    from portscore.core.config_service import get_config_service
    from portscore.logging_config import setup_logging

    config = get_config_service()
    plain = plain or config.is_plain_output()
    ui.set_plain_mode(plain)
    setup_logging("DEBUG" if verbose else config.get_log_level(), plain=plain)


def _load(path: str):
    from portscore.core.repository_service import load_repository_files
    return load_repository_files(Path(path))


def _emit(data: dict, output_format: str) -> None:
    if output_format == "json":
        ui.print_json_output(data)
    else:
        ui.print_yaml_output(data)


@app.command(rich_help_panel="Analysis")
@handle_errors
def score(
    path: str = typer.Argument(".", help="Path to the repository checkout"),
    output_format: str = typer.Option(None, "--format", "-f", help="Output format: table, json, yaml"),
):
    """[bold cyan]Score[/bold cyan] a repository's portability to Azure App Service."""
    from portscore.analyzers.portability import calculate_portability_score
    from portscore.core.config_service import get_config_service

    output_format = get_config_service().get_output_format(output_format)
    files = _load(path)
    result = calculate_portability_score(files)

    if output_format == "table":
        ui.render_portability(result)
    else:
        _emit(result.to_dict(), output_format)


@app.command(rich_help_panel="Analysis")
@handle_errors
def check(
    path: str = typer.Argument(".", help="Path to the repository checkout"),
    platform: str = typer.Option("azure", "--platform", "-p", help="Target platform (only azure is supported)"),
    output_format: str = typer.Option(None, "--format", "-f", help="Output format: table, json, yaml"),
):
    """[bold cyan]Check[/bold cyan] platform readiness. Exits 1 when the repository is not ready."""
    from portscore.core.config_service import get_config_service
    from portscore.core.readiness_service import analyze_repository

    output_format = get_config_service().get_output_format(output_format)
    files = _load(path)
    result = analyze_repository(files, platform=platform, source=str(Path(path).resolve()))

    if output_format == "table":
        ui.render_readiness(result)
    else:
        _emit(result.to_dict(), output_format)

    if not result.is_ready:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
