"""CLI commands for configuration inspection."""
from __future__ import annotations

import typer

from portscore import ui
from portscore.error_handler import handle_errors

app = typer.Typer(
    name="config",
    help="Inspect portscore configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command()
@handle_errors
def show(
    json_output: bool = typer.Option(False, "--json", help="Print the resolved config as JSON"),
):
    """Display the resolved configuration (all layers merged)."""
    from rich.panel import Panel
    from rich.table import Table
    from portscore.core.config_service import get_config_service

    info = get_config_service().show()
    if json_output:
        ui.print_json_output(info)
        return

    console = ui.console
    sources = info["sources"]
    console.print(Panel(
        f"Global:  {sources['global_config'] or '[dim]not found[/dim]'}\n"
        f"Project: {sources['project_config'] or '[dim]not found[/dim]'}",
        title="Config Sources",
        border_style="cyan",
    ))

    for section, values in info["resolved"].items():
        if not isinstance(values, dict):
            continue
        table = Table(title=section.capitalize(), show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for key, val in values.items():
            if isinstance(val, list):
                val = ", ".join(str(v) for v in val)
            table.add_row(key, str(val) if val != "" else "[dim]not set[/dim]")
        console.print(table)


@app.command()
@handle_errors
def paths():
    """Show config file locations."""
    from portscore.core.config_service import get_config_service

    for name, location in get_config_service().config_paths().items():
        ui.console.print(f"[cyan]{name}:[/cyan] {location}")
