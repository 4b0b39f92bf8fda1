"""Unified CLI error handler for portscore commands."""

from __future__ import annotations

import functools
import logging
import os
import traceback
from typing import Optional

import typer
from rich.markup import escape

from portscore import ui
from portscore.errors import (
    ConfigError,
    OutputFormatError,
    PortscoreError,
    RepositoryNotFoundError,
    UnsupportedPlatformError,
)

logger = logging.getLogger("portscore.error_handler")


def _debug_mode() -> bool:
    """Check if debug output is enabled via PORTSCORE_DEBUG env var."""
    return os.environ.get("PORTSCORE_DEBUG", "").lower() in ("1", "true", "yes")


def _hint_for(e: PortscoreError) -> Optional[str]:
    """Return the follow-up hint shown under a portscore error, if any."""
    if isinstance(e, RepositoryNotFoundError):
        return (
            f"'{e.context.get('path')}' must be a local checkout. "
            "Clone the repository first, then run portscore on the clone."
        )
    if isinstance(e, UnsupportedPlatformError):
        available = e.context.get("available") or []
        if available:
            return f"Readiness checks exist for: {', '.join(available)}. Pass one with --platform."
        return None
    if isinstance(e, OutputFormatError):
        available = e.context.get("available") or ["table", "json", "yaml"]
        return f"Pass --format {' | '.join(available)}, or set output.format in .portscore.toml."
    if isinstance(e, ConfigError):
        return "Run 'portscore config show' to see which layer set the offending value."
    return None


def _render_portscore_error(e: PortscoreError) -> None:
    """Render a PortscoreError with Rich formatting and context."""
    console = ui.console
    console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")

    if e.context and _debug_mode():
        context_parts = [
            f"  [dim]{key}:[/dim] {escape(str(value))}" for key, value in e.context.items() if value
        ]
        if context_parts:
            console.print("[dim]Context:[/dim]")
            for part in context_parts:
                console.print(part)

    hint = _hint_for(e)
    if hint:
        console.print(f"[dim]{escape(hint)}[/dim]")


def handle_errors(func):
    """Decorator that catches PortscoreError and renders formatted CLI output.

    Usage::

        @app.command()
        @handle_errors
        def my_command(...):
            ...  # no try/except needed
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PortscoreError as e:
            logger.debug("Command failed: %s", e)
            _render_portscore_error(e)
            if _debug_mode():
                ui.console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            ui.console.print("\n[dim]Interrupted.[/dim]")
            raise typer.Exit(130)
        except (typer.Exit, typer.Abort, SystemExit):
            raise
        except Exception as e:
            ui.console.print(f"\n[bold red]Unexpected error:[/bold red] {escape(str(e))}")
            if _debug_mode():
                ui.console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
            else:
                ui.console.print("[dim]Set PORTSCORE_DEBUG=1 for full traceback.[/dim]")
            raise typer.Exit(1)

    return wrapper
