"""Shared UI theme, console, and display helpers for portscore."""

import json

import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from portscore.analyzers.models import PortabilityResult, Severity
from portscore.core import AnalysisResult

# ── Output Mode State ──
_plain_mode: bool = False


def set_plain_mode(enabled: bool = True) -> None:
    """Enable or disable plain text output (no colors, no panels, ASCII only)."""
    global _plain_mode, console
    _plain_mode = enabled
    if enabled:
        console = Console(no_color=True, highlight=False)
    else:
        console = Console(theme=PORTSCORE_THEME)


def is_plain() -> bool:
    """Check if plain output mode is active."""
    return _plain_mode


def print_json_output(data: dict | list) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def print_yaml_output(data: dict | list) -> None:
    """Print data as YAML to stdout, preserving key order."""
    print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True), end="")


# ── Theme ──
PORTSCORE_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "muted": "dim",
})

console = Console(theme=PORTSCORE_THEME)

SEVERITY_STYLES = {
    Severity.BLOCKING: "red",
    Severity.WARNING: "yellow",
    Severity.OK: "green",
}

ISSUE_SEVERITY_STYLES = {
    "error": "red",
    "warning": "yellow",
    "info": "cyan",
}

# ASCII equivalents for plain mode
PLAIN_ICONS = {
    "ready": "[OK]",
    "not_ready": "[!!]",
    "bullet": "*",
}


def render_portability(result: PortabilityResult) -> None:
    """Display a portability result as a score panel, issues table and recommendation."""
    if _plain_mode:
        print(f"Portability score: {result.score}/100 ({result.severity.value})")
        for issue in result.issues:
            marker = " [BLOCKER]" if issue.blocker else ""
            print(f"  {PLAIN_ICONS['bullet']} [{issue.category}] -{issue.impact}{marker} {issue.description}")
        print()
        print(result.recommendation)
        print()
        print(f"Estimated effort: {result.estimated_effort}")
        return

    style = SEVERITY_STYLES[result.severity]
    console.print(Panel(
        f"[bold {style}]{result.score}/100[/bold {style}]  {result.severity.value}\n"
        f"[dim]Can port: {'yes' if result.can_port else 'no'}[/dim]",
        title="Portability Score",
        border_style=style,
    ))

    if result.issues:
        table = Table(title="Issues", show_header=True, expand=False)
        table.add_column("Category", style="cyan")
        table.add_column("Impact", justify="right")
        table.add_column("Blocker", justify="center")
        table.add_column("Description")
        for issue in result.issues:
            table.add_row(
                issue.category,
                f"-{issue.impact}",
                "[red]yes[/red]" if issue.blocker else "",
                escape(issue.description),
            )
        console.print(table)

    console.print(Panel(escape(result.recommendation), title="Recommendation", border_style=style))
    console.print(f"[bold]Estimated effort:[/bold] {result.estimated_effort}")


def render_readiness(result: AnalysisResult) -> None:
    """Display a readiness analysis."""
    if _plain_mode:
        icon = PLAIN_ICONS["ready"] if result.is_ready else PLAIN_ICONS["not_ready"]
        print(f"{icon} {result.target_platform}: {'ready' if result.is_ready else 'not ready'}")
        if result.portability:
            print(f"Portability score: {result.portability.score}/100")
        for issue in result.issues:
            print(f"  {PLAIN_ICONS['bullet']} {issue.severity.upper()} [{issue.category}] {issue.message}")
        return

    status = "[green]ready[/green]" if result.is_ready else "[red]not ready[/red]"
    summary = f"[bold]{result.target_platform}[/bold]: {status}"
    if result.portability:
        summary += f"\n[dim]Portability score: {result.portability.score}/100[/dim]"
    console.print(Panel(summary, title="Readiness", border_style="green" if result.is_ready else "red"))

    if not result.issues:
        return

    table = Table(show_header=True, expand=False)
    table.add_column("Severity")
    table.add_column("Category", style="cyan")
    table.add_column("Message")
    table.add_column("Suggestion", style="dim")
    for issue in result.issues:
        style = ISSUE_SEVERITY_STYLES.get(issue.severity, "white")
        suggestion = issue.suggestion.splitlines()[0] if issue.suggestion else ""
        table.add_row(f"[{style}]{issue.severity}[/{style}]", issue.category, escape(issue.message), escape(suggestion))
    console.print(table)
