"""Central UI handler for convex-typegen.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from convex_typegen.pipeline.ui import console, print_header, print_error

    console.print("[success]Types written[/success]")
    print_header("SCAN RESULTS")
"""

import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

TYPEGEN_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "query": "bold blue",
    "mutation": "bold magenta",
    "action": "bold yellow",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=TYPEGEN_THEME,
    force_terminal=sys.stdout.isatty()
)


def print_header(title: str) -> None:
    """Print a styled section header with horizontal rules."""
    console.rule(f"[bold]{title}[/bold]")


def print_error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[error]ERROR:[/error] {msg}")


def print_warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[warning]WARNING:[/warning] {msg}")


def print_success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[success]OK:[/success] {msg}")


def print_status_panel(status: str, message: str, detail: str, level: str = "info") -> None:
    """Print a status panel with colored border.

    Args:
        status: Status label (e.g., "WRITTEN", "SKIPPED")
        message: Main message line
        detail: Additional detail line
        level: One of "success", "warning", "error", "info"
    """
    style_map = {
        "success": ("bold green", "green"),
        "warning": ("bold yellow", "yellow"),
        "error": ("bold red", "red"),
        "info": ("bold cyan", "cyan"),
    }
    text_style, border_style = style_map.get(level, ("white", "white"))

    panel = Panel(
        Text.assemble(
            (f"STATUS: [{status}]\n", text_style),
            (f"{message}\n", border_style),
            (detail, border_style)
        ),
        border_style=border_style,
        expand=False
    )
    console.print(panel)
