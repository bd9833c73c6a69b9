"""Rich Console factory and theme for shipctl output.

Consoles render to a StringIO buffer so every renderer keeps the
``render_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SHIP_THEME = Theme(
    {
        "ship.ok": "bold green",
        "ship.error": "bold red",
        "ship.warning": "bold yellow",
        "ship.op": "bold cyan",
        "ship.key": "dim",
        "ship.id": "bold blue",
        "ship.money": "magenta",
        "ship.status.registered": "cyan",
        "ship.status.in_transit": "yellow",
        "ship.status.delivered": "green",
        "ship.status.cancelled": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SHIP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Rich style name for a shipment status ("" if unknown)."""
    name = f"ship.status.{status}"
    return name if name in SHIP_THEME.styles else ""
