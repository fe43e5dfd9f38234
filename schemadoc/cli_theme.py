"""Terminal theme for the schemadoc CLI.

Teal & sand palette:
  - Compact branded version line
  - Section headers ("01 · SECTION NAME")
  - Borderless and key-value tables
  - One-line status markers (info, ok, warn, err)
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

# ── Brand ─────────────────────────────────────────────────────────

BRAND = "schemadoc"
TAGLINE = "JSON Schema documentation for service specifications"

# ── Palette ───────────────────────────────────────────────────────

TEAL = "#2A9D8F"
SAND = "#C8B79A"
MUTED = "dim"


def print_version(version: str, console: Console) -> None:
    """Print a compact branded version line."""
    t = Text()
    t.append(BRAND, style=f"bold {TEAL}")
    t.append(f"  v{version}", style=MUTED)
    console.print(t)


# ── Section headers ──────────────────────────────────────────────


def section(
    title: str,
    console: Console,
    number: str | None = None,
    uppercase: bool = True,
) -> None:
    """Print a numbered section header with a rule underneath."""
    console.print()
    t = Text()
    if number:
        t.append(f"  {number}", style=f"bold {TEAL}")
        t.append(" · ", style=MUTED)
    else:
        t.append("  ", style="")
    t.append(title.upper() if uppercase else title, style="bold")
    console.print(t)
    console.print(f"  {'─' * len(TAGLINE)}", style=SAND)


# ── Tables ───────────────────────────────────────────────────────


def make_kv_table() -> Table:
    """Create a headerless two-column key-value table."""
    t = Table(
        box=box.ROUNDED,
        border_style=SAND,
        show_header=False,
        padding=(0, 1),
    )
    t.add_column("Key", style=f"bold {TEAL}", no_wrap=True)
    t.add_column("Value")
    return t


def make_clean_table(**kwargs: object) -> Table:
    """Create a borderless table with dim headers and clean spacing."""
    return Table(
        box=None,
        show_edge=False,
        pad_edge=False,
        header_style=MUTED,
        padding=(0, 2),
        **kwargs,
    )


# ── Status lines ─────────────────────────────────────────────────


def info(msg: str) -> str:
    """Info-level status line (teal arrow, dim text)."""
    return f"  [{TEAL}]›[/{TEAL}] [{MUTED}]{msg}[/{MUTED}]"


def ok(msg: str) -> str:
    """Success status line (green check)."""
    return f"  [bold green]✓[/bold green] {msg}"


def warn(msg: str) -> str:
    """Warning status line (yellow bang)."""
    return f"  [bold yellow]![/bold yellow] [yellow]{msg}[/yellow]"


def err(msg: str) -> str:
    """Error status line (red cross)."""
    return f"  [bold red]✗[/bold red] {msg}"
