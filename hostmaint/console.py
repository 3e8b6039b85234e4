"""Terminal status lines for hostmaint.

Two rich consoles are used: one on stdout for progress and one on stderr for
failures. Rich drops colour codes on its own when the stream is not a
terminal (or NO_COLOR is set), so callers never check ``isatty`` themselves.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def section(title: str) -> None:
    console.print()
    console.print(f"[bold cyan]➤ {escape(title)}[/bold cyan]")
    console.rule(style="cyan")


def banner(text: str) -> None:
    """Highlighted one-liner, used for the host name and completion notices."""
    console.print(f"[bold white on green] {escape(text)} [/bold white on green]")


def line(text: str = "") -> None:
    console.print(escape(text))


def start(text: str) -> None:
    console.print(f"[cyan]==>[/cyan] {escape(text)}")


def ok(text: str) -> None:
    console.print(f"[bold green]✓[/bold green] {escape(text)}")


def fail(text: str) -> None:
    err_console.print(f"[bold red]✗ {escape(text)}[/bold red]")


def warn(text: str) -> None:
    console.print(f"[bold yellow]! {escape(text)}[/bold yellow]")


def skip(text: str) -> None:
    console.print(f"[dim]○ {escape(text)}[/dim]")
