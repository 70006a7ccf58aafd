"""
Shared Rich Console singleton for diagnostics.

Emitted lines never go through this console: they are written straight to the
sink by `StyledWriter` for throughput. This console is only for the occasional
warning or fatal error, and it always targets stderr so diagnostics never mix
into the data stream a downstream consumer is reading.

Usage:
    from .console import print_error
    print_error("No space left on device")
"""

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True, highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning line"""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_error(message: str) -> None:
    """Print a single red error line"""
    console.print(f"[red]{escape(message)}[/red]")
