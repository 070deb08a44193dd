"""Console helpers shared by CLI commands.

Everything goes to stderr so ``generate --output -`` can stream the module
on stdout.
"""
from rich.console import Console
from rich.markup import escape

from tmplpack.errors import TmplpackError

console = Console(stderr=True)


def success(message: str) -> None:
    console.print(f"[bold green]✓[/bold green] {message}")


def info(message: str) -> None:
    console.print(f"[cyan]ℹ[/cyan] {message}")


def error(message: str) -> None:
    console.print(f"[bold red]✗[/bold red] {message}")


def handle_error(e: Exception, verbose: bool = False) -> None:
    """Print an error; tracebacks only with --verbose."""
    if isinstance(e, TmplpackError):
        error(f"{escape(e.message)} [dim]({e.code})[/dim]")
    else:
        error(f"Unexpected error: {escape(str(e))}")
    if verbose:
        console.print_exception()
