"""Shared CLI error handling."""

import functools
import logging
from collections.abc import Callable

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

EXIT_USER_ERROR = 50
EXIT_INTERRUPT = 130

console = Console()
stderr_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_time=True)],
    )


def cli_error_handler(func: Callable) -> Callable:
    """Wrap a CLI command to catch common exceptions with consistent exit codes.

    Validation and tool errors subclass ValueError or RuntimeError and land in
    the user error branch.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (typer.Exit, SystemExit):
            raise
        except KeyboardInterrupt:
            stderr_console.print("\n[bold yellow]Interrupted by user[/bold yellow]")
            raise typer.Exit(code=EXIT_INTERRUPT)
        except (FileNotFoundError, FileExistsError, ValueError, RuntimeError) as e:
            stderr_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
            raise typer.Exit(code=EXIT_USER_ERROR)
        except Exception as e:
            stderr_console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(e))}", highlight=False)
            raise typer.Exit(code=EXIT_USER_ERROR)

    return wrapper
