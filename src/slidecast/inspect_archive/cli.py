"""CLI command for inspect."""

from typing import Optional

import typer

from slidecast.inspect_archive.main import main
from slidecast.utils.cli import cli_error_handler, console, setup_logging


@cli_error_handler
def inspect(
    archive_file: str = typer.Argument(..., help="Path to the .tar.gz archive holding audio, img/ and timecodes.txt"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds before the audio decoder is aborted (default: no limit)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """
    Validate an archive and print the display schedule without encoding anything.
    """
    setup_logging(verbose)
    main(archive_file, timeout)
    console.print("\n[bold green]Archive is valid.[/bold green]")
