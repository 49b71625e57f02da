"""Console script for slidecast."""

import typer

from slidecast import __version__
from slidecast.build_slideshow.cli import build
from slidecast.inspect_archive.cli import inspect

app = typer.Typer(no_args_is_help=True)

app.command()(build)
app.command()(inspect)


@app.command()
def version():
    """Display version information."""
    typer.echo(f"Slidecast v{__version__}")
    raise typer.Exit()


if __name__ == "__main__":
    app()
