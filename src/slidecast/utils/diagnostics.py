"""Directory dumps printed when validation fails."""

from pathlib import Path
from typing import Callable, List, TypeVar

from slidecast.models.slideshow import DirectoryEntry
from slidecast.utils.cli import stderr_console
from slidecast.utils.errors import SequenceError, StructuralError

T = TypeVar("T")

DiagnosticHook = Callable[[Path], None]


def list_directory(directory: Path) -> List[DirectoryEntry]:
    """Entries of a directory sorted by name."""
    return [
        DirectoryEntry(name=path.name, is_dir=path.is_dir())
        for path in sorted(directory.iterdir(), key=lambda p: p.name)
    ]


def dump_directory(directory: Path) -> None:
    """Print the names found in a directory for the operator."""
    stderr_console.print("Dumping directory contents:")
    for entry in list_directory(directory):
        stderr_console.print(entry.name, markup=False, highlight=False)


def run_with_diagnostics(
    directory: Path,
    func: Callable[..., T],
    *args,
    on_failure: DiagnosticHook | None = dump_directory,
    **kwargs,
) -> T:
    """Call a validator and dump ``directory`` if it rejects its input."""
    try:
        return func(*args, **kwargs)
    except (StructuralError, SequenceError):
        if on_failure is not None:
            on_failure(directory)
        raise
