"""Core logic for inspect: validate an archive and show its schedule without encoding."""

import tempfile
from datetime import timedelta
from pathlib import Path

from rich.console import Console
from rich.table import Table

from slidecast.planning.planner import format_clip_duration
from slidecast.utils.archive import extract_archive
from slidecast.utils.diagnostics import DiagnosticHook, dump_directory, run_with_diagnostics
from slidecast.validation.pipeline import PreparedSlideshow, prepare_slideshow


def schedule_table(prepared: PreparedSlideshow) -> Table:
    """One row per image with its start time and display duration."""
    table = Table(title="Slideshow schedule")
    table.add_column("#", justify="right")
    table.add_column("Image")
    table.add_column("Start", justify="right")
    table.add_column("Duration", justify="right")

    start = timedelta(0)
    for frame, duration in zip(prepared.sequence.frames, prepared.schedule.durations):
        table.add_row(str(frame.index), frame.file_name, format_clip_duration(start), format_clip_duration(duration))
        start += duration
    return table


def inspect_archive(
    archive_file: str,
    timeout: float | None = None,
    on_failure: DiagnosticHook | None = dump_directory,
    console: Console | None = None,
) -> PreparedSlideshow:
    """
    Extract and validate an archive, then print its duration schedule.

    Args:
        archive_file: Path to the .tar.gz archive
        timeout: Seconds allowed for the audio decoder
        on_failure: Called with the offending directory on structural or sequence errors
        console: Console receiving the report
    """
    console = console or Console()
    archive_path = Path(archive_file)
    if not archive_path.exists():
        raise FileNotFoundError(f"no such file: {archive_file}")

    with tempfile.TemporaryDirectory(prefix="slidecast-") as temp_dir:
        temp_path = Path(temp_dir)
        extract_dir = temp_path / "archive"
        archive_dir = run_with_diagnostics(
            extract_dir, extract_archive, archive_path.resolve(), extract_dir, on_failure=on_failure,
        )
        prepared = prepare_slideshow(archive_dir, temp_path / "work", on_failure=on_failure, timeout=timeout)

    width, height = prepared.sequence.pixel_size
    console.print(schedule_table(prepared))
    console.print(
        f"[bold]{prepared.sequence.count}[/bold] images at {width}x{height}, "
        f"audio source {prepared.audio_kind.file_name}, "
        f"{prepared.audio_duration.total_seconds():.3f}s total"
    )
    return prepared


def main(archive_file: str, timeout: float | None = None) -> PreparedSlideshow:
    """Entry point called from cli.py."""
    return inspect_archive(archive_file, timeout)
