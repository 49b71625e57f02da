"""CLI command for build."""

import logging
from typing import Optional

import typer

from slidecast.build_slideshow.main import main
from slidecast.models.settings import EncodeSettings
from slidecast.utils.cli import cli_error_handler, console, setup_logging


@cli_error_handler
def build(
    archive_file: str = typer.Argument(..., help="Path to the .tar.gz archive holding audio, img/ and timecodes.txt"),
    output_file: Optional[str] = typer.Option(None, "--output", "-o", help="Path to output video file (default: <archive name>.mp4 in the current directory)"),
    video_codec: str = typer.Option("libx264", "--codec", "-c", help="FFmpeg video codec (default: libx264)"),
    pix_fmt: str = typer.Option("yuv420p", "--pix-fmt", help="Pixel format of the encoded clips (default: yuv420p)"),
    audio_bitrate: int = typer.Option(192, "--audio-bitrate", help="MP3 bitrate in kbps when the archive holds WAV audio (default: 192)"),
    jobs: int = typer.Option(1, "--jobs", "-j", help="Number of clips encoded in parallel (default: 1)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds before an external tool call is aborted (default: no limit)"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite output file if it exists"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """
    Build a slideshow video from an archive.

    Each image of img/ is shown until its timecode in timecodes.txt, the last
    one until the narration ends. The archive is rejected, never repaired,
    when its contents do not line up.
    """
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    settings = EncodeSettings(
        video_codec=video_codec,
        pix_fmt=pix_fmt,
        audio_bitrate=audio_bitrate,
        jobs=jobs,
        timeout=timeout,
        overwrite=overwrite,
    )

    logger.info(f"Building slideshow from: {archive_file}")
    output_path = main(archive_file, output_file, settings)
    console.print(f"\n[bold green]Success![/bold green] Video saved to: {output_path}")
