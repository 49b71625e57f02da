#!/usr/bin/env python3
"""
Build a narrated slideshow video from an archive of images, audio and timecodes
"""

import logging
import tempfile
from pathlib import Path

from slidecast.models.settings import EncodeSettings
from slidecast.models.slideshow import AudioSourceKind
from slidecast.planning.executor import Encoder, execute_plan
from slidecast.planning.planner import plan_assembly
from slidecast.utils.archive import archive_stem, extract_archive
from slidecast.utils.audio import encode_mp3
from slidecast.utils.dependencies import check_ffmpeg, check_lame
from slidecast.utils.diagnostics import DiagnosticHook, dump_directory, run_with_diagnostics
from slidecast.utils.video import FfmpegEncoder
from slidecast.validation.pipeline import prepare_slideshow

logger = logging.getLogger(__name__)


def default_output_path(archive_path: Path) -> Path:
    """``<archive name>.mp4`` in the current directory."""
    return Path.cwd() / f"{archive_stem(archive_path)}.mp4"


def build_slideshow(
    archive_file: str,
    output_file: str | None = None,
    settings: EncodeSettings | None = None,
    encoder: Encoder | None = None,
    on_failure: DiagnosticHook | None = dump_directory,
) -> Path:
    """
    Convert an archive into a slideshow video synchronized to its timecodes.

    Args:
        archive_file: Path to a .tar.gz archive holding audio, img/ and timecodes.txt
        output_file: Path to the output video, defaults to <archive name>.mp4 in the current directory
        settings: Encoding settings
        encoder: Clip-encode and concat/mux collaborator, defaults to ffmpeg
        on_failure: Called with the offending directory on structural or sequence errors

    Returns:
        Path of the produced video
    """
    settings = settings or EncodeSettings()
    archive_path = Path(archive_file)
    archive_stem(archive_path)  # rejects anything but .tar.gz and .tgz
    if not archive_path.exists():
        raise FileNotFoundError(f"no such file: {archive_file}")
    if not archive_path.is_file():
        raise ValueError(f"Input path is not a file: {archive_file}")

    output_path = (Path(output_file) if output_file else default_output_path(archive_path)).resolve()
    if output_path.exists() and not settings.overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}. Use --overwrite to replace.")

    if encoder is None:
        version = check_ffmpeg()
        logger.debug(f"ffmpeg version: {version}")
        encoder = FfmpegEncoder(settings)

    with tempfile.TemporaryDirectory(prefix="slidecast-") as temp_dir:
        temp_path = Path(temp_dir)
        extract_dir = temp_path / "archive"
        work_dir = temp_path / "work"

        archive_dir = run_with_diagnostics(
            extract_dir, extract_archive, archive_path.resolve(), extract_dir, on_failure=on_failure,
        )
        prepared = prepare_slideshow(archive_dir, work_dir, on_failure=on_failure, timeout=settings.timeout)
        logger.info(
            f"Slideshow: {prepared.sequence.count} images over {prepared.audio_duration.total_seconds():.3f}s of audio"
        )

        if prepared.audio_kind is AudioSourceKind.COMPRESSED_LOSSY:
            mux_audio = prepared.source_audio
        else:
            check_lame()
            mux_audio = encode_mp3(
                prepared.wav_path,
                work_dir / AudioSourceKind.COMPRESSED_LOSSY.file_name,
                settings.audio_bitrate,
                settings.timeout,
            )

        plan = plan_assembly(
            prepared.schedule,
            prepared.sequence,
            prepared.image_dir,
            work_dir / "vid",
            mux_audio,
            output_path,
        )
        logger.info(f"Encoding {len(plan.clips)} clips with {settings.jobs} job(s)...")
        execute_plan(plan, encoder, settings.jobs)

    logger.info("Done!")
    return output_path


def main(
    archive_file: str,
    output_file: str | None = None,
    settings: EncodeSettings | None = None,
) -> Path:
    return build_slideshow(archive_file, output_file, settings)
