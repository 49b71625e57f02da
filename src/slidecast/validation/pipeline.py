"""
Run every validation stage over an extracted archive
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from slidecast.models.slideshow import AudioSourceKind, DurationSchedule, ImageSequence, ParsedTimecodes
from slidecast.utils.audio import decode_mp3, wav_duration
from slidecast.utils.dependencies import check_lame
from slidecast.utils.diagnostics import DiagnosticHook, dump_directory, list_directory, run_with_diagnostics
from slidecast.utils.images import decode_jpeg
from slidecast.validation.images import ImageDecoder, validate_image_sequence
from slidecast.validation.reconcile import reconcile_durations
from slidecast.validation.structure import IMAGE_DIR_NAME, TIMECODES_FILE_NAME, validate_archive_structure
from slidecast.validation.timecodes import load_timecodes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedSlideshow:
    """Everything known about an archive once it passed validation."""
    archive_dir: Path
    image_dir: Path
    audio_kind: AudioSourceKind
    wav_path: Path
    sequence: ImageSequence
    timecodes: ParsedTimecodes
    audio_duration: timedelta
    schedule: DurationSchedule

    @property
    def source_audio(self) -> Path:
        return self.archive_dir / self.audio_kind.file_name


def prepare_slideshow(
    archive_dir: Path,
    work_dir: Path,
    decode: ImageDecoder = decode_jpeg,
    on_failure: DiagnosticHook | None = dump_directory,
    timeout: float | None = None,
) -> PreparedSlideshow:
    """
    Validate an extracted archive and compute the display duration of every image.

    Args:
        archive_dir: Top-level directory of the extracted archive
        work_dir: Scratch directory receiving the decoded audio when needed
        decode: Image decode collaborator
        on_failure: Called with the offending directory on structural or sequence errors
        timeout: Seconds allowed for the audio decoder

    Returns:
        PreparedSlideshow holding the validated sequence and its schedule
    """
    audio_kind = run_with_diagnostics(
        archive_dir, validate_archive_structure, list_directory(archive_dir), on_failure=on_failure,
    )

    image_dir = archive_dir / IMAGE_DIR_NAME
    logger.info(f"Validating images in: {image_dir}")
    sequence = run_with_diagnostics(
        image_dir, validate_image_sequence, image_dir, list_directory(image_dir), decode, on_failure=on_failure,
    )
    logger.info(f"Found {sequence.count} images")

    timecodes = load_timecodes(archive_dir / TIMECODES_FILE_NAME)
    logger.info(f"Found {len(timecodes.segments)} timecodes")

    if audio_kind.needs_decode:
        check_lame()
        work_dir.mkdir(parents=True, exist_ok=True)
        wav_path = decode_mp3(archive_dir / audio_kind.file_name, work_dir / AudioSourceKind.RAW_PCM.file_name, timeout)
    else:
        wav_path = archive_dir / audio_kind.file_name

    audio_duration = wav_duration(wav_path)
    schedule = reconcile_durations(sequence.count, timecodes, audio_duration)

    return PreparedSlideshow(
        archive_dir=archive_dir,
        image_dir=image_dir,
        audio_kind=audio_kind,
        wav_path=wav_path,
        sequence=sequence,
        timecodes=timecodes,
        audio_duration=audio_duration,
        schedule=schedule,
    )
