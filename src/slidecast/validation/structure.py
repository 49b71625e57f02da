"""Check the top level of an extracted archive."""

import logging
from typing import Iterable

from slidecast.models.slideshow import AudioSourceKind, DirectoryEntry
from slidecast.utils.errors import (
    AmbiguousAudio,
    ImageDirIsNotADirectory,
    NoAudioFound,
    NoImageDirectory,
    NoTimecodeFile,
)

IMAGE_DIR_NAME = "img"
TIMECODES_FILE_NAME = "timecodes.txt"

logger = logging.getLogger(__name__)


def validate_archive_structure(listing: Iterable[DirectoryEntry]) -> AudioSourceKind:
    """
    Confirm the archive holds one audio track, an img directory and a timecode file.

    Args:
        listing: Top-level entries of the extracted archive

    Returns:
        The encoding of the audio track

    Raises:
        StructuralError: On the first missing or misclassified member, checked
            in the order audio, images, timecodes.
    """
    audio_kinds = []
    image_dir: DirectoryEntry | None = None
    has_timecodes = False

    for entry in listing:
        if entry.name == AudioSourceKind.COMPRESSED_LOSSY.file_name:
            audio_kinds.append(AudioSourceKind.COMPRESSED_LOSSY)
        elif entry.name == AudioSourceKind.RAW_PCM.file_name:
            audio_kinds.append(AudioSourceKind.RAW_PCM)
        elif entry.name == IMAGE_DIR_NAME:
            image_dir = entry
        elif entry.name == TIMECODES_FILE_NAME:
            has_timecodes = True

    if not audio_kinds:
        raise NoAudioFound()
    if len(audio_kinds) > 1:
        raise AmbiguousAudio()
    if image_dir is None:
        raise NoImageDirectory()
    if not image_dir.is_dir:
        raise ImageDirIsNotADirectory()
    if not has_timecodes:
        raise NoTimecodeFile()

    logger.debug(f"Archive structure ok, audio source is {audio_kinds[0].file_name}")
    return audio_kinds[0]
