"""Reconcile timecodes, image count and audio length into a duration schedule."""

import logging
from datetime import timedelta

from slidecast.models.slideshow import DurationSchedule, ParsedTimecodes
from slidecast.utils.errors import AudioShorterThanTimecodes, FrameTimecodeCountMismatch

logger = logging.getLogger(__name__)


def reconcile_durations(
    image_count: int,
    timecodes: ParsedTimecodes,
    audio_duration: timedelta,
) -> DurationSchedule:
    """
    Build the display duration of every image.

    Each timecode closes one image, so there is exactly one image more than
    timecodes. The last image stays on screen until the audio ends.

    Raises:
        FrameTimecodeCountMismatch: If image_count != number of timecodes + 1.
        AudioShorterThanTimecodes: If the audio ends at or before the last timecode.
    """
    if len(timecodes.segments) + 1 != image_count:
        raise FrameTimecodeCountMismatch(len(timecodes.segments), image_count)
    if audio_duration <= timecodes.total:
        raise AudioShorterThanTimecodes(audio_duration, timecodes.total)

    trailing = audio_duration - timecodes.total
    logger.debug(f"Last image is displayed for {trailing}")
    return DurationSchedule(durations=[*timecodes.segments, trailing])
