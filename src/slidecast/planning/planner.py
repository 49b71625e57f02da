"""
Turn a duration schedule into an ordered assembly plan
"""

import logging
from datetime import timedelta
from pathlib import Path
from typing import List, Tuple

from slidecast.models.slideshow import AssemblyPlan, ClipJob, DurationSchedule, ImageSequence, MuxJob

CLIP_PREFIX = "vid"
CLIP_EXTENSION = ".mp4"
MANIFEST_NAME = "list.txt"
CONCAT_NAME = "vid.mp4"

HOUR = timedelta(hours=1)
MINUTE = timedelta(minutes=1)
SECOND = timedelta(seconds=1)
MILLISECOND = timedelta(milliseconds=1)

logger = logging.getLogger(__name__)


def split_duration(duration: timedelta) -> Tuple[int, int, int, int]:
    """
    Split a duration into hours, minutes, seconds and milliseconds.

    Each component is taken by floor division of what the previous ones left
    over. Anything below a millisecond is dropped.
    """
    hours, rest = divmod(duration, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    seconds, rest = divmod(rest, SECOND)
    millis = rest // MILLISECOND
    return hours, minutes, seconds, millis


def format_clip_duration(duration: timedelta) -> str:
    """Render a duration the way ffmpeg's ``-t`` option expects it."""
    hours, minutes, seconds, millis = split_duration(duration)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def clip_file_name(index: int, digit_width: int) -> str:
    return f"{CLIP_PREFIX}{index:0{digit_width}d}{CLIP_EXTENSION}"


def plan_assembly(
    schedule: DurationSchedule,
    sequence: ImageSequence,
    image_dir: Path,
    work_dir: Path,
    audio: Path,
    output: Path,
) -> AssemblyPlan:
    """
    Describe every encode job needed to build the final video.

    Args:
        schedule: Display duration of each image
        sequence: Validated image sequence
        image_dir: Directory holding the images
        work_dir: Directory receiving the clips, the manifest and the concatenated video
        audio: Audio track muxed into the final video
        output: Path of the final video

    Returns:
        AssemblyPlan with one clip per frame in index order
    """
    if len(schedule) != sequence.count:
        raise ValueError(
            f"schedule has {len(schedule)} durations but the sequence has {sequence.count} images"
        )

    clips: List[ClipJob] = []
    for frame in sequence.frames:
        clips.append(ClipJob(
            frame_index=frame.index,
            source_image=image_dir / frame.file_name,
            clip_path=work_dir / clip_file_name(frame.index, sequence.digit_width),
            duration=schedule[frame.index],
        ))

    concat_output = work_dir / CONCAT_NAME
    plan = AssemblyPlan(
        clips=clips,
        manifest_path=work_dir / MANIFEST_NAME,
        concat_output=concat_output,
        mux=MuxJob(video=concat_output, audio=audio, output=output),
    )
    logger.debug(f"Planned {len(clips)} clips into {work_dir}")
    return plan


def render_concat_manifest(plan: AssemblyPlan) -> str:
    """Concat demuxer instructions listing the clips in frame order."""
    lines = []
    for clip_path in plan.concat_manifest:
        escaped = str(clip_path).replace("'", "'\\''")
        lines.append(f"file '{escaped}'\n")
    return "".join(lines)


def write_concat_manifest(plan: AssemblyPlan) -> Path:
    plan.manifest_path.parent.mkdir(parents=True, exist_ok=True)
    with open(plan.manifest_path, 'w') as f:
        f.write(render_concat_manifest(plan))
    return plan.manifest_path
