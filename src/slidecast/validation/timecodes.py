"""
Parse the timecode file into per-image segment durations.

Each line holds the cumulative end-time of one image as ``hh:mm:ss`` or
``hh:mm:ss.fff``. The fractional part is read as a literal number of
milliseconds: ``.5`` is 5 ms, not half a second. Existing archives were
authored against that reading, so it must not be rescaled.
"""

import logging
import re
from datetime import timedelta
from pathlib import Path
from typing import Iterable, List

from slidecast.models.slideshow import ParsedTimecodes
from slidecast.utils.errors import MalformedTimecode, TimecodeOutOfOrder

logger = logging.getLogger(__name__)

CLOCK_PATTERN: re.Pattern[str] = re.compile(r"([0-9]{1,2}):([0-9]{2}):([0-9]{2})")
MILLIS_PATTERN: re.Pattern[str] = re.compile(r"[0-9]+")


def parse_clock(clock: str) -> timedelta:
    """Parse ``hh:mm:ss`` into a duration since the start of playback."""
    match = CLOCK_PATTERN.fullmatch(clock)
    if not match:
        raise MalformedTimecode(clock, "expected format hh:mm:ss")
    hours, minutes, seconds = (int(group) for group in match.groups())
    if hours > 23:
        raise MalformedTimecode(clock, f"hour out of range: {hours}")
    if minutes > 59:
        raise MalformedTimecode(clock, f"minute out of range: {minutes}")
    if seconds > 59:
        raise MalformedTimecode(clock, f"second out of range: {seconds}")
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def parse_timecode(line: str) -> timedelta:
    """Parse one ``hh:mm:ss[.fff]`` line into a cumulative end-time."""
    parts = line.split(".")
    if len(parts) > 2:
        raise MalformedTimecode(line)

    millis = 0
    if len(parts) == 2:
        if not MILLIS_PATTERN.fullmatch(parts[1]):
            raise MalformedTimecode(line, f"invalid millisecond value {parts[1]!r}")
        millis = int(parts[1])

    try:
        fraction = timedelta(milliseconds=millis)
    except OverflowError:
        raise MalformedTimecode(line, "millisecond value out of range")
    return parse_clock(parts[0]) + fraction


def parse_timecode_lines(lines: Iterable[str]) -> ParsedTimecodes:
    """
    Turn cumulative end-times into segment durations.

    Every end-time must be strictly greater than the time accumulated so far.

    Raises:
        MalformedTimecode: If a line does not match hh:mm:ss[.fff].
        TimecodeOutOfOrder: If a line does not move playback forward.
    """
    segments: List[timedelta] = []
    total = timedelta(0)

    for line in lines:
        end_time = parse_timecode(line)
        if end_time <= total:
            raise TimecodeOutOfOrder(line, end_time, total)
        segment = end_time - total
        segments.append(segment)
        total += segment

    logger.debug(f"Parsed {len(segments)} timecodes, last image change at {total}")
    return ParsedTimecodes(segments=segments, total=total)


def split_lines(text: str) -> List[str]:
    """Split on "\n" and "\r\n" only. A final newline does not start an empty line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_timecodes(text: str) -> ParsedTimecodes:
    """Parse the full text of a timecode file, one entry per line."""
    return parse_timecode_lines(split_lines(text))


def load_timecodes(path: Path) -> ParsedTimecodes:
    """Read and parse a timecode file. I/O errors propagate unchanged."""
    with open(path, encoding="utf-8", newline="") as f:
        return parse_timecodes(f.read())
