"""Error kinds raised while turning an archive into a slideshow video.

Every error is terminal for the run. Validation errors subclass ValueError and
tool failures subclass RuntimeError so the shared CLI handler maps them to a
user error exit code.
"""


class SlidecastError(Exception):
    """Base class for all slidecast failures."""


# ----------------------------
# Archive structure
# ----------------------------
class StructuralError(SlidecastError, ValueError):
    """A required archive member is missing or has the wrong kind."""


class NoAudioFound(StructuralError):
    def __init__(self):
        super().__init__("no audio found (expected audio.mp3 or audio.wav)")


class AmbiguousAudio(StructuralError):
    def __init__(self):
        super().__init__("found both audio.mp3 and audio.wav, expected exactly one")


class NoImageDirectory(StructuralError):
    def __init__(self):
        super().__init__("no img directory found")


class ImageDirIsNotADirectory(StructuralError):
    def __init__(self):
        super().__init__("expected img to be a directory")


class NoTimecodeFile(StructuralError):
    def __init__(self):
        super().__init__("no timecodes found (expected timecodes.txt)")


class UnexpectedArchiveLayout(StructuralError):
    """Extraction did not yield exactly one top-level directory."""


# ----------------------------
# Image sequence
# ----------------------------
class SequenceError(SlidecastError, ValueError):
    """The image files do not form a valid indexed sequence."""


class InconsistentDigitWidth(SequenceError):
    def __init__(self, name: str, expected: int):
        self.name = name
        self.expected = expected
        super().__init__(f"found bad image: {name} (expected {expected} digits)")


class MalformedImageName(SequenceError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"found bad image: {name}")


class OutOfOrderImage(SequenceError):
    def __init__(self, name: str, expected: int, got: int):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(f"found image out of order: expected {expected} got {got} in {name}")


class MalformedImage(SequenceError):
    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"malformed jpeg {name}: {reason}")


class SizeMismatch(SequenceError):
    def __init__(self, name: str, expected: tuple[int, int], got: tuple[int, int]):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(
            f"image {name} is of unexpected size: expected {expected[0]}x{expected[1]}, got {got[0]}x{got[1]}"
        )


# ----------------------------
# Timecodes
# ----------------------------
class TimecodeFormatError(SlidecastError, ValueError):
    """A timecode line does not match hh:mm:ss[.fff]."""


class MalformedTimecode(TimecodeFormatError):
    def __init__(self, line: str, reason: str = "expected format hh:mm:ss[.xxx]"):
        self.line = line
        super().__init__(f"malformatted timecode {line!r}: {reason}")


class TimecodeOrderError(SlidecastError, ValueError):
    """Timecodes are not strictly increasing."""


class TimecodeOutOfOrder(TimecodeOrderError):
    def __init__(self, line: str, end_time, elapsed):
        self.line = line
        self.end_time = end_time
        self.elapsed = elapsed
        super().__init__(
            f"got timecode out of order: {line} ({end_time}) but only {elapsed} time has passed"
        )


# ----------------------------
# Reconciliation
# ----------------------------
class ReconciliationError(SlidecastError, ValueError):
    """Timecodes, images and audio do not agree."""


class FrameTimecodeCountMismatch(ReconciliationError):
    def __init__(self, timecode_count: int, image_count: int):
        self.timecode_count = timecode_count
        self.image_count = image_count
        super().__init__(
            f"mismatched timecode ({timecode_count}) and image counts ({image_count}), "
            f"expected exactly one more image than timecodes"
        )


class AudioShorterThanTimecodes(ReconciliationError):
    def __init__(self, audio_duration, last_timecode):
        self.audio_duration = audio_duration
        self.last_timecode = last_timecode
        super().__init__(
            f"audio ends before last image is displayed: audio is {audio_duration}, "
            f"last timecode is {last_timecode}"
        )


# ----------------------------
# External tools
# ----------------------------
class ExternalToolError(SlidecastError, RuntimeError):
    """An external collaborator (ffmpeg, lame, tar, decoder) failed."""


class ClipCancelled(ExternalToolError):
    def __init__(self, description: str):
        self.description = description
        super().__init__(f"ffmpeg stopped on {description} after another clip failed")
