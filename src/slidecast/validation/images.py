"""
Validate the numbered still images of an archive.

Images are named ``img<digits>.jpg``. Scanned in name order they must count up
from zero without gaps or repeats, share one zero-padding width, and decode to
the same pixel size.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List

from slidecast.models.slideshow import DirectoryEntry, ImageFrame, ImageSequence, PixelSize
from slidecast.utils.errors import (
    InconsistentDigitWidth,
    MalformedImage,
    MalformedImageName,
    OutOfOrderImage,
    SizeMismatch,
)

IMAGE_PREFIX = "img"
IMAGE_EXTENSION = ".jpg"

# Returns (width, height), raises MalformedImage when the file does not decode
ImageDecoder = Callable[[Path], PixelSize]

logger = logging.getLogger(__name__)


def is_sequence_member(name: str) -> bool:
    """Whether a file name belongs to the image sequence at all."""
    return (
        name.startswith(IMAGE_PREFIX)
        and name.endswith(IMAGE_EXTENSION)
        and len(name) >= len(IMAGE_PREFIX) + len(IMAGE_EXTENSION)
    )


def image_file_name(index: int, digit_width: int) -> str:
    return f"{IMAGE_PREFIX}{index:0{digit_width}d}{IMAGE_EXTENSION}"


def validate_image_sequence(
    image_dir: Path,
    listing: Iterable[DirectoryEntry],
    decode: ImageDecoder,
) -> ImageSequence:
    """
    Scan an image directory listing and build the validated sequence.

    Args:
        image_dir: Directory the listing was taken from, used to locate files to decode
        listing: Entries of the image directory, in name order
        decode: Image decode collaborator returning the pixel size of a file

    Returns:
        ImageSequence with one frame per matching file

    Raises:
        SequenceError: On the first naming, ordering, decode or size violation.
    """
    frames: List[ImageFrame] = []
    digit_width = 0
    pixel_size: PixelSize | None = None

    for entry in listing:
        name = entry.name
        if not is_sequence_member(name):
            continue

        digits = name[len(IMAGE_PREFIX):-len(IMAGE_EXTENSION)]
        if not frames:
            digit_width = len(digits)
        if len(digits) != digit_width:
            raise InconsistentDigitWidth(name, digit_width)
        if not digits or not digits.isascii() or not digits.isdigit():
            raise MalformedImageName(name)

        expected = len(frames)
        index = int(digits)
        if index != expected:
            raise OutOfOrderImage(name, expected, index)
        if entry.is_dir:
            raise MalformedImage(name, "is a directory")

        size = decode(image_dir / name)
        if pixel_size is None:
            pixel_size = size
        if size != pixel_size:
            raise SizeMismatch(name, pixel_size, size)

        frames.append(ImageFrame(index=index, file_name=name, pixel_size=size))

    logger.debug(f"Validated {len(frames)} images ({digit_width} digits, size {pixel_size})")
    return ImageSequence(frames=frames, digit_width=digit_width, pixel_size=pixel_size)
