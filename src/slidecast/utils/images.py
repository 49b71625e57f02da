"""Image decode collaborator."""

from pathlib import Path

from PIL import Image

from slidecast.models.slideshow import PixelSize
from slidecast.utils.errors import MalformedImage


def decode_jpeg(path: Path) -> PixelSize:
    """Fully decode a JPEG file and return its (width, height)."""
    try:
        with Image.open(path) as img:
            if img.format != "JPEG":
                raise MalformedImage(path.name, f"expected JPEG data, found {img.format}")
            # open() only reads the header, load() decodes the pixel data
            img.load()
            return img.size
    except (OSError, SyntaxError, Image.DecompressionBombError) as e:
        raise MalformedImage(path.name, str(e))
