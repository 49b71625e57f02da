"""Build narrated slideshow videos from archives of images, audio and timecodes."""

__version__ = "0.1.0"
