"""Encoding settings collected from the command line."""

from pydantic import BaseModel, Field


class EncodeSettings(BaseModel):
    """Options forwarded to the external encoders."""
    video_codec: str = Field("libx264", description="FFmpeg video codec for the per-image clips")
    pix_fmt: str = Field("yuv420p", description="Pixel format of the per-image clips")
    audio_bitrate: int = Field(192, gt=0, description="MP3 bitrate in kbps used when re-encoding PCM audio")
    jobs: int = Field(1, ge=1, description="Number of clips encoded concurrently")
    timeout: float | None = Field(None, gt=0, description="Seconds before an external tool call is killed")
    overwrite: bool = Field(False, description="Replace the output file if it already exists")
