"""Shared Pydantic models handed from one pipeline stage to the next."""

from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

PixelSize = Tuple[int, int]


class AudioSourceKind(str, Enum):
    """Encoding of the narration track found in the archive."""
    COMPRESSED_LOSSY = "mp3"
    RAW_PCM = "wav"

    @property
    def file_name(self) -> str:
        return f"audio.{self.value}"

    @property
    def needs_decode(self) -> bool:
        return self is AudioSourceKind.COMPRESSED_LOSSY


class DirectoryEntry(BaseModel):
    """One entry of a directory listing."""
    model_config = ConfigDict(frozen=True)

    name: str
    is_dir: bool = False


class ImageFrame(BaseModel):
    """A validated still image of the sequence."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    file_name: str
    pixel_size: PixelSize


class ImageSequence(BaseModel):
    """Contiguous, uniformly sized images indexed 0..count-1."""
    model_config = ConfigDict(frozen=True)

    frames: List[ImageFrame]
    digit_width: int = Field(0, ge=0)
    pixel_size: PixelSize | None = None

    @computed_field
    @property
    def count(self) -> int:
        return len(self.frames)

    @model_validator(mode="after")
    def check_contiguous(self) -> "ImageSequence":
        for expected, frame in enumerate(self.frames):
            if frame.index != expected:
                raise ValueError(f"frame {frame.file_name} has index {frame.index}, expected {expected}")
            if frame.pixel_size != self.pixel_size:
                raise ValueError(f"frame {frame.file_name} does not share the sequence pixel size")
        return self


class ParsedTimecodes(BaseModel):
    """Segment durations derived from the timecode file."""
    model_config = ConfigDict(frozen=True)

    segments: List[timedelta]
    total: timedelta = timedelta(0)


class DurationSchedule(BaseModel):
    """Display duration of every image, the last one filling the remaining audio."""
    model_config = ConfigDict(frozen=True)

    durations: List[timedelta]

    @model_validator(mode="after")
    def check_positive(self) -> "DurationSchedule":
        for i, duration in enumerate(self.durations):
            if duration <= timedelta(0):
                raise ValueError(f"duration of frame {i} must be positive, got {duration}")
        return self

    @property
    def total(self) -> timedelta:
        return sum(self.durations, timedelta(0))

    def __len__(self) -> int:
        return len(self.durations)

    def __getitem__(self, index: int) -> timedelta:
        return self.durations[index]


class ClipJob(BaseModel):
    """Encode one still image into a clip of fixed duration."""
    model_config = ConfigDict(frozen=True)

    frame_index: int = Field(..., ge=0)
    source_image: Path
    clip_path: Path
    duration: timedelta


class MuxJob(BaseModel):
    """Combine the concatenated video with the audio, trimmed to the shorter stream."""
    model_config = ConfigDict(frozen=True)

    video: Path
    audio: Path
    output: Path


class AssemblyPlan(BaseModel):
    """Ordered jobs an encoder runs to produce the final video."""
    model_config = ConfigDict(frozen=True)

    clips: List[ClipJob]
    manifest_path: Path
    concat_output: Path
    mux: MuxJob

    @property
    def concat_manifest(self) -> List[Path]:
        return [job.clip_path for job in sorted(self.clips, key=lambda job: job.frame_index)]
