"""Shared fixtures: archives built from generated JPEGs and WAV files."""

import tarfile
import wave
from pathlib import Path

import pytest
from PIL import Image

SAMPLE_RATE = 8000


def write_jpeg(path: Path, size: tuple[int, int] = (32, 24), color: str = "red") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format="JPEG")
    return path


def write_wav(path: Path, seconds: float, rate: int = SAMPLE_RATE) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(rate)
        wav.writeframes(b"\x00\x00" * round(seconds * rate))
    return path


def build_archive_dir(
    root: Path,
    image_count: int = 3,
    timecodes: str = "00:00:01\n00:00:02.500\n",
    audio_seconds: float = 4.0,
    digit_width: int = 1,
) -> Path:
    """Lay out a valid archive directory with WAV audio."""
    root.mkdir(parents=True, exist_ok=True)
    for i in range(image_count):
        write_jpeg(root / "img" / f"img{i:0{digit_width}d}.jpg")
    (root / "timecodes.txt").write_text(timecodes)
    write_wav(root / "audio.wav", audio_seconds)
    return root


def pack_archive(source_dir: Path, archive_path: Path) -> Path:
    with tarfile.open(archive_path, "w:gz") as tar:
        tar.add(source_dir, arcname=source_dir.name)
    return archive_path


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    return build_archive_dir(tmp_path / "talk")


@pytest.fixture
def archive_file(tmp_path: Path) -> Path:
    source = build_archive_dir(tmp_path / "src" / "talk")
    return pack_archive(source, tmp_path / "talk.tar.gz")


@pytest.fixture
def make_archive_dir():
    return build_archive_dir


@pytest.fixture
def make_jpeg():
    return write_jpeg


@pytest.fixture
def make_wav():
    return write_wav


@pytest.fixture
def make_archive_file():
    return pack_archive
