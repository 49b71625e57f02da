"""Audio transcode and duration collaborators."""

import logging
import subprocess
import wave
from datetime import timedelta
from pathlib import Path

from slidecast.utils.errors import ExternalToolError

logger = logging.getLogger(__name__)


def _run_lame(args: list[str], timeout: float | None) -> None:
    cmd = ["lame", "--quiet", *args]
    logger.debug(f"lame command: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, check=False)
    except FileNotFoundError:
        raise ExternalToolError("Required tool not found: lame")
    except subprocess.TimeoutExpired:
        raise ExternalToolError(f"lame timed out after {timeout}s")
    if result.returncode != 0:
        raise ExternalToolError(f"lame returned error {result.returncode}: {result.stderr.strip()}")


def decode_mp3(mp3_path: Path, wav_path: Path, timeout: float | None = None) -> Path:
    """Decode an MP3 narration into PCM WAV."""
    logger.info(f"Decoding {mp3_path.name} to PCM...")
    wav_path.parent.mkdir(parents=True, exist_ok=True)
    _run_lame(["--decode", str(mp3_path), str(wav_path)], timeout)
    return wav_path


def encode_mp3(wav_path: Path, mp3_path: Path, bitrate: int = 192, timeout: float | None = None) -> Path:
    """Encode a PCM WAV narration as MP3 at a fixed bitrate in kbps."""
    logger.info(f"Encoding {wav_path.name} as {bitrate} kbps MP3...")
    mp3_path.parent.mkdir(parents=True, exist_ok=True)
    _run_lame(["-b", str(bitrate), str(wav_path), str(mp3_path)], timeout)
    return mp3_path


def wav_duration(wav_path: Path) -> timedelta:
    """Exact playable length of a PCM WAV file."""
    try:
        with wave.open(str(wav_path), 'rb') as wav:
            frames = wav.getnframes()
            rate = wav.getframerate()
    except (wave.Error, EOFError) as e:
        raise ExternalToolError(f"could not read audio {wav_path.name}: {e}")

    if rate <= 0:
        raise ExternalToolError(f"could not read audio {wav_path.name}: invalid sample rate {rate}")

    duration = timedelta(seconds=frames / rate)
    logger.info(f"Audio detected: {rate} Hz, {frames} frames, {duration.total_seconds():.3f}s")
    return duration
