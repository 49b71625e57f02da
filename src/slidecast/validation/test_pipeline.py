"""Tests running every validation stage over an archive directory."""

import shutil
from datetime import timedelta
from pathlib import Path

import pytest

from slidecast.models.slideshow import AudioSourceKind
from slidecast.utils.errors import (
    FrameTimecodeCountMismatch,
    NoAudioFound,
    OutOfOrderImage,
    SizeMismatch,
    TimecodeOutOfOrder,
)
from slidecast.validation import pipeline
from slidecast.validation.pipeline import prepare_slideshow


def test_valid_wav_archive(tmp_path: Path, archive_dir: Path):
    prepared = prepare_slideshow(archive_dir, tmp_path / "work")

    assert prepared.audio_kind is AudioSourceKind.RAW_PCM
    assert prepared.wav_path == archive_dir / "audio.wav"
    assert prepared.source_audio == archive_dir / "audio.wav"
    assert prepared.sequence.count == 3
    assert prepared.audio_duration == timedelta(seconds=4)
    assert prepared.schedule.durations == [
        timedelta(seconds=1), timedelta(seconds=1.5), timedelta(seconds=1.5),
    ]


def test_mp3_archive_is_decoded_first(tmp_path: Path, archive_dir: Path, make_wav, monkeypatch):
    wav = archive_dir / "audio.wav"
    (archive_dir / "audio.mp3").write_bytes(b"fake mp3")
    wav.unlink()
    decoded = []

    def fake_decode(mp3_path, wav_path, timeout=None):
        decoded.append((mp3_path, wav_path, timeout))
        return make_wav(wav_path, seconds=5.0)

    monkeypatch.setattr(pipeline, "check_lame", lambda: "3.100")
    monkeypatch.setattr(pipeline, "decode_mp3", fake_decode)

    prepared = prepare_slideshow(archive_dir, tmp_path / "work", timeout=12.0)

    assert decoded == [(archive_dir / "audio.mp3", tmp_path / "work" / "audio.wav", 12.0)]
    assert prepared.audio_kind is AudioSourceKind.COMPRESSED_LOSSY
    assert prepared.source_audio == archive_dir / "audio.mp3"
    assert prepared.schedule.durations[-1] == timedelta(seconds=2.5)


def test_structural_failure_dumps_archive_dir(tmp_path: Path, archive_dir: Path):
    (archive_dir / "audio.wav").unlink()
    dumped = []
    with pytest.raises(NoAudioFound):
        prepare_slideshow(archive_dir, tmp_path / "work", on_failure=dumped.append)
    assert dumped == [archive_dir]


def test_sequence_failure_dumps_image_dir(tmp_path: Path, archive_dir: Path):
    (archive_dir / "img" / "img1.jpg").unlink()
    dumped = []
    with pytest.raises(OutOfOrderImage):
        prepare_slideshow(archive_dir, tmp_path / "work", on_failure=dumped.append)
    assert dumped == [archive_dir / "img"]


def test_size_mismatch_dumps_image_dir(tmp_path: Path, archive_dir: Path, make_jpeg):
    make_jpeg(archive_dir / "img" / "img2.jpg", size=(10, 10))
    dumped = []
    with pytest.raises(SizeMismatch):
        prepare_slideshow(archive_dir, tmp_path / "work", on_failure=dumped.append)
    assert dumped == [archive_dir / "img"]


def test_timecode_failure_does_not_dump(tmp_path: Path, archive_dir: Path):
    (archive_dir / "timecodes.txt").write_text("00:00:02\n00:00:01\n")
    dumped = []
    with pytest.raises(TimecodeOutOfOrder):
        prepare_slideshow(archive_dir, tmp_path / "work", on_failure=dumped.append)
    assert dumped == []


def test_extra_image_is_count_mismatch(tmp_path: Path, archive_dir: Path):
    shutil.copy(archive_dir / "img" / "img2.jpg", archive_dir / "img" / "img3.jpg")
    with pytest.raises(FrameTimecodeCountMismatch):
        prepare_slideshow(archive_dir, tmp_path / "work", on_failure=None)
