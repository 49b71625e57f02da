"""Tests for archive extraction and directory diagnostics."""

import tarfile
from pathlib import Path

import pytest

from slidecast.utils.archive import archive_stem, extract_archive
from slidecast.utils.diagnostics import dump_directory, list_directory, run_with_diagnostics
from slidecast.utils.errors import (
    ExternalToolError,
    NoTimecodeFile,
    TimecodeOrderError,
    UnexpectedArchiveLayout,
)


@pytest.mark.parametrize("name, stem", [
    ("talk.tar.gz", "talk"),
    ("week.1.talk.tar.gz", "week.1.talk"),
    ("talk.tgz", "talk"),
])
def test_archive_stem(name, stem):
    assert archive_stem(Path(name)) == stem


@pytest.mark.parametrize("name", ["talk.zip", "talk.tar", ".tar.gz"])
def test_archive_stem_rejects_other_files(name):
    with pytest.raises(ValueError, match=".tar.gz"):
        archive_stem(Path(name))


def test_extract_single_directory(tmp_path: Path, archive_file: Path):
    archive_dir = extract_archive(archive_file, tmp_path / "out")
    assert archive_dir == tmp_path / "out" / "talk"
    assert [entry.name for entry in list_directory(archive_dir)] == ["audio.wav", "img", "timecodes.txt"]


def test_extract_rejects_loose_files(tmp_path: Path):
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")
    archive = tmp_path / "loose.tar.gz"
    with tarfile.open(archive, "w:gz") as tar:
        tar.add(tmp_path / "a.txt", arcname="a.txt")
        tar.add(tmp_path / "b.txt", arcname="b.txt")

    with pytest.raises(UnexpectedArchiveLayout, match="can't find tarball output"):
        extract_archive(archive, tmp_path / "out")


def test_extract_corrupt_archive(tmp_path: Path):
    archive = tmp_path / "broken.tar.gz"
    archive.write_bytes(b"definitely not gzip")
    with pytest.raises(ExternalToolError, match="could not extract"):
        extract_archive(archive, tmp_path / "out")


def test_list_directory_is_sorted(tmp_path: Path):
    (tmp_path / "b").mkdir()
    (tmp_path / "a.txt").write_text("")
    (tmp_path / "c.txt").write_text("")
    entries = list_directory(tmp_path)
    assert [(e.name, e.is_dir) for e in entries] == [("a.txt", False), ("b", True), ("c.txt", False)]


def test_dump_directory_prints_names(tmp_path: Path, capsys):
    (tmp_path / "audio.wav").write_text("")
    (tmp_path / "[draft].txt").write_text("")
    dump_directory(tmp_path)
    err = capsys.readouterr().err
    assert "Dumping directory contents:" in err
    assert "audio.wav" in err
    assert "[draft].txt" in err


def test_hook_runs_on_structural_failure(tmp_path: Path):
    dumped = []

    def fail():
        raise NoTimecodeFile()

    with pytest.raises(NoTimecodeFile):
        run_with_diagnostics(tmp_path, fail, on_failure=dumped.append)
    assert dumped == [tmp_path]


def test_hook_skipped_for_other_errors(tmp_path: Path):
    dumped = []

    def fail():
        raise TimecodeOrderError("out of order")

    with pytest.raises(TimecodeOrderError):
        run_with_diagnostics(tmp_path, fail, on_failure=dumped.append)
    assert dumped == []


def test_hook_passes_result_through(tmp_path: Path):
    assert run_with_diagnostics(tmp_path, lambda a, b=0: a + b, 1, b=2, on_failure=None) == 3
