"""Tests for plan execution with a fake encoder."""

import threading
import time
from datetime import timedelta
from pathlib import Path

import pytest

from slidecast.models.slideshow import DurationSchedule, ImageFrame, ImageSequence
from slidecast.planning.executor import encode_clips, execute_plan
from slidecast.planning.planner import plan_assembly
from slidecast.utils.errors import ClipCancelled, ExternalToolError


class FakeEncoder:
    """Records calls and writes empty files where ffmpeg would write videos."""

    def __init__(self, delays=None, fail_on=None, create_output=True):
        self.delays = delays or {}
        self.fail_on = fail_on
        self.create_output = create_output
        self.completed = []
        self.started = []
        self.manifest = None
        self.muxed = None
        self.lock = threading.Lock()

    def encode_clip(self, job, cancel=None):
        with self.lock:
            self.started.append(job.frame_index)
        delay = self.delays.get(job.frame_index, 0)
        if cancel is None:
            time.sleep(delay)
        elif cancel.wait(delay):
            raise ClipCancelled(f"clip for frame {job.frame_index}")
        if job.frame_index == self.fail_on:
            raise ExternalToolError(f"ffmpeg returned error on clip for frame {job.frame_index}")
        job.clip_path.parent.mkdir(parents=True, exist_ok=True)
        job.clip_path.write_bytes(b"")
        with self.lock:
            self.completed.append(job.frame_index)

    def concat(self, manifest_path, output):
        self.manifest = Path(manifest_path).read_text()
        Path(output).write_bytes(b"")

    def mux(self, job):
        self.muxed = job
        if self.create_output:
            job.output.write_bytes(b"")


def make_plan(tmp_path: Path, count: int):
    frames = [ImageFrame(index=i, file_name=f"img{i}.jpg", pixel_size=(4, 3)) for i in range(count)]
    sequence = ImageSequence(frames=frames, digit_width=1, pixel_size=(4, 3))
    schedule = DurationSchedule(durations=[timedelta(seconds=1)] * count)
    return plan_assembly(schedule, sequence, tmp_path / "img", tmp_path / "vid", tmp_path / "audio.mp3", tmp_path / "out.mp4")


def test_sequential_execution(tmp_path: Path):
    plan = make_plan(tmp_path, 3)
    encoder = FakeEncoder()

    execute_plan(plan, encoder)

    assert encoder.completed == [0, 1, 2]
    assert encoder.manifest.splitlines() == [f"file '{path}'" for path in plan.concat_manifest]
    assert encoder.muxed == plan.mux
    assert plan.mux.output.exists()


def test_concurrent_completion_order_does_not_change_manifest(tmp_path: Path):
    plan = make_plan(tmp_path, 4)
    encoder = FakeEncoder(delays={0: 0.3, 1: 0.2, 2: 0.1, 3: 0.0})

    execute_plan(plan, encoder, jobs=4)

    assert encoder.completed != [0, 1, 2, 3]
    assert sorted(encoder.completed) == [0, 1, 2, 3]
    assert encoder.manifest == "".join(
        f"file '{tmp_path / 'vid' / f'vid{i}.mp4'}'\n" for i in range(4)
    )


def test_sequential_failure_stops_remaining_clips(tmp_path: Path):
    plan = make_plan(tmp_path, 4)
    encoder = FakeEncoder(fail_on=1)

    with pytest.raises(ExternalToolError, match="frame 1"):
        execute_plan(plan, encoder)

    assert encoder.started == [0, 1]
    assert encoder.manifest is None
    assert encoder.muxed is None


def test_concurrent_failure_cancels_pending_clips(tmp_path: Path):
    plan = make_plan(tmp_path, 10)
    encoder = FakeEncoder(delays={i: 0.05 for i in range(10)}, fail_on=0)

    with pytest.raises(ExternalToolError, match="frame 0"):
        encode_clips(plan.clips, encoder, jobs=2)

    assert len(encoder.started) < 10
    assert encoder.manifest is None


def test_concurrent_failure_stops_running_clips(tmp_path: Path):
    plan = make_plan(tmp_path, 4)
    encoder = FakeEncoder(delays={0: 0.05, 1: 1.0, 2: 1.0, 3: 1.0}, fail_on=0)

    start = time.monotonic()
    with pytest.raises(ExternalToolError, match="frame 0"):
        encode_clips(plan.clips, encoder, jobs=4)
    elapsed = time.monotonic() - start

    assert encoder.completed == []
    assert elapsed < 0.5


def test_missing_output_is_an_error(tmp_path: Path):
    plan = make_plan(tmp_path, 2)
    with pytest.raises(ExternalToolError, match="was not created"):
        execute_plan(plan, FakeEncoder(create_output=False))


def test_jobs_must_be_positive(tmp_path: Path):
    with pytest.raises(ValueError):
        encode_clips(make_plan(tmp_path, 1).clips, FakeEncoder(), jobs=0)
