import logging
import subprocess
import threading
import time
from pathlib import Path

import ffmpeg

from slidecast.models.settings import EncodeSettings
from slidecast.models.slideshow import ClipJob, MuxJob
from slidecast.planning.planner import format_clip_duration
from slidecast.utils.errors import ClipCancelled, ExternalToolError

logger: logging.Logger = logging.getLogger(__name__)

# Keep the tail of ffmpeg's stderr in error messages, the banner is noise
STDERR_TAIL_CHARS = 2000

# How often a running ffmpeg is checked for cancellation
POLL_INTERVAL = 0.2


class FfmpegEncoder:
    """Clip-encode and concat/mux collaborator backed by the ffmpeg binary."""

    def __init__(self, settings: EncodeSettings | None = None):
        self.settings = settings or EncodeSettings()

    def encode_clip(self, job: ClipJob, cancel: threading.Event | None = None) -> None:
        """
        Hold one still image for exactly the job's duration.

        Setting ``cancel`` kills the running ffmpeg and raises ClipCancelled.
        """
        job.clip_path.parent.mkdir(parents=True, exist_ok=True)
        stream = ffmpeg.input(str(job.source_image), loop=1)
        stream = ffmpeg.output(
            stream,
            str(job.clip_path),
            vcodec=self.settings.video_codec,
            pix_fmt=self.settings.pix_fmt,
            t=format_clip_duration(job.duration),
        )
        self._run(stream, f"clip for frame {job.frame_index}", cancel)

    def concat(self, manifest_path: Path, output: Path) -> None:
        """Join the clips listed in a concat manifest without re-encoding."""
        stream = ffmpeg.input(str(manifest_path), f='concat', safe=0)
        stream = ffmpeg.output(stream, str(output), c='copy')
        self._run(stream, "concatenated video")

    def mux(self, job: MuxJob) -> None:
        """Put the audio under the video, stopping at the shorter stream."""
        job.output.parent.mkdir(parents=True, exist_ok=True)
        video_input = ffmpeg.input(str(job.video))
        audio_input = ffmpeg.input(str(job.audio))
        stream = ffmpeg.output(
            video_input['v'],
            audio_input['a'],
            str(job.output),
            codec='copy',
            shortest=None,
        )
        self._run(stream, f"final video {job.output}")

    def _run(self, stream, description: str, cancel: threading.Event | None = None) -> None:
        stream = stream.global_args('-nostdin')
        logger.debug(f"FFmpeg command: {' '.join(ffmpeg.compile(stream, overwrite_output=True))}")

        try:
            process = ffmpeg.run_async(stream, overwrite_output=True, pipe_stdout=True, pipe_stderr=True)
        except FileNotFoundError:
            raise ExternalToolError("Required tool not found: ffmpeg")

        stderr = self._wait(process, description, cancel)

        if process.returncode != 0:
            message = stderr.decode(errors='replace').strip()[-STDERR_TAIL_CHARS:] if stderr else 'Unknown error'
            logger.error(f"FFmpeg failed: {message}")
            raise ExternalToolError(f"ffmpeg returned error {process.returncode} on {description}")

    def _wait(self, process, description: str, cancel: threading.Event | None) -> bytes:
        """Wait for ffmpeg to exit, killing it on timeout or cancellation."""
        deadline = None
        if self.settings.timeout is not None:
            deadline = time.monotonic() + self.settings.timeout

        while True:
            wait = POLL_INTERVAL
            if deadline is not None:
                wait = max(0.0, min(wait, deadline - time.monotonic()))
            try:
                _, stderr = process.communicate(timeout=wait)
                return stderr
            except subprocess.TimeoutExpired:
                pass

            if cancel is not None and cancel.is_set():
                process.kill()
                process.communicate()
                raise ClipCancelled(description)
            if deadline is not None and time.monotonic() >= deadline:
                process.kill()
                process.communicate()
                raise ExternalToolError(f"ffmpeg timed out after {self.settings.timeout}s on {description}")
