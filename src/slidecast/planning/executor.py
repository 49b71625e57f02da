"""Run an assembly plan against an encoder."""

import concurrent.futures
import logging
import threading
from typing import Callable, Iterable, Protocol

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn

from slidecast.models.slideshow import AssemblyPlan, ClipJob, MuxJob
from slidecast.planning.planner import write_concat_manifest
from slidecast.utils.errors import ExternalToolError

logger = logging.getLogger(__name__)


class Encoder(Protocol):
    """Clip-encode and concat/mux collaborator."""

    def encode_clip(self, job: ClipJob, cancel: threading.Event | None = None) -> None: ...

    def concat(self, manifest_path, output) -> None: ...

    def mux(self, job: MuxJob) -> None: ...


def encode_clips(
    clips: Iterable[ClipJob],
    encoder: Encoder,
    jobs: int = 1,
    on_done: Callable[[ClipJob], None] | None = None,
) -> None:
    """
    Encode every clip, one at a time or up to ``jobs`` at once.

    The first failure cancels every clip that has not started yet and sets the
    cancel event so the running ones stop early. It is re-raised once they exit.
    """
    clips = list(clips)
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")

    if jobs == 1:
        for job in clips:
            encoder.encode_clip(job)
            if on_done:
                on_done(job)
        return

    with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as pool:
        cancel = threading.Event()
        future_map = {pool.submit(encoder.encode_clip, job, cancel): job for job in clips}
        try:
            for future in concurrent.futures.as_completed(future_map):
                job = future_map[future]
                try:
                    future.result()
                except Exception as e:
                    logger.error(f"Clip for frame {job.frame_index} failed: {e}")
                    raise
                if on_done:
                    on_done(job)
        except BaseException:
            cancel.set()
            for future in future_map:
                future.cancel()
            raise


def execute_plan(
    plan: AssemblyPlan,
    encoder: Encoder,
    jobs: int = 1,
    console: Console | None = None,
) -> None:
    """
    Encode the clips, concatenate them in frame order and mux in the audio.

    Raises:
        ExternalToolError: If any job fails or the final video is missing.
    """
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[cyan]{task.completed}/{task.total}[/cyan] clips"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Encoding clips...", total=len(plan.clips))
        encode_clips(plan.clips, encoder, jobs, on_done=lambda job: progress.advance(task))

    manifest_path = write_concat_manifest(plan)
    logger.info(f"Concatenating {len(plan.clips)} clips...")
    encoder.concat(manifest_path, plan.concat_output)

    logger.info("Adding audio...")
    encoder.mux(plan.mux)

    if not plan.mux.output.exists():
        raise ExternalToolError(f"encoder reported success but {plan.mux.output} was not created")
    logger.info(f"Video saved to: {plan.mux.output}")
