"""Run orchestration: output directory, job discovery, single file or pool."""

from functools import partial
from pathlib import Path

from bleeder.acquisition.filesystem import discover_jobs
from bleeder.config import OutputPolicy
from bleeder.errors import OutputDirCreateError
from bleeder.logger import logger as LOGGER

from .job import BatchSummary
from .pool import DEFAULT_QUEUE_SIZE, DEFAULT_WORKERS, WorkerPool
from .runner import run_job


def prepare_output_dir(output_dir: Path) -> Path:
    """Create the output directory (and parents) if missing."""
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirCreateError(f"Failed to create output directory: {e}", output_dir) from e
    if not output_dir.is_dir():
        raise OutputDirCreateError(f"Output path is not a directory: {output_dir}", output_dir)
    return output_dir


def run_bleed(
    input_path: Path,
    output_dir: Path,
    policy: OutputPolicy,
    workers: int = DEFAULT_WORKERS,
    queue_size: int = DEFAULT_QUEUE_SIZE,
) -> BatchSummary:
    """Add bleed to one image file or every supported image in a directory.

    Args:
        input_path: Image file or directory of images
        output_dir: Directory for outputs, created if absent
        policy: Output policy shared read-only by all workers
        workers: Worker thread count for directory mode
        queue_size: Bounded job queue capacity for directory mode

    Returns:
        BatchSummary of every job outcome

    Raises:
        OutputDirCreateError, InputNotFoundError, InputReadError: before any job runs
    """
    input_path = Path(input_path)
    output_dir = prepare_output_dir(output_dir)
    jobs = discover_jobs(input_path)
    handler = partial(run_job, output_dir=output_dir, policy=policy)

    if input_path.is_dir():
        LOGGER.debug(f"Directory mode: {input_path} with {workers} workers")
        results = WorkerPool(handler, workers=workers, queue_size=queue_size).run(jobs)
    else:
        results = [handler(job) for job in jobs]

    return BatchSummary(output_dir=output_dir, results=results)
