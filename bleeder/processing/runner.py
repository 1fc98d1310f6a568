"""Processing runner for executing bleed jobs."""

from pathlib import Path

from bleeder.config import OutputPolicy
from bleeder.errors import BleederError, DecodeError, FileIOError
from bleeder.logger import logger as LOGGER

from .codec import decode, encode, output_path_for, resolve_output_format
from .compose import add_bleed
from .job import BleedJob, ProcessingResult


def _read_bytes(path: Path) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileIOError(f"Failed to open image file [{path}]: {e}", path) from e


def _write_bytes(path: Path, data: bytes, overwrite: bool) -> None:
    """Write data to path.

    Without overwrite the file is created exclusively, so FileExistsError is
    raised if another job (or an earlier run) already produced it.
    """
    try:
        with open(path, "wb" if overwrite else "xb") as f:
            f.write(data)
    except FileExistsError:
        raise
    except OSError as e:
        raise FileIOError(f"Failed to create file [{path}]: {e}", path) from e


def _skip(job: BleedJob, output_path: Path) -> ProcessingResult:
    LOGGER.info(f"Output file exists, skipping: [{output_path.name}]")
    return ProcessingResult(job=job, status="SKIPPED", output_path=output_path)


def run_job(job: BleedJob, output_dir: Path, policy: OutputPolicy) -> ProcessingResult:
    """Execute a single bleed job: read, decode, add bleed, encode, write.

    Args:
        job: Job to execute
        output_dir: Existing directory receiving the output file
        policy: Output format, overwrite and corner fix settings

    Returns:
        ProcessingResult with status DONE, SKIPPED or FAILED. Per-file errors
        are reported in the result, never raised.
    """
    output_dir = Path(output_dir)

    try:
        # With a forced format the output name is known before decoding
        if not policy.overwrite_existing and not policy.auto_format:
            candidate = output_path_for(job.input_path, output_dir, policy.output_format)
            if candidate.exists():
                return _skip(job, candidate)

        data = _read_bytes(job.input_path)
        try:
            image = decode(data)
        except DecodeError as e:
            e.path = job.input_path
            raise

        out_format = resolve_output_format(policy.output_format, image.format)
        output_path = output_path_for(job.input_path, output_dir, out_format, keep_suffix=policy.auto_format)

        if not policy.overwrite_existing and output_path.exists():
            return _skip(job, output_path)

        LOGGER.info(f"Adding bleed to image: [{output_path.name}]")
        with_bleed = add_bleed(image, corner_fix_enabled=policy.corner_fix_enabled)
        encoded = encode(with_bleed, out_format, quality=policy.jpeg_quality)
        try:
            _write_bytes(output_path, encoded, overwrite=policy.overwrite_existing)
        except FileExistsError:
            # Another input in this batch maps to the same output name
            return _skip(job, output_path)

    except BleederError as e:
        LOGGER.error(f"Failed to process [{job.input_path}]: {e}")
        return ProcessingResult(job=job, status="FAILED", error=str(e))

    return ProcessingResult(job=job, status="DONE", output_path=output_path)
