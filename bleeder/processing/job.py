"""Processing job datastructures."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal


JobStatus = Literal["DONE", "SKIPPED", "FAILED"]


@dataclass(frozen=True)
class BleedJob:
    """Job for adding bleed to a single image file."""

    input_path: Path

    @property
    def name(self) -> str:
        return self.input_path.name


@dataclass
class ProcessingResult:
    """Outcome of one job."""

    job: BleedJob
    status: JobStatus
    output_path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != "FAILED"


@dataclass
class BatchSummary:
    """All job outcomes of one run."""

    output_dir: Path
    results: list[ProcessingResult] = field(default_factory=list)

    def _count(self, status: JobStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def done(self) -> int:
        return self._count("DONE")

    @property
    def skipped(self) -> int:
        return self._count("SKIPPED")

    @property
    def failed(self) -> int:
        return self._count("FAILED")

    @property
    def failures(self) -> list[ProcessingResult]:
        return [r for r in self.results if r.status == "FAILED"]
