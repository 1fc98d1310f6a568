"""Fixed-size worker pool draining a bounded job queue."""

import queue
import threading
from typing import Callable, Iterable, List

from bleeder.logger import logger as LOGGER

from .job import BleedJob, ProcessingResult

DEFAULT_WORKERS = 8
DEFAULT_QUEUE_SIZE = 100

JobHandler = Callable[[BleedJob], ProcessingResult]

# Marks queue closure; each worker consumes exactly one
_CLOSED = object()


class WorkerPool:
    """Runs a handler over jobs with a fixed number of worker threads.

    The producer blocks while the queue is full. Workers block while it is
    empty and exit once they take the closing sentinel. A failing job is
    reported as a FAILED result and never stops the other workers.
    """

    def __init__(self, handler: JobHandler, workers: int = DEFAULT_WORKERS, queue_size: int = DEFAULT_QUEUE_SIZE):
        if workers <= 0:
            raise ValueError(f"workers must be positive, got {workers}")
        if queue_size <= 0:
            raise ValueError(f"queue_size must be positive, got {queue_size}")

        self.handler = handler
        self.workers = workers
        self.queue_size = queue_size

    def _produce(self, jobs: Iterable[BleedJob], jobs_queue: queue.Queue, errors: List[BaseException]) -> None:
        try:
            for job in jobs:
                jobs_queue.put(job)
        except Exception as e:
            LOGGER.error(f"Job producer stopped early: {e}")
            errors.append(e)
        finally:
            for _ in range(self.workers):
                jobs_queue.put(_CLOSED)

    def _handle(self, job: BleedJob) -> ProcessingResult:
        try:
            return self.handler(job)
        except Exception as e:
            LOGGER.exception(f"Failed to process [{job.input_path}]: {e}")
            return ProcessingResult(job=job, status="FAILED", error=str(e))

    def _work(self, jobs_queue: queue.Queue, results: List[ProcessingResult], lock: threading.Lock) -> None:
        while True:
            job = jobs_queue.get()
            try:
                if job is _CLOSED:
                    return
                result = self._handle(job)
                with lock:
                    results.append(result)
            finally:
                jobs_queue.task_done()

    def run(self, jobs: Iterable[BleedJob]) -> List[ProcessingResult]:
        """Process all jobs and block until every worker has exited.

        Returns:
            One ProcessingResult per job, in completion order
        """
        jobs_queue: queue.Queue = queue.Queue(maxsize=self.queue_size)
        results: List[ProcessingResult] = []
        lock = threading.Lock()

        threads = [
            threading.Thread(target=self._work, args=(jobs_queue, results, lock), name=f"bleed-worker-{i}", daemon=True)
            for i in range(self.workers)
        ]
        for thread in threads:
            thread.start()

        producer_errors: List[BaseException] = []
        producer = threading.Thread(
            target=self._produce, args=(jobs, jobs_queue, producer_errors), name="bleed-producer", daemon=True
        )
        producer.start()

        producer.join()
        for thread in threads:
            thread.join()

        # Jobs already queued were drained; surface the producer failure to the caller
        if producer_errors:
            raise producer_errors[0]

        LOGGER.debug(f"Worker pool finished {len(results)} jobs")
        return results
