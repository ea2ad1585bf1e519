"""A fixed-size pool of threads that run submitted jobs in order of arrival."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable

_log = logging.getLogger(__name__)
_STOP = object()


class WorkerPool:
    """Runs callables on a fixed number of background threads.

    Closing the pool lets every job already submitted finish, then joins the threads.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("worker pool size must be positive")
        self._jobs: queue.SimpleQueue = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False
        self._workers = [
            threading.Thread(target=self._run, name=f"worker-{index}", daemon=True)
            for index in range(size)
        ]
        for worker in self._workers:
            worker.start()

    @property
    def size(self) -> int:
        return len(self._workers)

    def _run(self) -> None:
        while True:
            job = self._jobs.get()
            if job is _STOP:
                return
            try:
                job()
            except Exception:
                _log.exception("worker job failed")

    def execute(self, job: Callable[[], object]) -> None:
        """Queue a callable to run on one of the workers."""
        with self._lock:
            if self._closed:
                raise RuntimeError("worker pool is closed")
            self._jobs.put(job)

    def close(self) -> None:
        """Finish queued jobs and stop all workers."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            for _ in self._workers:
                self._jobs.put(_STOP)
        for worker in self._workers:
            worker.join()

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()