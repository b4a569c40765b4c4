# services/queue.py
"""
Job Queue
=========

Bounded worker pool for vocoder jobs.

Jobs run in arrival order on a ThreadPoolExecutor. Each submission returns
a concurrent.futures.Future that resolves to the WAV bytes or fails with
ValidationError, DecodeError or EngineError.

Back-pressure:
- max_pending limits how many submitted jobs may wait for a worker
  (0 means unbounded)
- overflow decides what happens when that limit is reached: "queue" blocks
  the submitter until a slot frees up, "reject" raises QueueFullError

Cancellation is honoured only before a job starts (Future.cancel()). There
is no internal timeout; callers use future.result(timeout=...).

A job drops its input bytes as soon as it is done, failed or cancelled, and
only the most recent `history` finished jobs stay listed in `jobs`.

Usage:
    with JobQueue(workers=2) as queue:
        future = queue.submit(speech_bytes, synth_bytes, width=50)
        wav = future.result(timeout=60)
"""

import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Deque, Dict, List, Optional, Set
from uuid import UUID

from bandvocoder.core import globals as G
from bandvocoder.core.bands import validate_width
from bandvocoder.core.engine import VocoderEngine
from bandvocoder.core.exceptions import QueueFullError, ValidationError
from bandvocoder.core.logger import get_logger
from bandvocoder.models.config import EngineSettings
from bandvocoder.models.job import JobState, VocodeJob

if TYPE_CHECKING:
    from bandvocoder.core.config import Config

logger = get_logger(__name__)

OVERFLOW_POLICIES = ("queue", "reject")
DEFAULT_HISTORY = 100


class JobQueue:
    """
    FIFO vocoder job queue backed by a thread pool.

    Args:
        engine: Engine shared by all workers (it holds no per-job state)
        workers: Number of worker threads
        max_pending: Maximum jobs waiting for a worker (0 = unbounded)
        overflow: "queue" to block submitters, "reject" to raise QueueFullError
        history: Number of finished jobs kept in `jobs`
    """

    def __init__(
        self,
        engine: Optional[VocoderEngine] = None,
        workers: int = 1,
        max_pending: int = 0,
        overflow: str = "queue",
        history: int = DEFAULT_HISTORY,
    ) -> None:
        if workers < 1:
            raise ValidationError(f"workers must be at least 1, got {workers}", field="workers")
        if max_pending < 0:
            raise ValidationError(
                f"max_pending must be >= 0, got {max_pending}", field="max_pending"
            )
        if overflow not in OVERFLOW_POLICIES:
            raise ValidationError(
                f"Unknown overflow policy '{overflow}' (expected one of: {', '.join(OVERFLOW_POLICIES)})",
                field="overflow",
            )
        if history < 0:
            raise ValidationError(f"history must be >= 0, got {history}", field="history")

        self.engine = engine or VocoderEngine()
        self.workers = workers
        self.max_pending = max_pending
        self.overflow = overflow
        self.history = history

        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="bandvocoder")
        self._slots = threading.BoundedSemaphore(max_pending) if max_pending else None
        self._lock = threading.Lock()
        self._holding: Set[UUID] = set()
        self._jobs: Dict[UUID, VocodeJob] = {}
        self._done: Deque[UUID] = deque()

    @classmethod
    def from_config(cls, config: "Config", engine: Optional[VocoderEngine] = None) -> "JobQueue":
        """Build a queue from the [queue] section, and the engine from the rest."""
        queue = config.queue
        if engine is None:
            engine = VocoderEngine(EngineSettings.from_config(config))
        return cls(
            engine=engine,
            workers=int(queue.get("workers", 1)),
            max_pending=int(queue.get("max_pending", 0)),
            overflow=str(queue.get("overflow", "queue")),
            history=int(queue.get("history", DEFAULT_HISTORY)),
        )

    @property
    def jobs(self) -> List[VocodeJob]:
        """Snapshot of unfinished jobs and recently finished ones, oldest first."""
        with self._lock:
            return list(self._jobs.values())

    @property
    def pending_count(self) -> int:
        """Jobs submitted but not yet started."""
        with self._lock:
            return sum(1 for job in self._jobs.values() if job.state is JobState.PENDING)

    def submit(
        self,
        modulator: bytes,
        carrier: bytes,
        width: float = G.DEFAULT_WIDTH,
    ) -> "Future[bytes]":
        """
        Queue a vocoder job.

        Args:
            modulator: Encoded modulator audio
            carrier: Encoded carrier audio
            width: Band width percentage in [0, 100]

        Returns:
            Future resolving to mono 48 kHz WAV bytes

        Raises:
            ValidationError: If width is invalid
            QueueFullError: If the queue is full and overflow is "reject"
        """
        width = validate_width(width)
        self._acquire_slot()

        job = VocodeJob(modulator=modulator, carrier=carrier, width=width)
        with self._lock:
            self._jobs[job.id] = job
            if self._slots is not None:
                self._holding.add(job.id)

        try:
            future = self._executor.submit(self._run, job)
        except RuntimeError:
            self._release_slot(job)
            with self._lock:
                self._jobs.pop(job.id, None)
            raise
        future.add_done_callback(lambda f: self._finished(job, f))
        logger.debug(f"Queued job {job.id} (width {width:g}%)")
        return future

    def _acquire_slot(self) -> None:
        if self._slots is None:
            return
        if self.overflow == "reject":
            if not self._slots.acquire(blocking=False):
                raise QueueFullError(
                    f"Queue is full ({self.max_pending} jobs pending); try again later"
                )
        else:
            self._slots.acquire()

    def _release_slot(self, job: VocodeJob) -> None:
        with self._lock:
            if job.id not in self._holding:
                return
            self._holding.discard(job.id)
        self._slots.release()

    def _run(self, job: VocodeJob) -> bytes:
        self._release_slot(job)
        job.state = JobState.RUNNING
        logger.debug(f"Started job {job.id}")
        try:
            data = self.engine.process(job.modulator, job.carrier, job.width)
        except Exception as e:
            job.state = JobState.FAILED
            job.error = str(e)
            logger.warning(f"Job {job.id} failed: {e}")
            self._retire(job)
            raise
        job.state = JobState.DONE
        self._retire(job)
        return data

    def _finished(self, job: VocodeJob, future: "Future[bytes]") -> None:
        if future.cancelled():
            job.state = JobState.CANCELLED
            self._release_slot(job)
            self._retire(job)
            logger.debug(f"Cancelled job {job.id}")

    def _retire(self, job: VocodeJob) -> None:
        job.modulator = job.carrier = b""
        with self._lock:
            self._done.append(job.id)
            while len(self._done) > self.history:
                self._jobs.pop(self._done.popleft(), None)

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """
        Stop accepting jobs.

        Args:
            wait: Block until running and queued jobs finish
            cancel_pending: Cancel jobs that have not started yet
        """
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)

    def __enter__(self) -> "JobQueue":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)
