"""
Coordinator: partitions the candidate file, fans the slices out to workers
and aggregates their reports once every worker has signaled completion.
"""

import threading
import uuid
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from datetime import datetime
from functools import partial
from logging import getLogger
from pathlib import Path
from time import perf_counter
from typing import Callable, Optional, Union

from password_cracker.config import DEFAULT_EXECUTOR, DEFAULT_HASH_ALGORITHM, EXECUTORS, MAX_POOL_SIZE
from password_cracker.cracker.cracker_core import resolve_algorithm
from password_cracker.cracker.worker import run_worker
from password_cracker.exceptions import ResourceError, SetupFailure
from password_cracker.models.models import (
    MatchResult,
    RunReport,
    RunState,
    RunStatus,
    WorkerAssignment,
    WorkerReport,
    WorkerStatus,
)
from password_cracker.utils.line_source import count_lines
from password_cracker.utils.partition import format_duration, split_candidates
from password_cracker.utils.targets import load_targets

logger = getLogger(__name__)

CompletionCallback = Callable[[RunReport], None]


def _unique(matches: list[MatchResult]) -> list[MatchResult]:
    seen = set()
    unique = []
    for match in matches:
        key = (match.user, match.candidate)
        if key not in seen:
            seen.add(key)
            unique.append(match)
    return unique


class RunHandle:
    """
    Handle on a started run. The run state is only touched under `_lock`;
    the report is built once, by whichever of the last worker signal or the
    deadline gets there first.
    """

    def __init__(self, state: RunState, candidates_total: int, skipped_targets: int):
        self.state = state
        self.candidates_total = candidates_total
        self.skipped_targets = skipped_targets
        self.report: Optional[RunReport] = None

        self._lock = threading.Lock()
        self._done = threading.Event()
        self._matches: list[MatchResult] = []
        self._failed = 0
        self._timer: Optional[threading.Timer] = None
        self._t0 = perf_counter()

    @property
    def run_id(self) -> str:
        return self.state.run_id

    def done(self) -> bool:
        """True once the completion notification has fired."""
        return self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> Optional[RunReport]:
        """Block until the run is aggregated; None if `timeout` passes first."""
        return self.report if self._done.wait(timeout) else None

    def snapshot(self) -> RunState:
        with self._lock:
            return self.state.model_copy(deep=True)

    def _mark_running(self, worker_id: int) -> None:
        with self._lock:
            self.state.workers[worker_id] = WorkerStatus.RUNNING

    def _record_worker(self, report: WorkerReport) -> Optional[RunReport]:
        """Count one worker completion; returns the run report when it was the last one."""
        with self._lock:
            self.state.finished_workers += 1
            self.state.workers[report.worker_id] = WorkerStatus.SIGNALED

            if self.state.status is not RunStatus.RUNNING:
                logger.info(
                    f"[{self.run_id}] - Discarding late signal from worker {report.worker_id}")
                return None

            if report.status is WorkerStatus.FAILED:
                self._failed += 1
            self._matches.extend(report.matches)

            logger.info(
                f"[{self.run_id}] - Worker finished: "
                f"{self.state.finished_workers}/{self.state.total_workers}")

            if self.state.finished_workers < self.state.total_workers:
                return None
            return self._aggregate(RunStatus.COMPLETED)

    def _expire(self) -> Optional[RunReport]:
        with self._lock:
            if self.state.status is not RunStatus.RUNNING:
                return None
            logger.warning(
                f"[{self.run_id}] - Deadline reached with "
                f"{self.state.finished_workers}/{self.state.total_workers} workers finished")
            return self._aggregate(RunStatus.TIMED_OUT)

    def _aggregate(self, status: RunStatus) -> RunReport:
        # caller holds self._lock
        elapsed = perf_counter() - self._t0
        self.state.status = status
        if self._timer is not None:
            self._timer.cancel()

        self.report = RunReport(
            run_id=self.run_id,
            status=status,
            total_workers=self.state.total_workers,
            finished_workers=self.state.finished_workers,
            failed_workers=self._failed,
            candidates_total=self.candidates_total,
            skipped_targets=self.skipped_targets,
            elapsed_seconds=elapsed,
            duration=format_duration(elapsed),
            matches=_unique(self._matches),
        )
        return self.report


class Coordinator:
    """
    Starts cracking runs.

    Each run counts the candidate lines, parses the targets once, splits the
    candidates into `worker_count` slices and submits one worker per slice.
    `on_complete` is called exactly once per run with the RunReport.
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_HASH_ALGORITHM,
        executor: str = DEFAULT_EXECUTOR,
        on_complete: Optional[CompletionCallback] = None,
    ):
        if executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}")
        self.algorithm = algorithm
        self.executor = executor
        self.on_complete = on_complete

    def _make_executor(self, worker_count: int) -> Executor:
        max_workers = min(worker_count, MAX_POOL_SIZE)
        if self.executor == "thread":
            return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="cracker")
        return ProcessPoolExecutor(max_workers=max_workers)

    def start(
        self,
        candidate_resource: Union[str, Path],
        target_resource: Union[str, Path],
        worker_count: int,
        deadline: Optional[float] = None,
    ) -> RunHandle:
        """
        Start a run and return at once.

        Raises:
            SetupFailure: bad worker count, an unreadable candidate/target file,
                or a worker pool that cannot be created
            UnsupportedAlgorithm: the hash algorithm is not available
        """
        if worker_count < 1:
            raise SetupFailure(
                f"worker_count must be >= 1, got {worker_count}")
        if deadline is not None and deadline <= 0:
            raise SetupFailure(f"deadline must be > 0, got {deadline}")

        algorithm = resolve_algorithm(self.algorithm)

        try:
            total = count_lines(candidate_resource)
            targets = load_targets(target_resource)
        except ResourceError as e:
            logger.error(f"Cannot set up run: {e}")
            raise SetupFailure(f"Cannot set up run: {e}") from e

        ranges = split_candidates(total, worker_count)

        state = RunState(
            run_id=str(uuid.uuid4()),
            total_workers=worker_count,
            started_at=datetime.now(),
            workers={i: WorkerStatus.CREATED for i in range(worker_count)},
        )
        handle = RunHandle(state, total, len(targets.skipped))
        logger.info(
            f"[{handle.run_id}] - Starting run: {total} candidates, "
            f"{len(targets.entries)} targets, {worker_count} workers, {algorithm}")

        try:
            pool = self._make_executor(worker_count)
        except (OSError, NotImplementedError, ValueError) as e:
            logger.error(f"[{handle.run_id}] - Cannot create worker pool: {e}")
            raise SetupFailure(f"Cannot create worker pool: {e}") from e

        if deadline is not None:
            handle._timer = threading.Timer(
                deadline, self._on_deadline, args=(handle,))
            handle._timer.daemon = True
            handle._timer.start()

        for worker_id, rng in enumerate(ranges):
            assignment = WorkerAssignment(
                worker_id=worker_id,
                candidate_resource=str(candidate_resource),
                candidate_range=rng,
                targets=targets.entries,
                algorithm=algorithm,
            )
            handle._mark_running(worker_id)
            try:
                future = pool.submit(run_worker, assignment)
            except RuntimeError as e:
                logger.error(f"[{handle.run_id}] - Could not start worker {worker_id}: {e}")
                self._on_worker_report(handle, WorkerReport(
                    worker_id=worker_id, status=WorkerStatus.FAILED, error=str(e)))
                continue
            future.add_done_callback(
                partial(self._on_future_done, handle, worker_id))

        # Submitted work keeps running; the pool winds down once it is drained
        pool.shutdown(wait=False)
        return handle

    def _on_future_done(self, handle: RunHandle, worker_id: int, future: Future) -> None:
        try:
            report = future.result()
        except Exception as e:
            logger.error(f"[{handle.run_id}] - Worker {worker_id} crashed", exc_info=e)
            report = WorkerReport(
                worker_id=worker_id, status=WorkerStatus.FAILED, error=str(e))
        self._on_worker_report(handle, report)

    def _on_worker_report(self, handle: RunHandle, report: WorkerReport) -> None:
        run_report = handle._record_worker(report)
        if run_report is not None:
            self._complete(handle, run_report)

    def _on_deadline(self, handle: RunHandle) -> None:
        run_report = handle._expire()
        if run_report is not None:
            self._complete(handle, run_report)

    def _complete(self, handle: RunHandle, report: RunReport) -> None:
        logger.info(
            f"[{handle.run_id}] - Run {report.status.value}: {len(report.matches)} matches, "
            f"total duration {report.duration}")
        try:
            if self.on_complete is not None:
                self.on_complete(report)
        except Exception as e:
            logger.error(f"[{handle.run_id}] - Completion callback failed", exc_info=e)
        finally:
            handle._done.set()
