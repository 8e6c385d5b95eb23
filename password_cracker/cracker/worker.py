"""
Worker: checks one contiguous slice of the candidate file against every target.
"""

from logging import getLogger
from time import perf_counter

from password_cracker.config import LOG_PROGRESS_INTERVAL
from password_cracker.cracker.cracker_core import hash_of
from password_cracker.exceptions import CrackerError, ResourceError, WorkerIOFailure
from password_cracker.models.models import MatchResult, WorkerAssignment, WorkerReport, WorkerStatus
from password_cracker.utils.line_source import iter_range

logger = getLogger(__name__)


def run_worker(assignment: WorkerAssignment) -> WorkerReport:
    """
    Hash every candidate of the assigned slice with every target's salt.

    Always returns a report: a read or hash failure yields a FAILED report
    holding the matches found before the failure.
    """
    worker_id = assignment.worker_id
    rng = assignment.candidate_range
    matches: list[MatchResult] = []
    checked = 0
    t0 = perf_counter()

    if rng.is_empty:
        logger.info(f"[worker-{worker_id}] - Empty range, nothing to check")
        return WorkerReport(worker_id=worker_id, status=WorkerStatus.SUCCEEDED)

    logger.info(
        f"[worker-{worker_id}] - Checking lines {rng.start} to {rng.end} "
        f"against {len(assignment.targets)} targets")

    status = WorkerStatus.SUCCEEDED
    error = None
    try:
        try:
            for candidate in iter_range(assignment.candidate_resource, rng.start, rng.end):
                checked += 1
                if checked % LOG_PROGRESS_INTERVAL == 0:
                    pct = (checked / rng.size) * 100
                    logger.info(
                        f"[worker-{worker_id}] - Progress: ({pct:.1f}%) {checked}/{rng.size}")

                for target in assignment.targets:
                    if hash_of(assignment.algorithm, candidate + target.salt) == target.expected_hash:
                        logger.info(
                            f"[worker-{worker_id}] - FOUND Password for user {target.user}: {candidate}")
                        matches.append(MatchResult(
                            user=target.user, candidate=candidate))
        except ResourceError as e:
            raise WorkerIOFailure(worker_id, str(e)) from e
    except CrackerError as e:
        logger.warning(
            f"[worker-{worker_id}] - Stopped after {checked} candidates: {e}")
        status = WorkerStatus.FAILED
        error = str(e)

    elapsed = perf_counter() - t0
    logger.info(
        f"[worker-{worker_id}] - Done: {checked} candidates, {len(matches)} matches "
        f"in {elapsed:.3f}s")

    return WorkerReport(
        worker_id=worker_id,
        status=status,
        matches=matches,
        candidates_checked=checked,
        error=error,
        elapsed_seconds=elapsed,
    )
