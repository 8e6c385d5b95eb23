"""
Models for the password cracker.
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WorkerStatus(str, Enum):
    """Status of a single worker.

    CREATED:    The worker is submitted but not started.
    RUNNING:    The worker is hashing its slice.
    SUCCEEDED:  The worker checked its whole slice.
    FAILED:     The worker stopped early on a read or hash error.
    SIGNALED:   The coordinator has counted the worker's completion.
    """
    CREATED = "created"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SIGNALED = "signaled"


class RunStatus(str, Enum):
    """Status of a cracking run.

    RUNNING:    Workers are still active.
    COMPLETED:  Every worker has signaled completion.
    TIMED_OUT:  The deadline passed before every worker signaled.
    """
    RUNNING = "running"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"


class TargetEntry(BaseModel):
    """One parsed line of the target file.

    user:          The user the hash belongs to.
    salt:          Appended to the candidate before hashing.
    expected_hash: Base64 digest of candidate + salt.
    """
    model_config = ConfigDict(frozen=True)

    user: str
    salt: str
    expected_hash: str


class CandidateRange(BaseModel):
    """Inclusive, 0-based slice of the candidate file.

    An empty range has end == start - 1.
    """
    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=-1)

    @model_validator(mode="after")
    def check_bounds(self) -> "CandidateRange":
        if self.end < self.start - 1:
            raise ValueError("end must be >= start - 1")
        return self

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    @property
    def is_empty(self) -> bool:
        return self.size == 0


class MatchResult(BaseModel):
    """A candidate whose salted hash equals a user's expected hash."""
    model_config = ConfigDict(frozen=True)

    user: str
    candidate: str


class WorkerAssignment(BaseModel):
    """Everything a worker needs; crosses process boundaries by pickling."""
    worker_id: int
    candidate_resource: str
    candidate_range: CandidateRange
    targets: List[TargetEntry]
    algorithm: str


class WorkerReport(BaseModel):
    """What a worker hands back when it is done."""
    worker_id: int
    status: WorkerStatus
    matches: List[MatchResult] = []
    candidates_checked: int = 0
    error: Optional[str] = None
    elapsed_seconds: float = 0.0


class RunState(BaseModel):
    """Completion accounting of a run. Mutated only under the run's lock."""
    run_id: str
    total_workers: int
    finished_workers: int = 0
    started_at: datetime
    workers: Dict[int, WorkerStatus] = {}
    status: RunStatus = RunStatus.RUNNING


class RunReport(BaseModel):
    """Final outcome of a run, produced exactly once."""
    run_id: str
    status: RunStatus
    total_workers: int
    finished_workers: int
    failed_workers: int
    candidates_total: int
    skipped_targets: int
    elapsed_seconds: float
    duration: str
    matches: List[MatchResult]
