"""Schemas for API requests."""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from password_cracker.config import DEFAULT_EXECUTOR, DEFAULT_HASH_ALGORITHM


class StartRunRequest(BaseModel):
    """Start run request.

    candidate_path: File of clear-text candidates, one per line.
    target_path:    File of "user salt hash" lines.
    worker_count:   Number of parallel workers.
    algorithm:      Hash algorithm name.
    executor:       Run workers in processes or threads.
    deadline:       Seconds after which the run is reported as timed out.
    """
    candidate_path: str
    target_path: str
    worker_count: int = Field(..., ge=1)
    algorithm: str = DEFAULT_HASH_ALGORITHM
    executor: Literal["process", "thread"] = DEFAULT_EXECUTOR
    deadline: Optional[float] = Field(None, gt=0)
