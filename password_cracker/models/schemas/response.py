"""Schemas for API responses."""

from typing import List, Optional
from pydantic import BaseModel

from password_cracker.models.models import RunReport, RunStatus


class StartRunResponse(BaseModel):
    """Start run response.

    run_id: The ID of the started run.
    status: The status of the run right after it started.
    """
    run_id: str
    status: RunStatus


class RunStatusResponse(BaseModel):
    """Run status response.

    run_id:           The ID of the run.
    status:           running, completed or timed_out.
    total_workers:    Workers started for the run.
    finished_workers: Workers that have signaled completion so far.
    report:           The final report, once the run is over.
    """
    run_id: str
    status: RunStatus
    total_workers: int
    finished_workers: int
    report: Optional[RunReport] = None


class RunListResponse(BaseModel):
    runs: List[RunStatusResponse]
