"""
Run server for the password cracker.

Starts cracking runs on this host and reports their progress over HTTP.
"""

from logging import getLogger
from typing import Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import RedirectResponse

from password_cracker.config import CRACKER_LOGGER, MAX_FINISHED_RUNS, SERVER_LOGGER, parse_args, setup_logger
from password_cracker.cracker.coordinator import Coordinator, RunHandle
from password_cracker.exceptions import ResourceNotFound, SetupFailure, UnsupportedAlgorithm
from password_cracker.models.models import RunStatus
from password_cracker.models.schemas.request import StartRunRequest
from password_cracker.models.schemas.response import RunListResponse, RunStatusResponse, StartRunResponse

logger = getLogger(SERVER_LOGGER)


def run_status(handle: RunHandle) -> RunStatusResponse:
    state = handle.snapshot()
    return RunStatusResponse(
        run_id=state.run_id,
        status=state.status,
        total_workers=state.total_workers,
        finished_workers=state.finished_workers,
        report=handle.report if state.status is not RunStatus.RUNNING else None,
    )


def evict_finished_runs(runs: Dict[str, RunHandle], keep: int) -> None:
    """Drop the oldest finished runs so that at most `keep` of them remain."""
    finished = [run_id for run_id, handle in list(runs.items()) if handle.done()]
    for run_id in finished[:max(0, len(finished) - keep)]:
        del runs[run_id]
        logger.debug(f"Evicted finished run {run_id}")


def create_app(runs: Optional[Dict[str, RunHandle]] = None,
               max_finished_runs: int = MAX_FINISHED_RUNS) -> FastAPI:
    """Build the FastAPI app. `runs` holds the running runs and the latest finished ones."""
    runs = {} if runs is None else runs
    app = FastAPI(title="Password Cracker Run Server")

    @app.get("/")
    async def root() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    @app.post("/runs", response_model=StartRunResponse)
    def start_run(req: StartRunRequest) -> StartRunResponse:
        """Start a cracking run; returns as soon as the workers are submitted."""
        coordinator = Coordinator(algorithm=req.algorithm, executor=req.executor)
        try:
            handle = coordinator.start(
                req.candidate_path, req.target_path, req.worker_count, deadline=req.deadline)
        except UnsupportedAlgorithm as e:
            raise HTTPException(status_code=400, detail=str(e))
        except SetupFailure as e:
            status_code = 404 if isinstance(e.__cause__, ResourceNotFound) else 400
            raise HTTPException(status_code=status_code, detail=str(e))

        evict_finished_runs(runs, max_finished_runs)
        runs[handle.run_id] = handle
        logger.info(f"Run {handle.run_id} started with {req.worker_count} workers")
        return StartRunResponse(run_id=handle.run_id, status=handle.snapshot().status)

    @app.get("/runs", response_model=RunListResponse)
    def list_runs() -> RunListResponse:
        """List all runs started by this server."""
        return RunListResponse(runs=[run_status(h) for h in list(runs.values())])

    @app.get("/runs/{run_id}", response_model=RunStatusResponse)
    def get_run(run_id: str) -> RunStatusResponse:
        """Return the progress of a run, with its report once it is over."""
        handle = runs.get(run_id)
        if handle is None:
            raise HTTPException(status_code=404, detail="Run not found")
        return run_status(handle)

    return app


def main() -> None:
    args = parse_args("Password Cracker Run Server")
    setup_logger(CRACKER_LOGGER, log_level=args.log_level, log_file=args.log_file)
    uvicorn.run(create_app(), host=args.host, port=args.port,
                log_level=args.log_level)


if __name__ == "__main__":
    main()
