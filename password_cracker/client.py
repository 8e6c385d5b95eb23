"""Client helpers for the run server."""

import time
from logging import getLogger
from typing import Optional

import httpx

from password_cracker.config import POLL_INTERVAL, REQUEST_TIMEOUT, SERVER_LOGGER, SERVER_URL
from password_cracker.models.models import RunStatus
from password_cracker.models.schemas.request import StartRunRequest
from password_cracker.models.schemas.response import RunStatusResponse, StartRunResponse

logger = getLogger(SERVER_LOGGER)


def make_client(base_url: str = SERVER_URL) -> httpx.Client:
    return httpx.Client(base_url=base_url, timeout=REQUEST_TIMEOUT)


def submit_run(client: httpx.Client, request: StartRunRequest) -> StartRunResponse:
    """Ask the server to start a run."""
    response = client.post("/runs", json=request.model_dump())
    response.raise_for_status()
    run = StartRunResponse(**response.json())
    logger.info(f"Submitted run {run.run_id}")
    return run


def get_run(client: httpx.Client, run_id: str) -> RunStatusResponse:
    """Fetch the current status of a run."""
    response = client.get(f"/runs/{run_id}")
    response.raise_for_status()
    return RunStatusResponse(**response.json())


def wait_for_run(
    client: httpx.Client,
    run_id: str,
    poll_interval: float = POLL_INTERVAL,
    timeout: Optional[float] = None,
) -> RunStatusResponse:
    """
    Poll a run until it is over.
    Raises TimeoutError if `timeout` seconds pass first.
    """
    started = time.monotonic()
    while True:
        status = get_run(client, run_id)
        if status.status is not RunStatus.RUNNING:
            return status

        logger.debug(
            f"Run {run_id}: {status.finished_workers}/{status.total_workers} workers finished")
        if timeout is not None and time.monotonic() - started > timeout:
            raise TimeoutError(f"Run {run_id} still running after {timeout}s")
        time.sleep(poll_interval)
