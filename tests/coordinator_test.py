import threading
import time

import pytest

from password_cracker.cracker import coordinator as coordinator_module
from password_cracker.cracker.coordinator import Coordinator
from password_cracker.cracker.sequential import crack_sequential
from password_cracker.cracker.worker import run_worker
from password_cracker.exceptions import SetupFailure, UnsupportedAlgorithm
from password_cracker.models.models import MatchResult, RunStatus, WorkerReport, WorkerStatus

WORDS = [f"word{i:03d}" for i in range(40)]


def start_run(candidates, targets, workers, **kwargs):
    reports = []
    coordinator = Coordinator(executor=kwargs.pop("executor", "thread"), on_complete=reports.append)
    handle = coordinator.start(candidates, targets, workers, **kwargs)
    return handle, reports


def wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        time.sleep(0.01)


@pytest.mark.parametrize("position", [0, 12, 13, 25, 26, 39])
def test_match_found_whatever_worker_owns_it(write_lines, target_file, position):
    words = list(WORDS)
    words[position] = "secret"
    candidates = write_lines("pw.txt", words)
    targets = target_file([("alice", "secret", "xy")])

    handle, _ = start_run(candidates, targets, 3)
    report = handle.wait(timeout=10)

    assert report.status is RunStatus.COMPLETED
    assert report.matches == [MatchResult(user="alice", candidate="secret")]


def test_no_false_positives(write_lines, target_file):
    candidates = write_lines("pw.txt", WORDS)
    targets = target_file([("alice", "secret", "xy"), ("bob", "hunter2", "ab")])

    handle, _ = start_run(candidates, targets, 4)

    assert handle.wait(timeout=10).matches == []


def test_completion_fires_once_after_all_workers(write_lines, target_file):
    candidates = write_lines("pw.txt", WORDS)
    targets = target_file([("alice", "word007", "xy")])

    handle, reports = start_run(candidates, targets, 16)
    report = handle.wait(timeout=10)

    assert handle.done()
    assert reports == [report]
    assert report.finished_workers == report.total_workers == 16
    assert handle.state.finished_workers == 16
    assert set(handle.state.workers.values()) == {WorkerStatus.SIGNALED}


def test_boundary_candidates_are_not_dropped(write_lines, target_file):
    # every slice boundary of 40 lines / 4 workers holds a password
    words = list(WORDS)
    users = []
    for i in (0, 9, 10, 19, 20, 29, 30, 39):
        words[i] = f"pw{i}"
        users.append((f"user{i}", f"pw{i}", f"salt{i}"))
    candidates = write_lines("pw.txt", words)
    targets = target_file(users)

    handle, _ = start_run(candidates, targets, 4)
    found = {(m.user, m.candidate) for m in handle.wait(timeout=10).matches}

    assert found == {(u, p) for u, p, _ in users}


def test_more_workers_than_candidates(write_lines, target_file):
    candidates = write_lines("pw.txt", ["nope", "secret"])
    targets = target_file([("alice", "secret", "xy")])

    handle, reports = start_run(candidates, targets, 6)
    report = handle.wait(timeout=10)

    assert report.status is RunStatus.COMPLETED
    assert report.finished_workers == 6
    assert report.failed_workers == 0
    assert report.matches == [MatchResult(user="alice", candidate="secret")]
    assert len(reports) == 1


def test_empty_candidate_file(tmp_path, target_file):
    candidates = tmp_path / "pw.txt"
    candidates.write_text("")
    handle, reports = start_run(candidates, target_file([("alice", "secret", "xy")]), 2)

    report = handle.wait(timeout=10)
    assert report.candidates_total == 0
    assert report.matches == []
    assert len(reports) == 1


def test_duplicate_matches_are_reported_once(write_lines, target_file):
    candidates = write_lines("pw.txt", ["secret", "x", "y", "secret"])
    targets = target_file([("alice", "secret", "xy")])

    handle, _ = start_run(candidates, targets, 2)

    assert handle.wait(timeout=10).matches == [MatchResult(user="alice", candidate="secret")]


def test_malformed_target_line_does_not_stop_run(write_lines, target_file, tmp_path):
    good = target_file([("alice", "secret", "xy")]).read_text()
    targets = tmp_path / "mixed.txt"
    targets.write_text(good + "bob onlytwo\n")
    candidates = write_lines("pw.txt", ["secret"])

    handle, _ = start_run(candidates, targets, 1)
    report = handle.wait(timeout=10)

    assert report.skipped_targets == 1
    assert report.matches == [MatchResult(user="alice", candidate="secret")]


def test_parallel_agrees_with_sequential(write_lines, target_file):
    words = list(WORDS)
    words[3], words[17], words[31] = "dragon", "letmein", "dragon"
    candidates = write_lines("pw.txt", words)
    targets = target_file([
        ("alice", "dragon", "a1"),
        ("bob", "letmein", "b2"),
        ("carol", "nothere", "c3"),
    ])

    handle, _ = start_run(candidates, targets, 4)
    parallel = {(m.user, m.candidate) for m in handle.wait(timeout=10).matches}
    sequential = {(m.user, m.candidate) for m in crack_sequential(candidates, targets)}

    assert parallel == sequential == {("alice", "dragon"), ("bob", "letmein")}


def test_process_executor(write_lines, target_file):
    words = list(WORDS)
    words[21] = "secret"
    candidates = write_lines("pw.txt", words)
    targets = target_file([("alice", "secret", "xy")])

    handle, reports = start_run(candidates, targets, 2, executor="process")
    report = handle.wait(timeout=60)

    assert report.matches == [MatchResult(user="alice", candidate="secret")]
    assert len(reports) == 1


def test_crashed_worker_still_counts(write_lines, target_file, monkeypatch):
    def flaky(assignment):
        if assignment.worker_id == 1:
            raise RuntimeError("boom")
        return run_worker(assignment)

    monkeypatch.setattr(coordinator_module, "run_worker", flaky)
    words = list(WORDS)
    words[0] = "secret"
    candidates = write_lines("pw.txt", words)
    targets = target_file([("alice", "secret", "xy")])

    handle, reports = start_run(candidates, targets, 3)
    report = handle.wait(timeout=10)

    assert report.status is RunStatus.COMPLETED
    assert report.failed_workers == 1
    assert report.finished_workers == 3
    assert report.matches == [MatchResult(user="alice", candidate="secret")]
    assert len(reports) == 1


def test_deadline_reports_timeout_and_discards_late_signal(write_lines, target_file, monkeypatch):
    release = threading.Event()

    def slow(assignment):
        if assignment.worker_id == 0:
            release.wait(10)
        return run_worker(assignment)

    monkeypatch.setattr(coordinator_module, "run_worker", slow)
    candidates = write_lines("pw.txt", WORDS)
    targets = target_file([("alice", "word000", "xy")])

    handle, reports = start_run(candidates, targets, 2, deadline=0.2)
    report = handle.wait(timeout=10)

    assert report.status is RunStatus.TIMED_OUT
    assert report.finished_workers == 1
    # the match sits in the straggler's slice
    assert report.matches == []

    release.set()
    wait_until(lambda: handle.snapshot().finished_workers == 2)
    assert handle.state.status is RunStatus.TIMED_OUT
    assert handle.report is report
    assert reports == [report]


def test_setup_failure_missing_candidates(tmp_path, target_file):
    reports = []
    coordinator = Coordinator(executor="thread", on_complete=reports.append)

    with pytest.raises(SetupFailure):
        coordinator.start(tmp_path / "missing.txt", target_file([("a", "b", "c")]), 2)
    assert reports == []


def test_setup_failure_missing_targets(write_lines, tmp_path):
    coordinator = Coordinator(executor="thread")
    with pytest.raises(SetupFailure):
        coordinator.start(write_lines("pw.txt", WORDS), tmp_path / "missing.txt", 2)


@pytest.mark.parametrize("workers", [0, -3])
def test_setup_failure_bad_worker_count(write_lines, target_file, workers):
    coordinator = Coordinator(executor="thread")
    with pytest.raises(SetupFailure):
        coordinator.start(write_lines("pw.txt", WORDS), target_file([("a", "b", "c")]), workers)


def test_unsupported_algorithm_aborts_before_spawn(write_lines, target_file, monkeypatch):
    spawned = []
    monkeypatch.setattr(coordinator_module, "run_worker", spawned.append)
    coordinator = Coordinator(algorithm="SHA-999", executor="thread")

    with pytest.raises(UnsupportedAlgorithm):
        coordinator.start(write_lines("pw.txt", WORDS), target_file([("a", "b", "c")]), 2)
    assert spawned == []


def test_unknown_executor():
    with pytest.raises(ValueError):
        Coordinator(executor="gpu")


def test_callback_error_does_not_hang_run(write_lines, target_file):
    def broken(report):
        raise RuntimeError("callback failed")

    coordinator = Coordinator(executor="thread", on_complete=broken)
    handle = coordinator.start(write_lines("pw.txt", WORDS), target_file([("a", "b", "c")]), 2)

    assert handle.wait(timeout=10) is not None


def test_worker_report_defaults():
    report = WorkerReport(worker_id=0, status=WorkerStatus.SUCCEEDED)
    assert report.matches == []
    assert report.error is None


def test_pool_creation_failure_is_setup_failure(write_lines, target_file, monkeypatch):
    def no_pool(self, worker_count):
        raise OSError("no semaphores")

    monkeypatch.setattr(Coordinator, "_make_executor", no_pool)
    reports = []
    coordinator = Coordinator(executor="thread", on_complete=reports.append)

    with pytest.raises(SetupFailure) as excinfo:
        coordinator.start(write_lines("pw.txt", WORDS), target_file([("a", "b", "c")]), 2, deadline=0.1)

    assert isinstance(excinfo.value.__cause__, OSError)
    # no deadline may fire for a run that never started
    time.sleep(0.4)
    assert reports == []


def test_wait_timeout_returns_none_while_running(write_lines, target_file, monkeypatch):
    release = threading.Event()

    def slow(assignment):
        release.wait(10)
        return run_worker(assignment)

    monkeypatch.setattr(coordinator_module, "run_worker", slow)
    handle, reports = start_run(write_lines("pw.txt", WORDS), target_file([("a", "b", "c")]), 2)

    assert handle.wait(timeout=0.05) is None
    assert not handle.done()

    release.set()
    report = handle.wait(timeout=10)
    assert handle.done()
    assert reports == [report]
