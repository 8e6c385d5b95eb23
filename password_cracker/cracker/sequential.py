"""
Sequential reference cracker: same hashing, no parallelism.
Used as a baseline for timing and as an oracle for the parallel engine.
"""
from __future__ import annotations
import logging
from pathlib import Path
from time import perf_counter
from typing import Union

from password_cracker.config import DEFAULT_HASH_ALGORITHM
from password_cracker.cracker.cracker_core import hash_of, resolve_algorithm
from password_cracker.models.models import MatchResult
from password_cracker.utils.line_source import load_all
from password_cracker.utils.partition import format_duration
from password_cracker.utils.targets import load_targets

logger = logging.getLogger(__name__)


def crack_sequential(
    candidate_resource: Union[str, Path],
    target_resource: Union[str, Path],
    algorithm: str = DEFAULT_HASH_ALGORITHM,
) -> list[MatchResult]:
    algorithm = resolve_algorithm(algorithm)
    t0 = perf_counter()

    targets = load_targets(target_resource).entries
    candidates = load_all(candidate_resource)

    matches = []
    for target in targets:
        for candidate in candidates:
            if hash_of(algorithm, candidate + target.salt) == target.expected_hash:
                logger.info(f"FOUND Password for user {target.user}: {candidate}")
                matches.append(MatchResult(user=target.user, candidate=candidate))

    logger.info(
        f"Sequential run checked {len(candidates)} candidates in "
        f"{format_duration(perf_counter() - t0)}")
    return matches
