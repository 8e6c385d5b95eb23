"""
Parsing of the target file ("user salt hash" per line).
"""

from logging import getLogger
from typing import NamedTuple

from password_cracker.exceptions import MalformedTargetEntry
from password_cracker.models.models import TargetEntry
from password_cracker.utils.line_source import Resource, iter_lines

logger = getLogger(__name__)


class TargetFile(NamedTuple):
    entries: list[TargetEntry]
    skipped: list[MalformedTargetEntry]


def parse_target_line(line: str, line_number: int = 0) -> TargetEntry:
    """Parse one target line, raising MalformedTargetEntry unless it has exactly 3 fields."""
    fields = line.split()
    if len(fields) != 3:
        raise MalformedTargetEntry(line_number, line)

    user, salt, expected_hash = fields
    return TargetEntry(user=user, salt=salt, expected_hash=expected_hash)


def load_targets(resource: Resource) -> TargetFile:
    """
    Read and parse every target line.
    Malformed lines are logged and skipped; blank lines are ignored.
    """
    entries: list[TargetEntry] = []
    skipped: list[MalformedTargetEntry] = []

    for line_number, line in enumerate(iter_lines(resource), start=1):
        if not line.strip():
            continue
        try:
            entries.append(parse_target_line(line, line_number))
        except MalformedTargetEntry as e:
            logger.warning(f"Skipping target entry: {e}")
            skipped.append(e)

    logger.info(
        f"Loaded {len(entries)} target entries from {resource} ({len(skipped)} skipped)")
    return TargetFile(entries, skipped)
