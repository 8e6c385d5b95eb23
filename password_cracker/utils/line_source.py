"""
Line source: reads ordered text lines from a file, whole or by range.
"""

from contextlib import contextmanager
from itertools import islice
from logging import getLogger
from pathlib import Path
from typing import Generator, Iterator, TextIO, Union

from password_cracker.exceptions import ResourceNotFound, ResourceReadError

logger = getLogger(__name__)

Resource = Union[str, Path]


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


@contextmanager
def _open(resource: Resource) -> Iterator[TextIO]:
    """Open a resource for reading, translating OS errors."""
    try:
        f = open(resource, 'r', encoding='utf-8')
    except FileNotFoundError:
        raise ResourceNotFound(str(resource)) from None
    except OSError as e:
        raise ResourceReadError(str(resource), str(e)) from e

    try:
        with f:
            yield f
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceReadError(str(resource), str(e)) from e


def iter_lines(resource: Resource) -> Generator[str, None, None]:
    """Yield every line of the resource without its line terminator."""
    with _open(resource) as f:
        for line in f:
            yield _strip_newline(line)


def iter_range(resource: Resource, start: int, end: int) -> Generator[str, None, None]:
    """
    Yield lines start..end (0-based, end inclusive) of the resource.
    Reading stops after `end`, so only the needed prefix of the file is read.
    """
    if start < 0:
        raise ValueError("start must be >= 0")
    if start > end:
        return

    with _open(resource) as f:
        for line in islice(f, start, end + 1):
            yield _strip_newline(line)


def load_all(resource: Resource) -> list[str]:
    """Load every line of the resource."""
    return list(iter_lines(resource))


def load_range(resource: Resource, start: int, end: int) -> list[str]:
    """Load lines start..end inclusive; equals load_all(resource)[start:end + 1]."""
    return list(iter_range(resource, start, end))


def count_lines(resource: Resource) -> int:
    """Count the lines of the resource without keeping them."""
    with _open(resource) as f:
        total = sum(1 for _ in f)
    logger.debug(f"{resource} holds {total} lines")
    return total
