"""
Exceptions for the password cracker.

Setup and configuration errors stop a run before any worker starts.
Resource, worker and target-line errors are contained where they happen.
"""


class CrackerError(Exception):
    """Base exception for all password cracker errors."""
    pass


class SetupFailure(CrackerError):
    """Raised when a run cannot be partitioned or started."""
    pass


class UnsupportedAlgorithm(CrackerError):
    """Raised when the runtime does not provide the requested hash algorithm."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"Unsupported hash algorithm: {algorithm}")


class ResourceError(CrackerError):
    """Base class for line source failures."""

    def __init__(self, resource: str, reason: str):
        self.resource = resource
        self.reason = reason
        super().__init__(f"{resource}: {reason}")


class ResourceNotFound(ResourceError):
    """Raised when a resource does not exist."""

    def __init__(self, resource: str):
        super().__init__(resource, "resource not found")


class ResourceReadError(ResourceError):
    """Raised for any I/O or decoding failure while reading a resource."""
    pass


class WorkerIOFailure(CrackerError):
    """Raised inside a worker when its candidate slice cannot be read."""

    def __init__(self, worker_id: int, reason: str):
        self.worker_id = worker_id
        self.reason = reason
        super().__init__(f"Worker {worker_id} failed to read its slice: {reason}")


class MalformedTargetEntry(CrackerError):
    """Raised when a target line does not hold exactly three fields."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"Malformed line {line_number} in target file: {line!r}")
