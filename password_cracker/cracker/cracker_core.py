from __future__ import annotations
import base64
import hashlib
import logging
from functools import lru_cache

from password_cracker.exceptions import UnsupportedAlgorithm

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def resolve_algorithm(name: str) -> str:
    """
    Map an algorithm name ("SHA-512", "sha512", "SHA3-256", "SHA-512/256", "MD5") to the
    hashlib name, raising UnsupportedAlgorithm if this runtime lacks it.
    """
    normalized = name.strip().lower()
    if normalized.startswith("sha3-"):
        normalized = "sha3_" + normalized[len("sha3-"):]
    else:
        normalized = normalized.replace("-", "")
    normalized = normalized.replace("/", "_")

    # shake_* needs a digest length and cannot be compared as a fixed digest
    if normalized.startswith("shake"):
        raise UnsupportedAlgorithm(name)
    if normalized not in hashlib.algorithms_available:
        raise UnsupportedAlgorithm(name)

    try:
        hashlib.new(normalized)
    except ValueError:
        raise UnsupportedAlgorithm(name) from None

    logger.debug(f"resolve_algorithm('{name}') -> {normalized}")
    return normalized

# ---------------------------------------------------------------------------


def hash_of(algorithm: str, text: str) -> str:
    """Base64 of the digest of the UTF-8 bytes of `text`. A fresh digest per call."""
    try:
        digest = hashlib.new(algorithm, text.encode("utf-8"))
    except ValueError:
        raise UnsupportedAlgorithm(algorithm) from None
    return base64.b64encode(digest.digest()).decode("ascii")
