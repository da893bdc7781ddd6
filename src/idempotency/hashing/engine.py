import hashlib

from idempotency.core.models import HashAlgorithm


def digest(algorithm: HashAlgorithm, data: bytes) -> bytes:
    """Hash canonical bytes with the given algorithm."""
    # MD5/SHA-1 are identifiers here, not security primitives.
    return hashlib.new(algorithm.value, data, usedforsecurity=False).digest()
