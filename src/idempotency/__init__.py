"""Deterministic, content-derived idempotency keys for semi-structured data."""

from idempotency.core.errors import (
    CanonicalizationError,
    IdempotencyError,
    InvalidArgumentError,
    InvalidHashError,
    InvalidVersionedStringError,
    UnsupportedAlgorithmError,
    UnsupportedTypeError,
    UnsupportedVersionError,
)
from idempotency.core.models import (
    DEFAULT_ALGORITHM,
    KEY_VERSION,
    UNSET,
    HashAlgorithm,
    KeyConfig,
    OutputFormat,
)
from idempotency.generator import KeyGenerator, canonicalize, create, matches
from idempotency.hashing.encoders import hex_to_binary
from idempotency.key import IdempotencyKey, equals, from_versioned_string, is_valid, truncate
from idempotency.normalizer.base import CanonicalSerializable, Normalizer
from idempotency.normalizer.registry import ExtractorRegistry

__all__ = [
    "CanonicalSerializable",
    "CanonicalizationError",
    "DEFAULT_ALGORITHM",
    "ExtractorRegistry",
    "HashAlgorithm",
    "IdempotencyError",
    "IdempotencyKey",
    "InvalidArgumentError",
    "InvalidHashError",
    "InvalidVersionedStringError",
    "KEY_VERSION",
    "KeyConfig",
    "KeyGenerator",
    "Normalizer",
    "OutputFormat",
    "UNSET",
    "UnsupportedAlgorithmError",
    "UnsupportedTypeError",
    "UnsupportedVersionError",
    "canonicalize",
    "create",
    "equals",
    "from_versioned_string",
    "hex_to_binary",
    "is_valid",
    "matches",
    "truncate",
]
__version__ = "0.1.0"
