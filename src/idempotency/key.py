"""Immutable idempotency key and its encodings."""

from __future__ import annotations

import hmac
import re
from dataclasses import dataclass
from typing import Any

from idempotency.core.errors import (
    InvalidArgumentError,
    InvalidHashError,
    InvalidVersionedStringError,
    UnsupportedVersionError,
)
from idempotency.core.models import KEY_VERSION, HashAlgorithm, OutputFormat
from idempotency.hashing import encoders

_HEX_RE = re.compile(r"[0-9a-f]+")
_VERSION_RE = re.compile(r"v(\d+)", re.ASCII)


def is_valid(text: str, algorithm: HashAlgorithm | str | None = None) -> bool:
    """True iff text is lowercase hex of exactly the algorithm's digest length."""
    algorithm = HashAlgorithm.coerce(algorithm)
    if not isinstance(text, str) or len(text) != algorithm.hex_length:
        return False
    return _HEX_RE.fullmatch(text) is not None


@dataclass(frozen=True, eq=False)
class IdempotencyKey:
    digest: bytes
    algorithm: HashAlgorithm
    prefix: str | None = None

    def __post_init__(self) -> None:
        if len(self.digest) != self.algorithm.digest_size:
            raise InvalidArgumentError(
                f"{self.algorithm.value} digest must be {self.algorithm.digest_size} bytes, "
                f"got {len(self.digest)}"
            )

    @staticmethod
    def create(
        data: Any,
        algorithm: HashAlgorithm | str | None = None,
        prefix: str | None = None,
        normalizer: Any = None,
    ) -> IdempotencyKey:
        # generator imports this module, so the import is deferred to call time
        from idempotency.generator import create

        return create(data, algorithm=algorithm, prefix=prefix, normalizer=normalizer)

    @classmethod
    def from_versioned_string(cls, versioned: str) -> IdempotencyKey:
        """Parse "v{version}:{algorithm}:{hex}". The result carries no prefix.

        A version tag whose suffix is not a decimal number (e.g. "vabc") is
        rejected as malformed with InvalidVersionedStringError rather than
        read as version 0 and reported as unsupported.
        """
        parts = versioned.split(":", 2)
        if len(parts) != 3:
            raise InvalidVersionedStringError("Invalid versioned key format")

        version_tag, algorithm_name, hex_digest = parts
        if not version_tag.startswith("v"):
            raise InvalidVersionedStringError('Version must start with "v"')
        match = _VERSION_RE.fullmatch(version_tag)
        if match is None:
            raise InvalidVersionedStringError(f"Invalid version tag: {version_tag!r}")
        version = int(match.group(1))
        if version != KEY_VERSION:
            raise UnsupportedVersionError(f"Unsupported version: {version}")

        algorithm = HashAlgorithm.from_string(algorithm_name)
        if not is_valid(hex_digest, algorithm):
            raise InvalidHashError("Invalid hash in versioned string")

        return cls(digest=bytes.fromhex(hex_digest), algorithm=algorithm, prefix=None)

    @property
    def version(self) -> int:
        return KEY_VERSION

    def hex(self) -> str:
        return encoders.to_hex(self.digest)

    def binary(self) -> bytes:
        return self.digest

    def base64(self) -> str:
        return encoders.to_base64(self.digest)

    def base62(self) -> str:
        return encoders.to_base62(self.digest)

    def uuid(self) -> str:
        return encoders.to_uuid(self.digest)

    def to_versioned_string(self) -> str:
        return f"v{KEY_VERSION}:{self.algorithm.value}:{self.hex()}"

    def format(self, output_format: OutputFormat) -> str | bytes:
        if output_format is OutputFormat.HEX:
            return self.hex()
        elif output_format is OutputFormat.BINARY:
            return self.binary()
        elif output_format is OutputFormat.BASE64:
            return self.base64()
        elif output_format is OutputFormat.BASE62:
            return self.base62()
        elif output_format is OutputFormat.UUID:
            return self.uuid()
        else:
            raise ValueError(f"Unknown output format: {output_format}")

    def truncate(self, length: int) -> str:
        """First `length` hex characters; the full hex if length exceeds it."""
        if length <= 0:
            raise InvalidArgumentError("Truncate length must be greater than 0")
        return self.hex()[:length]

    def equals(self, other: IdempotencyKey | str) -> bool:
        """Compare hex digests only; algorithm and prefix are not part of equality."""
        other_hex = other.hex() if isinstance(other, IdempotencyKey) else other
        if not isinstance(other_hex, str):
            return False
        return hmac.compare_digest(self.hex().encode("ascii"), other_hex.encode("utf-8"))

    def matches(self, data: Any, normalizer: Any = None) -> bool:
        """Rebuild a key from data with this key's algorithm and prefix and compare."""
        from idempotency.generator import create

        return self.equals(create(data, algorithm=self.algorithm, prefix=self.prefix, normalizer=normalizer))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IdempotencyKey):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.digest)

    def __str__(self) -> str:
        return self.hex()


def truncate(key: IdempotencyKey, length: int) -> str:
    return key.truncate(length)


def equals(a: IdempotencyKey, b: IdempotencyKey | str) -> bool:
    return a.equals(b)


def from_versioned_string(versioned: str) -> IdempotencyKey:
    return IdempotencyKey.from_versioned_string(versioned)
