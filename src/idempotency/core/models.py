from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Union

from idempotency.core.errors import UnsupportedAlgorithmError

KEY_VERSION = 1
PREFIX_FIELD = "__prefix__"
DATA_FIELD = "__data__"
SCALAR_FIELD = "value"

# Canonical value tree: JSON-shaped, str-keyed maps only.
Value = Union[None, bool, int, float, str, list["Value"], dict[str, "Value"]]


class HashAlgorithm(str, enum.Enum):
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @classmethod
    def from_string(cls, name: str) -> HashAlgorithm:
        """Parse an algorithm name case-insensitively; accepts "sha256" and "sha-256"."""
        key = name.strip().lower()
        if key.startswith("sha-"):
            key = "sha" + key[4:]
        for algorithm in cls:
            if algorithm.value == key:
                return algorithm
        raise UnsupportedAlgorithmError(f"Unsupported hash algorithm: {name}")

    @classmethod
    def coerce(cls, value: HashAlgorithm | str | None) -> HashAlgorithm:
        if value is None:
            return DEFAULT_ALGORITHM
        if isinstance(value, cls):
            return value
        return cls.from_string(value)

    @property
    def digest_size(self) -> int:
        return _DIGEST_SIZES[self]

    @property
    def hex_length(self) -> int:
        return self.digest_size * 2

    def __str__(self) -> str:
        return self.value


_DIGEST_SIZES = {
    HashAlgorithm.MD5: 16,
    HashAlgorithm.SHA1: 20,
    HashAlgorithm.SHA256: 32,
    HashAlgorithm.SHA512: 64,
}

DEFAULT_ALGORITHM = HashAlgorithm.SHA256


class OutputFormat(enum.Enum):
    HEX = "hex"
    BINARY = "binary"
    BASE64 = "base64"
    BASE62 = "base62"
    UUID = "uuid"


class _Unset:
    """Marker for a declared field that was never given a value."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class KeyConfig:
    algorithm: HashAlgorithm = DEFAULT_ALGORITHM
    prefix: str | None = None
    normalizer: Any = None  # Normalizer | Callable[[Any], Any] | None

    def __post_init__(self) -> None:
        object.__setattr__(self, "algorithm", HashAlgorithm.coerce(self.algorithm))

    def with_overrides(
        self,
        algorithm: HashAlgorithm | str | None = None,
        prefix: str | None = None,
        normalizer: Callable[[Any], Any] | None = None,
    ) -> KeyConfig:
        """Return a config where any non-None argument replaces the stored value."""
        return KeyConfig(
            algorithm=HashAlgorithm.coerce(algorithm) if algorithm is not None else self.algorithm,
            prefix=prefix if prefix is not None else self.prefix,
            normalizer=normalizer if normalizer is not None else self.normalizer,
        )
