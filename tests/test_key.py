import base64
import hashlib
import re

import pytest
from idempotency.core.errors import (
    InvalidArgumentError,
    InvalidHashError,
    InvalidVersionedStringError,
    UnsupportedAlgorithmError,
    UnsupportedVersionError,
)
from idempotency.core.models import HashAlgorithm, OutputFormat
from idempotency.key import IdempotencyKey, equals, from_versioned_string, is_valid, truncate

VERSIONED_RE = re.compile(r"^v\d+:[a-z0-9]+:[a-f0-9]+$")


def make_key(text: bytes = b"payload", algorithm: HashAlgorithm = HashAlgorithm.SHA256, prefix=None):
    return IdempotencyKey(
        digest=hashlib.new(algorithm.value, text).digest(),
        algorithm=algorithm,
        prefix=prefix,
    )


class TestConstruction:
    def test_fields(self):
        key = make_key(prefix="orders")
        assert key.algorithm is HashAlgorithm.SHA256
        assert key.prefix == "orders"
        assert key.version == 1

    def test_immutable(self):
        key = make_key()
        with pytest.raises(AttributeError):
            key.prefix = "other"

    def test_digest_length_checked(self):
        with pytest.raises(InvalidArgumentError, match="32 bytes"):
            IdempotencyKey(digest=b"\x00" * 16, algorithm=HashAlgorithm.SHA256)


class TestEncodings:
    @pytest.mark.parametrize("algorithm", list(HashAlgorithm))
    def test_hex(self, algorithm):
        key = make_key(algorithm=algorithm)
        assert key.hex() == hashlib.new(algorithm.value, b"payload").hexdigest()
        assert len(key.hex()) == algorithm.hex_length
        assert str(key) == key.hex()

    def test_binary_round_trip(self):
        key = make_key()
        assert bytes.fromhex(key.hex()) == key.binary()
        assert len(key.binary()) == 32

    def test_base64(self):
        key = make_key()
        assert base64.b64decode(key.base64()) == key.binary()

    def test_base62_decodes_to_digest(self):
        key = make_key()
        alphabet = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
        number = 0
        for char in key.base62():
            number = number * 62 + alphabet.index(char)
        assert number == int(key.hex(), 16)

    @pytest.mark.parametrize("algorithm", list(HashAlgorithm))
    def test_uuid_shape(self, algorithm):
        key = make_key(algorithm=algorithm)
        uuid = key.uuid()
        assert re.match(r"^[0-9a-f]{8}-[0-9a-f]{4}-5[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", uuid)
        assert uuid[:8] == key.hex()[:8]

    def test_versioned_string(self):
        key = make_key(algorithm=HashAlgorithm.SHA1)
        assert key.to_versioned_string() == f"v1:sha1:{key.hex()}"
        assert VERSIONED_RE.match(key.to_versioned_string())

    @pytest.mark.parametrize(
        "output_format,method",
        [
            (OutputFormat.HEX, "hex"),
            (OutputFormat.BINARY, "binary"),
            (OutputFormat.BASE64, "base64"),
            (OutputFormat.BASE62, "base62"),
            (OutputFormat.UUID, "uuid"),
        ],
    )
    def test_format_dispatch(self, output_format, method):
        key = make_key()
        assert key.format(output_format) == getattr(key, method)()


class TestFromVersionedString:
    def test_round_trip(self):
        key = make_key(prefix="orders")
        parsed = IdempotencyKey.from_versioned_string(key.to_versioned_string())
        assert parsed.hex() == key.hex()
        assert parsed.algorithm is key.algorithm
        assert parsed.prefix is None

    @pytest.mark.parametrize("name", ["SHA256", "sha-256", "Sha-256"])
    def test_algorithm_spellings(self, name):
        key = make_key()
        parsed = from_versioned_string(f"v1:{name}:{key.hex()}")
        assert parsed.algorithm is HashAlgorithm.SHA256

    def test_unsupported_version(self):
        with pytest.raises(UnsupportedVersionError, match="99"):
            from_versioned_string("v99:sha256:" + "a" * 64)

    def test_version_zero(self):
        with pytest.raises(UnsupportedVersionError):
            from_versioned_string("v0:sha256:" + "a" * 64)

    @pytest.mark.parametrize("text", ["sha256:" + "a" * 64, "v1sha256", "", "v1:sha256"])
    def test_wrong_segment_count(self, text):
        with pytest.raises(InvalidVersionedStringError, match="format"):
            from_versioned_string(text)

    def test_missing_v(self):
        with pytest.raises(InvalidVersionedStringError, match='start with "v"'):
            from_versioned_string("1:sha256:" + "a" * 64)

    @pytest.mark.parametrize("tag", ["vx", "vabc", "v1a", "v"])
    def test_non_numeric_version(self, tag):
        with pytest.raises(InvalidVersionedStringError, match="Invalid version tag") as exc_info:
            from_versioned_string(f"{tag}:sha256:" + "a" * 64)
        assert not isinstance(exc_info.value, UnsupportedVersionError)

    def test_unknown_algorithm(self):
        with pytest.raises(UnsupportedAlgorithmError):
            from_versioned_string("v1:sha384:" + "a" * 96)

    @pytest.mark.parametrize(
        "digest",
        ["a" * 63, "a" * 65, "A" * 64, "g" * 64, "a" * 32, "a" * 62 + ":a"],
    )
    def test_invalid_hash(self, digest):
        with pytest.raises(InvalidHashError):
            from_versioned_string(f"v1:sha256:{digest}")

    def test_invalid_hash_is_versioned_string_error(self):
        with pytest.raises(InvalidVersionedStringError):
            from_versioned_string("v1:md5:" + "a" * 64)


class TestIsValid:
    @pytest.mark.parametrize("algorithm", list(HashAlgorithm))
    def test_exact_length(self, algorithm):
        n = algorithm.hex_length
        assert is_valid("a" * n, algorithm)
        assert not is_valid("a" * (n - 1), algorithm)
        assert not is_valid("a" * (n + 1), algorithm)

    def test_default_algorithm_is_sha256(self):
        assert is_valid("0" * 64)
        assert not is_valid("0" * 32)

    def test_uppercase_rejected(self):
        assert not is_valid("A" * 64)

    def test_non_hex_rejected(self):
        assert not is_valid("z" * 64)
        assert not is_valid("a" * 63 + "\n")

    def test_algorithm_name(self):
        assert is_valid("f" * 40, "sha-1")


class TestTruncate:
    def test_prefix_of_hex(self):
        key = make_key()
        assert key.truncate(8) == key.hex()[:8]
        assert truncate(key, 1) == key.hex()[0]

    def test_longer_than_hex_returns_full(self):
        key = make_key()
        assert key.truncate(1000) == key.hex()
        assert len(key.truncate(1000)) == 64

    @pytest.mark.parametrize("length", [0, -1])
    def test_non_positive_rejected(self, length):
        key = make_key()
        with pytest.raises(InvalidArgumentError, match="greater than 0"):
            key.truncate(length)


class TestEquality:
    def test_same_digest(self):
        assert make_key().equals(make_key())
        assert make_key() == make_key()
        assert equals(make_key(), make_key())

    def test_different_digest(self):
        assert not make_key(b"a").equals(make_key(b"b"))
        assert make_key(b"a") != make_key(b"b")

    def test_prefix_ignored(self):
        assert make_key(prefix="x").equals(make_key(prefix="y"))

    def test_raw_hex_string(self):
        key = make_key()
        assert key.equals(key.hex())
        assert not key.equals(key.hex().upper())
        assert not key.equals("ünïcode")

    def test_not_equal_to_other_types(self):
        assert make_key() != object()
        assert not make_key().equals(None)

    def test_hashable(self):
        assert len({make_key(), make_key(), make_key(b"other")}) == 2