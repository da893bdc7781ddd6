"""Text encodings of a raw digest."""

from __future__ import annotations

import base64
import binascii
import uuid

from idempotency.core.errors import InvalidArgumentError

BASE62_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def to_hex(digest: bytes) -> str:
    return digest.hex()


def hex_to_binary(text: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentError(f"Not a hex string: {text!r}") from e


def to_base64(digest: bytes) -> str:
    return base64.b64encode(digest).decode("ascii")


def to_base62(digest: bytes) -> str:
    """Big-endian integer value of the digest in base 62; a zero digest is "0"."""
    number = int.from_bytes(digest, "big")
    if number == 0:
        return "0"
    chars = []
    while number > 0:
        number, remainder = divmod(number, 62)
        chars.append(BASE62_ALPHABET[remainder])
    return "".join(reversed(chars))


def to_uuid(digest: bytes) -> str:
    """First 16 digest bytes shaped as a version-5, RFC 4122 variant UUID."""
    if len(digest) < 16:
        raise InvalidArgumentError(f"UUID encoding needs at least 16 bytes, got {len(digest)}")
    return str(uuid.UUID(bytes=digest[:16], version=5))
