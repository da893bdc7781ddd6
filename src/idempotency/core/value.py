"""Helpers for the canonical value tree.

Map keys are always strings. Native keys are folded to their decimal
string form before insertion, and a map whose keys are exactly
``"0" .. "n-1"`` is re-expressed as a list once the tree is built.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from idempotency.core.errors import UnsupportedTypeError
from idempotency.core.models import Value


def stringify_key(key: Any) -> str:
    """Return the canonical string form of a native map key."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "1" if key else "0"
    if isinstance(key, int):
        return str(key)
    if isinstance(key, float) and key.is_integer():
        return str(int(key))
    if key is None:
        return ""
    raise UnsupportedTypeError(type(key).__name__, "map keys must be strings or integers")


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _is_indexed(mapping: dict[str, Value]) -> bool:
    return set(mapping) == {str(i) for i in range(len(mapping))}


def collapse_indexed_maps(value: Value) -> Value:
    """Turn every map keyed exactly "0".."n-1" into a list, depth first.

    The empty map is the n=0 case and collapses to the empty list.
    """
    if isinstance(value, list):
        return [collapse_indexed_maps(item) for item in value]
    if isinstance(value, dict):
        collapsed = {k: collapse_indexed_maps(v) for k, v in value.items()}
        if _is_indexed(collapsed):
            return [collapsed[str(i)] for i in range(len(collapsed))]
        return collapsed
    return value


def _decode(raw: bytes | bytearray) -> str:
    try:
        return bytes(raw).decode("utf-8")
    except UnicodeDecodeError as e:
        raise UnsupportedTypeError(type(raw).__name__, "not valid UTF-8") from e


def to_value(raw: Any, convert_object: Callable[[Any], Value] | None = None) -> Value:
    """Build a fresh value tree from native data.

    Scalars pass through, mappings get string keys (last write wins on
    collisions), and lists and tuples become lists. Anything else is
    handed to ``convert_object``; without one it is unsupported.
    """
    if raw is None or isinstance(raw, bool):
        return raw
    # Subclasses (IntEnum, StrEnum, ...) collapse to their plain builtin.
    if isinstance(raw, int):
        return int(raw)
    if isinstance(raw, float):
        return float(raw)
    if isinstance(raw, str):
        return str.__str__(raw)
    if isinstance(raw, (bytes, bytearray)):
        return _decode(raw)
    if isinstance(raw, Mapping):
        result: dict[str, Value] = {}
        for key, item in raw.items():
            result[stringify_key(key)] = to_value(item, convert_object)
        return result
    if isinstance(raw, (list, tuple)):
        return [to_value(item, convert_object) for item in raw]
    if isinstance(raw, (set, frozenset, complex)):
        raise UnsupportedTypeError(type(raw).__name__)
    if convert_object is None:
        raise UnsupportedTypeError(type(raw).__name__)
    return convert_object(raw)
