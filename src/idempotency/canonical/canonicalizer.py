import json
import math

from idempotency.canonical.sorter import RecursiveSorter
from idempotency.core.errors import CanonicalizationError
from idempotency.core.models import Value


def _fold_numbers(value: Value) -> Value:
    """Emit integral floats in integer form so 42.0 and 42 encode alike."""
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationError(f"Cannot canonicalize non-finite number: {value!r}")
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, dict):
        return {k: _fold_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_fold_numbers(item) for item in value]
    return value


class Canonicalizer:
    def __init__(self, sorter: RecursiveSorter | None = None):
        self._sorter = sorter if sorter is not None else RecursiveSorter()

    def canonicalize(self, value: Value) -> bytes:
        """Serialize a map- or list-shaped value to compact JSON bytes with ordered keys.

        Unicode is written as literal UTF-8 and slashes are not escaped.
        """
        if not isinstance(value, (dict, list)):
            raise CanonicalizationError(
                f"Top-level value must be a map or list, got {type(value).__name__}"
            )
        sorted_value = self._sorter.sort(_fold_numbers(value))
        text = json.dumps(sorted_value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        try:
            return text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise CanonicalizationError(f"Value contains text that is not valid UTF-8: {e}") from e
