from collections.abc import Mapping
from typing import Any

from idempotency.core.errors import UnsupportedTypeError
from idempotency.core.models import SCALAR_FIELD, Value
from idempotency.core.value import collapse_indexed_maps, to_value
from idempotency.normalizer.object_extractor import ObjectExtractor
from idempotency.parser.string_parser import StringParser


class DataNormalizer:
    def __init__(
        self,
        object_extractor: ObjectExtractor | None = None,
        string_parser: StringParser | None = None,
    ):
        self._string_parser = string_parser if string_parser is not None else StringParser()
        self._object_extractor = (
            object_extractor
            if object_extractor is not None
            else ObjectExtractor(string_parser=self._string_parser)
        )

    def normalize(self, data: Any) -> Value:
        """
        Convert any accepted input into a map- or list-shaped value tree.

        Dispatch:
        - mappings        -> map (keys stringified, last write wins)
        - lists / tuples  -> list
        - strings / bytes -> string parser (JSON, XML, YAML or plain text)
        - None/bool/int/float -> {"value": data}
        - other objects   -> object extractor

        Indexed maps ("0".."n-1") are collapsed into lists once, at the end.
        """
        return collapse_indexed_maps(self._dispatch(data))

    def _dispatch(self, data: Any) -> Value:
        if isinstance(data, Mapping) or isinstance(data, (list, tuple)):
            return self._to_value(data)

        if isinstance(data, (str, bytes, bytearray)):
            return self._string_parser.parse(to_value(data))

        if data is None or isinstance(data, (bool, int, float)):
            return {SCALAR_FIELD: to_value(data)}

        if isinstance(data, (set, frozenset, complex)):
            raise UnsupportedTypeError(type(data).__name__)

        return self._object_extractor.extract(data)

    def _to_value(self, data: Any) -> Value:
        return to_value(data, self._object_extractor.to_nested_value)
