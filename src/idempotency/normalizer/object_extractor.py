"""Conversion of arbitrary Python objects into canonical values.

Strategy, in priority order:

1. An adapter registered for the object's type (or a base class).
2. A ``to_canonical_value()`` hook on the object.
3. A ``__str__`` override on the object's class; the string is run
   through the string parser.
4. Field introspection: dataclass fields, ``__slots__`` and instance
   attributes. Fields never assigned (or holding ``UNSET``) are omitted,
   fields assigned ``None`` are kept.

Top-level extraction must yield a map or list. Objects nested inside a
container are embedded as plain values instead (strings are not parsed).
"""

from __future__ import annotations

import dataclasses
import io
import socket
import types
from typing import Any

from idempotency.core.errors import UnsupportedTypeError
from idempotency.core.models import SCALAR_FIELD, UNSET, Value
from idempotency.core.value import is_container, to_value
from idempotency.normalizer.registry import ExtractorRegistry
from idempotency.parser.string_parser import StringParser

_RESOURCE_TYPES = (
    io.IOBase,
    socket.socket,
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.GeneratorType,
    types.AsyncGeneratorType,
    types.CoroutineType,
)


def ensure_supported(obj: Any) -> None:
    if isinstance(obj, _RESOURCE_TYPES):
        raise UnsupportedTypeError(type(obj).__name__)


def has_canonical_hook(obj: Any) -> bool:
    return callable(getattr(obj, "to_canonical_value", None))


def overrides_str(obj: Any) -> bool:
    return type(obj).__str__ is not object.__str__


def _field_names(obj: Any) -> list[str]:
    names: list[str] = []
    if dataclasses.is_dataclass(obj):
        names.extend(f.name for f in dataclasses.fields(obj))
    for klass in reversed(type(obj).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    names.extend(getattr(obj, "__dict__", {}))
    return list(dict.fromkeys(names))


class ObjectExtractor:
    def __init__(
        self,
        registry: ExtractorRegistry | None = None,
        string_parser: StringParser | None = None,
    ):
        self._registry = registry if registry is not None else ExtractorRegistry.with_defaults()
        self._string_parser = string_parser if string_parser is not None else StringParser()

    def extract(self, obj: Any) -> Value:
        """Convert a top-level object into a map or list."""
        ensure_supported(obj)

        adapter = self._registry.lookup(obj)
        if adapter is not None:
            return self._shape(adapter(obj))

        if has_canonical_hook(obj):
            return self._shape(obj.to_canonical_value())

        if overrides_str(obj):
            return self._string_parser.parse(str(obj))

        return self.fields(obj)

    def to_nested_value(self, obj: Any) -> Value:
        """Convert an object found inside a container into a plain value."""
        ensure_supported(obj)

        adapter = self._registry.lookup(obj)
        if adapter is not None:
            return to_value(adapter(obj), self.to_nested_value)

        if has_canonical_hook(obj):
            return to_value(obj.to_canonical_value(), self.to_nested_value)

        if overrides_str(obj):
            return str(obj)

        return self.fields(obj)

    def fields(self, obj: Any) -> dict[str, Value]:
        """Collect assigned instance fields in declaration order."""
        data: dict[str, Value] = {}
        for name in _field_names(obj):
            try:
                value = getattr(obj, name)
            except AttributeError:
                continue
            if value is UNSET:
                continue
            data[name] = to_value(value, self.to_nested_value)
        return data

    def _shape(self, result: Any) -> Value:
        value = to_value(result, self.to_nested_value)
        if is_container(value):
            return value
        if isinstance(value, str):
            return self._string_parser.parse(value)
        return {SCALAR_FIELD: value}
