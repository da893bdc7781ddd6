import datetime
import decimal
import enum
import uuid
from typing import Any, Callable

Adapter = Callable[[Any], Any]


def _isoformat(value: datetime.date | datetime.time) -> str:
    return value.isoformat()


DEFAULT_ADAPTERS: list[tuple[type, Adapter]] = [
    (enum.Enum, lambda member: member.value),
    (datetime.datetime, _isoformat),
    (datetime.date, _isoformat),
    (datetime.time, _isoformat),
    (decimal.Decimal, str),
    (uuid.UUID, str),
]


class ExtractorRegistry:
    """Maps concrete types to functions that turn instances into plain data."""

    def __init__(self):
        self._adapters: dict[type, Adapter] = {}

    @classmethod
    def with_defaults(cls) -> "ExtractorRegistry":
        """Create registry with adapters for common stdlib value types."""
        registry = cls()
        for type_, adapter in DEFAULT_ADAPTERS:
            registry.register(type_, adapter)
        return registry

    def register(self, type_: type, adapter: Adapter, replace: bool = False) -> None:
        if not isinstance(type_, type):
            raise TypeError(f"Expected a type, got {type_!r}")
        if type_ in self._adapters and not replace:
            raise ValueError(f"Adapter for '{type_.__qualname__}' already registered")
        self._adapters[type_] = adapter

    def unregister(self, type_: type) -> None:
        if type_ not in self._adapters:
            raise ValueError(f"No adapter registered for '{type_.__qualname__}'")
        del self._adapters[type_]

    def lookup(self, obj: Any) -> Adapter | None:
        """Return the adapter for the closest registered class in the object's MRO."""
        for klass in type(obj).__mro__:
            adapter = self._adapters.get(klass)
            if adapter is not None:
                return adapter
        return None

    def registered_types(self) -> list[type]:
        return list(self._adapters)

    def __contains__(self, type_: type) -> bool:
        return type_ in self._adapters
