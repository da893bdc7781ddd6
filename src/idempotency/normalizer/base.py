from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol, runtime_checkable


class Normalizer(ABC):
    """Custom preprocessing applied to input before the standard pipeline.

    Typical uses: dropping volatile fields (timestamps, request ids),
    coercing domain objects, masking secrets.
    """

    @abstractmethod
    def normalize(self, data: Any) -> Any:
        ...


@runtime_checkable
class CanonicalSerializable(Protocol):
    def to_canonical_value(self) -> Any:
        """Return the data that identifies this object (map, list, string or scalar)."""
        ...


def apply_normalizer(normalizer: "Normalizer | Callable[[Any], Any] | None", data: Any) -> Any:
    if normalizer is None:
        return data
    if isinstance(normalizer, Normalizer):
        return normalizer.normalize(data)
    if callable(normalizer):
        return normalizer(data)
    raise TypeError(f"Normalizer must be a Normalizer or callable, got {type(normalizer).__name__}")
