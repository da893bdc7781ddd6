from idempotency.core.models import Value


class RecursiveSorter:
    def sort(self, value: Value) -> Value:
        """Recursively order map entries by key. Lists keep their order but their contents are sorted.

        Keys compare by code point, which matches byte-wise UTF-8 order
        (uppercase before lowercase).
        """
        if isinstance(value, dict):
            return {key: self.sort(value[key]) for key in sorted(value)}
        elif isinstance(value, list):
            return [self.sort(item) for item in value]
        return value
