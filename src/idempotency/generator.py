import logging
from typing import Any, Callable

from idempotency.canonical.canonicalizer import Canonicalizer
from idempotency.core.models import DATA_FIELD, PREFIX_FIELD, HashAlgorithm, KeyConfig
from idempotency.hashing.engine import digest
from idempotency.key import IdempotencyKey
from idempotency.normalizer.base import Normalizer, apply_normalizer
from idempotency.normalizer.data_normalizer import DataNormalizer
from idempotency.normalizer.object_extractor import ObjectExtractor
from idempotency.normalizer.registry import ExtractorRegistry
from idempotency.parser.string_parser import StringParser

logger = logging.getLogger(__name__)

NormalizerLike = Normalizer | Callable[[Any], Any] | None


class KeyGenerator:
    """Runs data through normalize -> sort -> canonicalize -> hash."""

    def __init__(
        self,
        config: KeyConfig | None = None,
        registry: ExtractorRegistry | None = None,
    ):
        self.config = config if config is not None else KeyConfig()
        string_parser = StringParser()
        extractor = ObjectExtractor(registry=registry, string_parser=string_parser)
        self._normalizer = DataNormalizer(object_extractor=extractor, string_parser=string_parser)
        self._canonicalizer = Canonicalizer()

    def canonical_bytes(
        self,
        data: Any,
        prefix: str | None = None,
        normalizer: NormalizerLike = None,
    ) -> bytes:
        """Return the exact bytes that get hashed for this data."""
        config = self.config.with_overrides(prefix=prefix, normalizer=normalizer)

        processed = apply_normalizer(config.normalizer, data)
        if config.prefix:
            processed = {PREFIX_FIELD: config.prefix, DATA_FIELD: processed}

        value = self._normalizer.normalize(processed)
        return self._canonicalizer.canonicalize(value)

    def create(
        self,
        data: Any,
        algorithm: HashAlgorithm | str | None = None,
        prefix: str | None = None,
        normalizer: NormalizerLike = None,
    ) -> IdempotencyKey:
        config = self.config.with_overrides(algorithm=algorithm, prefix=prefix, normalizer=normalizer)
        canonical = self.canonical_bytes(data, prefix=config.prefix, normalizer=config.normalizer)
        key = IdempotencyKey(
            digest=digest(config.algorithm, canonical),
            algorithm=config.algorithm,
            prefix=config.prefix or None,
        )
        logger.debug(
            "Created %s key (prefixed=%s, canonical_bytes=%d)",
            config.algorithm.value, key.prefix is not None, len(canonical),
        )
        return key

    def matches(self, key: IdempotencyKey, data: Any, normalizer: NormalizerLike = None) -> bool:
        """Rebuild a key from data with the key's own algorithm and prefix and compare digests."""
        # "" keeps the configured prefix from filling in for an unprefixed key
        rebuilt = self.create(data, algorithm=key.algorithm, prefix=key.prefix or "", normalizer=normalizer)
        return key.equals(rebuilt)


_default_generator = KeyGenerator()


def create(
    data: Any,
    algorithm: HashAlgorithm | str | None = None,
    prefix: str | None = None,
    normalizer: NormalizerLike = None,
) -> IdempotencyKey:
    """Create an idempotency key from arbitrary data (default algorithm: SHA-256)."""
    return _default_generator.create(data, algorithm=algorithm, prefix=prefix, normalizer=normalizer)


def canonicalize(data: Any, prefix: str | None = None, normalizer: NormalizerLike = None) -> bytes:
    return _default_generator.canonical_bytes(data, prefix=prefix, normalizer=normalizer)


def matches(key: IdempotencyKey, data: Any, normalizer: NormalizerLike = None) -> bool:
    return _default_generator.matches(key, data, normalizer=normalizer)
