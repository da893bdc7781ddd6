import logging

from idempotency.core.models import SCALAR_FIELD, Value
from idempotency.parser.formats import DEFAULT_PARSERS, Parser, first_success

logger = logging.getLogger(__name__)


class StringParser:
    def __init__(self, parsers: tuple[Parser, ...] | list[Parser] = DEFAULT_PARSERS):
        self._parsers = tuple(parsers)

    def parse(self, text: str) -> Value:
        """
        Detect the format of a string and parse it into a container value.

        Detection chain (first match wins):
        1. JSON:  trimmed text starts with { or [
        2. XML:   trimmed text starts with <
        3. YAML:  trimmed text contains : and a line break
        4. Plain: {"value": <original untrimmed text>}

        Whitespace is trimmed only for detection and parsing. A document
        that parses to a scalar counts as a miss for that format.
        """
        trimmed = text.strip()
        parsed = first_success(self._parsers, trimmed)
        if parsed is not None:
            return parsed
        logger.debug("No structured format detected; wrapping %d chars as plain text", len(text))
        return {SCALAR_FIELD: text}
