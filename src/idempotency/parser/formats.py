"""Per-format parse attempts for structured strings.

Each ``try_parse_*`` function is pure: it returns a container value
(map or list) when the text is that format, or ``None`` when it is not.
Expected "not this format" outcomes never raise.
"""

from __future__ import annotations

import json
import logging
from typing import Callable
from xml.etree import ElementTree as ET

import yaml

from idempotency.core.errors import IdempotencyError
from idempotency.core.models import Value
from idempotency.core.value import is_container, to_value

logger = logging.getLogger(__name__)

XML_ATTRIBUTES = "@attributes"
XML_TEXT = "#text"

Parser = Callable[[str], "Value | None"]


class _StringTimestampLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as the strings they were written as."""
    pass


_StringTimestampLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str
)


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _as_container(parsed: object) -> Value | None:
    if not isinstance(parsed, (dict, list)):
        return None
    try:
        value = to_value(parsed)
    except IdempotencyError as e:
        logger.debug("Parsed document holds unsupported data: %s", e)
        return None
    except RecursionError:
        logger.debug("Parsed document is self-referencing")
        return None
    return value if is_container(value) else None


def try_parse_json(text: str) -> Value | None:
    """Strict JSON: only objects and arrays count, NaN/Infinity literals are rejected."""
    if not text.startswith(("{", "[")):
        return None
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.debug("Not JSON: %s", e)
        return None
    return _as_container(parsed)


def _element_to_value(element: ET.Element) -> Value:
    children = list(element)
    text = (element.text or "").strip()

    if not children and not element.attrib:
        return text

    content: dict[str, Value] = {}
    if element.attrib:
        content[XML_ATTRIBUTES] = dict(element.attrib)

    grouped: dict[str, list[Value]] = {}
    for child in children:
        grouped.setdefault(child.tag, []).append(_element_to_value(child))
    for tag, values in grouped.items():
        content[tag] = values if len(values) > 1 else values[0]

    if text:
        content[XML_TEXT] = text
    return content


def try_parse_xml(text: str) -> Value | None:
    """Parse an XML document into ``{root_tag: content}``."""
    if not text.startswith("<"):
        return None
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        logger.debug("Not XML: %s", e)
        return None
    return {root.tag: _element_to_value(root)}


def try_parse_yaml(text: str) -> Value | None:
    """YAML is only attempted for multi-line text containing a colon."""
    if ":" not in text or ("\n" not in text and "\r" not in text):
        return None
    try:
        parsed = yaml.load(text, Loader=_StringTimestampLoader)
    except yaml.YAMLError as e:
        logger.debug("Not YAML: %s", e)
        return None
    return _as_container(parsed)


DEFAULT_PARSERS: tuple[Parser, ...] = (try_parse_json, try_parse_xml, try_parse_yaml)


def first_success(parsers: tuple[Parser, ...] | list[Parser], text: str) -> Value | None:
    """Run parsers in order and return the first non-None result."""
    for parse in parsers:
        result = parse(text)
        if result is not None:
            return result
    return None
