"""
Attribute Matcher Engine - Extracts typed attribute values from raw content.

The raw content is parsed once into a BeautifulSoup tree and every matcher
of the block type is evaluated against that same tree. Absent results are
omitted from the output; matcher exceptions propagate to the caller.
"""

import copy
import logging
import math
from typing import Any, Optional

from bs4 import BeautifulSoup

from ..config import get_settings
from .sources import (
    AttributeSchema,
    PerAttributeMatchers,
    ValueType,
    WholeContentFunction,
    build_attribute_schema,
)

logger = logging.getLogger(__name__)


def parse_fragment(raw_content: str) -> BeautifulSoup:
    """Parses a markup fragment into a tree matchers can query."""
    return BeautifulSoup(
        raw_content,
        get_settings().html_parser,
        multi_valued_attributes=None,
    )


def _to_number(value: Any) -> Optional[Any]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        number = None
    if number is None or not math.isfinite(number):
        logger.debug(f"Cannot coerce {value!r} to a number")
        return None
    return number


def coerce_value(value: Any, value_type: Optional[ValueType]) -> Any:
    """Coerces an extracted value to its declared type (None stays None)."""
    if value is None or value_type is None:
        return value
    if value_type is ValueType.NUMBER:
        return _to_number(value)
    if value_type is ValueType.BOOLEAN:
        return bool(value)
    return value


def get_matcher_attributes(raw_content: str, schema: Any) -> dict[str, Any]:
    """
    Evaluates the matcher-backed sources of a schema against raw content.

    Sources without a matcher are skipped. When a matcher yields nothing
    the source's default is used, if it declares one.

    Args:
        raw_content: Block inner markup
        schema: PerAttributeMatchers or a raw per-attribute declaration

    Returns:
        Mapping of extracted attribute values
    """
    if not isinstance(schema, PerAttributeMatchers):
        schema = build_attribute_schema(schema)

    matchers = schema.matchers
    if not matchers:
        return {}

    tree = parse_fragment(raw_content)
    attributes = {}
    for name, source in matchers.items():
        value = coerce_value(source.matcher(tree), source.value_type)
        if value is None:
            value = copy.deepcopy(source.default)
        if value is not None:
            attributes[name] = value

    return attributes


def parse_block_attributes(raw_content: str, schema: Optional[AttributeSchema]) -> dict[str, Any]:
    """
    Returns the attributes parsed from raw content for a block's schema.

    A WholeContentFunction receives the raw content and its mapping is
    returned directly, minus absent values.
    """
    if schema is None:
        return {}

    if not isinstance(schema, (PerAttributeMatchers, WholeContentFunction)):
        schema = build_attribute_schema(schema)

    if isinstance(schema, WholeContentFunction):
        result = schema.function(raw_content) or {}
        return {name: value for name, value in result.items() if value is not None}

    return get_matcher_attributes(raw_content, schema)
