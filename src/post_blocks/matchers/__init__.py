"""
Matchers module - Declarative attribute extraction from block markup.

Usage:
    from post_blocks.matchers import text, attr, get_matcher_attributes

    sources = {
        "content": text("p"),
        "count": {"type": int, "matcher": attr("div", "data-count")},
    }
    get_matcher_attributes('<div data-count="3"><p>Hi</p></div>', sources)
    # {"content": "Hi", "count": 3}
"""

from .query import (
    Matcher,
    TextMatcher,
    HtmlMatcher,
    AttrMatcher,
    QueryMatcher,
    is_valid_matcher,
    text,
    html,
    attr,
    query,
)
from .sources import (
    ValueType,
    AttributeSource,
    AttributeSchema,
    PerAttributeMatchers,
    WholeContentFunction,
    build_attribute_source,
    build_attribute_schema,
)
from .engine import (
    parse_fragment,
    coerce_value,
    get_matcher_attributes,
    parse_block_attributes,
)

__all__ = [
    # Matchers
    "Matcher",
    "TextMatcher",
    "HtmlMatcher",
    "AttrMatcher",
    "QueryMatcher",
    "is_valid_matcher",
    "text",
    "html",
    "attr",
    "query",
    # Sources
    "ValueType",
    "AttributeSource",
    "AttributeSchema",
    "PerAttributeMatchers",
    "WholeContentFunction",
    "build_attribute_source",
    "build_attribute_schema",
    # Engine
    "parse_fragment",
    "coerce_value",
    "get_matcher_attributes",
    "parse_block_attributes",
]
