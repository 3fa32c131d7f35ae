"""
Matchers - Declarative rules that select one attribute value from markup.

Each matcher is evaluated against a BeautifulSoup tree of the block's raw
content. The tree is built once per block and shared by every matcher.

Available matchers:
    - text(selector):        text content of the first match
    - html(selector):        inner HTML of the first match
    - attr(selector, name):  attribute value of the first match
    - query(selector, m):    list of results of `m` for every match

A selector of None means the root of the fragment. A selector that matches
nothing yields None (absent).

Only the matcher classes defined here are recognised by the engine; any
other callable offered as a matcher is rejected when the block type is
defined.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from bs4 import Tag

from ..exceptions import BlockTypeError


class Matcher:
    """Base class of the built-in matchers."""

    def __init__(self, selector: Optional[str] = None):
        self.selector = selector

    def __call__(self, node: Tag) -> Any:
        target = node.select_one(self.selector) if self.selector else node
        if target is None:
            return None
        return self.extract(target)

    def extract(self, element: Tag) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.selector!r})"


class TextMatcher(Matcher):
    def extract(self, element: Tag) -> str:
        return element.get_text()


class HtmlMatcher(Matcher):
    def extract(self, element: Tag) -> str:
        return element.decode_contents()


class AttrMatcher(Matcher):
    def __init__(self, selector: Optional[str], name: str):
        super().__init__(selector)
        self.name = name

    def extract(self, element: Tag) -> Optional[str]:
        return element.get(self.name)

    def __repr__(self) -> str:
        return f"AttrMatcher({self.selector!r}, {self.name!r})"


class QueryMatcher(Matcher):
    """Applies a matcher (or a mapping of matchers) to every selected element."""

    def __init__(self, selector: str, matcher: Union[Matcher, Mapping]):
        super().__init__(selector)
        if isinstance(matcher, Mapping):
            for key, value in matcher.items():
                if not is_valid_matcher(value):
                    raise BlockTypeError(f"query() matcher for {key!r} is not a known matcher: {value!r}")
        elif not is_valid_matcher(matcher):
            raise BlockTypeError(f"query() expects a known matcher, got {matcher!r}")
        self.matcher = matcher

    def __call__(self, node: Tag) -> list:
        return [apply_matcher(self.matcher, element) for element in node.select(self.selector)]

    def __repr__(self) -> str:
        return f"QueryMatcher({self.selector!r}, {self.matcher!r})"


MATCHER_TYPES = (TextMatcher, HtmlMatcher, AttrMatcher, QueryMatcher)


def is_valid_matcher(value: Any) -> bool:
    """True only for instances of the built-in matcher classes."""
    return type(value) in MATCHER_TYPES


def apply_matcher(matcher: Union[Matcher, Mapping], node: Tag) -> Any:
    """Evaluates a matcher, or a mapping of matchers, against a node."""
    if isinstance(matcher, Mapping):
        result = {}
        for key, value in matcher.items():
            extracted = value(node)
            if extracted is not None:
                result[key] = extracted
        return result
    return matcher(node)


# =============================================================================
# CONSTRUCTORS
# =============================================================================

def text(selector: Optional[str] = None) -> TextMatcher:
    return TextMatcher(selector)


def html(selector: Optional[str] = None) -> HtmlMatcher:
    return HtmlMatcher(selector)


def attr(selector: Optional[str], name: str) -> AttrMatcher:
    return AttrMatcher(selector, name)


def query(selector: str, matcher: Union[Matcher, Mapping]) -> QueryMatcher:
    return QueryMatcher(selector, matcher)
