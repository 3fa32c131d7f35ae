"""
Attribute Sources - How a block type declares where its attributes come from.

A block type declares its attributes in one of two forms, resolved once
when the block type is defined:

    - PerAttributeMatchers: mapping attribute name -> AttributeSource.
      Only sources carrying a matcher extract anything; the others only
      contribute a value type and an optional default.
    - WholeContentFunction: one function receiving the raw content and
      returning the complete attribute mapping.

Accepted per-attribute declarations:
    {"content": text("p")}                               # matcher
    {"align": str}                                       # value type only
    {"count": {"type": int, "matcher": attr("div", "data-count")}}
    {"topic": {"type": str, "default": "none"}}
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from ..exceptions import BlockTypeError
from .query import Matcher, is_valid_matcher


class ValueType(str, Enum):
    """Declared value types of block attributes."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


_PYTHON_TYPES = {
    str: ValueType.STRING,
    int: ValueType.NUMBER,
    float: ValueType.NUMBER,
    bool: ValueType.BOOLEAN,
    dict: ValueType.OBJECT,
    list: ValueType.ARRAY,
}

_SOURCE_KEYS = {"type", "matcher", "default"}


@dataclass(frozen=True)
class AttributeSource:
    """
    Declaration of a single attribute.

    Attributes:
        matcher: Built-in matcher extracting the value, None if inert
        value_type: Type the extracted value is coerced to
        default: Value used when extraction yields nothing (None = no default)
    """

    matcher: Optional[Matcher] = None
    value_type: Optional[ValueType] = None
    default: Any = None

    @property
    def has_matcher(self) -> bool:
        return self.matcher is not None


class PerAttributeMatchers:
    """Attribute schema resolved attribute by attribute."""

    def __init__(self, sources: Optional[Mapping[str, AttributeSource]] = None):
        self.sources = dict(sources or {})

    @property
    def matchers(self) -> dict[str, AttributeSource]:
        """Sources that actually extract a value."""
        return {name: source for name, source in self.sources.items() if source.has_matcher}

    @property
    def defaults(self) -> dict[str, Any]:
        return {
            name: source.default
            for name, source in self.sources.items()
            if source.default is not None
        }

    def __repr__(self) -> str:
        return f"PerAttributeMatchers({list(self.sources)})"


class WholeContentFunction:
    """Attribute schema delegated to one function of the raw content."""

    def __init__(self, function: Callable[[str], Optional[Mapping[str, Any]]]):
        self.function = function

    def __repr__(self) -> str:
        return f"WholeContentFunction({self.function!r})"


AttributeSchema = Union[PerAttributeMatchers, WholeContentFunction]


def resolve_value_type(value: Any) -> ValueType:
    """Maps a declared type (python type, ValueType or its name) to ValueType."""
    if isinstance(value, ValueType):
        return value
    if isinstance(value, str):
        try:
            return ValueType(value.lower())
        except ValueError:
            raise BlockTypeError(f"Unknown attribute type: {value!r}") from None
    if isinstance(value, type) and value in _PYTHON_TYPES:
        return _PYTHON_TYPES[value]
    raise BlockTypeError(f"Unknown attribute type: {value!r}")


def build_attribute_source(name: str, declaration: Any) -> AttributeSource:
    """Normalizes one attribute declaration into an AttributeSource."""
    if isinstance(declaration, AttributeSource):
        if declaration.has_matcher and not is_valid_matcher(declaration.matcher):
            raise BlockTypeError(f"Attribute {name!r} matcher is not a known matcher: {declaration.matcher!r}")
        return declaration

    if is_valid_matcher(declaration):
        return AttributeSource(matcher=declaration)

    if isinstance(declaration, (type, ValueType)):
        return AttributeSource(value_type=resolve_value_type(declaration))

    if isinstance(declaration, Mapping):
        unknown = set(declaration) - _SOURCE_KEYS
        if unknown:
            raise BlockTypeError(f"Attribute {name!r} has unknown keys: {sorted(unknown)}")

        matcher = declaration.get("matcher")
        if matcher is not None and not is_valid_matcher(matcher):
            raise BlockTypeError(f"Attribute {name!r} matcher is not a known matcher: {matcher!r}")

        value_type = declaration.get("type")
        return AttributeSource(
            matcher=matcher,
            value_type=resolve_value_type(value_type) if value_type is not None else None,
            default=declaration.get("default"),
        )

    raise BlockTypeError(f"Attribute {name!r} has an unsupported declaration: {declaration!r}")


def build_attribute_schema(declaration: Any) -> AttributeSchema:
    """
    Resolves a block type's attribute declaration into an AttributeSchema.

    Args:
        declaration: None, a mapping of attribute declarations, a function
            of the raw content, or an already resolved schema

    Raises:
        BlockTypeError: for anything that is neither form
    """
    if declaration is None:
        return PerAttributeMatchers()

    if isinstance(declaration, (PerAttributeMatchers, WholeContentFunction)):
        return declaration

    if isinstance(declaration, Mapping):
        return PerAttributeMatchers({
            name: build_attribute_source(name, value)
            for name, value in declaration.items()
        })

    if isinstance(declaration, Matcher):
        raise BlockTypeError("A matcher must be declared per attribute, not for the whole block")

    if callable(declaration):
        return WholeContentFunction(declaration)

    raise BlockTypeError(f"Unsupported attribute declaration: {declaration!r}")
