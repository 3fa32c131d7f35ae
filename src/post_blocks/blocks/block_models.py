"""
Block Models - Block type definitions and parsed blocks.

BlockTypeDefinition is validated once, when it is built: its name must be
namespaced and its attribute declaration is resolved into an
AttributeSchema, so nothing about the definition is re-inspected while
parsing.

Block is the parser's output unit. A block whose content could not be
reproduced from its attributes is kept with is_valid=False and carries the
original content verbatim.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..matchers.sources import AttributeSchema, PerAttributeMatchers, build_attribute_schema

NAMESPACED_NAME = re.compile(r'^[a-z][a-z0-9-]*/[a-z][a-z0-9-]*$')


class BlockTypeDefinition(BaseModel):
    """
    A registered block type.

    Attributes:
        name: Namespaced identifier (ex: core/text, my-plugin/gallery)
        save: Renders attributes to the canonical markup of the block
        attributes: Per-attribute sources or a whole-content function
        default_attributes: Static defaults, lowest precedence when merging
        get_edit_wrapper_props: Optional extra wrapper metadata from attributes
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    save: Callable[[dict], Any]
    attributes: AttributeSchema = Field(default_factory=PerAttributeMatchers)
    default_attributes: dict[str, Any] = Field(default_factory=dict)
    get_edit_wrapper_props: Optional[Callable[[dict], Any]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not NAMESPACED_NAME.match(v):
            raise ValueError(
                f"Block names must contain a namespace prefix, "
                f"include only lowercase alphanumeric characters or dashes, "
                f"and start with a letter. Example: my-plugin/my-custom-block. Got: {v!r}"
            )
        return v

    @field_validator("attributes", mode="before")
    @classmethod
    def resolve_attributes(cls, v: Any) -> AttributeSchema:
        return build_attribute_schema(v)

    @property
    def defaults(self) -> dict[str, Any]:
        """Declared source defaults overlaid by default_attributes."""
        defaults = {}
        if isinstance(self.attributes, PerAttributeMatchers):
            defaults.update(self.attributes.defaults)
        defaults.update(self.default_attributes)
        return defaults

    def get_wrapper_props(self, attributes: dict[str, Any]) -> dict[str, Any]:
        if self.get_edit_wrapper_props is None:
            return {}
        return dict(self.get_edit_wrapper_props(attributes) or {})


@dataclass
class Block:
    """
    A parsed block.

    Attributes:
        name: Block type name
        attributes: Resolved attributes (never holds None values)
        uid: Opaque identifier, unique within the process
        is_valid: Whether the markup re-rendered from attributes matched
        original_content: Raw content, set only when is_valid is False
    """

    name: str
    attributes: dict[str, Any] = field(default_factory=dict)
    uid: str = ""
    is_valid: bool = True
    original_content: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "attributes": self.attributes,
            "uid": self.uid,
            "is_valid": self.is_valid,
        }
        if not self.is_valid:
            data["original_content"] = self.original_content
        return data

    def __repr__(self) -> str:
        status = "valid" if self.is_valid else "invalid"
        return f"Block({self.name}, {self.uid}, {status})"
