"""
Block Factory - Builds blocks from raw content and a resolved block type.

Attribute precedence, lowest to highest:
    1. block type defaults
    2. attributes from the delimiter's inline JSON
    3. attributes matched from the raw content
"""

import copy
from typing import Any, Optional

from ..matchers.engine import parse_block_attributes
from ..validation.block_validator import BlockValidator
from .block_models import Block, BlockTypeDefinition
from .uid import UidGenerator, default_uid_generator


def create_block(
    block_type: BlockTypeDefinition,
    attributes: Optional[dict[str, Any]] = None,
    uid_generator: Optional[UidGenerator] = None,
) -> Block:
    """Returns a new block of the given type with a fresh uid."""
    generator = uid_generator or default_uid_generator
    return Block(
        name=block_type.name,
        attributes=dict(attributes or {}),
        uid=generator.next(),
    )


def get_block_attributes(
    block_type: Optional[BlockTypeDefinition],
    raw_content: str,
    attributes: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Merges defaults, delimiter attributes and matched attributes.

    Args:
        block_type: Block type, or None to return only the delimiter attributes
        raw_content: Block inner markup
        attributes: Attributes parsed from the delimiter

    Returns:
        Merged attributes (later sources overwrite earlier ones key by key,
        None values are absent)
    """
    attributes = _present(attributes or {})
    if block_type is None:
        return attributes

    return {
        **_present(copy.deepcopy(block_type.defaults)),
        **attributes,
        **parse_block_attributes(raw_content, block_type.attributes),
    }


def _present(attributes: dict[str, Any]) -> dict[str, Any]:
    return {name: value for name, value in attributes.items() if value is not None}


def create_block_with_fallback(
    block_type: Optional[BlockTypeDefinition],
    fallback_block_type: Optional[BlockTypeDefinition],
    raw_content: str,
    attributes: Optional[dict[str, Any]] = None,
    uid_generator: Optional[UidGenerator] = None,
    validator: Optional[BlockValidator] = None,
) -> Optional[Block]:
    """
    Creates a block, falling back to the unknown-type handler.

    No block is created when there is neither a block type nor a fallback,
    or when the fallback would receive empty content.

    The block is validated: if re-rendering its attributes does not
    reproduce raw_content, it is marked invalid and keeps raw_content as
    original_content.
    """
    parsed_block_type = block_type or fallback_block_type

    if parsed_block_type is None:
        return None
    if parsed_block_type is fallback_block_type and not raw_content:
        return None

    block = create_block(
        parsed_block_type,
        get_block_attributes(parsed_block_type, raw_content, attributes),
        uid_generator=uid_generator,
    )

    validator = validator or BlockValidator()
    block.is_valid = validator.is_valid(raw_content, parsed_block_type, block.attributes)
    if not block.is_valid:
        block.original_content = raw_content

    return block
