"""
Blocks module - Block data model, block type lookup and block factory.

Usage:
    from post_blocks.blocks import BlockTypeDefinition, BlockTypeCatalog
    from post_blocks.matchers import text

    quote = BlockTypeDefinition(
        name="core/quote",
        attributes={"value": text("blockquote")},
        save=lambda attributes: f"<blockquote>{attributes.get('value', '')}</blockquote>",
    )
    catalog = BlockTypeCatalog([quote])
"""

from .block_models import Block, BlockTypeDefinition
from .uid import UidGenerator, UuidGenerator, SequentialUidGenerator
from .registry import BlockTypeCatalog, BlockTypeRegistry
from .factory import create_block, get_block_attributes, create_block_with_fallback

__all__ = [
    # Models
    "Block",
    "BlockTypeDefinition",
    # uid
    "UidGenerator",
    "UuidGenerator",
    "SequentialUidGenerator",
    # Lookup
    "BlockTypeCatalog",
    "BlockTypeRegistry",
    # Factory
    "create_block",
    "get_block_attributes",
    "create_block_with_fallback",
]
