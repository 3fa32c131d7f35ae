"""
post_blocks - Parser for block-delimited post content.

A document mixes free-form markup with comment delimiters:

    <p>Intro</p>
    <!-- wp:core/quote {"citation":"Ada"} -->
    <blockquote>Hello</blockquote>
    <!-- /wp:core/quote -->
    <!-- wp:core/more /-->

parse() turns it into typed Block records. Each block's attributes are
merged from its type's defaults, the delimiter JSON and matchers run on
its content; then the block is re-rendered and compared with the original
markup. Blocks that do not round-trip are kept with is_valid=False and
their original content.

Usage:
    from post_blocks import BlockTypeRegistry, html, parse

    registry = BlockTypeRegistry()
    registry.register("core/freeform", attributes={"content": html()},
                      save=lambda attributes: attributes.get("content"))
    registry.set_unknown_type_handler("core/freeform")

    blocks = registry.parse("<p>Hello</p>")
"""

from .exceptions import BlockParserError, BlockTypeError
from .grammar import RawBlockNode, BlockGrammar, tokenize
from .matchers import (
    ValueType,
    AttributeSource,
    PerAttributeMatchers,
    WholeContentFunction,
    is_valid_matcher,
    text,
    html,
    attr,
    query,
    coerce_value,
    get_matcher_attributes,
    parse_block_attributes,
)
from .blocks import (
    Block,
    BlockTypeDefinition,
    BlockTypeCatalog,
    BlockTypeRegistry,
    UuidGenerator,
    SequentialUidGenerator,
    create_block,
    get_block_attributes,
    create_block_with_fallback,
)
from .validation import BlockValidator, is_valid_block, get_save_content, get_beautiful_content
from .parsing import BlockParser, ParserConfig, parse

__all__ = [
    # Errors
    "BlockParserError",
    "BlockTypeError",
    # Grammar
    "RawBlockNode",
    "BlockGrammar",
    "tokenize",
    # Matchers
    "ValueType",
    "AttributeSource",
    "PerAttributeMatchers",
    "WholeContentFunction",
    "is_valid_matcher",
    "text",
    "html",
    "attr",
    "query",
    "coerce_value",
    "get_matcher_attributes",
    "parse_block_attributes",
    # Blocks
    "Block",
    "BlockTypeDefinition",
    "BlockTypeCatalog",
    "BlockTypeRegistry",
    "UuidGenerator",
    "SequentialUidGenerator",
    "create_block",
    "get_block_attributes",
    "create_block_with_fallback",
    # Validation
    "BlockValidator",
    "is_valid_block",
    "get_save_content",
    "get_beautiful_content",
    # Parsing
    "BlockParser",
    "ParserConfig",
    "parse",
]
