"""
Parsing module - Document to block list.

Usage:
    from post_blocks.parsing import parse

    blocks = parse(document, [paragraph, quote], fallback_block_name="core/freeform")
"""

from .block_parser import BlockParser, ParserConfig, parse

__all__ = [
    "BlockParser",
    "ParserConfig",
    "parse",
]
