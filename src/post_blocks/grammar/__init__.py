"""
Grammar module - Tokenizes block-delimited documents into raw segments.

Usage:
    from post_blocks.grammar import BlockGrammar

    for node in BlockGrammar().tokenize(document):
        print(node.block_name, node.attributes, node.raw_content)
"""

from .node_models import RawBlockNode
from .tokenizer import BlockGrammar, tokenize

__all__ = [
    "RawBlockNode",
    "BlockGrammar",
    "tokenize",
]
