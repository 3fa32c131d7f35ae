"""
BlockParser - Parses a document into an ordered list of blocks.

Pipeline per segment, in document order:
    BlockGrammar -> block type lookup -> create_block_with_fallback
    (attributes + round-trip validation) -> output list

Free-form text and blocks of unregistered types go to the fallback
(unknown-type handler) block type when one is given; otherwise they are
dropped. A failing matcher aborts the whole parse.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional, Union

from ..blocks.block_models import Block, BlockTypeDefinition
from ..blocks.factory import create_block_with_fallback
from ..blocks.registry import BlockTypeCatalog
from ..blocks.uid import UidGenerator
from ..config import get_settings
from ..grammar.tokenizer import BlockGrammar
from ..validation.block_validator import BlockValidator

logger = logging.getLogger(__name__)

BlockTypes = Union[BlockTypeCatalog, Mapping, Iterable[BlockTypeDefinition], None]


@dataclass
class ParserConfig:
    """Parser configuration."""

    # Namespace for bare block names ("text" -> "core/text")
    default_namespace: str = field(default_factory=lambda: get_settings().default_namespace)

    # Strip leading/trailing whitespace of every segment before building blocks
    trim_content: bool = True

    # Invalid-block diagnostics; None follows the environment
    log_invalid_blocks: Optional[bool] = None


class BlockParser:
    """
    Parses block-delimited documents.

    Holds no per-document state: one instance can parse many documents,
    also concurrently, as long as the catalogs passed in are not mutated.

    Usage:
        parser = BlockParser()
        blocks = parser.parse(document, catalog, fallback_block_name="core/freeform")

        for block in blocks:
            print(block.name, block.attributes, block.is_valid)
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        uid_generator: Optional[UidGenerator] = None,
        validator: Optional[BlockValidator] = None,
        grammar: Optional[BlockGrammar] = None,
    ):
        self.config = config or ParserConfig()
        self.uid_generator = uid_generator
        self.validator = validator or BlockValidator(log_invalid=self.config.log_invalid_blocks)
        self.grammar = grammar or BlockGrammar()

    def resolve_block_name(self, name: Optional[str]) -> Optional[str]:
        """Adds the default namespace to bare block names."""
        if not name or "/" in name:
            return name
        return f"{self.config.default_namespace}/{name}"

    def parse(
        self,
        document: str,
        block_types: BlockTypes,
        fallback_block_name: Optional[str] = None,
    ) -> list[Block]:
        """
        Parses a document into blocks.

        Args:
            document: Full document text
            block_types: Catalog (or mapping / iterable of definitions) to look up types
            fallback_block_name: Block type for free-form and unknown content

        Returns:
            Blocks in document order
        """
        catalog = BlockTypeCatalog.coerce(block_types)
        fallback_block_type = catalog.lookup(self.resolve_block_name(fallback_block_name))

        blocks = []
        for node in self.grammar.tokenize(document):
            block_type = catalog.lookup(self.resolve_block_name(node.block_name))
            raw_content = node.raw_content.strip() if self.config.trim_content else node.raw_content

            block = create_block_with_fallback(
                block_type,
                fallback_block_type,
                raw_content,
                node.attributes,
                uid_generator=self.uid_generator,
                validator=self.validator,
            )
            if block is not None:
                blocks.append(block)

        logger.debug(
            f"Parsed document: {len(blocks)} blocks, "
            f"{sum(1 for b in blocks if not b.is_valid)} invalid"
        )

        return blocks


def parse(
    document: str,
    block_types: BlockTypes,
    fallback_block_name: Optional[str] = None,
    config: Optional[ParserConfig] = None,
    uid_generator: Optional[UidGenerator] = None,
    validator: Optional[BlockValidator] = None,
) -> list[Block]:
    """Parses a document into blocks with a one-off BlockParser."""
    parser = BlockParser(config, uid_generator=uid_generator, validator=validator)
    return parser.parse(document, block_types, fallback_block_name)
