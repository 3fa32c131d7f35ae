class BlockParserError(Exception):
    """Base error for post_blocks."""


class BlockTypeError(BlockParserError, ValueError):
    """A block type definition or registration is invalid."""
