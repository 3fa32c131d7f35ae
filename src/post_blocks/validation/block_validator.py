"""
Block validation by round-trip.

A parsed block is valid when rendering its attributes with the block
type's save function reproduces the original content, after both sides
are beautified. A mismatch means the attributes did not capture the
markup, so the caller keeps the original content verbatim.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..config import get_settings
from .serializer import get_beautiful_content, get_save_content

if TYPE_CHECKING:
    from ..blocks.block_models import BlockTypeDefinition

logger = logging.getLogger(__name__)


class BlockValidator:
    """
    Compares raw block content with its re-rendered markup.

    Args:
        serializer: (block_type, attributes) -> markup, defaults to save()
        beautifier: markup -> canonical markup
        log_invalid: emit a diagnostic for mismatches; defaults to True in
            the development environment only
    """

    def __init__(
        self,
        serializer: Optional[Callable[["BlockTypeDefinition", dict], str]] = None,
        beautifier: Optional[Callable[[str], str]] = None,
        log_invalid: Optional[bool] = None,
    ):
        self.serializer = serializer or get_save_content
        self.beautifier = beautifier or get_beautiful_content
        self.log_invalid = log_invalid

    @property
    def diagnostics_enabled(self) -> bool:
        if self.log_invalid is None:
            return get_settings().is_development
        return self.log_invalid

    def is_valid(
        self,
        raw_content: str,
        block_type: "BlockTypeDefinition",
        attributes: dict[str, Any],
    ) -> bool:
        actual = self.beautifier(raw_content)
        expected = self.beautifier(self.serializer(block_type, attributes))

        is_valid = actual == expected

        if not is_valid and self.diagnostics_enabled:
            logger.warning(
                f"Invalid block parse ({block_type.name})\n"
                f"\tExpected: {expected}\n"
                f"\tActual:   {actual}"
            )

        return is_valid


def is_valid_block(
    raw_content: str,
    block_type: "BlockTypeDefinition",
    attributes: dict[str, Any],
    validator: Optional[BlockValidator] = None,
) -> bool:
    """Returns True if the block's attributes reproduce raw_content."""
    return (validator or BlockValidator()).is_valid(raw_content, block_type, attributes)
