"""
Serializer adapters used by the validator.

get_save_content renders a block through its type's save function.
get_beautiful_content canonicalizes insignificant whitespace so that two
markup strings can be compared. It is idempotent and only used for the
comparison, never for stored content.
"""

from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup

from ..config import get_settings

if TYPE_CHECKING:
    from ..blocks.block_models import BlockTypeDefinition


def get_save_content(block_type: "BlockTypeDefinition", attributes: dict[str, Any]) -> str:
    """Returns the canonical markup of a block type for the given attributes."""
    content = block_type.save(attributes)
    if content is None:
        return ""
    if not isinstance(content, str):
        return str(content)
    return content


def get_beautiful_content(content: str) -> str:
    """Normalizes whitespace of a markup string (one node per line, indented)."""
    if not content or not content.strip():
        return ""
    soup = BeautifulSoup(content, get_settings().html_parser, multi_valued_attributes=None)
    return soup.prettify().strip()
