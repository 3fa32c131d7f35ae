"""
Node Models - Raw segments produced by the grammar tokenizer.

A document is split into a gapless sequence of nodes. Each node is either
free-form text (no block name) or a delimited block (paired or void).

Delimiter Format:
    - Paired: <!-- wp:core/quote {"align":"left"} --> ... <!-- /wp:core/quote -->
    - Void:   <!-- wp:core/more /-->
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RawBlockNode:
    """
    One segment of the source document.

    Attributes:
        block_name: Name from the opening delimiter, None for free-form text
        raw_content: Exact inner content (untrimmed); always "" for void blocks
        attributes: Inline JSON attributes of the opening delimiter
        is_void: True for self-closing delimiters
        start_pos: Offset of the segment start in the document
        end_pos: Offset just past the segment end (includes the closer)
    """

    block_name: Optional[str]
    raw_content: str
    attributes: dict[str, Any] = field(default_factory=dict)
    is_void: bool = False
    start_pos: int = 0
    end_pos: int = 0

    @property
    def is_freeform(self) -> bool:
        return self.block_name is None

    def to_dict(self) -> dict:
        return {
            "block_name": self.block_name,
            "raw_content": self.raw_content,
            "attributes": self.attributes,
            "is_void": self.is_void,
            "start_pos": self.start_pos,
            "end_pos": self.end_pos,
        }

    def __repr__(self) -> str:
        preview = self.raw_content[:40] + "..." if len(self.raw_content) > 40 else self.raw_content
        name = self.block_name or "<freeform>"
        return f"RawBlockNode({name}, {self.start_pos}:{self.end_pos}, {preview!r})"
