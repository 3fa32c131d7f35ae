"""
BlockGrammar - Regex-first tokenizer for block-delimited documents.

Splits a document into an ordered, gapless sequence of RawBlockNode
segments. Every character of the input belongs to exactly one segment.

Grammar:
    Document     := Segment*
    Segment      := FreeForm | PairedBlock | VoidBlock
    PairedBlock  := "<!--" WS "wp:" Name WS (JsonObject WS)? "-->" Content
                    "<!--" WS "/wp:" Name WS "-->"
    VoidBlock    := "<!--" WS "wp:" Name WS (JsonObject WS)? "/-->"
    Name         := [a-z][a-z0-9-]* ("/" [a-z][a-z0-9-]*)?

Recovery rules (the tokenizer never raises):
    - Dangling or malformed closers are literal free-form text
    - Invalid inline JSON yields empty attributes
    - An opener never closed takes the rest of the document as content
"""

import json
import logging
import re
from functools import lru_cache
from typing import Any, Iterator, Optional

from .node_models import RawBlockNode

logger = logging.getLogger(__name__)


class BlockGrammar:
    """
    Deterministic tokenizer for the block delimiter grammar.

    Stateless: each call to tokenize() returns an independent generator,
    so one instance can be shared across threads.

    Usage:
        grammar = BlockGrammar()
        for node in grammar.tokenize(document):
            print(node.block_name, node.raw_content)
    """

    # =========================================================================
    # REGEX PATTERNS
    # =========================================================================

    WHITESPACE = r'[ \t\r\n]+'

    # Optional namespace before the slash: "core/quote", "quote"
    BLOCK_NAME = r'[a-z][a-z0-9-]*(?:/[a-z][a-z0-9-]*)?'

    # Any delimiter: opener, closer or void.
    # The JSON object ends at the first "}" followed by whitespace and -->.
    PATTERN_DELIMITER = re.compile(
        rf'<!--{WHITESPACE}(?P<closer>/)?wp:(?P<name>{BLOCK_NAME}){WHITESPACE}'
        rf'(?:(?P<attrs>\{{.*?\}}){WHITESPACE})?(?P<void>/)?-->',
        re.DOTALL
    )

    def tokenize(self, document: str) -> Iterator[RawBlockNode]:
        """
        Lazily yields the segments of a document in order.

        Args:
            document: Full document text

        Yields:
            RawBlockNode for every free-form span and block
        """
        freeform_start = 0
        cursor = 0

        while True:
            match = self.PATTERN_DELIMITER.search(document, cursor)
            if match is None:
                break

            if match.group("closer"):
                # Closer without an open block: literal text
                logger.debug(f"Dangling closer at {match.start()}: {match.group(0)!r}")
                cursor = match.start() + 1
                continue

            name = match.group("name")
            attributes = self._parse_attributes(match.group("attrs"), match.start())

            freeform = self._freeform(document, freeform_start, match.start())
            if freeform is not None:
                yield freeform

            if match.group("void"):
                yield RawBlockNode(
                    block_name=name,
                    raw_content="",
                    attributes=attributes,
                    is_void=True,
                    start_pos=match.start(),
                    end_pos=match.end(),
                )
                freeform_start = cursor = match.end()
                continue

            closer = _closer_pattern(name).search(document, match.end())
            if closer is None:
                logger.debug(f"Block {name} opened at {match.start()} is never closed")
                yield RawBlockNode(
                    block_name=name,
                    raw_content=document[match.end():],
                    attributes=attributes,
                    start_pos=match.start(),
                    end_pos=len(document),
                )
                return

            yield RawBlockNode(
                block_name=name,
                raw_content=document[match.end():closer.start()],
                attributes=attributes,
                start_pos=match.start(),
                end_pos=closer.end(),
            )
            freeform_start = cursor = closer.end()

        freeform = self._freeform(document, freeform_start, len(document))
        if freeform is not None:
            yield freeform

    def parse(self, document: str) -> list[RawBlockNode]:
        """Tokenizes the whole document into a list."""
        return list(self.tokenize(document))

    def _freeform(self, document: str, start: int, end: int) -> Optional[RawBlockNode]:
        if start >= end:
            return None
        return RawBlockNode(
            block_name=None,
            raw_content=document[start:end],
            start_pos=start,
            end_pos=end,
        )

    def _parse_attributes(self, raw: Optional[str], position: int) -> dict[str, Any]:
        """Parses inline JSON attributes, falling back to {} when malformed."""
        if not raw:
            return {}
        try:
            attributes = json.loads(raw)
        except (ValueError, RecursionError):
            logger.debug(f"Malformed block attributes at {position}: {raw!r:.200}")
            return {}
        return attributes if isinstance(attributes, dict) else {}


@lru_cache(maxsize=256)
def _closer_pattern(name: str) -> re.Pattern:
    ws = BlockGrammar.WHITESPACE
    return re.compile(rf'<!--{ws}/wp:{re.escape(name)}{ws}-->')


def tokenize(document: str) -> Iterator[RawBlockNode]:
    """Shortcut for BlockGrammar().tokenize(document)."""
    return BlockGrammar().tokenize(document)
