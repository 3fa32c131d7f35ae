"""
Block type lookup.

BlockTypeCatalog is the read-only snapshot the parser consumes: a name ->
definition mapping that cannot change during a parse call.

BlockTypeRegistry is a mutable collection of definitions plus the name of
the unknown-type handler. It hands out catalogs through snapshot().

Usage:
    registry = BlockTypeRegistry()
    registry.register("core/text", attributes={"content": html()}, save=render_text)
    registry.set_unknown_type_handler("core/text")

    blocks = registry.parse(document)
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Iterator, Optional, Union

from ..exceptions import BlockTypeError
from .block_models import BlockTypeDefinition

logger = logging.getLogger(__name__)


class BlockTypeCatalog(Mapping):
    """Immutable name -> BlockTypeDefinition lookup."""

    def __init__(self, block_types: Iterable[BlockTypeDefinition] = ()):
        self._block_types = MappingProxyType({bt.name: bt for bt in block_types})

    def __getitem__(self, name: str) -> BlockTypeDefinition:
        return self._block_types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._block_types)

    def __len__(self) -> int:
        return len(self._block_types)

    def lookup(self, name: Optional[str]) -> Optional[BlockTypeDefinition]:
        """Returns the block type registered under name, if any."""
        if not name:
            return None
        return self._block_types.get(name)

    @classmethod
    def coerce(
        cls,
        block_types: Union["BlockTypeCatalog", Mapping, Iterable[BlockTypeDefinition], None],
    ) -> "BlockTypeCatalog":
        """Builds a catalog from a catalog, a mapping or an iterable of definitions."""
        if isinstance(block_types, BlockTypeCatalog):
            return block_types
        if block_types is None:
            return cls()
        if isinstance(block_types, Mapping):
            return cls(block_types.values())
        return cls(block_types)

    def __repr__(self) -> str:
        return f"BlockTypeCatalog({list(self._block_types)})"


class BlockTypeRegistry:
    """Registration and unregistration of block types."""

    def __init__(self):
        self._block_types: dict[str, BlockTypeDefinition] = {}
        self._unknown_type_handler: Optional[str] = None
        self._lock = threading.Lock()

    def register(
        self,
        block_type: Union[BlockTypeDefinition, str],
        **settings: Any,
    ) -> BlockTypeDefinition:
        """
        Registers a block type.

        Args:
            block_type: A definition, or a block name built with settings
            **settings: Definition fields when block_type is a name

        Raises:
            BlockTypeError: if the name is already registered
            ValueError: if the definition is invalid
        """
        if not isinstance(block_type, BlockTypeDefinition):
            block_type = BlockTypeDefinition(name=block_type, **settings)
        elif settings:
            raise BlockTypeError("Settings cannot be combined with a BlockTypeDefinition")

        with self._lock:
            if block_type.name in self._block_types:
                raise BlockTypeError(f'Block "{block_type.name}" is already registered.')
            self._block_types[block_type.name] = block_type

        return block_type

    def unregister(self, name: str) -> Optional[BlockTypeDefinition]:
        """Removes a block type; returns it, or None if it was not registered."""
        with self._lock:
            block_type = self._block_types.pop(name, None)
        if block_type is None:
            logger.error(f'Block "{name}" is not registered.')
        return block_type

    def get(self, name: str) -> Optional[BlockTypeDefinition]:
        return self._block_types.get(name)

    def get_all(self) -> list[BlockTypeDefinition]:
        return list(self._block_types.values())

    def set_unknown_type_handler(self, name: Optional[str]):
        """Sets the block type used for free-form and unrecognised content."""
        self._unknown_type_handler = name

    def get_unknown_type_handler(self) -> Optional[str]:
        return self._unknown_type_handler

    def snapshot(self) -> BlockTypeCatalog:
        """Read-only view of the currently registered block types."""
        with self._lock:
            return BlockTypeCatalog(self._block_types.values())

    def parse(self, document: str, **kwargs: Any) -> list:
        """Parses a document against a snapshot of this registry."""
        from ..parsing.block_parser import parse

        return parse(document, self.snapshot(), self._unknown_type_handler, **kwargs)

    def __len__(self) -> int:
        return len(self._block_types)

    def __contains__(self, name: str) -> bool:
        return name in self._block_types
