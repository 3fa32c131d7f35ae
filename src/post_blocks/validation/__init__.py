"""Round-trip validation of parsed blocks."""
from .serializer import get_save_content, get_beautiful_content
from .block_validator import BlockValidator, is_valid_block

__all__ = ['get_save_content', 'get_beautiful_content', 'BlockValidator', 'is_valid_block']
