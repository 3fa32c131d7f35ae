"""
Block uid generators.

Parsing takes a UidGenerator so tests can use deterministic ids. Every
generator here is safe to share between threads.
"""

import itertools
import threading
import uuid
from typing import Protocol


class UidGenerator(Protocol):
    def next(self) -> str:
        ...


class UuidGenerator:
    """Random uuid4 ids (default)."""

    def next(self) -> str:
        return str(uuid.uuid4())


class SequentialUidGenerator:
    """Deterministic ids: "{prefix}-1", "{prefix}-2", ..."""

    def __init__(self, prefix: str = "block", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self.prefix}-{value}"


default_uid_generator = UuidGenerator()
