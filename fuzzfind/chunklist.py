"""Thread-safe list of fixed-size chunks of items."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from fuzzfind.constants import CHUNK_SIZE
from fuzzfind.item import Item

ItemBuilder = Callable[[str], Optional[Item]]


@dataclass(eq=False)
class Chunk:
    """Up to ``CHUNK_SIZE`` items; compared and hashed by identity."""

    items: list[Item] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    def push(self, trans: ItemBuilder, data: str) -> bool:
        """Build an item from ``data`` and add it; False if ``trans`` rejected it."""
        if self.is_full():
            raise ValueError("chunk is full")
        item = trans(data)
        if item is None:
            return False
        self.items.append(item)
        return True

    def is_full(self) -> bool:
        return self.count == CHUNK_SIZE


def count_items(chunks: list[Chunk]) -> int:
    """Return the total number of items in ``chunks``."""
    if not chunks:
        return 0
    return CHUNK_SIZE * (len(chunks) - 1) + chunks[-1].count


class ChunkList:
    """Items split into chunks, from which immutable snapshots can be taken."""

    def __init__(self, trans: ItemBuilder):
        self._chunks: list[Chunk] = []
        self._lock = threading.Lock()
        self.trans = trans

    def push(self, data: str) -> bool:
        """Add an item built from ``data``; return whether it was added."""
        with self._lock:
            if not self._chunks or self._chunks[-1].is_full():
                self._chunks.append(Chunk())
            return self._chunks[-1].push(self.trans, data)

    def clear(self) -> None:
        with self._lock:
            self._chunks = []

    def snapshot(self) -> tuple[list[Chunk], int]:
        """Return a copy of the chunks that later pushes do not change, and the item count."""
        with self._lock:
            chunks = list(self._chunks)
            if chunks:
                chunks[-1] = Chunk(list(chunks[-1].items))
        return chunks, count_items(chunks)