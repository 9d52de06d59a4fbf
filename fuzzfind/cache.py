"""Per-chunk cache of query results."""

from __future__ import annotations

import threading
from typing import Optional

from fuzzfind.chunklist import Chunk
from fuzzfind.constants import QUERY_CACHE_MAX


class ChunkCache:
    """Maps a full chunk and a query string to that query's results in the chunk."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[Chunk, dict[str, list]] = {}

    def add(self, chunk: Chunk, key: str, results: list) -> None:
        """Cache ``results``; ignored for empty keys, partial chunks and large lists."""
        if not key or not chunk.is_full() or len(results) > QUERY_CACHE_MAX:
            return
        with self._lock:
            self._cache.setdefault(chunk, {})[key] = results

    def lookup(self, chunk: Chunk, key: str) -> Optional[list]:
        """Return the results cached for exactly ``key``, or None."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            return self._cache.get(chunk, {}).get(key)

    def search(self, chunk: Chunk, key: str) -> Optional[list]:
        """Return cached results for the longest prefix or suffix of ``key``, or None."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            cached = self._cache.get(chunk)
            if cached is None:
                return None
            for idx in range(1, len(key)):
                for substr in (key[: len(key) - idx], key[idx:]):
                    if substr in cached:
                        return cached[substr]
        return None