from fuzzfind.cache import ChunkCache
from fuzzfind.chunklist import Chunk
from fuzzfind.constants import CHUNK_SIZE, QUERY_CACHE_MAX
from fuzzfind.item import Item


def _full_chunk():
    return Chunk([Item(text=str(i)) for i in range(CHUNK_SIZE)])


def test_chunk_cache():
    cache = ChunkCache()
    chunk1 = Chunk()
    chunk2 = _full_chunk()
    items1 = ["r1"]
    items2 = ["r1", "r2"]
    cache.add(chunk1, "foo", items1)
    cache.add(chunk2, "foo", items1)
    cache.add(chunk2, "bar", items2)

    assert cache.lookup(chunk1, "foo") is None
    assert cache.lookup(chunk2, "foo") == ["r1"]
    assert cache.lookup(chunk2, "bar") == ["r1", "r2"]
    assert cache.lookup(chunk1, "foobar") is None


def test_large_lists_not_cached():
    cache = ChunkCache()
    chunk = _full_chunk()
    cache.add(chunk, "q", list(range(QUERY_CACHE_MAX + 1)))
    assert cache.lookup(chunk, "q") is None
    cache.add(chunk, "q", list(range(QUERY_CACHE_MAX)))
    assert cache.lookup(chunk, "q") == list(range(QUERY_CACHE_MAX))


def test_empty_key_not_cached():
    cache = ChunkCache()
    chunk = _full_chunk()
    cache.add(chunk, "", ["x"])
    assert cache.lookup(chunk, "") is None


def test_search_prefix_and_suffix():
    cache = ChunkCache()
    chunk = _full_chunk()
    cache.add(chunk, "foo", ["prefix"])
    cache.add(chunk, "bar", ["suffix"])
    assert cache.search(chunk, "foob") == ["prefix"]
    assert cache.search(chunk, "xbar") == ["suffix"]
    assert cache.search(chunk, "zzz") is None
    assert cache.search(Chunk(), "foob") is None