# fuzzfind

Building blocks for a line-oriented fuzzy finder: match algorithms that score
candidates, accent folding, ANSI colour parsing, chunked item storage with a
per-chunk query cache, and a query history kept in a file.

## Installation

```
pip install fuzzfind
```

For the test suite:

```
pip install "fuzzfind[test]"
pytest
```

## Matching

Every matcher in `fuzzfind.algo` takes the same arguments:

```
matcher(case_sensitive, normalize, forward, text, pattern, with_pos, slab)
```

and returns a pair `(MatchResult, positions)`. `MatchResult` is a frozen
dataclass with `start`, `end` (exclusive) and `score`; its `matched` property
is false when nothing was found (start and end are then -1). `positions` is a
list of matched character indices when `with_pos` is true and the matcher
reports them (`fuzzy_match_v1` and `fuzzy_match_v2`), otherwise `None`.

The pattern must already be lower case when `case_sensitive` is false, and
already folded (see below) when `normalize` is true. `forward` decides which
occurrence wins when scores tie. `slab` is an integer bound on
`len(text) * len(pattern)` for `fuzzy_match_v2`; above it the greedy
`fuzzy_match_v1` is used instead. `None` means no bound.

```python
from fuzzfind.algo import fuzzy_match_v2, prefix_match

result, positions = fuzzy_match_v2(
    False, False, True, "foo bar baz", "fbb", True, None
)
print(result.start, result.end, result.score, sorted(positions))

result, _ = prefix_match(False, False, True, " fooBar", "foo", False, None)
print(result.start, result.end)  # 1 4
```

Available matchers:

- `fuzzy_match_v2` – highest-scoring fuzzy occurrence.
- `fuzzy_match_v1` – first fuzzy occurrence, shortened backwards.
- `exact_match_naive` – substring match preferring the best starting position.
- `prefix_match` / `suffix_match` – match at the start or end, ignoring
  surrounding whitespace unless the pattern itself starts or ends with it.
- `equal_match` – the whole text, without surrounding whitespace, equals the
  pattern.

`ascii_fuzzy_index(text, pattern, case_sensitive)` is a quick pre-check that
returns -1 when an ASCII text cannot contain the pattern.

### Scoring

`fuzzfind.scoring` holds the scoring rules: `CharClass`, `char_class_of`,
`bonus_for`, `bonus_at` and `calculate_score`. The bonus scheme is chosen with
`init_scheme("default")`, `init_scheme("path")` or `init_scheme("history")`;
any other name raises `ValueError`. `scheme()` returns the `Scheme` in effect.
The scheme is module-wide state.

## Accent folding

```python
from fuzzfind.normalize import normalize_rune, normalize_runes

normalize_runes("Danço")  # "Danco"
normalize_rune("é")       # "e"
```

Accented Latin letters and Cyrillic letters are folded to plain ASCII letters;
everything else is left unchanged.

## ANSI colours

```python
from fuzzfind.ansi import extract_color

text, offsets, state = extract_color("hello \x1b[34;45;1mworld", None, None)
# text == "hello world"
# offsets[0].start == 6, offsets[0].end == 11
# state.fg == 4, state.bg == 5
```

`extract_color(text, state, proc)` strips escape sequences and returns the
plain text, a list of `AnsiOffset` (or `None` when nothing is coloured) and the
final `AnsiState`, which can be passed in for the next line. The optional
`proc` is called with each plain segment and the state in effect; if it returns
false, `("", None, None)` is returned. `AnsiState.to_string()` renders a state
back to an escape sequence. Lower-level helpers: `next_ansi_escape_sequence`,
`interpret_code`, `parse_ansi_code` and `to_ansi_string`. Attributes are the
`Attr` flags.

## Items, chunks and cache

- `fuzzfind.item.Item` holds a line's searchable `text`, its `index`, its
  colours and optionally the original line; `as_string(strip_ansi)` returns the
  original line, with or without escape sequences.
- `fuzzfind.chunklist.ChunkList(trans)` collects items in chunks of
  `CHUNK_SIZE` (100). `trans` builds an `Item` from a line or returns `None` to
  reject it. `push`, `clear` and `snapshot()` (a copy unaffected by later
  pushes, together with the item count) are thread-safe. `count_items(chunks)`
  counts the items in a list of chunks.
- `fuzzfind.cache.ChunkCache` caches query results per full chunk: `add`,
  `lookup` for an exact key, and `search` for the longest cached prefix or
  suffix of a key. Empty keys, partial chunks and result lists longer than
  `QUERY_CACHE_MAX` are not cached.

`fuzzfind.constants` holds these limits and timings, the `EventType` enum and
the `ExitCode` enum.

## History

```python
from fuzzfind.history import History, HistoryError

history = History("/tmp/queries", 1000)
history.append("foo")
history.previous()  # "foo"
history.next()      # ""
```

The file is created (mode 0600) if missing. `append` skips empty lines, keeps at
most `max_size` entries and rewrites the file. `override` changes the entry
under the cursor in memory only. A file that cannot be read or created raises
`HistoryError`.

## What this package does not do

There is no command-line program and no interactive screen: the package does
not read input from a command or standard input, run searches across threads,
merge and sort results, or draw a terminal interface. It provides the matching,
colour, storage and history pieces such a program would be built on.