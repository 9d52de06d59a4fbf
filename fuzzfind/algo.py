"""Fuzzy, exact, prefix, suffix and equality matching of a pattern in a text.

Every match function assumes that ``pattern`` is already lowercase when
``case_sensitive`` is false and already normalized when ``normalize`` is true.
Each returns ``(MatchResult, positions)``; ``positions`` is a list of matched
character indices when requested and supported, otherwise None.

The ``slab`` argument bounds the size of the score matrix used by
:func:`fuzzy_match_v2`: when ``len(text) * len(pattern)`` exceeds it, the
greedy :func:`fuzzy_match_v1` is used instead. None means no bound.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Optional

from fuzzfind.normalize import normalize_rune
from fuzzfind.scoring import (
    BONUS_BOUNDARY,
    BONUS_CONSECUTIVE,
    BONUS_FIRST_CHAR_MULTIPLIER,
    SCORE_GAP_EXTENSION,
    SCORE_GAP_START,
    SCORE_MATCH,
    CharClass,
    bonus_at,
    bonus_for,
    calculate_score,
    char_class_of,
    scheme,
)

_LATIN1_SPACES = "\t\n\v\f\r \x85\xa0"


@dataclass(frozen=True)
class MatchResult:
    """Start and end (exclusive) character offsets of a match and its score."""

    start: int
    end: int
    score: int

    @property
    def matched(self) -> bool:
        return self.start >= 0


_NO_MATCH = MatchResult(-1, -1, 0)


def _is_space(char: str) -> bool:
    if ord(char) <= 0xFF:
        return char in _LATIN1_SPACES
    return unicodedata.category(char) in ("Zs", "Zl", "Zp")


def _leading_whitespaces(text: str) -> int:
    count = 0
    for char in text:
        if not _is_space(char):
            break
        count += 1
    return count


def _trailing_whitespaces(text: str) -> int:
    count = 0
    for char in reversed(text):
        if not _is_space(char):
            break
        count += 1
    return count


def _lower(char: str) -> str:
    """Lowercase one character, always returning exactly one character."""
    if "A" <= char <= "Z":
        return chr(ord(char) + 32)
    if ord(char) < 128:
        return char
    lowered = char.lower()
    return lowered[0] if lowered else char


def _fold(char: str, case_sensitive: bool, normalize: bool) -> str:
    if not case_sensitive:
        char = _lower(char)
    if normalize:
        char = normalize_rune(char)
    return char


def _index_at(index: int, size: int, forward: bool) -> int:
    return index if forward else size - index - 1


def _try_skip(text: str, case_sensitive: bool, char: str, start: int) -> int:
    idx = text.find(char, start)
    if idx == start:
        return start
    if not case_sensitive and "a" <= char <= "z":
        end = idx if idx >= 0 else len(text)
        upper_idx = text.find(char.upper(), start, end)
        if upper_idx >= 0:
            idx = upper_idx
    return idx


def ascii_fuzzy_index(text: str, pattern: str, case_sensitive: bool) -> int:
    """Quick pre-check for ASCII text.

    Returns -1 when ``pattern`` cannot occur in ``text``, otherwise an index
    one before the first possible match (0 when it cannot be determined).
    """
    if not text.isascii():
        return 0
    if not pattern.isascii():
        return -1
    first_idx = 0
    idx = 0
    for pidx, pchar in enumerate(pattern):
        idx = _try_skip(text, case_sensitive, pchar, idx)
        if idx < 0:
            return -1
        if pidx == 0 and idx > 0:
            first_idx = idx - 1
        idx += 1
    return first_idx


def fuzzy_match_v2(case_sensitive, normalize, forward, text, pattern, with_pos, slab):
    """Find the highest-scoring fuzzy occurrence of ``pattern`` in ``text``."""
    m = len(pattern)
    if m == 0:
        return MatchResult(0, 0, 0), ([] if with_pos else None)
    n = len(text)
    if slab is not None and n * m > slab:
        return fuzzy_match_v1(case_sensitive, normalize, forward, text, pattern, with_pos, slab)

    # Phase 1: quick rejection and a starting point for ASCII text.
    idx = ascii_fuzzy_index(text, pattern, case_sensitive)
    if idx < 0:
        return _NO_MATCH, None

    h0 = [0] * n
    c0 = [0] * n
    bonuses = [0] * n
    first = [0] * m
    chars = list(text)

    # Phase 2: bonus of each position and scores for the first pattern character.
    max_score, max_score_pos = 0, 0
    pidx, last_idx = 0, 0
    pchar0 = pchar = pattern[0]
    prev_h0 = 0
    prev_class = scheme().initial_char_class
    in_gap = False
    for col, char in enumerate(text[idx:], start=idx):
        char_class = char_class_of(char)
        if not case_sensitive and char_class == CharClass.UPPER:
            char = _lower(char)
        if normalize and ord(char) >= 128:
            char = normalize_rune(char)

        chars[col] = char
        bonus = bonus_for(prev_class, char_class)
        bonuses[col] = bonus
        prev_class = char_class

        if char == pchar:
            if pidx < m:
                first[pidx] = col
                pidx += 1
                pchar = pattern[min(pidx, m - 1)]
            last_idx = col

        if char == pchar0:
            score = SCORE_MATCH + bonus * BONUS_FIRST_CHAR_MULTIPLIER
            h0[col] = score
            c0[col] = 1
            if m == 1 and (forward and score > max_score or not forward and score >= max_score):
                max_score, max_score_pos = score, col
                if forward and bonus >= BONUS_BOUNDARY:
                    break
            in_gap = False
        else:
            gap = SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            h0[col] = max(prev_h0 + gap, 0)
            c0[col] = 0
            in_gap = True
        prev_h0 = h0[col]

    if pidx != m:
        return _NO_MATCH, None
    if m == 1:
        result = MatchResult(max_score_pos, max_score_pos + 1, max_score)
        return result, ([max_score_pos] if with_pos else None)

    # Phase 3: fill in the score matrix; omissions are not allowed.
    f0 = first[0]
    width = last_idx - f0 + 1
    scores = [0] * (width * m)
    scores[:width] = h0[f0:last_idx + 1]
    consec = [0] * (width * m)
    consec[:width] = c0[f0:last_idx + 1]

    for pidx in range(1, m):
        f = first[pidx]
        pchar = pattern[pidx]
        row = pidx * width
        in_gap = False
        scores[row + f - f0 - 1] = 0
        for col in range(f, last_idx + 1):
            j = col - f0
            char = chars[col]
            gap = SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            s2 = scores[row + j - 1] + gap
            s1 = 0
            consecutive = 0
            if char == pchar:
                diag = row - width + j - 1
                s1 = scores[diag] + SCORE_MATCH
                b = bonuses[col]
                consecutive = consec[diag] + 1
                if consecutive > 1:
                    fb = bonuses[col - consecutive + 1]
                    if b >= BONUS_BOUNDARY and b > fb:
                        consecutive = 1
                    else:
                        b = max(b, BONUS_CONSECUTIVE, fb)
                if s1 + b < s2:
                    s1 += bonuses[col]
                    consecutive = 0
                else:
                    s1 += b
            consec[row + j] = consecutive

            in_gap = s1 < s2
            score = max(s1, s2, 0)
            if pidx == m - 1 and (forward and score > max_score or not forward and score >= max_score):
                max_score, max_score_pos = score, col
            scores[row + j] = score

    # Phase 4: backtrace to find the matched positions.
    positions = [] if with_pos else None
    j = f0
    if with_pos:
        i = m - 1
        j = max_score_pos
        prefer_match = True
        while True:
            base = i * width
            j0 = j - f0
            s = scores[base + j0]
            s1 = s2 = 0
            if i > 0 and j >= first[i]:
                s1 = scores[base - width + j0 - 1]
            if j > first[i]:
                s2 = scores[base + j0 - 1]
            if s > s1 and (s > s2 or s == s2 and prefer_match):
                positions.append(j)
                if i == 0:
                    break
                i -= 1
            below = base + width + j0 + 1
            prefer_match = consec[base + j0] > 1 or (below < len(consec) and consec[below] > 0)
            j -= 1
    return MatchResult(j, max_score_pos + 1, max_score), positions


def fuzzy_match_v1(case_sensitive, normalize, forward, text, pattern, with_pos, slab):
    """Find the first fuzzy occurrence of ``pattern`` and shorten it backwards."""
    if not pattern:
        return MatchResult(0, 0, 0), None
    if ascii_fuzzy_index(text, pattern, case_sensitive) < 0:
        return _NO_MATCH, None

    pidx = 0
    sidx = -1
    eidx = -1
    n = len(text)
    lp = len(pattern)

    for index in range(n):
        char = _fold(text[_index_at(index, n, forward)], case_sensitive, normalize)
        if char == pattern[_index_at(pidx, lp, forward)]:
            if sidx < 0:
                sidx = index
            pidx += 1
            if pidx == lp:
                eidx = index + 1
                break

    if sidx < 0 or eidx < 0:
        return _NO_MATCH, None

    pidx -= 1
    for index in range(eidx - 1, sidx - 1, -1):
        char = _fold(text[_index_at(index, n, forward)], case_sensitive, False)
        if char == pattern[_index_at(pidx, lp, forward)]:
            pidx -= 1
            if pidx < 0:
                sidx = index
                break

    if not forward:
        sidx, eidx = n - eidx, n - sidx

    score, positions = calculate_score(case_sensitive, normalize, text, pattern, sidx, eidx, with_pos)
    return MatchResult(sidx, eidx, score), positions


def exact_match_naive(case_sensitive, normalize, forward, text, pattern, with_pos, slab):
    """Find the occurrence of ``pattern`` as a substring with the best starting bonus."""
    if not pattern:
        return MatchResult(0, 0, 0), None
    n = len(text)
    lp = len(pattern)
    if n < lp:
        return _NO_MATCH, None
    if ascii_fuzzy_index(text, pattern, case_sensitive) < 0:
        return _NO_MATCH, None

    pidx = 0
    best_pos, bonus, best_bonus = -1, 0, -1
    index = 0
    while index < n:
        text_idx = _index_at(index, n, forward)
        char = _fold(text[text_idx], case_sensitive, normalize)
        pattern_idx = _index_at(pidx, lp, forward)
        if pattern[pattern_idx] == char:
            if pattern_idx == 0:
                bonus = bonus_at(text, text_idx)
            pidx += 1
            if pidx == lp:
                if bonus > best_bonus:
                    best_pos, best_bonus = index, bonus
                if bonus >= BONUS_BOUNDARY:
                    break
                index -= pidx - 1
                pidx, bonus = 0, 0
        else:
            index -= pidx
            pidx, bonus = 0, 0
        index += 1

    if best_pos < 0:
        return _NO_MATCH, None
    if forward:
        sidx, eidx = best_pos - lp + 1, best_pos + 1
    else:
        sidx, eidx = n - (best_pos + 1), n - (best_pos - lp + 1)
    score, _ = calculate_score(case_sensitive, normalize, text, pattern, sidx, eidx, False)
    return MatchResult(sidx, eidx, score), None


def prefix_match(case_sensitive, normalize, forward, text, pattern, with_pos, slab):
    """Match ``pattern`` at the start of ``text``, ignoring leading whitespace."""
    if not pattern:
        return MatchResult(0, 0, 0), None
    trimmed = 0 if _is_space(pattern[0]) else _leading_whitespaces(text)
    lp = len(pattern)
    if len(text) - trimmed < lp:
        return _NO_MATCH, None
    for char, pchar in zip(text[trimmed:trimmed + lp], pattern):
        if _fold(char, case_sensitive, normalize) != pchar:
            return _NO_MATCH, None
    score, _ = calculate_score(case_sensitive, normalize, text, pattern, trimmed, trimmed + lp, False)
    return MatchResult(trimmed, trimmed + lp, score), None


def suffix_match(case_sensitive, normalize, forward, text, pattern, with_pos, slab):
    """Match ``pattern`` at the end of ``text``, ignoring trailing whitespace."""
    trimmed = len(text)
    if not pattern or not _is_space(pattern[-1]):
        trimmed -= _trailing_whitespaces(text)
    if not pattern:
        return MatchResult(trimmed, trimmed, 0), None
    lp = len(pattern)
    diff = trimmed - lp
    if diff < 0:
        return _NO_MATCH, None
    for char, pchar in zip(text[diff:trimmed], pattern):
        if _fold(char, case_sensitive, normalize) != pchar:
            return _NO_MATCH, None
    score, _ = calculate_score(case_sensitive, normalize, text, pattern, diff, trimmed, False)
    return MatchResult(diff, trimmed, score), None


def equal_match(case_sensitive, normalize, forward, text, pattern, with_pos, slab):
    """Match when ``text``, without surrounding whitespace, equals ``pattern``."""
    lp = len(pattern)
    if lp == 0:
        return _NO_MATCH, None
    trimmed = 0 if _is_space(pattern[0]) else _leading_whitespaces(text)
    trimmed_end = 0 if _is_space(pattern[-1]) else _trailing_whitespaces(text)
    if len(text) - trimmed - trimmed_end != lp:
        return _NO_MATCH, None

    body = text[trimmed:len(text) - trimmed_end]
    if normalize:
        match = all(
            normalize_rune(pchar) == normalize_rune(_fold(char, case_sensitive, False))
            for char, pchar in zip(body, pattern)
        )
    else:
        match = (body if case_sensitive else body.lower()) == pattern
    if not match:
        return _NO_MATCH, None
    white = scheme().bonus_boundary_white
    score = (SCORE_MATCH + white) * lp + (BONUS_FIRST_CHAR_MULTIPLIER - 1) * white
    return MatchResult(trimmed, trimmed + lp, score), None