"""Character classes, position bonuses and match scoring."""

from __future__ import annotations

import enum
import os
import unicodedata
from dataclasses import dataclass

from fuzzfind.normalize import normalize_rune

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

# Cancelled out once the gap between acronym letters grows past about 8 characters.
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_WHITE_CHARS = " \t\n\v\f\r\x85\xa0"


class CharClass(enum.IntEnum):
    """Class of a character; the order matters for bonus computation."""

    WHITE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


@dataclass(frozen=True)
class Scheme:
    """Scoring parameters that depend on the selected scheme."""

    name: str
    bonus_boundary_white: int
    bonus_boundary_delimiter: int
    delimiter_chars: str
    initial_char_class: CharClass


def _path_delimiters() -> str:
    return "/" if os.sep == "/" else os.sep + "/"


_SCHEMES = {
    "default": lambda: Scheme("default", BONUS_BOUNDARY + 2, BONUS_BOUNDARY + 1,
                              "/,:;|", CharClass.WHITE),
    "path": lambda: Scheme("path", BONUS_BOUNDARY, BONUS_BOUNDARY + 1,
                           _path_delimiters(), CharClass.DELIMITER),
    "history": lambda: Scheme("history", BONUS_BOUNDARY, BONUS_BOUNDARY,
                              "/,:;|", CharClass.WHITE),
}

_current: Scheme = _SCHEMES["default"]()


def scheme() -> Scheme:
    """Return the scheme currently in effect."""
    return _current


def init_scheme(name: str) -> Scheme:
    """Select a scoring scheme by name; raise ValueError for an unknown one."""
    global _current
    try:
        factory = _SCHEMES[name]
    except KeyError:
        raise ValueError(f"unknown scoring scheme: {name!r}") from None
    _current = factory()
    return _current


def _char_class_of_ascii(char: str) -> CharClass:
    if "a" <= char <= "z":
        return CharClass.LOWER
    if "A" <= char <= "Z":
        return CharClass.UPPER
    if "0" <= char <= "9":
        return CharClass.NUMBER
    if char in _WHITE_CHARS:
        return CharClass.WHITE
    if char in _current.delimiter_chars:
        return CharClass.DELIMITER
    return CharClass.NON_WORD


def _char_class_of_non_ascii(char: str) -> CharClass:
    category = unicodedata.category(char)
    if category == "Ll":
        return CharClass.LOWER
    if category == "Lu":
        return CharClass.UPPER
    if category.startswith("N"):
        return CharClass.NUMBER
    if category.startswith("L"):
        return CharClass.LETTER
    if char.isspace():
        return CharClass.WHITE
    if char in _current.delimiter_chars:
        return CharClass.DELIMITER
    return CharClass.NON_WORD


def char_class_of(char: str) -> CharClass:
    """Return the class of a single character."""
    if ord(char) < 128:
        return _char_class_of_ascii(char)
    return _char_class_of_non_ascii(char)


def bonus_for(prev_class: CharClass, char_class: CharClass) -> int:
    """Return the bonus for a character of ``char_class`` following ``prev_class``."""
    if char_class > CharClass.NON_WORD:
        if prev_class == CharClass.WHITE:
            return _current.bonus_boundary_white
        if prev_class == CharClass.DELIMITER:
            return _current.bonus_boundary_delimiter
        if prev_class == CharClass.NON_WORD:
            return BONUS_BOUNDARY
    if (prev_class == CharClass.LOWER and char_class == CharClass.UPPER) or (
        prev_class != CharClass.NUMBER and char_class == CharClass.NUMBER
    ):
        return BONUS_CAMEL123
    if char_class == CharClass.NON_WORD:
        return BONUS_NON_WORD
    if char_class == CharClass.WHITE:
        return _current.bonus_boundary_white
    return 0


def bonus_at(text: str, idx: int) -> int:
    """Return the bonus for the character of ``text`` at ``idx``."""
    if idx == 0:
        return _current.bonus_boundary_white
    return bonus_for(char_class_of(text[idx - 1]), char_class_of(text[idx]))


def _to_lower(char: str) -> str:
    """Lowercase a single character, keeping it a single character."""
    if "A" <= char <= "Z":
        return chr(ord(char) + 32)
    if ord(char) < 128:
        return char
    lowered = char.lower()
    return lowered if len(lowered) == 1 else lowered[0]


def calculate_score(case_sensitive, normalize, text, pattern, sidx, eidx, with_pos):
    """Score ``pattern`` matched inside ``text[sidx:eidx]``.

    Returns ``(score, positions)``; positions is None unless ``with_pos``.
    """
    pidx = 0
    score = 0
    in_gap = False
    consecutive = 0
    first_bonus = 0
    positions = [] if with_pos else None
    prev_class = _current.initial_char_class
    if sidx > 0:
        prev_class = char_class_of(text[sidx - 1])
    for idx in range(sidx, eidx):
        char = text[idx]
        char_class = char_class_of(char)
        if not case_sensitive:
            char = _to_lower(char)
        if normalize:
            char = normalize_rune(char)
        if pidx < len(pattern) and char == pattern[pidx]:
            if positions is not None:
                positions.append(idx)
            score += SCORE_MATCH
            bonus = bonus_for(prev_class, char_class)
            if consecutive == 0:
                first_bonus = bonus
            else:
                if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)
            score += bonus * BONUS_FIRST_CHAR_MULTIPLIER if pidx == 0 else bonus
            in_gap = False
            consecutive += 1
            pidx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0
        prev_class = char_class
    return score, positions