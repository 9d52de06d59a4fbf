import pytest

from fuzzfind.scoring import (
    BONUS_BOUNDARY,
    BONUS_CAMEL123,
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
    init_scheme,
    scheme,
)


@pytest.fixture(autouse=True)
def default_scheme():
    init_scheme("default")
    yield
    init_scheme("default")


def test_default_scheme_values():
    s = scheme()
    assert s.bonus_boundary_white == BONUS_BOUNDARY + 2
    assert s.bonus_boundary_delimiter == BONUS_BOUNDARY + 1
    assert s.initial_char_class == CharClass.WHITE


def test_path_and_history_schemes():
    s = init_scheme("path")
    assert s.bonus_boundary_white == BONUS_BOUNDARY
    assert "/" in s.delimiter_chars
    assert s.initial_char_class == CharClass.DELIMITER
    assert scheme() is s
    h = init_scheme("history")
    assert h.bonus_boundary_delimiter == BONUS_BOUNDARY


def test_unknown_scheme():
    with pytest.raises(ValueError):
        init_scheme("nope")


@pytest.mark.parametrize(
    "char, expected",
    [
        ("a", CharClass.LOWER),
        ("Z", CharClass.UPPER),
        ("5", CharClass.NUMBER),
        (" ", CharClass.WHITE),
        ("/", CharClass.DELIMITER),
        ("-", CharClass.NON_WORD),
        ("é", CharClass.LOWER),
        ("É", CharClass.UPPER),
        ("٣", CharClass.NUMBER),
        ("中", CharClass.LETTER),
        ("\u3000", CharClass.WHITE),
    ],
)
def test_char_class_of(char, expected):
    assert char_class_of(char) == expected


def test_bonus_for():
    white = scheme().bonus_boundary_white
    assert bonus_for(CharClass.WHITE, CharClass.LOWER) == white
    assert bonus_for(CharClass.NON_WORD, CharClass.LOWER) == BONUS_BOUNDARY
    assert bonus_for(CharClass.LOWER, CharClass.UPPER) == BONUS_CAMEL123
    assert bonus_for(CharClass.LOWER, CharClass.NUMBER) == BONUS_CAMEL123
    assert bonus_for(CharClass.LOWER, CharClass.LOWER) == 0


def test_bonus_at():
    white = scheme().bonus_boundary_white
    assert bonus_at("foo bar", 0) == white
    assert bonus_at("foo bar", 4) == white
    assert bonus_at("foo bar", 1) == 0


def test_calculate_score_camel():
    score, pos = calculate_score(False, False, "fooBarbaz1", "obz", 2, 9, True)
    assert score == SCORE_MATCH * 3 + BONUS_CAMEL123 + SCORE_GAP_START + SCORE_GAP_EXTENSION * 3
    assert pos == [2, 3, 8]


def test_calculate_score_whitespace_boundaries():
    white = scheme().bonus_boundary_white
    score, pos = calculate_score(False, False, "foo bar baz", "fbb", 0, 9, False)
    assert score == (
        SCORE_MATCH * 3 + white * BONUS_FIRST_CHAR_MULTIPLIER + white * 2
        + 2 * SCORE_GAP_START + 4 * SCORE_GAP_EXTENSION
    )
    assert pos is None


def test_calculate_score_delimiter():
    delim = scheme().bonus_boundary_delimiter
    score, _ = calculate_score(False, False, "/man1/zshcompctl.1", "zshc", 6, 10, False)
    assert score == SCORE_MATCH * 4 + delim * BONUS_FIRST_CHAR_MULTIPLIER + delim * 3


def test_calculate_score_consecutive():
    score, _ = calculate_score(False, False, "/AutomatorDocument.icns", "rdoc", 9, 13, False)
    assert score == SCORE_MATCH * 4 + BONUS_CAMEL123 + BONUS_CONSECUTIVE * 2


def test_calculate_score_normalized():
    score, pos = calculate_score(False, True, "Danço", "danco", 0, 5, True)
    assert score == 140
    assert pos == [0, 1, 2, 3, 4]