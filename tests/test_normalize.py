import pytest

from fuzzfind.normalize import normalize_rune, normalize_runes


@pytest.mark.parametrize(
    "char, expected",
    [
        ("\u00f3", "o"),
        ("\u00e7", "c"),
        ("\u00df", "s"),
        ("\u2184", "c"),
        ("\u1eac", "A"),
        ("Я", "a"),
        ("ю", "u"),
        ("\u0251", "a"),
    ],
)
def test_known_folds(char, expected):
    assert normalize_rune(char) == expected


def test_sentence_from_matching_examples():
    assert normalize_runes("Só Danço Samba") == "So Danco Samba"
    assert normalize_runes("Danço") == "Danco"


@pytest.mark.parametrize("char", ["a", "Z", "0", " ", "\u00bf", "\u2185", "椙", "\U0001f600"])
def test_characters_outside_table_unchanged(char):
    assert normalize_rune(char) == char


def test_ascii_text_unchanged():
    text = "hello World 123 /-_"
    assert normalize_runes(text) == text


def test_runes_agree_with_single_rune():
    text = "".join(chr(c) for c in range(0x00B0, 0x0300)) + "ẮếỢựЙщ"
    assert normalize_runes(text) == "".join(normalize_rune(c) for c in text)


def test_length_preserved():
    text = "Ắấ Ếề Ốớ Ứừ ЙЦУКЕН"
    assert len(normalize_runes(text)) == len(text)


def test_every_fold_is_ascii_letter():
    for code in range(0x00C0, 0x2185):
        char = chr(code)
        folded = normalize_rune(char)
        assert folded == char or (folded.isascii() and folded.isalpha())


def test_idempotent():
    text = "".join(chr(c) for c in range(0x00C0, 0x2185))
    once = normalize_runes(text)
    assert normalize_runes(once) == once


def test_input_not_modified():
    text = "Danço"
    result = normalize_runes(text)
    assert result == "Danco"
    assert text == "Danço"


@pytest.mark.parametrize("bad", ["", "ab"])
def test_normalize_rune_requires_single_character(bad):
    with pytest.raises(ValueError):
        normalize_rune(bad)


def test_empty_text():
    assert normalize_runes("") == ""