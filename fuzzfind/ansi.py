"""ANSI escape sequence parsing and colour extraction."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Callable, Optional


class Attr(enum.IntFlag):
    """Text attributes."""

    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINE = enum.auto()
    BLINK = enum.auto()
    REVERSE = enum.auto()
    STRIKE_THROUGH = enum.auto()


_ATTR_CODES = (
    (Attr.BOLD, "1"),
    (Attr.DIM, "2"),
    (Attr.ITALIC, "3"),
    (Attr.UNDERLINE, "4"),
    (Attr.BLINK, "5"),
    (Attr.REVERSE, "7"),
    (Attr.STRIKE_THROUGH, "9"),
)


@dataclass
class AnsiState:
    """Colour state; -1 means the default colour."""

    fg: int = -1
    bg: int = -1
    attr: Attr = Attr(0)
    lbg: int = -1

    def colored(self) -> bool:
        return self.fg != -1 or self.bg != -1 or self.attr > 0 or self.lbg >= 0

    def to_string(self) -> str:
        """Return the escape sequence that reproduces this state."""
        if not self.colored():
            return ""
        parts = "".join(code + ";" for flag, code in _ATTR_CODES if self.attr & flag)
        parts += to_ansi_string(self.fg, 30) + to_ansi_string(self.bg, 40)
        return "\x1b[" + parts.removesuffix(";") + "m"


@dataclass
class AnsiOffset:
    """A colour applied to characters ``start`` up to ``end``."""

    start: int
    end: int
    color: AnsiState


def _same(state: AnsiState, other: Optional[AnsiState]) -> bool:
    if other is None:
        return not state.colored()
    return state == other


def to_ansi_string(color: int, offset: int) -> str:
    """Return the SGR parameters for ``color``, followed by ';'."""
    if color == -1:
        ret = str(offset + 9)
    elif color < 8:
        ret = str(offset + color)
    elif color < 16:
        ret = str(offset - 30 + 90 + color - 8)
    elif color < 256:
        ret = f"{offset + 8};5;{color}"
    elif color >= 1 << 24:
        r, g, b = (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF
        ret = f"{offset + 8};2;{r};{g};{b}"
    else:
        ret = ""
    return ret + ";"


def _is_print(char: str) -> bool:
    return " " <= char <= "~"


def _match_osc(text: str) -> int:
    i = 5
    n = len(text)
    while i < n and _is_print(text[i]):
        i += 1
    if i < n:
        if text[i] == "\x07":
            return i + 1
        if text[i] == "\x1b" and i < n - 1 and text[i + 1] == "\\":
            return i + 2
    return -1


def _match_control_sequence(text: str) -> int:
    for i in range(2, len(text)):
        c = text[i]
        if c in "0123456789;:?":
            continue
        if "a" <= c <= "z" or "A" <= c <= "Z" or c == "@":
            return i + 1
        return -1
    return -1


def next_ansi_escape_sequence(text: str) -> Optional[tuple[int, int]]:
    """Return ``(start, end)`` of the first escape sequence in ``text``, or None."""
    n = len(text)
    for i, c in enumerate(text):
        if c == "\x08":
            if i > 0 and text[i - 1] != "\n":
                return i - 1, i + 1
        elif c == "\x1b":
            if i + 2 < n and text[i + 1] in "\\[()":
                j = _match_control_sequence(text[i:])
                if j != -1:
                    return i, i + j
            if (
                i + 5 < n
                and text[i + 1] == "]"
                and "0" <= text[i + 2] <= "9"
                and text[i + 3] in ";:"
                and _is_print(text[i + 4])
            ):
                j = _match_osc(text[i:])
                if j != -1:
                    return i, i + j
            if i + 1 < n and text[i + 1] != "\n":
                return i, i + 2
        elif c in "\x0e\x0f":
            return i, i + 1
    return None


def extract_color(
    text: str,
    state: Optional[AnsiState],
    proc: Optional[Callable[[str, Optional[AnsiState]], bool]],
):
    """Strip escape sequences from ``text``.

    Returns ``(plain_text, offsets_or_None, final_state)``. If ``proc`` returns
    False for a segment, ``("", None, None)`` is returned.
    """
    offsets: list[AnsiOffset] = []
    if state is not None:
        offsets.append(AnsiOffset(0, 0, dataclasses.replace(state)))

    parts: list[str] = []
    prev_idx = 0
    rune_count = 0
    idx = 0
    while idx < len(text):
        found = next_ansi_escape_sequence(text[idx:])
        if found is None:
            break
        start = found[0] + idx
        idx += found[1]

        prev = text[prev_idx:start]
        if proc is not None and not proc(prev, state):
            return "", None, None
        prev_idx = idx

        if prev:
            rune_count += len(prev)
            parts.append(prev)

        new_state = interpret_code(text[start:idx], state)
        if not _same(new_state, state):
            if state is not None:
                offsets[-1].end = rune_count
            if new_state.colored():
                state = new_state
                offsets.append(AnsiOffset(rune_count, rune_count, dataclasses.replace(new_state)))
            else:
                state = None

    if prev_idx == 0:
        rest = trimmed = text
    else:
        rest = text[prev_idx:]
        parts.append(rest)
        trimmed = "".join(parts)
    if proc is not None:
        proc(rest, state)
    if offsets:
        if rest and state is not None:
            rune_count += len(rest)
            offsets[-1].end = rune_count
        return trimmed, offsets, state
    return trimmed, None, state


def parse_ansi_code(text: str, delimiter: Optional[str]):
    """Parse one numeric parameter; return ``(code, delimiter, remaining)``.

    ``code`` is -1 when the parameter is empty or not a non-negative integer.
    """
    remaining = ""
    if delimiter is None:
        i = text.find(";")
        if i < 0:
            i = text.find(":")
    else:
        i = text.find(delimiter)
    if i >= 0:
        delimiter = text[i]
        remaining = text[i + 1:]
        text = text[:i]
    if text and all("0" <= c <= "9" for c in text):
        return int(text), delimiter, remaining
    return -1, delimiter, remaining


def interpret_code(ansi_code: str, prev_state: Optional[AnsiState]) -> AnsiState:
    """Return the state after applying ``ansi_code`` to ``prev_state``."""
    state = AnsiState() if prev_state is None else dataclasses.replace(prev_state)
    if not (ansi_code.startswith("\x1b[") and ansi_code.endswith("m")):
        if prev_state is not None and ansi_code.endswith("0K"):
            state.lbg = prev_state.bg
        return state

    if len(ansi_code) <= 3:
        state.fg, state.bg, state.attr = -1, -1, Attr(0)
        return state
    code = ansi_code[2:-1]

    state256 = 0
    target = "fg"
    delimiter = None
    count = 0
    while code:
        num, delimiter, code = parse_ansi_code(code, delimiter)
        if num == -1:
            continue
        count += 1
        if state256 == 0:
            if num == 38:
                target, state256 = "fg", 1
            elif num == 48:
                target, state256 = "bg", 1
            elif num == 39:
                state.fg = -1
            elif num == 49:
                state.bg = -1
            elif num in (1, 2, 3, 4, 5, 7, 9):
                state.attr |= dict((int(c), f) for f, c in _ATTR_CODES)[num]
            elif num == 22:
                state.attr &= ~(Attr.BOLD | Attr.DIM)
            elif num == 23:
                state.attr &= ~Attr.ITALIC
            elif num == 24:
                state.attr &= ~Attr.UNDERLINE
            elif num == 25:
                state.attr &= ~Attr.BLINK
            elif num == 27:
                state.attr &= ~Attr.REVERSE
            elif num == 29:
                state.attr &= ~Attr.STRIKE_THROUGH
            elif num == 0:
                state.fg, state.bg, state.attr = -1, -1, Attr(0)
            elif 30 <= num <= 37:
                state.fg = num - 30
            elif 40 <= num <= 47:
                state.bg = num - 40
            elif 90 <= num <= 97:
                state.fg = num - 90 + 8
            elif 100 <= num <= 107:
                state.bg = num - 100 + 8
        elif state256 == 1:
            if num == 2:
                state256 = 10
            elif num == 5:
                state256 = 2
            else:
                state256 = 0
        elif state256 == 2:
            setattr(state, target, num)
            state256 = 0
        elif state256 == 10:
            setattr(state, target, (1 << 24) | (num << 16))
            state256 = 11
        elif state256 == 11:
            setattr(state, target, getattr(state, target) | (num << 8))
            state256 = 12
        elif state256 == 12:
            setattr(state, target, getattr(state, target) | num)
            state256 = 0

    if count == 0:
        state.fg, state.bg, state.attr = -1, -1, Attr(0)
    if state256 > 0:
        setattr(state, target, -1)
    return state