"""Query history backed by a file."""

from __future__ import annotations

import os


class HistoryError(Exception):
    """The history file cannot be used."""


def _write(path: str, content: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)


class History:
    """Lines of history with a cursor; the last line is the one being edited."""

    def __init__(self, path: str, max_size: int):
        self.path = path
        self.max_size = max_size
        try:
            with open(path, encoding="utf-8", newline="") as handle:
                data = handle.read()
        except FileNotFoundError:
            data = ""
            try:
                _write(path, data)
            except OSError as exc:
                raise self._error(exc) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise self._error(exc) from exc

        lines = data.strip("\n").split("\n")
        if lines[-1]:
            lines.append("")
        self.lines = lines
        self.modified: dict[int, str] = {}
        self.cursor = len(lines) - 1

    def _error(self, exc: Exception) -> HistoryError:
        if isinstance(exc, PermissionError):
            return HistoryError(f"permission denied: {self.path}")
        return HistoryError(f"invalid history file: {exc}")

    def append(self, line: str) -> None:
        """Add a non-empty line, keep at most ``max_size`` entries and save the file."""
        if not line:
            return
        lines = self.lines[:-1] + [line]
        if len(lines) > self.max_size:
            lines = lines[len(lines) - self.max_size:]
        lines.append("")
        self.lines = lines
        _write(self.path, "\n".join(self.lines))

    def override(self, text: str) -> None:
        """Replace the entry under the cursor in memory only."""
        last = len(self.lines) - 1
        if self.cursor == last:
            self.lines[self.cursor] = text
        elif self.cursor < last:
            self.modified[self.cursor] = text

    def current(self) -> str:
        return self.modified.get(self.cursor, self.lines[self.cursor])

    def previous(self) -> str:
        if self.cursor > 0:
            self.cursor -= 1
        return self.current()

    def next(self) -> str:
        if self.cursor < len(self.lines) - 1:
            self.cursor += 1
        return self.current()