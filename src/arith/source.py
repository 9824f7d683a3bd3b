"""Source text with a line-start index for offset → line/column lookups."""

from __future__ import annotations

from bisect import bisect_right
from pathlib import Path

from arith.tokens import Position, Span


class SourceCode:
    """Owns the raw text and the sorted offsets at which each line begins.

    The table always starts with 0 and is strictly increasing; an offset
    belongs to the last line whose start is not greater than it. The offset
    just past the end of the text is valid so that spans can close there.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._line_starts = [0]
        for idx, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(idx + 1)

    @classmethod
    def from_file(cls, path: str | Path) -> SourceCode:
        """Read a UTF-8 file; OSError propagates to the caller."""
        return cls(Path(path).read_text(encoding="utf-8"))

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    @property
    def line_starts(self) -> tuple[int, ...]:
        return tuple(self._line_starts)

    def position(self, offset: int) -> Position:
        """Return the Position of an absolute character offset."""
        if offset < 0 or offset > len(self.text):
            raise ValueError(f"offset {offset} outside source of length {len(self.text)}")
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line], offset)

    def span(self, start: int, end: int) -> Span:
        return Span(self.position(start), self.position(end))

    def line(self, n: int) -> str:
        """Return the text of line *n* without its trailing newline."""
        if n < 0 or n >= len(self._line_starts):
            raise IndexError(f"line {n} out of range")
        start = self._line_starts[n]
        if n + 1 < len(self._line_starts):
            end = self._line_starts[n + 1] - 1
        else:
            end = len(self.text)
        return self.text[start:end].rstrip("\r")

    def text_range(self, start: int, end: int) -> str:
        """Return the text between two offsets."""
        if start < 0 or end > len(self.text) or end < start:
            raise ValueError(f"invalid range {start}..{end}")
        return self.text[start:end]
