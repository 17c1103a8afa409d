"""Immutable text snapshots and the offset spans that address them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Position = Tuple[int, int]  # (row, column)


@dataclass(frozen=True, slots=True, order=True)
class Span:
    """Half-open ``[start, end)`` character range into one snapshot."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @classmethod
    def caret(cls, offset: int) -> "Span":
        return cls(offset, offset)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True, slots=True)
class SourceText:
    """The document's plain text at one moment.

    Snapshots are never edited in place: every replacement returns a new
    snapshot with ``version`` bumped so stale match indexes can be detected.
    """

    text: str = ""
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "SourceText":
        return cls(text=normalize_newlines(text), version=version)

    def __len__(self) -> int:
        return len(self.text)

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self.text.split("\n"))

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    def contains(self, span: Span) -> bool:
        return span.end <= len(self.text)

    def slice(self, span: Span) -> str:
        return self.text[span.start : span.end]

    def replace_span(self, span: Span, replacement: str) -> "SourceText":
        text = self.text[: span.start] + replacement + self.text[span.end :]
        return SourceText(text=text, version=self.version + 1)

    def with_text(self, text: str) -> "SourceText":
        return SourceText(text=normalize_newlines(text), version=self.version + 1)

    def line_bounds(self, span: Span) -> Span:
        """Widen ``span`` to cover every full line it touches."""

        start = self.text.rfind("\n", 0, span.start) + 1
        end = self.text.find("\n", span.end)
        if end == -1:
            end = len(self.text)
        return Span(start, max(start, end))

    def offset_for(self, row: int, col: int) -> int:
        lines = self.lines
        row = max(0, min(row, len(lines) - 1))
        offset = sum(len(line) + 1 for line in lines[:row])
        return offset + max(0, min(col, len(lines[row])))

    def position_for(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self.text)))
        row = self.text.count("\n", 0, offset)
        line_start = self.text.rfind("\n", 0, offset) + 1
        return (row, offset - line_start)


__all__ = ["Position", "SourceText", "Span", "normalize_newlines"]
