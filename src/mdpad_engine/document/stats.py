"""Word, character and line counts for the status bar."""

from __future__ import annotations

from dataclasses import dataclass

from .source import SourceText


@dataclass(frozen=True, slots=True)
class DocumentStats:
    words: int
    characters: int
    lines: int

    def describe(self) -> str:
        return f"Words: {self.words}  Characters: {self.characters}  Lines: {self.lines}"


def compute_stats(source: SourceText) -> DocumentStats:
    stripped = source.text.strip()
    return DocumentStats(
        words=len(stripped.split()) if stripped else 0,
        characters=len(source.text),
        lines=source.line_count,
    )
