"""Markup view of the source text with match spans wrapped for display."""

from __future__ import annotations

from typing import List, Sequence

from mdpad_engine.document.source import SourceText, Span
from mdpad_engine.render.html import escape_html

MATCH_CLASS = "md-match"
CURRENT_CLASS = "md-match-current"


def _escape(segment: str) -> str:
    return escape_html(segment).replace("\n", "<br>")


def highlight_matches(
    source: SourceText | str, spans: Sequence[Span], current_index: int = -1
) -> str:
    """Escape ``source`` and wrap each span; the current one gets its own class.

    Spans that fall outside the text or overlap an earlier span are skipped.
    """

    text = source.text if isinstance(source, SourceText) else str(source)
    pieces: List[str] = []
    cursor = 0
    for index, span in enumerate(spans):
        if span.start < cursor or span.end > len(text):
            continue
        css = CURRENT_CLASS if index == current_index else MATCH_CLASS
        pieces.append(_escape(text[cursor : span.start]))
        pieces.append(f'<span class="{css}">{_escape(text[span.start : span.end])}</span>')
        cursor = span.end
    pieces.append(_escape(text[cursor:]))
    return "".join(pieces)


__all__ = ["CURRENT_CLASS", "MATCH_CLASS", "highlight_matches"]
