"""Produce the ordered, non-overlapping match spans for a query."""

from __future__ import annotations

import re
from typing import Iterator, List, Tuple

from mdpad_engine.document.source import Span

from .patterns import CompiledQuery

# Match spans are ordinary snapshot spans; the alias keeps call sites readable.
MatchSpan = Span


def iter_regex_matches(
    text: str, pattern: re.Pattern[str], *, sticky: bool = False
) -> Iterator[re.Match[str]]:
    """Yield successive global matches of ``pattern`` over ``text``.

    After a zero-length match the scan position moves one character forward,
    so every step either consumes text or advances, and the loop ends once the
    position passes the end of the text.
    """

    position = 0
    length = len(text)
    while position <= length:
        if sticky:
            match = pattern.match(text, position)
        else:
            match = pattern.search(text, position)
        if match is None:
            return
        yield match
        start, end = match.span()
        position = end if end > start else end + 1


def scan_regex(
    text: str, pattern: re.Pattern[str], *, sticky: bool = False
) -> Tuple[MatchSpan, ...]:
    return tuple(
        MatchSpan(*match.span()) for match in iter_regex_matches(text, pattern, sticky=sticky)
    )


def scan_literal(text: str, needle: str, *, case_sensitive: bool) -> Tuple[MatchSpan, ...]:
    if not needle:
        return ()
    if not case_sensitive:
        folded_text, folded_needle = text.lower(), needle.lower()
        if len(folded_text) != len(text) or len(folded_needle) != len(needle):
            # Lowering changed some lengths ("İ"), so folded offsets would drift.
            return scan_regex(text, re.compile(re.escape(needle), re.IGNORECASE))
        text, needle = folded_text, folded_needle

    spans: List[MatchSpan] = []
    width = len(needle)
    start = text.find(needle)
    while start != -1:
        spans.append(MatchSpan(start, start + width))
        start = text.find(needle, start + width)
    return tuple(spans)


def scan(text: str, compiled: CompiledQuery) -> Tuple[MatchSpan, ...]:
    if not compiled.query:
        return ()
    if compiled.pattern is not None:
        return scan_regex(text, compiled.pattern, sticky=compiled.sticky)
    return scan_literal(text, compiled.query, case_sensitive=compiled.options.case_sensitive)


__all__ = ["MatchSpan", "iter_regex_matches", "scan", "scan_literal", "scan_regex"]
