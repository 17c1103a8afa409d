from __future__ import annotations

from mdpad_engine.document import SourceText, Span
from mdpad_engine.search import highlight_matches


def test_current_match_gets_its_own_class() -> None:
    markup = highlight_matches("a<b\nab", [Span(0, 1), Span(4, 5)], 1)

    assert markup == (
        '<span class="md-match">a</span>&lt;b<br>'
        '<span class="md-match-current">a</span>b'
    )


def test_text_without_matches_is_escaped() -> None:
    source = SourceText.from_text("x & y > z")

    assert highlight_matches(source, ()) == "x &amp; y &gt; z"


def test_invalid_spans_are_skipped() -> None:
    markup = highlight_matches("abc", [Span(0, 2), Span(1, 3), Span(2, 9)])

    assert markup == '<span class="md-match">ab</span>c'
