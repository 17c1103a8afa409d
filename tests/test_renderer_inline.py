from __future__ import annotations

import re

import pytest

from mdpad_engine.render import ESCAPABLE, extract_escapes, render, restore_escapes


def test_emphasis_variants() -> None:
    markup = render("Some **bold** and *it* and ~~del~~ and ***both***")

    assert markup == (
        "<p>Some <strong>bold</strong> and <em>it</em> and <del>del</del>"
        " and <strong><em>both</em></strong></p>"
    )


def test_inline_code_shields_markers() -> None:
    assert render("run `a*b*` now") == "<p>run <code>a*b*</code> now</p>"


def test_inline_code_is_escaped() -> None:
    assert render("`<br>`") == "<p><code>&lt;br&gt;</code></p>"


def test_link_with_emphasis_in_label() -> None:
    assert render("[**site**](https://x.io)") == (
        '<p><a href="https://x.io"><strong>site</strong></a></p>'
    )


def test_link_title() -> None:
    assert render('[a](b.html "Tip")') == '<p><a href="b.html" title="Tip">a</a></p>'


def test_image_before_link() -> None:
    assert render('![alt](a.png "T")') == '<p><img src="a.png" alt="alt" title="T"></p>'


def test_image_inside_link() -> None:
    assert render("[![i](a.png)](https://x.io)") == (
        '<p><a href="https://x.io"><img src="a.png" alt="i"></a></p>'
    )


def test_bare_url_is_autolinked_without_trailing_punctuation() -> None:
    assert render("see https://example.com.") == (
        '<p>see <a href="https://example.com">https://example.com</a>.</p>'
    )


def test_url_keeps_semicolon_that_closes_an_entity() -> None:
    assert render("go https://x.io/a&") == (
        '<p>go <a href="https://x.io/a&amp;">https://x.io/a&amp;</a></p>'
    )
    assert render("see https://x.io/page;") == (
        '<p>see <a href="https://x.io/page">https://x.io/page</a>;</p>'
    )


def test_url_with_underscores_keeps_them() -> None:
    assert render("https://x.io/a_b_c") == (
        '<p><a href="https://x.io/a_b_c">https://x.io/a_b_c</a></p>'
    )


def test_email_is_autolinked() -> None:
    assert render("mail me@example.com") == (
        '<p>mail <a href="mailto:me@example.com">me@example.com</a></p>'
    )


def test_backslash_escapes_are_literal() -> None:
    assert render(r"\*not italic\*") == "<p>*not italic*</p>"
    assert render(r"\# not heading") == "<p># not heading</p>"


def test_escape_extraction_round_trips() -> None:
    source = r"a \* b \_ c \\ d \| e \` f"

    assert restore_escapes(extract_escapes(source), as_source=True) == source


@pytest.mark.parametrize(
    "source",
    [r"\*a\*", r"1\. not a list", r"\# not heading", r"a \| b", r"\[x\](y)", r"\`tick\`"],
)
def test_rendering_restored_escapes_matches_original(source: str) -> None:
    restored = restore_escapes(extract_escapes(source), as_source=True)

    assert render(restored) == render(source)


def _paragraph_text(markup: str) -> str:
    chunks = re.findall(r"<p>(.*?)</p>", markup)
    return "\n\n".join(chunk.replace("<br>", "\n") for chunk in chunks)


@pytest.mark.parametrize(
    "source", ["one line", "first line\nsecond line\n\nthird", "a\n\n\n\nb"]
)
def test_plain_text_paragraph_wrapping_is_stable(source: str) -> None:
    markup = render(source)

    assert render(_paragraph_text(markup)) == markup


def test_every_escapable_character_survives_rendering() -> None:
    source = " ".join("\\" + char for char in ESCAPABLE)

    markup = render(source)

    for char in "*_#+-.!|[]()`{}":
        assert char in markup


def test_unclosed_markers_are_plain_text() -> None:
    assert render("**open and *half") == "<p>**open and *half</p>"
    assert render("[text") == "<p>[text</p>"
