from __future__ import annotations

import pytest

from mdpad_engine.render import Renderer, literal_markup, render


def test_heading_levels_and_closing_hashes() -> None:
    assert render("# T") == "<h1>T</h1>"
    assert render("## Title ##") == "<h2>Title</h2>"
    assert render("###### deep") == "<h6>deep</h6>"


def test_seven_hashes_is_not_a_heading() -> None:
    assert render("####### x") == "<p>####### x</p>"


def test_horizontal_rule_between_paragraphs() -> None:
    assert render("---") == "<hr>"
    assert render("a\n\n***\n\nb") == "<p>a</p><hr><p>b</p>"


def test_paragraphs_split_on_blank_lines() -> None:
    assert render("a\nb\n\nc") == "<p>a<br>b</p><p>c</p>"


def test_nested_blockquote_by_marker_count() -> None:
    assert render("> > quoted") == (
        "<blockquote><blockquote><p>quoted</p></blockquote></blockquote>"
    )


def test_blockquote_nesting_returns_to_outer_level() -> None:
    assert render("> a\n> > b\n> a2") == (
        "<blockquote><p>a</p><blockquote><p>b</p></blockquote><p>a2</p></blockquote>"
    )


def test_table_inside_blockquote() -> None:
    markup = render("> | A |\n> | - |\n> | 1 |")

    assert markup == (
        "<blockquote><table><thead><tr>"
        '<th style="text-align: left">A</th>'
        "</tr></thead><tbody><tr>"
        '<td style="text-align: left">1</td>'
        "</tr></tbody></table></blockquote>"
    )


def test_fenced_code_inside_blockquote() -> None:
    assert render("> ```\n> x < 1\n> ```") == (
        '<blockquote><pre><code class="language-none">x &lt; 1</code></pre></blockquote>'
    )


def test_quoted_fence_after_prose_keeps_markers_literal() -> None:
    markup = render("> intro\n> ```py\n> a * b *\n> ```")

    assert markup == (
        "<blockquote><p>intro</p>"
        '<pre><code class="language-py">a * b *</code></pre></blockquote>'
    )


def test_fenced_code_is_escaped_and_tagged_with_language() -> None:
    markup = render("```python\nx = 1 < 2 **y**\n```")

    assert markup == (
        '<pre><code class="language-python">x = 1 &lt; 2 **y**</code></pre>'
    )


def test_fence_without_language() -> None:
    assert render("```\n# not a heading\n```") == (
        '<pre><code class="language-none"># not a heading</code></pre>'
    )


def test_unclosed_fence_stays_literal() -> None:
    markup = render("```\ncode")

    assert "<pre>" not in markup
    assert "code" in markup


def test_prose_is_html_escaped() -> None:
    assert render("a < b & c &amp; d") == "<p>a &lt; b &amp; c &amp; d</p>"


def test_placeholder_delimiters_in_input_are_ignored() -> None:
    assert render("x\x02s0\x03y") == "<p>xs0y</p>"


def test_empty_document_renders_nothing() -> None:
    assert render("") == ""
    assert render("\n\n   \n") == ""


def test_crlf_input_matches_lf_input() -> None:
    assert render("# T\r\n\r\nbody") == render("# T\n\nbody")


def test_renderer_falls_back_to_literal_markup(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(self, text: str) -> str:
        raise RuntimeError("stage failed")

    monkeypatch.setattr(Renderer, "_run_stages", _boom)

    assert Renderer().render("a<b\nc") == "<p>a&lt;b<br>c</p>"


def test_literal_markup_escapes_everything() -> None:
    assert literal_markup("**x** > y") == "<p>**x** &gt; y</p>"


@pytest.mark.parametrize(
    "source",
    [
        "> " * 200 + "deep",
        "-" * 500,
        "[unclosed](",
        "| only pipe",
        "|\n|",
        "* * *\n- - -",
        "`",
        "![",
        "    - orphan\n- item",
    ],
)
def test_renderer_is_total(source: str) -> None:
    assert isinstance(render(source), str)
