"""Markdown to markup, as an ordered sequence of text stages.

The renderer is total: whatever the input, it returns markup. Constructs that
do not parse are left as literal text, and an unexpected failure in any stage
degrades the whole document to escaped plain paragraphs.
"""

from __future__ import annotations

from typing import Optional, Union

from mdpad_engine.document.source import SourceText, normalize_newlines
from mdpad_engine.runtime import telemetry

from .blockquotes import fold_blockquotes
from .code import stash_fences, stash_spans
from .escapes import Stash, extract_escapes, restore_escapes, strip_delimiters
from .html import escape_html, escape_text
from .inline import apply_inline, apply_line_blocks
from .lists import apply_lists
from .paragraphs import cleanup_blocks, wrap_paragraphs
from .tables import apply_tables

Renderable = Union[SourceText, str]


def literal_markup(text: str) -> str:
    text = normalize_newlines(text).strip()
    if not text:
        return ""
    return "<p>" + escape_html(text).replace("\n", "<br>") + "</p>"


class Renderer:
    """Stateless Markdown renderer; one instance can serve any number of calls."""

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._logger_name = logger_name

    def render(self, source: Renderable) -> str:
        text = source.text if isinstance(source, SourceText) else str(source)
        with telemetry.span(
            "render::document",
            logger_name=self._logger_name,
            component="renderer",
            metadata={"chars": len(text)},
        ) as handle:
            try:
                markup = self._run_stages(text)
            except Exception as exc:  # pragma: no cover - literal fallback
                handle.warn(f"fallback: {exc!r}")
                telemetry.record_event(
                    "render.fallback",
                    level="error",
                    data={"error": repr(exc), "chars": len(text)},
                    logger_name=self._logger_name,
                )
                markup = literal_markup(text)
            handle.add_metadata("markup_chars", len(markup))
            return markup

    def _run_stages(self, text: str) -> str:
        stash = Stash()
        text = strip_delimiters(normalize_newlines(text))
        text = extract_escapes(text)
        text = stash_fences(text, stash)
        text = fold_blockquotes(text, stash)
        text = stash_spans(text, stash)
        text = escape_text(text)
        text = apply_line_blocks(text)
        text = apply_inline(text, stash)
        text = apply_tables(text)
        text = apply_lists(text)
        text = wrap_paragraphs(text)
        text = stash.restore(text)
        text = cleanup_blocks(text)
        return restore_escapes(text)


_DEFAULT_RENDERER = Renderer()


def render(source: Renderable) -> str:
    """Render Markdown ``source`` to an HTML markup string."""

    return _DEFAULT_RENDERER.render(source)


__all__ = ["Renderer", "Renderable", "literal_markup", "render"]
