"""Paragraph wrapping and removal of paragraphs around block elements."""

from __future__ import annotations

import re

_BLANK_LINE = re.compile(r"\n[ \t]*\n")

_BLOCK_START = r"<(?:table|ul|ol|pre|blockquote|h[1-6]|hr)\b"
_BLOCK_END = r"</(?:table|ul|ol|pre|blockquote|h[1-6])>|<hr>"

_OPENING_WRAPPED = re.compile(rf"<p>\s*({_BLOCK_START}|</blockquote>)")
_CLOSING_WRAPPED = re.compile(rf"({_BLOCK_END}|<blockquote>)\s*</p>")
_EMPTY_PARAGRAPH = re.compile(r"<p>(?:\s|<br>)*</p>")


def wrap_paragraphs(text: str) -> str:
    chunks = (chunk.strip() for chunk in _BLANK_LINE.split(text))
    return "".join(
        "<p>" + chunk.replace("\n", "<br>") + "</p>" for chunk in chunks if chunk
    )


def cleanup_blocks(markup: str) -> str:
    markup = _OPENING_WRAPPED.sub(r"\1", markup)
    markup = _CLOSING_WRAPPED.sub(r"\1", markup)
    return _EMPTY_PARAGRAPH.sub("", markup)
