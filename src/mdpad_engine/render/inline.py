"""Line-anchored blocks (headings, rules) and inline spans.

Images and links are rendered before emphasis and stashed, as are
autolinks, so emphasis markers inside URLs stay intact and a rendered link is
never linked a second time. Image syntax is a superset of link syntax, so
images go first.
"""

from __future__ import annotations

import re

from .escapes import Stash
from .html import escape_attr
from .nodes import Image, Link

_HEADING = re.compile(r"^(#{1,6})[ \t]+(.*?)(?:[ \t]+#+)?[ \t]*$", re.M)
_RULE = re.compile(r"^(?:-{3}|\*{3}|_{3})[ \t]*$", re.M)

_IMAGE = re.compile(r'!\[([^\]]*)\]\(\s*([^)\s]+)(?:\s+"([^"]*)")?\s*\)')
_LINK = re.compile(r'\[([^\]]+)\]\(\s*([^)\s]+)(?:\s+"([^"]*)")?\s*\)')
_URL = re.compile(r"(?<![\w/])(https?://[\w\-.~:/?#\[\]@!$&'()*+,;=%]+)")
_EMAIL = re.compile(r"(?<!\S)([A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,})")

_BOLD_ITALIC = re.compile(r"\*\*\*(?=\S)(.+?)(?<=\S)\*\*\*")
_BOLD = re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*")
_ITALIC = re.compile(r"\*(?=\S)(.+?)(?<=\S)\*")
_STRIKE = re.compile(r"~~(?=\S)(.+?)(?<=\S)~~")

_URL_TRAILERS = ".,;:!?'"
_ENTITY_SUFFIX = re.compile(r"&#?\w+;\Z")


def apply_line_blocks(text: str) -> str:
    def _heading(match: re.Match[str]) -> str:
        level = len(match.group(1))
        return f"\n\n<h{level}>{match.group(2)}</h{level}>\n\n"

    text = _HEADING.sub(_heading, text)
    return _RULE.sub("\n\n<hr>\n\n", text)


def render_image(image: Image) -> str:
    title = f' title="{escape_attr(image.title)}"' if image.title else ""
    return f'<img src="{escape_attr(image.url)}" alt="{escape_attr(image.alt)}"{title}>'


def render_link(link: Link) -> str:
    title = f' title="{escape_attr(link.title)}"' if link.title else ""
    return f'<a href="{escape_attr(link.url)}"{title}>{link.text}</a>'


def apply_emphasis(text: str) -> str:
    text = _BOLD_ITALIC.sub(r"<strong><em>\1</em></strong>", text)
    text = _BOLD.sub(r"<strong>\1</strong>", text)
    text = _ITALIC.sub(r"<em>\1</em>", text)
    return _STRIKE.sub(r"<del>\1</del>", text)


def _split_url_trailer(url: str) -> tuple[str, str]:
    end = len(url)
    while end:
        char = url[end - 1]
        if char == ";" and _ENTITY_SUFFIX.search(url, 0, end):
            break
        if char in _URL_TRAILERS:
            end -= 1
        elif char == ")" and url.count("(", 0, end) < url.count(")", 0, end):
            end -= 1
        else:
            break
    return url[:end], url[end:]


def apply_inline(text: str, stash: Stash) -> str:
    def _image(match: re.Match[str]) -> str:
        alt, url, title = match.groups()
        return stash.put(render_image(Image(alt=alt, url=url, title=title)))

    def _link(match: re.Match[str]) -> str:
        label, url, title = match.groups()
        return stash.put(render_link(Link(text=apply_emphasis(label), url=url, title=title)))

    def _url(match: re.Match[str]) -> str:
        url, trailer = _split_url_trailer(match.group(1))
        if not url:
            return match.group(0)
        return stash.put(render_link(Link(text=url, url=url))) + trailer

    def _email(match: re.Match[str]) -> str:
        email = match.group(1)
        return stash.put(render_link(Link(text=email, url=f"mailto:{email}")))

    text = _IMAGE.sub(_image, text)
    text = _LINK.sub(_link, text)
    text = _URL.sub(_url, text)
    text = _EMAIL.sub(_email, text)
    return apply_emphasis(text)
