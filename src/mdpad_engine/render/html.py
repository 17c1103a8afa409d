"""HTML escaping helpers used by the render stages."""

from __future__ import annotations

import re

_BARE_AMPERSAND = re.compile(r"&(?!#?\w+;)")


def escape_html(text: str) -> str:
    """Full escape for raw content such as code."""

    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_text(text: str) -> str:
    """Escape prose while leaving ``>`` (blockquote syntax) and entities alone."""

    return _BARE_AMPERSAND.sub("&amp;", text).replace("<", "&lt;")


def escape_attr(value: str) -> str:
    return value.replace('"', "&quot;")
