"""Fenced code blocks and inline code spans.

Both are rendered early and parked in the stash, so no later stage can read
emphasis markers, pipes or list bullets inside code. Fences are taken before
blockquote folding and again inside each quoted run; spans only once the
quote markers are gone, so a quoted fence is never read as a span.
"""

from __future__ import annotations

import re

from .escapes import Stash, restore_escapes
from .html import escape_html
from .nodes import CodeBlock

_FENCE = re.compile(r"^```[ \t]*([\w+#.-]*)[ \t]*\n(.*?)\n?```[ \t]*$", re.M | re.S)
# no blank lines inside a span, so an unpaired backtick cannot swallow paragraphs
_CODE_SPAN = re.compile(r"`([^`\n]+(?:\n[^`\n]+)*)`")


def render_code_block(block: CodeBlock) -> str:
    return f'<pre><code class="{block.css_class}">{escape_html(block.code)}</code></pre>'


def stash_fences(text: str, stash: Stash) -> str:
    def _fence(match: re.Match[str]) -> str:
        block = CodeBlock(
            code=restore_escapes(match.group(2), as_source=True),
            language=match.group(1) or None,
        )
        return f"\n\n{stash.put(render_code_block(block))}\n\n"

    return _FENCE.sub(_fence, text)


def stash_spans(text: str, stash: Stash) -> str:
    def _span(match: re.Match[str]) -> str:
        code = escape_html(restore_escapes(match.group(1), as_source=True))
        return stash.put(f"<code>{code}</code>")

    return _CODE_SPAN.sub(_span, text)
