"""Replacement text expansion and single-pass splicing."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from mdpad_engine.document.source import Span

from .patterns import CompiledQuery
from .scanner import iter_regex_matches, scan_literal

_TEMPLATE = re.compile(r"\$(?:(\$)|(&)|(`)|(')|(\d{1,2})|<([^>]*)>)")


def expand_template(match: re.Match[str], template: str) -> str:
    """Expand ``$&``, ``$1``..``$99``, ``$<name>``, ``$```, ``$'`` and ``$$``.

    References to groups the pattern does not define are kept as written.
    """

    groups = match.re.groups
    named = match.re.groupindex

    def _expand(token: re.Match[str]) -> str:
        dollar, whole, before, after, number, name = token.groups()
        if dollar:
            return "$"
        if whole:
            return match.group(0)
        if before:
            return match.string[: match.start()]
        if after:
            return match.string[match.end() :]
        if name is not None:
            if not named:
                return token.group(0)
            return (match.group(name) or "") if name in named else ""
        if len(number) == 2 and 1 <= int(number) <= groups:
            return match.group(int(number)) or ""
        first = int(number[0])
        if 1 <= first <= groups:
            return (match.group(first) or "") + number[1:]
        return token.group(0)

    return _TEMPLATE.sub(_expand, template)


def splice(text: str, edits: Iterable[Tuple[Span, str]]) -> str:
    """Rebuild ``text`` with each ordered, non-overlapping span replaced."""

    pieces: List[str] = []
    cursor = 0
    for span, replacement in edits:
        pieces.append(text[cursor : span.start])
        pieces.append(replacement)
        cursor = span.end
    pieces.append(text[cursor:])
    return "".join(pieces)


def replace_spans(text: str, spans: Sequence[Span], replacement: str) -> str:
    return splice(text, ((span, replacement) for span in spans))


def substitute_all(text: str, compiled: CompiledQuery, replacement: str) -> Tuple[str, int]:
    """Replace every match of ``compiled`` in one pass; returns ``(text, count)``."""

    if not compiled.query:
        return text, 0
    if compiled.pattern is None:
        spans = scan_literal(text, compiled.query, case_sensitive=compiled.options.case_sensitive)
        return replace_spans(text, spans, replacement), len(spans)

    edits = [
        (Span(*match.span()), expand_template(match, replacement))
        for match in iter_regex_matches(text, compiled.pattern, sticky=compiled.sticky)
    ]
    return splice(text, edits), len(edits)


def substitute_at(
    text: str, compiled: CompiledQuery, span: Span, replacement: str
) -> str | None:
    """Replacement text for the match occupying ``span``, or ``None`` if it moved."""

    if compiled.pattern is None:
        return replacement
    match = compiled.pattern.match(text, span.start)
    if match is None or match.end() != span.end:
        return None
    return expand_template(match, replacement)


__all__ = [
    "expand_template",
    "replace_spans",
    "splice",
    "substitute_all",
    "substitute_at",
]
