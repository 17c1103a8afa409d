"""Validation helpers shared by the buffer and the match engine."""

from __future__ import annotations

from .source import SourceText, Span
from .sync import DocumentValidationError


def ensure_span(source: SourceText, span: Span) -> Span:
    if span.end > len(source.text):
        raise DocumentValidationError("Span out of range", span=span)
    return span
