"""Find/replace: query compilation, match indexing, replacement and highlighting."""

from .engine import (
    INVALID_REGEX_MESSAGE,
    MatchEngine,
    ReplaceOutcome,
    SearchOutcome,
    format_counter,
)
from .highlight import highlight_matches
from .options import SearchOptions
from .patterns import CompiledQuery, InvalidPatternError, compile_query
from .replace import expand_template
from .scanner import MatchSpan, scan_literal, scan_regex

__all__ = [
    "CompiledQuery",
    "INVALID_REGEX_MESSAGE",
    "InvalidPatternError",
    "MatchEngine",
    "MatchSpan",
    "ReplaceOutcome",
    "SearchOptions",
    "SearchOutcome",
    "compile_query",
    "expand_template",
    "format_counter",
    "highlight_matches",
    "scan_literal",
    "scan_regex",
]
