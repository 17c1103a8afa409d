"""Compile a query plus options into a matcher."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from .options import SearchOptions

# ``g`` is always implied and ``u`` is the default for ``str`` patterns.
PATTERN_FLAGS: Dict[str, int] = {
    "g": 0,
    "u": 0,
    "y": 0,
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "a": re.ASCII,
}


class InvalidPatternError(ValueError):
    """Raised when a regex query or its flags cannot be compiled."""

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Invalid regex {query!r}: {reason}")
        self.query = query
        self.reason = reason


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """A query ready to scan with.

    ``pattern`` is ``None`` in literal mode. ``sticky`` requires every match
    to begin exactly where the previous scan position stopped.
    """

    query: str
    options: SearchOptions
    pattern: Optional[re.Pattern[str]] = None
    sticky: bool = False

    @property
    def is_regex(self) -> bool:
        return self.pattern is not None


def compile_query(query: str, options: SearchOptions) -> CompiledQuery:
    if not options.is_regex:
        return CompiledQuery(query=query, options=options)

    unknown = sorted(flag for flag in options.extra_flags if flag not in PATTERN_FLAGS)
    if unknown:
        raise InvalidPatternError(query, f"unsupported flags {''.join(unknown)!r}")

    flags = 0 if options.case_sensitive else re.IGNORECASE
    for flag in options.extra_flags:
        flags |= PATTERN_FLAGS[flag]

    try:
        pattern = re.compile(query, flags)
    except (re.error, ValueError, OverflowError, RecursionError) as exc:
        raise InvalidPatternError(query, str(exc)) from exc

    return CompiledQuery(
        query=query,
        options=options,
        pattern=pattern,
        sticky="y" in options.extra_flags,
    )


__all__ = ["CompiledQuery", "InvalidPatternError", "PATTERN_FLAGS", "compile_query"]
