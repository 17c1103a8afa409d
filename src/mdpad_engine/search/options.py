"""Search configuration shared by the match engine and its hosts."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Union

FlagInput = Union[str, Iterable[str]]


def normalize_flags(flags: FlagInput) -> FrozenSet[str]:
    """``"ms"``, ``["m", "s"]`` and ``{"m", "s"}`` all become ``{"m", "s"}``."""

    if isinstance(flags, str):
        return frozenset(char for char in flags if not char.isspace())
    return frozenset(char for flag in flags for char in str(flag) if not char.isspace())


@dataclass(frozen=True, slots=True)
class SearchOptions:
    case_sensitive: bool = False
    is_regex: bool = False
    extra_flags: FrozenSet[str] = field(default_factory=frozenset)
    wrap_around: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra_flags", normalize_flags(self.extra_flags))

    def evolve(self, **changes: object) -> "SearchOptions":
        return replace(self, **changes)

    def affects_matching(self, other: "SearchOptions") -> bool:
        """True if switching to ``other`` changes which spans match."""

        return (
            self.case_sensitive != other.case_sensitive
            or self.is_regex != other.is_regex
            or self.extra_flags != other.extra_flags
        )


__all__ = ["FlagInput", "SearchOptions", "normalize_flags"]
