"""Dataclasses for the block and inline structures the renderer builds."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class ListKind(str, Enum):
    ORDERED = "ol"
    UNORDERED = "ul"


@dataclass(frozen=True, slots=True)
class Table:
    """Header cells, one alignment per column, and rows already fitted to width."""

    header: Tuple[str, ...]
    alignments: Tuple[Alignment, ...]
    rows: Tuple[Tuple[str, ...], ...] = ()

    def __post_init__(self) -> None:
        if len(self.alignments) != len(self.header):
            raise ValueError("one alignment per header cell is required")

    @property
    def column_count(self) -> int:
        return len(self.header)


@dataclass(slots=True)
class ListItem:
    kind: ListKind
    content: str
    child_lines: list[str] = field(default_factory=list)
    children: Tuple["ListBlock", ...] = ()


@dataclass(frozen=True, slots=True)
class ListBlock:
    kind: ListKind
    items: Tuple[ListItem, ...]


@dataclass(frozen=True, slots=True)
class CodeBlock:
    code: str
    language: Optional[str] = None

    @property
    def css_class(self) -> str:
        return f"language-{self.language}" if self.language else "language-none"


@dataclass(frozen=True, slots=True)
class Link:
    text: str
    url: str
    title: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Image:
    alt: str
    url: str
    title: Optional[str] = None


__all__ = [
    "Alignment",
    "CodeBlock",
    "Image",
    "Link",
    "ListBlock",
    "ListItem",
    "ListKind",
    "Table",
]
