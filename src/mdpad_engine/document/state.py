"""Selection and change tracking for the document buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .source import Span


@dataclass(slots=True)
class DocumentState:
    """Mutable selection info tied to a snapshot version."""

    selection: Optional[Span] = None
    last_change_version: int = 0

    @property
    def caret(self) -> int:
        return self.selection.end if self.selection else 0

    def set_selection(self, span: Span) -> None:
        self.selection = span

    def clear_selection(self) -> None:
        self.selection = None
