"""Bounded undo/redo stack for whole-snapshot edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .source import SourceText, Span

DEFAULT_UNDO_DEPTH = 50


@dataclass(slots=True)
class UndoEntry:
    label: str
    before: SourceText
    after: SourceText
    selection_before: Optional[Span]
    selection_after: Optional[Span]


class UndoStack:
    """Linear history; the oldest entry falls off once ``depth`` is reached."""

    def __init__(self, depth: int = DEFAULT_UNDO_DEPTH) -> None:
        if depth <= 0:
            raise ValueError("depth must be positive")
        self.depth = depth
        self._done: List[UndoEntry] = []
        self._undone: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._done)

    def push(self, entry: UndoEntry) -> None:
        self._done.append(entry)
        if len(self._done) > self.depth:
            del self._done[0]
        self._undone.clear()

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry
