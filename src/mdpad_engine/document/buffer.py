"""Document buffer façade combining the snapshot, selection, undo and histories."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from mdpad_engine.runtime import telemetry
from mdpad_engine.runtime.events import EventBus

from .history import QueryHistory
from .source import SourceText, Span
from .state import DocumentState
from .stats import DocumentStats, compute_stats
from .sync import DocumentMirror
from .undo import UndoEntry, UndoStack
from .validation import ensure_span


@dataclass(slots=True)
class DocumentDelta:
    version: int
    text: str
    selection: Optional[Span]
    label: str


class DocumentBuffer:
    """The single writer of the document text.

    Engines and formatting actions hand back new snapshots; the buffer installs
    them, records undo entries and announces ``document.changed`` on the bus.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        source: Optional[SourceText] = None,
        state: Optional[DocumentState] = None,
        undo: Optional[UndoStack] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.name = name
        self.source = source or SourceText()
        self.state = state or DocumentState()
        self.undo_stack = undo or UndoStack()
        self.bus = bus or EventBus()
        self.find_history = QueryHistory()
        self.replace_history = QueryHistory()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "DocumentBuffer":
        return cls(name=name, source=SourceText.from_text(text))

    @property
    def text(self) -> str:
        return self.source.text

    def snapshot(self) -> SourceText:
        return self.source

    @property
    def selection(self) -> Optional[Span]:
        return self.state.selection

    def selected_text(self) -> str:
        if self.state.selection is None:
            return ""
        return self.source.slice(self.state.selection)

    def select(self, span: Span) -> None:
        self.state.set_selection(ensure_span(self.source, span))

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> DocumentMirror:
        return DocumentMirror(
            text=self.source.text,
            selection=self.state.selection,
            version=self.source.version,
            attributes=dict(attributes or {}),
        )

    def stats(self) -> DocumentStats:
        return compute_stats(self.source)

    def replace_range(self, span: Span, text: str, *, label: str) -> DocumentDelta:
        span = ensure_span(self.source, span)
        updated = self.source.replace_span(span, text)
        return self.install(updated, Span.caret(span.start + len(text)), label=label)

    def insert_text(self, text: str) -> DocumentDelta:
        caret = Span.caret(self.state.caret)
        return self.replace_range(self.state.selection or caret, text, label="insert_text")

    def set_text(self, text: str, *, label: str = "set_text") -> DocumentDelta:
        updated = self.source.with_text(text)
        return self.install(updated, Span.caret(len(updated.text)), label=label)

    def install(
        self, source: SourceText, selection: Optional[Span], *, label: str
    ) -> DocumentDelta:
        """Adopt ``source`` as the current snapshot and record an undo entry."""

        with Transaction(self, label) as tx:
            before, selection_before = self.source, self.state.selection
            self.source = source
            if selection is not None:
                self.state.set_selection(ensure_span(source, selection))
            else:
                self.state.clear_selection()
            self.state.last_change_version = source.version
            tx.commit(before, source, selection_before, self.state.selection)

        self.bus.emit("document.changed", self.mirror())
        return DocumentDelta(
            version=self.source.version,
            text=self.source.text,
            selection=self.state.selection,
            label=label,
        )

    def undo(self) -> Optional[DocumentDelta]:
        entry = self.undo_stack.undo()
        if entry is None:
            return None
        return self._restore(entry.before, entry.selection_before, f"undo:{entry.label}")

    def redo(self) -> Optional[DocumentDelta]:
        entry = self.undo_stack.redo()
        if entry is None:
            return None
        return self._restore(entry.after, entry.selection_after, f"redo:{entry.label}")

    def _restore(
        self, snapshot: SourceText, selection: Optional[Span], label: str
    ) -> DocumentDelta:
        # Restored snapshots get a fresh version so engines never mistake them
        # for the snapshot they last indexed.
        self.source = SourceText(
            text=snapshot.text, version=max(self.source.version, snapshot.version) + 1
        )
        self.state.selection = selection
        self.state.last_change_version = self.source.version
        telemetry.record_event(
            "document.history", level="debug", data={"label": label, "buffer": self.name}
        )
        self.bus.emit("document.changed", self.mirror())
        return DocumentDelta(
            version=self.source.version,
            text=self.source.text,
            selection=selection,
            label=label,
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: DocumentBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"document::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self,
        before: SourceText,
        after: SourceText,
        selection_before: Optional[Span],
        selection_after: Optional[Span],
    ) -> None:
        if before.text == after.text:
            return
        self.buffer.undo_stack.push(
            UndoEntry(
                label=self.label,
                before=before,
                after=after,
                selection_before=selection_before,
                selection_after=selection_after,
            )
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
