"""Adapter that wires buffer, renderer and match engine into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from mdpad_engine.actions.formatting import CommandResult, apply_command
from mdpad_engine.document import DocumentBuffer, DocumentMirror, Span
from mdpad_engine.render import Renderer
from mdpad_engine.search import (
    MatchEngine,
    ReplaceOutcome,
    SearchOptions,
    SearchOutcome,
    highlight_matches,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EditorHooks:
    """Callbacks invoked by the adapter to update host widgets."""

    update_preview: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    update_counter: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Text or selection changed by the engine that the editor widget must adopt
    update_editor: Callable[[DocumentMirror], None] = _noop
    log: Callable[[str], None] = _noop


class EditorAdapter:
    """Bridges a :class:`DocumentBuffer` to a preview pane and a find bar."""

    def __init__(
        self,
        buffer: DocumentBuffer,
        hooks: EditorHooks,
        *,
        options: Optional[SearchOptions] = None,
        renderer: Optional[Renderer] = None,
        engine: Optional[MatchEngine] = None,
    ) -> None:
        self.buffer = buffer
        self.hooks = hooks
        self.renderer = renderer or Renderer()
        self.engine = engine or MatchEngine(options, bus=buffer.bus)
        self._subscribe_events()
        self._refresh_document()

    # ----------------------------------------------------------- editing
    def set_text(self, text: str) -> None:
        """Adopt text typed into the host editor."""

        if text == self.buffer.text:
            return
        self._log_state("edit ->", chars=len(text))
        self.buffer.set_text(text, label="edit")

    def set_selection(self, span: Optional[Span]) -> None:
        if span is None:
            self.buffer.state.clear_selection()
        else:
            self.buffer.select(span)

    def run_command(self, name: str, **args: Any) -> CommandResult:
        result = apply_command(self.buffer, name, **args)
        self._log_state("command <-", command=name, status=result.status)
        if result.status == "command_error":
            self.hooks.update_status(result.message or result.status)
        elif result.delta is not None:
            self.hooks.update_editor(self.buffer.mirror())
        return result

    def undo(self) -> bool:
        delta = self.buffer.undo()
        if delta is not None:
            self.hooks.update_editor(self.buffer.mirror())
        return delta is not None

    def redo(self) -> bool:
        delta = self.buffer.redo()
        if delta is not None:
            self.hooks.update_editor(self.buffer.mirror())
        return delta is not None

    def pull_document(self) -> DocumentMirror:
        return self.buffer.mirror()

    def push_host_edit(self, mirror: DocumentMirror) -> None:
        self.set_text(mirror.text)
        if mirror.selection is not None and self.buffer.source.contains(mirror.selection):
            self.buffer.select(mirror.selection)

    # ------------------------------------------------------------ search
    def set_query(self, query: str, options: Optional[SearchOptions] = None) -> SearchOutcome:
        if options is not None:
            self.engine.set_options(options)
        self.engine.set_query(query)
        outcome = self.engine.reindex(self.buffer.snapshot())
        self._refresh_counter(outcome.message)
        self._refresh_highlight()
        return outcome

    def find_next(self) -> SearchOutcome:
        return self._navigate(self.engine.next)

    def find_previous(self) -> SearchOutcome:
        return self._navigate(self.engine.previous)

    def replace_one(self, replacement: str) -> ReplaceOutcome:
        self._sync_engine()
        outcome = self.engine.replace_current(replacement, self.buffer.selection)
        return self._after_replace(outcome, replacement, label="replace")

    def replace_all(self, replacement: str) -> ReplaceOutcome:
        self._sync_engine()
        outcome = self.engine.replace_all(replacement)
        return self._after_replace(outcome, replacement, label="replace_all")

    def _navigate(self, step: Callable[[], SearchOutcome]) -> SearchOutcome:
        self._sync_engine()
        outcome = step()
        if outcome.ok:
            self.buffer.find_history.add(self.engine.query)
            current = self.engine.current
            if current is not None:
                self.buffer.select(current)
                self.hooks.update_editor(self.buffer.mirror())
        self._log_state("find <-", status=outcome.status, counter=outcome.counter)
        self._refresh_counter(outcome.message)
        self._refresh_highlight()
        return outcome

    def _after_replace(
        self, outcome: ReplaceOutcome, replacement: str, *, label: str
    ) -> ReplaceOutcome:
        self._log_state("replace <-", status=outcome.status, replaced=outcome.replaced)
        if outcome.changed:
            self.buffer.find_history.add(self.engine.query)
            self.buffer.replace_history.add(replacement)
            self.buffer.install(outcome.source, outcome.selection, label=label)
            self.hooks.update_editor(self.buffer.mirror())
            noun = "occurrence" if outcome.replaced == 1 else "occurrences"
            self.hooks.update_status(f"Replaced {outcome.replaced} {noun}")
        self._refresh_counter(outcome.message)
        self._refresh_highlight()
        return outcome

    def _sync_engine(self) -> None:
        if self.engine.is_stale(self.buffer.snapshot()):
            self.engine.reindex(self.buffer.snapshot())

    # ----------------------------------------------------------- refresh
    def _subscribe_events(self) -> None:
        bus = self.buffer.bus
        for event in (
            "document.changed",
            "search.indexed",
            "search.replaced",
            "command.applied",
            "command.error",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        if name == "document.changed":
            self._refresh_document()

    def _refresh_document(self) -> None:
        snapshot = self.buffer.snapshot()
        self.hooks.update_preview(self.renderer.render(snapshot))
        self.hooks.update_status(self.buffer.stats().describe())
        if self.engine.query:
            self._sync_engine()
            self._refresh_counter(self.engine.message)
            self._refresh_highlight()

    def _refresh_counter(self, message: Optional[str] = None) -> None:
        self.hooks.update_counter(message or self.engine.counter)

    def _refresh_highlight(self) -> None:
        source = self.engine.source
        if source is None:
            return
        markup = highlight_matches(source, self.engine.matches, self.engine.current_index)
        self.hooks.handle_event("search.highlight", markup)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "buffer": self.buffer.name,
            "buffer_version": self.buffer.source.version,
            "selection": self.buffer.selection,
            "query": self.engine.query,
            "search_state": self.engine.state,
        }


__all__ = ["EditorAdapter", "EditorHooks"]
