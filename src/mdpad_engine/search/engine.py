"""Stateful find/replace over immutable source snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from mdpad_engine.document.source import SourceText, Span
from mdpad_engine.runtime import telemetry
from mdpad_engine.runtime.events import EventBus

from .options import SearchOptions
from .patterns import CompiledQuery, InvalidPatternError, compile_query
from .replace import expand_template, splice, substitute_all, substitute_at
from .scanner import MatchSpan, scan

INVALID_REGEX_MESSAGE = "Invalid regex"

SearchStatus = Literal["indexed", "moved", "idle", "empty_query", "invalid_pattern", "no_match"]
ReplaceStatus = Literal["replaced", "empty_query", "invalid_pattern", "no_match"]
EngineState = Literal["idle", "indexed", "navigating"]


def format_counter(current_index: int, total: int) -> str:
    return f"{current_index + 1 if current_index >= 0 else 0}/{total}"


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    status: SearchStatus
    total: int = 0
    current_index: int = -1
    message: Optional[str] = None

    @property
    def counter(self) -> str:
        return format_counter(self.current_index, self.total)

    @property
    def ok(self) -> bool:
        return self.status in ("indexed", "moved")


@dataclass(frozen=True, slots=True)
class ReplaceOutcome:
    status: ReplaceStatus
    source: SourceText
    selection: Optional[Span] = None
    replaced: int = 0
    message: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.status == "replaced"


class MatchEngine:
    """Indexes a query against one snapshot and walks or replaces its matches.

    The engine never owns the document: it reads the snapshot passed to
    :meth:`reindex` and hands new snapshots back in :class:`ReplaceOutcome`.
    Changing the query or any matching option clears the index; the next
    navigation or replacement rebuilds it against the last known snapshot.
    """

    def __init__(
        self,
        options: Optional[SearchOptions] = None,
        *,
        query: str = "",
        bus: Optional[EventBus] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self._options = options or SearchOptions()
        self._query = query
        self._bus = bus
        self._logger_name = logger_name
        self._source: Optional[SourceText] = None
        self._compiled: Optional[CompiledQuery] = None
        self._matches: Tuple[MatchSpan, ...] = ()
        self._current = -1
        self._indexed = False
        self._status: SearchStatus = "idle"
        self._message: Optional[str] = None

    # ------------------------------------------------------------------ state
    @property
    def query(self) -> str:
        return self._query

    @property
    def options(self) -> SearchOptions:
        return self._options

    @property
    def source(self) -> Optional[SourceText]:
        return self._source

    @property
    def matches(self) -> Tuple[MatchSpan, ...]:
        return self._matches

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def current(self) -> Optional[MatchSpan]:
        if 0 <= self._current < len(self._matches):
            return self._matches[self._current]
        return None

    @property
    def counter(self) -> str:
        return format_counter(self._current, len(self._matches))

    @property
    def state(self) -> EngineState:
        if not self._indexed:
            return "idle"
        return "navigating" if self._current >= 0 else "indexed"

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def message(self) -> Optional[str]:
        return self._message

    def is_stale(self, source: SourceText) -> bool:
        current = self._source
        return current is None or current.version != source.version or current.text != source.text

    # ------------------------------------------------------------ mutation
    def set_query(self, query: str) -> None:
        if query != self._query:
            self._query = query
            self.invalidate()

    def set_options(self, options: SearchOptions) -> None:
        if self._options.affects_matching(options):
            self.invalidate()
        self._options = options

    def invalidate(self) -> None:
        self._compiled = None
        self._matches = ()
        self._current = -1
        self._indexed = False
        self._status = "idle"
        self._message = None

    def reindex(
        self,
        source: Optional[SourceText] = None,
        *,
        query: Optional[str] = None,
        options: Optional[SearchOptions] = None,
    ) -> SearchOutcome:
        if query is not None:
            self._query = query
        if options is not None:
            self._options = options
        if source is not None:
            self._source = source
        self.invalidate()
        text = self._source.text if self._source is not None else ""

        with telemetry.span(
            "search::reindex",
            logger_name=self._logger_name,
            component="match_engine",
            metadata={"regex": self._options.is_regex, "chars": len(text)},
        ) as handle:
            self._indexed = True
            if not self._query:
                outcome = self._settle("empty_query")
            else:
                try:
                    self._compiled = compile_query(self._query, self._options)
                except InvalidPatternError as exc:
                    telemetry.record_event(
                        "search.invalid_pattern",
                        level="warning",
                        data={"query": self._query, "reason": exc.reason},
                        logger_name=self._logger_name,
                    )
                    outcome = self._settle("invalid_pattern", INVALID_REGEX_MESSAGE)
                else:
                    self._matches = scan(text, self._compiled)
                    outcome = self._settle("indexed" if self._matches else "no_match")
            handle.add_metadata("matches", len(self._matches))

        self._emit("search.indexed", outcome)
        return outcome

    def next(self) -> SearchOutcome:
        return self._step(1)

    def previous(self) -> SearchOutcome:
        return self._step(-1)

    def _step(self, delta: int) -> SearchOutcome:
        blocked = self._ensure_index()
        if blocked is not None:
            return blocked
        total = len(self._matches)
        if self._current < 0:
            if delta > 0 or not self._options.wrap_around:
                target = 0
            else:
                target = total - 1
        elif self._options.wrap_around:
            target = (self._current + delta) % total
        else:
            target = min(max(self._current + delta, 0), total - 1)
        self._current = target
        outcome = self._settle("moved")
        self._emit("search.moved", outcome)
        return outcome

    def replace_current(
        self, replacement: str, selection: Optional[Span] = None
    ) -> ReplaceOutcome:
        blocked = self._ensure_index()
        source = self._source or SourceText()
        compiled = self._compiled
        if blocked is not None or compiled is None:
            return self._blocked_replace(blocked, source)

        target, text = self._selection_substitute(compiled, source, selection, replacement)
        if target is None:
            self._step(1)
            target = self._matches[self._current]
            text = substitute_at(source.text, compiled, target, replacement)
            if text is None:
                text = replacement

        with telemetry.span(
            "search::replace_current",
            logger_name=self._logger_name,
            component="match_engine",
            metadata={"start": target.start, "end": target.end},
        ):
            updated = source.replace_span(target, text)
            self.reindex(updated)

        outcome = ReplaceOutcome(
            status="replaced",
            source=updated,
            selection=Span.caret(target.start + len(text)),
            replaced=1,
        )
        self._emit("search.replaced", outcome)
        return outcome

    def replace_all(self, replacement: str) -> ReplaceOutcome:
        blocked = self._ensure_index()
        source = self._source or SourceText()
        compiled = self._compiled
        if blocked is not None or compiled is None:
            return self._blocked_replace(blocked, source)

        with telemetry.span(
            "search::replace_all",
            logger_name=self._logger_name,
            component="match_engine",
            metadata={"regex": compiled.is_regex},
        ) as handle:
            if compiled.is_regex:
                text, count = substitute_all(source.text, compiled, replacement)
            else:
                text = splice(source.text, ((span, replacement) for span in self._matches))
                count = len(self._matches)
            handle.add_metadata("replaced", count)
            updated = source.with_text(text)
            self.reindex(updated)

        outcome = ReplaceOutcome(status="replaced", source=updated, replaced=count)
        self._emit("search.replaced", outcome)
        return outcome

    # ------------------------------------------------------------- helpers
    def _ensure_index(self) -> Optional[SearchOutcome]:
        """Rebuild a cleared index; returns the outcome that blocks the caller, if any."""

        if not self._indexed:
            self.reindex()
        if self._status in ("empty_query", "invalid_pattern", "no_match"):
            return SearchOutcome(status=self._status, message=self._message)
        return None

    def _blocked_replace(
        self, blocked: Optional[SearchOutcome], source: SourceText
    ) -> ReplaceOutcome:
        # An indexed engine without a compiled query cannot substitute anything.
        if blocked is None:
            blocked = SearchOutcome(status="invalid_pattern", message=INVALID_REGEX_MESSAGE)
        return ReplaceOutcome(status=blocked.status, source=source, message=blocked.message)

    def _selection_substitute(
        self,
        compiled: CompiledQuery,
        source: SourceText,
        selection: Optional[Span],
        replacement: str,
    ) -> Tuple[Optional[Span], str]:
        if selection is None or selection.is_empty or not source.contains(selection):
            return None, ""
        if compiled.pattern is None:
            selected = source.slice(selection)
            query = compiled.query
            if compiled.options.case_sensitive:
                matched = selected == query
            else:
                matched = selected.lower() == query.lower()
            return (selection, replacement) if matched else (None, "")
        match = compiled.pattern.fullmatch(source.text, selection.start, selection.end)
        if match is None:
            return None, ""
        return selection, expand_template(match, replacement)

    def _settle(self, status: SearchStatus, message: Optional[str] = None) -> SearchOutcome:
        self._status = status
        self._message = message
        return SearchOutcome(
            status=status,
            total=len(self._matches),
            current_index=self._current,
            message=message,
        )

    def _emit(self, event: str, payload: object) -> None:
        if self._bus is not None:
            self._bus.emit(event, payload)


__all__ = [
    "EngineState",
    "INVALID_REGEX_MESSAGE",
    "MatchEngine",
    "ReplaceOutcome",
    "ReplaceStatus",
    "SearchOutcome",
    "SearchStatus",
    "format_counter",
]
